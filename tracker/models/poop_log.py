from pydantic import Field
from typing import ClassVar, List
from datetime import datetime, timezone

from tracker.models.common.document import Document


class PoopLogModel(Document):
    collection_name: ClassVar[str] = "poop_logs"

    user_id: str
    timestamp: datetime
    is_public: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    day_key: str
    week_key: str
    month_key: str
    groups: List[str] = Field(default_factory=list)


class DailyStatsModel(Document):
    """
    Per-user rollup of one calendar day, keyed by "<user_id>:<day_key>".
    """

    collection_name: ClassVar[str] = "daily_stats"

    date: str
    user_id: str
    total_logs: int = 0
    public_logs: int = 0
    groups: dict[str, dict[str, int]] = Field(default_factory=dict)
    timestamps: List[datetime] = Field(default_factory=list)

    @staticmethod
    def build_id(user_id: str, day_key: str) -> str:
        return f"{user_id}:{day_key}"
