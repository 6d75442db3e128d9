from pydantic import BaseModel, Field, EmailStr
from typing import ClassVar, List
from datetime import datetime, timezone

from tracker.models.common.document import Document


class UserSettings(BaseModel):
    default_privacy: bool = True
    notifications: bool = True
    timezone: str = "UTC"


class UserStats(BaseModel):
    total_logs: int = 0
    public_logs: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    first_log_date: datetime | None = None
    last_log_day: str | None = None


class UserModel(Document):
    """
    Profile of a user verified by the identity provider.

    `groups` is a denormalized cache of the groups the user belongs to.
    Membership records are the source of truth.
    """

    collection_name: ClassVar[str] = "users"

    email_id: EmailStr
    display_name: str = Field(..., min_length=1, max_length=30)
    settings: UserSettings = Field(default_factory=UserSettings)
    stats: UserStats = Field(default_factory=UserStats)
    groups: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_active: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
