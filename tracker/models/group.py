from pydantic import BaseModel, Field
from typing import ClassVar, List
from datetime import datetime, timezone

from tracker.constants.group import (
    DEFAULT_GROUP_SIZE,
    MAX_DESCRIPTION_LENGTH,
    MAX_GROUP_NAME_LENGTH,
    MAX_GROUP_SIZE,
    MIN_GROUP_SIZE,
    GroupRole,
)
from tracker.models.common.document import Document


class GroupSettings(BaseModel):
    max_members: int = Field(default=DEFAULT_GROUP_SIZE, ge=MIN_GROUP_SIZE, le=MAX_GROUP_SIZE)
    is_private: bool = False
    allow_self_join: bool = True


class GroupStats(BaseModel):
    member_count: int = 0
    total_logs: int = 0
    last_activity: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GroupModel(Document):
    """
    Model for groups.

    `stats.member_count` always equals `len(member_ids)` and the number of
    membership records stored for the group.
    """

    collection_name: ClassVar[str] = "groups"

    name: str = Field(..., min_length=1, max_length=MAX_GROUP_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    created_by: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    invite_code: str
    settings: GroupSettings = Field(default_factory=GroupSettings)
    stats: GroupStats = Field(default_factory=GroupStats)
    member_ids: List[str] = Field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return self.stats.member_count >= self.settings.max_members


class MemberStats(BaseModel):
    total_logs: int = 0
    current_streak: int = 0
    longest_streak: int = 0


class GroupMemberModel(Document):
    """
    Model for a user's membership in a group, keyed by "<group_id>:<user_id>".
    """

    collection_name: ClassVar[str] = "group_members"

    group_id: str
    user_id: str
    display_name: str
    role: GroupRole = GroupRole.MEMBER
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_activity: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    stats: MemberStats = Field(default_factory=MemberStats)

    @staticmethod
    def build_id(group_id: str, user_id: str) -> str:
        return f"{group_id}:{user_id}"
