from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from tracker.constants.group import (
    DEFAULT_GROUP_SIZE,
    MAX_DESCRIPTION_LENGTH,
    MAX_GROUP_NAME_LENGTH,
    MAX_GROUP_SIZE,
    MIN_GROUP_SIZE,
)
from tracker.constants.messages import ValidationErrors


class CreateGroupDTO(BaseModel):
    name: str = Field(..., max_length=MAX_GROUP_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    is_private: bool = False
    allow_self_join: bool = True
    max_members: int = Field(default=DEFAULT_GROUP_SIZE, ge=MIN_GROUP_SIZE, le=MAX_GROUP_SIZE)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(ValidationErrors.BLANK_GROUP_NAME)
        return value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return value.strip() or None


class GroupSettingsDTO(BaseModel):
    max_members: int
    is_private: bool
    allow_self_join: bool


class GroupStatsDTO(BaseModel):
    member_count: int
    total_logs: int
    last_activity: datetime


class GroupDTO(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_by: str
    created_at: datetime
    invite_code: Optional[str] = None
    settings: GroupSettingsDTO
    stats: GroupStatsDTO
    member_ids: List[str] = []
    is_admin: bool = False


class GroupMemberStatsDTO(BaseModel):
    total_logs: int
    current_streak: int
    longest_streak: int


class GroupMemberDTO(BaseModel):
    user_id: str
    display_name: str
    role: str
    joined_at: datetime
    last_activity: datetime
    stats: GroupMemberStatsDTO


class LeaderboardEntryDTO(GroupMemberDTO):
    rank: int
