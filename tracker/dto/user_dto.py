from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class UserSettingsDTO(BaseModel):
    default_privacy: bool
    notifications: bool
    timezone: str


class UserStatsDTO(BaseModel):
    total_logs: int
    public_logs: int
    current_streak: int
    longest_streak: int
    first_log_date: Optional[datetime] = None


class UserDTO(BaseModel):
    id: str
    email_id: str
    display_name: str
    settings: UserSettingsDTO
    stats: UserStatsDTO
    groups: List[str] = []
    created_at: datetime
    last_active: datetime


class UpdateProfileDTO(BaseModel):
    display_name: Optional[str] = None
    default_privacy: Optional[bool] = None
    notifications: Optional[bool] = None
    timezone: Optional[str] = None
