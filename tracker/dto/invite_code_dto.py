from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from tracker.dto.group_dto import GroupDTO


class GenerateInviteCodeDTO(BaseModel):
    expires_at: Optional[datetime] = None
    max_uses: Optional[int] = None


class InviteCodeDTO(BaseModel):
    code: str
    group_id: str
    created_by: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    max_uses: Optional[int] = None
    current_uses: int
    status: str
    is_active: bool


class InviteCodePreviewDTO(BaseModel):
    """Read-only view of the group behind an invite code, shown before joining."""

    group: GroupDTO
    invite_code: InviteCodeDTO
