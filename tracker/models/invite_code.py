from pydantic import Field
from typing import ClassVar
from datetime import datetime, timezone

from tracker.constants.group import INVITE_CODE_LENGTH, InviteCodeStatus
from tracker.models.common.document import Document


class InviteCodeModel(Document):
    """
    Model for group invite codes. The code itself is the document key.

    Only one code per group is ACTIVE at a time; rotated codes become SUPERSEDED
    and the codes of deleted groups become REVOKED. Codes are never removed.
    """

    collection_name: ClassVar[str] = "invite_codes"

    code: str = Field(..., min_length=INVITE_CODE_LENGTH, max_length=INVITE_CODE_LENGTH)
    group_id: str
    created_by: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime | None = None
    max_uses: int | None = Field(default=None, ge=1)
    current_uses: int = 0
    status: InviteCodeStatus = InviteCodeStatus.ACTIVE
    deactivated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == InviteCodeStatus.ACTIVE

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.now(timezone.utc))

    @property
    def is_exhausted(self) -> bool:
        return self.max_uses is not None and self.current_uses >= self.max_uses
