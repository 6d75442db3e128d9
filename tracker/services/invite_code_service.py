import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo.errors import DuplicateKeyError

from tracker.constants.group import INVITE_CODE_MAX_ATTEMPTS
from tracker.constants.messages import ApiErrors
from tracker.dto.invite_code_dto import InviteCodeDTO
from tracker.exceptions.group_exceptions import (
    GroupNotFoundException,
    InvalidInviteCodeException,
    InviteCodeExhaustedException,
    InviteCodeExpiredException,
    InviteCodeInactiveException,
    NotAuthorizedException,
)
from tracker.exceptions.store_exceptions import (
    BatchPreconditionFailed,
    ConcurrentUpdateException,
    InviteCodeGenerationException,
)
from tracker.models.group import GroupModel
from tracker.models.invite_code import InviteCodeModel
from tracker.repositories.common.write_batch import WriteBatch
from tracker.repositories.group_repository import GroupRepository
from tracker.repositories.invite_code_repository import InviteCodeRepository
from tracker.utils.invite_code_utils import generate_invite_code, normalize_invite_code

logger = logging.getLogger(__name__)


class InviteCodeService:
    @classmethod
    def build_invite_code(
        cls,
        group_id: str,
        created_by: str,
        now: datetime,
        expires_at: Optional[datetime] = None,
        max_uses: Optional[int] = None,
    ) -> InviteCodeModel:
        code = generate_invite_code()
        return InviteCodeModel(
            id=code,
            code=code,
            group_id=group_id,
            created_by=created_by,
            created_at=now,
            expires_at=expires_at,
            max_uses=max_uses,
        )

    @classmethod
    def ensure_redeemable(cls, invite_code: InviteCodeModel, now: Optional[datetime] = None) -> None:
        """
        Raises the error describing why a code cannot be used, checked in the order
        inactive, expired, exhausted.
        """
        if not invite_code.is_active:
            raise InviteCodeInactiveException()
        if invite_code.is_expired(now):
            raise InviteCodeExpiredException()
        if invite_code.is_exhausted:
            raise InviteCodeExhaustedException()

    @classmethod
    def get_redeemable_invite_code(cls, code: str, now: Optional[datetime] = None) -> InviteCodeModel:
        invite_code = InviteCodeRepository.get_by_code(normalize_invite_code(code))
        if not invite_code:
            raise InvalidInviteCodeException()
        cls.ensure_redeemable(invite_code, now)
        return invite_code

    @classmethod
    def generate_new_invite_code(
        cls,
        group_id: str,
        caller_id: str,
        expires_at: Optional[datetime] = None,
        max_uses: Optional[int] = None,
    ) -> InviteCodeDTO:
        """
        Rotate a group's invite code. The previous code is kept as SUPERSEDED and stops working.

        Raises:
            GroupNotFoundException: If the group does not exist
            NotAuthorizedException: If the caller did not create the group
            ConcurrentUpdateException: If the group's code changed while rotating
            InviteCodeGenerationException: If no unused code could be found
        """
        group = cls._get_group(group_id)
        if group.created_by != caller_id:
            raise NotAuthorizedException(ApiErrors.ONLY_ADMINS_CAN_GENERATE_CODES)

        for attempt in range(1, INVITE_CODE_MAX_ATTEMPTS + 1):
            now = datetime.now(timezone.utc)
            new_code = cls.build_invite_code(group_id, caller_id, now, expires_at, max_uses)

            batch = WriteBatch()
            InviteCodeRepository.stage_supersede(batch, group.invite_code, now)
            InviteCodeRepository.stage_insert(batch, new_code)
            GroupRepository.stage_repoint_invite_code(batch, group_id, group.invite_code, new_code.code)

            try:
                batch.commit()
            except DuplicateKeyError:
                logger.warning(f"Invite code collision while rotating code of group {group_id} (attempt {attempt})")
                continue
            except BatchPreconditionFailed as e:
                logger.warning(f"Invite code of group {group_id} changed during rotation: {e}")
                raise ConcurrentUpdateException() from e

            logger.info(f"Invite code of group {group_id} rotated by {caller_id}")
            return cls.prepare_invite_code_dto(new_code)

        logger.error(f"Could not generate a unique invite code for group {group_id}")
        raise InviteCodeGenerationException()

    @classmethod
    def get_current_invite_code(cls, group_id: str, caller_id: str) -> InviteCodeDTO:
        group = cls._get_group(group_id)
        if group.created_by != caller_id:
            raise NotAuthorizedException(ApiErrors.ONLY_ADMINS_CAN_VIEW_CODE)

        invite_code = InviteCodeRepository.get_active_for_group(group_id)
        if not invite_code:
            raise InvalidInviteCodeException()
        return cls.prepare_invite_code_dto(invite_code)

    @classmethod
    def prepare_invite_code_dto(cls, invite_code: InviteCodeModel) -> InviteCodeDTO:
        return InviteCodeDTO(
            code=invite_code.code,
            group_id=invite_code.group_id,
            created_by=invite_code.created_by,
            created_at=invite_code.created_at,
            expires_at=invite_code.expires_at,
            max_uses=invite_code.max_uses,
            current_uses=invite_code.current_uses,
            status=invite_code.status,
            is_active=invite_code.is_active,
        )

    @classmethod
    def _get_group(cls, group_id: str) -> GroupModel:
        group = GroupRepository.get_by_id(group_id)
        if not group:
            raise GroupNotFoundException()
        return group
