import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from tracker.constants.group import INVITE_CODE_MAX_ATTEMPTS, MAX_JOIN_ATTEMPTS, GroupRole
from tracker.constants.messages import ApiErrors
from tracker.dto.group_dto import (
    CreateGroupDTO,
    GroupDTO,
    GroupMemberDTO,
    GroupMemberStatsDTO,
    GroupSettingsDTO,
    GroupStatsDTO,
    LeaderboardEntryDTO,
)
from tracker.dto.invite_code_dto import InviteCodePreviewDTO
from tracker.exceptions.auth_exceptions import AuthenticationRequiredException
from tracker.exceptions.group_exceptions import (
    AlreadyMemberException,
    CreatorCannotLeaveException,
    GroupAtCapacityException,
    GroupNotFoundException,
    NotAuthorizedException,
    NotGroupMemberException,
)
from tracker.exceptions.store_exceptions import (
    BatchPreconditionFailed,
    ConcurrentUpdateException,
    InviteCodeGenerationException,
    StoreUnavailableException,
)
from tracker.models.group import GroupMemberModel, GroupModel, GroupSettings, GroupStats, MemberStats
from tracker.models.user import UserModel
from tracker.repositories.common.write_batch import WriteBatch
from tracker.repositories.group_repository import GroupMemberRepository, GroupRepository
from tracker.repositories.invite_code_repository import InviteCodeRepository
from tracker.repositories.user_repository import UserRepository
from tracker.services.invite_code_service import InviteCodeService
from tracker.services.user_service import UserService
from tracker.utils.invite_code_utils import normalize_invite_code

logger = logging.getLogger(__name__)


class GroupService:
    @classmethod
    def create_group(cls, dto: CreateGroupDTO, creator_id: str) -> str:
        """
        Create a group with the caller as its only member and admin.

        The group, the creator's membership, the first invite code and the creator's
        group list are written in one batch.

        Args:
            dto: Validated group creation data
            creator_id: ID of the authenticated user creating the group

        Returns:
            The new group's ID

        Raises:
            AuthenticationRequiredException: If there is no caller
            InviteCodeGenerationException: If every generated code was already taken
        """
        if not creator_id:
            raise AuthenticationRequiredException()

        creator = UserService.get_user(creator_id)
        group_id = str(ObjectId())

        for attempt in range(1, INVITE_CODE_MAX_ATTEMPTS + 1):
            now = datetime.now(timezone.utc)
            invite_code = InviteCodeService.build_invite_code(group_id, creator_id, now)

            group = GroupModel(
                id=group_id,
                name=dto.name,
                description=dto.description,
                created_by=creator_id,
                created_at=now,
                invite_code=invite_code.code,
                settings=GroupSettings(
                    max_members=dto.max_members,
                    is_private=dto.is_private,
                    allow_self_join=dto.allow_self_join,
                ),
                stats=GroupStats(member_count=1, total_logs=0, last_activity=now),
                member_ids=[creator_id],
            )
            member = cls._build_member(group_id, creator, GroupRole.ADMIN, now)

            batch = WriteBatch()
            InviteCodeRepository.stage_insert(batch, invite_code)
            GroupRepository.stage_insert(batch, group)
            GroupMemberRepository.stage_insert(batch, member)
            UserRepository.stage_add_group(batch, creator_id, group_id)

            try:
                batch.commit()
            except DuplicateKeyError:
                logger.warning(f"Invite code collision while creating group {group_id} (attempt {attempt})")
                continue

            logger.info(f"Group {group_id} created by {creator_id}")
            return group_id

        logger.error(f"Could not generate a unique invite code for new group of {creator_id}")
        raise InviteCodeGenerationException()

    @classmethod
    def join_group_by_invite_code(cls, code: str, user_id: str) -> str:
        """
        Join the group an invite code points to.

        Every attempt re-reads the code and the group, so a join that loses a race
        against another join, a rotation or a deletion reports the precise reason.

        Returns:
            The joined group's ID

        Raises:
            InvalidInviteCodeException, InviteCodeInactiveException, InviteCodeExpiredException,
            InviteCodeExhaustedException, GroupNotFoundException, AlreadyMemberException,
            GroupAtCapacityException, ConcurrentUpdateException
        """
        if not user_id:
            raise AuthenticationRequiredException()

        code = normalize_invite_code(code)

        for attempt in range(1, MAX_JOIN_ATTEMPTS + 1):
            now = datetime.now(timezone.utc)
            invite_code = InviteCodeService.get_redeemable_invite_code(code, now)

            group = GroupRepository.get_by_id(invite_code.group_id)
            if not group:
                raise GroupNotFoundException()
            if user_id in group.member_ids:
                raise AlreadyMemberException()
            if group.is_full:
                raise GroupAtCapacityException()

            user = UserService.get_user(user_id)
            member = cls._build_member(group.id, user, GroupRole.MEMBER, now)

            batch = WriteBatch()
            GroupRepository.stage_add_member(batch, group, user_id, now)
            InviteCodeRepository.stage_redeem(batch, code, now)
            GroupMemberRepository.stage_insert(batch, member)
            UserRepository.stage_add_group(batch, user_id, group.id)

            try:
                batch.commit()
            except BatchPreconditionFailed as e:
                logger.info(f"Join of group {group.id} by {user_id} lost a race (attempt {attempt}): {e}")
                continue
            except DuplicateKeyError as e:
                raise AlreadyMemberException() from e

            logger.info(f"User {user_id} joined group {group.id}")
            return group.id

        logger.warning(f"User {user_id} gave up joining with code {code} after {MAX_JOIN_ATTEMPTS} attempts")
        raise ConcurrentUpdateException()

    @classmethod
    def leave_group(cls, group_id: str, user_id: str) -> None:
        group = cls._get_group(group_id)
        if group.created_by == user_id:
            raise CreatorCannotLeaveException()
        if user_id not in group.member_ids:
            raise NotGroupMemberException()

        now = datetime.now(timezone.utc)
        batch = WriteBatch()
        GroupMemberRepository.stage_delete(batch, group_id, user_id)
        GroupRepository.stage_remove_member(batch, group_id, user_id, now)
        UserRepository.stage_remove_group(batch, user_id, group_id)

        try:
            batch.commit()
        except BatchPreconditionFailed as e:
            raise NotGroupMemberException() from e

        logger.info(f"User {user_id} left group {group_id}")

    @classmethod
    def delete_group(cls, group_id: str, caller_id: str) -> None:
        """
        Delete a group together with its memberships. The current invite code is kept as REVOKED.

        Raises:
            GroupNotFoundException: If the group does not exist or was deleted concurrently
            NotAuthorizedException: If the caller did not create the group
        """
        group = cls._get_group(group_id)
        if group.created_by != caller_id:
            raise NotAuthorizedException(ApiErrors.ONLY_CREATOR_CAN_DELETE)

        now = datetime.now(timezone.utc)
        batch = WriteBatch()
        UserRepository.stage_remove_group_from_all(batch, group_id)
        GroupMemberRepository.stage_delete_for_group(batch, group_id)
        InviteCodeRepository.stage_revoke_for_group(batch, group_id, now)
        GroupRepository.stage_delete(batch, group_id, caller_id)

        try:
            batch.commit()
        except BatchPreconditionFailed as e:
            raise GroupNotFoundException() from e

        logger.info(f"Group {group_id} deleted by {caller_id}")

    @classmethod
    def preview_group_by_invite_code(cls, code: str) -> Optional[InviteCodePreviewDTO]:
        """
        Resolve an invite code to the group it leads to without joining.

        Args:
            code: Invite code in any letter case

        Returns:
            The group and code details, or None when the code or its group does not exist

        Raises:
            InviteCodeInactiveException, InviteCodeExpiredException, InviteCodeExhaustedException
        """
        invite_code = InviteCodeRepository.get_by_code(normalize_invite_code(code))
        if not invite_code:
            return None

        InviteCodeService.ensure_redeemable(invite_code)

        group = GroupRepository.get_by_id(invite_code.group_id)
        if not group:
            return None

        return InviteCodePreviewDTO(
            group=cls.prepare_group_dto(group),
            invite_code=InviteCodeService.prepare_invite_code_dto(invite_code),
        )

    @classmethod
    def get_user_groups(cls, user_id: str) -> List[GroupDTO]:
        """
        List the groups a user belongs to.

        Membership records decide the result. When the user's cached group list disagrees
        it is rewritten; store failures here are logged and yield an empty list.
        """
        try:
            group_ids = GroupMemberRepository.get_group_ids_for_user(user_id)
            user = UserRepository.get_by_id(user_id)
            if user and set(user.groups) != set(group_ids):
                logger.warning(f"Group list of user {user_id} is out of sync, repairing")
                UserRepository.repair_groups(user_id, group_ids)
            groups = GroupRepository.get_by_ids(group_ids)
        except StoreUnavailableException as e:
            logger.error(f"Could not list groups of user {user_id}: {e}")
            return []

        return [cls.prepare_group_dto(group, user_id) for group in groups]

    @classmethod
    def get_group(cls, group_id: str, caller_id: str) -> GroupDTO:
        return cls.prepare_group_dto(cls._get_group(group_id), caller_id)

    @classmethod
    def get_group_members(cls, group_id: str, caller_id: str) -> List[GroupMemberDTO]:
        cls._get_group_for_member(group_id, caller_id)
        members = GroupMemberRepository.get_by_group(group_id)
        return [GroupMemberDTO(**cls._member_fields(member)) for member in members]

    @classmethod
    def get_group_leaderboard(cls, group_id: str, caller_id: str) -> List[LeaderboardEntryDTO]:
        cls._get_group_for_member(group_id, caller_id)
        members = GroupMemberRepository.get_leaderboard(group_id)
        return [
            LeaderboardEntryDTO(rank=rank, **cls._member_fields(member)) for rank, member in enumerate(members, start=1)
        ]

    @classmethod
    def prepare_group_dto(cls, group: GroupModel, viewer_id: str | None = None) -> GroupDTO:
        is_admin = viewer_id is not None and viewer_id == group.created_by
        return GroupDTO(
            id=group.id,
            name=group.name,
            description=group.description,
            created_by=group.created_by,
            created_at=group.created_at,
            invite_code=group.invite_code if is_admin else None,
            settings=GroupSettingsDTO(**group.settings.model_dump()),
            stats=GroupStatsDTO(**group.stats.model_dump()),
            member_ids=group.member_ids,
            is_admin=is_admin,
        )

    @classmethod
    def _build_member(cls, group_id: str, user: UserModel, role: GroupRole, now: datetime) -> GroupMemberModel:
        return GroupMemberModel(
            id=GroupMemberModel.build_id(group_id, user.id),
            group_id=group_id,
            user_id=user.id,
            display_name=user.display_name,
            role=role,
            joined_at=now,
            last_activity=now,
            stats=MemberStats(
                total_logs=user.stats.public_logs,
                current_streak=user.stats.current_streak,
                longest_streak=user.stats.longest_streak,
            ),
        )

    @classmethod
    def _member_fields(cls, member: GroupMemberModel) -> dict:
        return {
            "user_id": member.user_id,
            "display_name": member.display_name,
            "role": member.role,
            "joined_at": member.joined_at,
            "last_activity": member.last_activity,
            "stats": GroupMemberStatsDTO(**member.stats.model_dump()),
        }

    @classmethod
    def _get_group(cls, group_id: str) -> GroupModel:
        group = GroupRepository.get_by_id(group_id)
        if not group:
            raise GroupNotFoundException()
        return group

    @classmethod
    def _get_group_for_member(cls, group_id: str, user_id: str) -> GroupModel:
        group = cls._get_group(group_id)
        if user_id not in group.member_ids:
            raise NotGroupMemberException()
        return group
