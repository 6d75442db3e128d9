import logging

from tracker.constants.group import MAX_DISPLAY_NAME_LENGTH
from tracker.dto.user_dto import UpdateProfileDTO, UserDTO, UserSettingsDTO, UserStatsDTO
from tracker.exceptions.user_exceptions import UserNotFoundException
from tracker.models.user import UserModel
from tracker.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    @classmethod
    def ensure_profile(cls, user_id: str, email_id: str, display_name: str | None = None) -> UserModel:
        """
        Make sure a verified user has a profile document.

        Args:
            user_id: Subject of the verified access token
            email_id: Email carried by the token
            display_name: Name carried by the token, falls back to the email's local part

        Returns:
            The stored UserModel
        """
        name = (display_name or "").strip() or email_id.split("@")[0]
        return UserRepository.ensure(user_id, email_id, name[:MAX_DISPLAY_NAME_LENGTH])

    @classmethod
    def get_user(cls, user_id: str) -> UserModel:
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return user

    @classmethod
    def get_profile(cls, user_id: str) -> UserDTO:
        return cls.prepare_user_dto(cls.get_user(user_id))

    @classmethod
    def update_profile(cls, user_id: str, dto: UpdateProfileDTO) -> UserDTO:
        update_data = {
            "display_name": dto.display_name,
            "settings.default_privacy": dto.default_privacy,
            "settings.notifications": dto.notifications,
            "settings.timezone": dto.timezone,
        }
        user = UserRepository.update_profile(user_id, update_data)
        if not user:
            raise UserNotFoundException(user_id)

        logger.info(f"Profile updated for user {user_id}")
        return cls.prepare_user_dto(user)

    @classmethod
    def prepare_user_dto(cls, user: UserModel) -> UserDTO:
        return UserDTO(
            id=user.id,
            email_id=user.email_id,
            display_name=user.display_name,
            settings=UserSettingsDTO(**user.settings.model_dump()),
            stats=UserStatsDTO(**user.stats.model_dump(exclude={"last_log_day"})),
            groups=user.groups,
            created_at=user.created_at,
            last_active=user.last_active,
        )
