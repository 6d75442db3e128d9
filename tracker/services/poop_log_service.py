import logging
from datetime import datetime, timezone
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tracker.constants.group import DEFAULT_LOG_HISTORY_LIMIT
from tracker.dto.poop_log_dto import CreatePoopLogDTO, PoopLogDTO
from tracker.exceptions.store_exceptions import BatchPreconditionFailed
from tracker.exceptions.user_exceptions import UserNotFoundException
from tracker.models.poop_log import PoopLogModel
from tracker.repositories.common.write_batch import WriteBatch
from tracker.repositories.group_repository import GroupMemberRepository, GroupRepository
from tracker.repositories.poop_log_repository import DailyStatsRepository, PoopLogRepository
from tracker.repositories.user_repository import UserRepository
from tracker.services.user_service import UserService
from tracker.utils.log_keys import build_log_keys, next_streak

logger = logging.getLogger(__name__)


class PoopLogService:
    @classmethod
    def log_poop(cls, user_id: str, dto: CreatePoopLogDTO) -> PoopLogDTO:
        """
        Record a log and roll it up into the user's, the day's and the shared groups' stats.

        Only public logs are shared, and only with groups the user is a member of.
        Visibility defaults to the user's privacy setting.
        """
        user = UserService.get_user(user_id)
        now = datetime.now(timezone.utc)

        timestamp = dto.timestamp or now
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        is_public = dto.is_public if dto.is_public is not None else not user.settings.default_privacy

        keys = build_log_keys(timestamp.astimezone(cls._user_timezone(user.settings.timezone)))

        group_ids = []
        if is_public and dto.groups:
            member_of = set(GroupMemberRepository.get_group_ids_for_user(user_id))
            group_ids = [group_id for group_id in dict.fromkeys(dto.groups) if group_id in member_of]

        stats = user.stats
        current_streak = next_streak(stats.current_streak, stats.last_log_day, keys.day_key)
        longest_streak = max(stats.longest_streak, current_streak)
        last_log_day = max(stats.last_log_day or keys.day_key, keys.day_key)
        first_log_date = min(stats.first_log_date or timestamp, timestamp)

        log = PoopLogModel(
            user_id=user_id,
            timestamp=timestamp,
            is_public=is_public,
            created_at=now,
            day_key=keys.day_key,
            week_key=keys.week_key,
            month_key=keys.month_key,
            groups=group_ids,
        )

        batch = WriteBatch()
        PoopLogRepository.stage_insert(batch, log)
        UserRepository.stage_record_log(
            batch, user_id, is_public, current_streak, longest_streak, last_log_day, first_log_date, now
        )
        DailyStatsRepository.stage_record_log(batch, user_id, keys.day_key, is_public, group_ids, timestamp)
        if group_ids:
            GroupRepository.stage_record_log(batch, group_ids, now)
            GroupMemberRepository.stage_record_log(batch, group_ids, user_id, current_streak, longest_streak, now)

        try:
            batch.commit()
        except BatchPreconditionFailed as e:
            raise UserNotFoundException(user_id) from e

        logger.info(f"Log {log.id} recorded for user {user_id} (shared with {len(group_ids)} groups)")
        return cls.prepare_poop_log_dto(log)

    @classmethod
    def get_recent_logs(cls, user_id: str, limit: int = DEFAULT_LOG_HISTORY_LIMIT) -> List[PoopLogDTO]:
        return [cls.prepare_poop_log_dto(log) for log in PoopLogRepository.get_recent(user_id, limit)]

    @classmethod
    def prepare_poop_log_dto(cls, log: PoopLogModel) -> PoopLogDTO:
        return PoopLogDTO(**log.model_dump())

    @staticmethod
    def _user_timezone(name: str):
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {name}, falling back to UTC")
            return timezone.utc
