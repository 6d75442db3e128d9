import logging
from datetime import datetime, timezone
from typing import List, Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from tracker.models.user import UserModel, UserSettings, UserStats
from tracker.repositories.common.mongo_repository import MongoRepository, translate_store_errors
from tracker.repositories.common.write_batch import WriteBatch

logger = logging.getLogger(__name__)


class UserRepository(MongoRepository):
    collection_name = UserModel.collection_name

    @classmethod
    @translate_store_errors
    def get_by_id(cls, user_id: str) -> Optional[UserModel]:
        user_data = cls.get_collection().find_one({"_id": user_id})
        if user_data:
            return UserModel(**user_data)
        return None

    @classmethod
    @translate_store_errors
    def ensure(cls, user_id: str, email_id: str, display_name: str) -> UserModel:
        """
        Creates the profile on first sight of a user and refreshes `last_active` afterwards.
        """
        now = datetime.now(timezone.utc)
        user_data = cls.get_collection().find_one_and_update(
            {"_id": user_id},
            {
                "$setOnInsert": {
                    "email_id": email_id,
                    "display_name": display_name,
                    "settings": UserSettings().model_dump(),
                    "stats": UserStats().model_dump(),
                    "groups": [],
                    "created_at": now,
                },
                "$set": {"last_active": now},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return UserModel(**user_data)

    @classmethod
    @translate_store_errors
    def update_profile(cls, user_id: str, update_data: dict) -> Optional[UserModel]:
        update_data = {k: v for k, v in update_data.items() if v is not None}
        update_data["last_active"] = datetime.now(timezone.utc)

        user_data = cls.get_collection().find_one_and_update(
            {"_id": user_id},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
        if user_data:
            return UserModel(**user_data)
        return None

    @classmethod
    def repair_groups(cls, user_id: str, group_ids: List[str]) -> bool:
        """
        Overwrites the cached group list with the authoritative one. Failures are logged, not raised.
        """
        try:
            cls.get_collection().update_one({"_id": user_id}, {"$set": {"groups": group_ids}})
            return True
        except PyMongoError as e:
            logger.warning(f"Failed to repair group list for user {user_id}: {e}")
            return False

    @classmethod
    def stage_add_group(cls, batch: WriteBatch, user_id: str, group_id: str) -> None:
        batch.update(cls.collection_name, {"_id": user_id}, {"$addToSet": {"groups": group_id}})

    @classmethod
    def stage_remove_group(cls, batch: WriteBatch, user_id: str, group_id: str) -> None:
        batch.update(cls.collection_name, {"_id": user_id}, {"$pull": {"groups": group_id}})

    @classmethod
    def stage_remove_group_from_all(cls, batch: WriteBatch, group_id: str) -> None:
        batch.update_many(cls.collection_name, {"groups": group_id}, {"$pull": {"groups": group_id}})

    @classmethod
    def stage_record_log(
        cls,
        batch: WriteBatch,
        user_id: str,
        is_public: bool,
        current_streak: int,
        longest_streak: int,
        last_log_day: str,
        first_log_date: datetime,
        now: datetime,
    ) -> None:
        batch.update(
            cls.collection_name,
            {"_id": user_id},
            {
                "$inc": {"stats.total_logs": 1, "stats.public_logs": 1 if is_public else 0},
                "$set": {
                    "stats.current_streak": current_streak,
                    "stats.longest_streak": longest_streak,
                    "stats.last_log_day": last_log_day,
                    "stats.first_log_date": first_log_date,
                    "last_active": now,
                },
            },
            expect_match=True,
        )
