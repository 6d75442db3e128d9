from datetime import datetime
from typing import List

from bson import ObjectId
from pymongo import DESCENDING

from tracker.models.poop_log import DailyStatsModel, PoopLogModel
from tracker.repositories.common.mongo_repository import MongoRepository, translate_store_errors
from tracker.repositories.common.write_batch import WriteBatch


class PoopLogRepository(MongoRepository):
    collection_name = PoopLogModel.collection_name

    @classmethod
    def stage_insert(cls, batch: WriteBatch, log: PoopLogModel) -> PoopLogModel:
        if log.id is None:
            log.id = str(ObjectId())
        batch.insert(cls.collection_name, log.to_document())
        return log

    @classmethod
    @translate_store_errors
    def get_recent(cls, user_id: str, limit: int) -> List[PoopLogModel]:
        cursor = cls.get_collection().find({"user_id": user_id}).sort("timestamp", DESCENDING).limit(limit)
        return [PoopLogModel(**log_data) for log_data in cursor]


class DailyStatsRepository(MongoRepository):
    collection_name = DailyStatsModel.collection_name

    @classmethod
    def stage_record_log(
        cls,
        batch: WriteBatch,
        user_id: str,
        day_key: str,
        is_public: bool,
        group_ids: List[str],
        timestamp: datetime,
    ) -> None:
        increments = {"total_logs": 1, "public_logs": 1 if is_public else 0}
        for group_id in group_ids:
            increments[f"groups.{group_id}.logs"] = 1

        batch.upsert(
            cls.collection_name,
            {"_id": DailyStatsModel.build_id(user_id, day_key)},
            {
                "$setOnInsert": {"date": day_key, "user_id": user_id},
                "$inc": increments,
                "$push": {"timestamps": timestamp},
            },
        )
