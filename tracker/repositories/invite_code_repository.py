from datetime import datetime
from typing import Optional

from tracker.constants.group import InviteCodeStatus
from tracker.models.invite_code import InviteCodeModel
from tracker.repositories.common.mongo_repository import MongoRepository, translate_store_errors
from tracker.repositories.common.write_batch import WriteBatch


class InviteCodeRepository(MongoRepository):
    collection_name = InviteCodeModel.collection_name

    @classmethod
    @translate_store_errors
    def get_by_code(cls, code: str) -> Optional[InviteCodeModel]:
        invite_data = cls.get_collection().find_one({"_id": code})
        if invite_data:
            return InviteCodeModel(**invite_data)
        return None

    @classmethod
    @translate_store_errors
    def get_active_for_group(cls, group_id: str) -> Optional[InviteCodeModel]:
        invite_data = cls.get_collection().find_one({"group_id": group_id, "status": InviteCodeStatus.ACTIVE.value})
        if invite_data:
            return InviteCodeModel(**invite_data)
        return None

    @classmethod
    def stage_insert(cls, batch: WriteBatch, invite_code: InviteCodeModel) -> None:
        document = invite_code.to_document()
        document["_id"] = invite_code.code
        batch.insert(cls.collection_name, document)

    @classmethod
    def stage_redeem(cls, batch: WriteBatch, code: str, now: datetime) -> None:
        """
        Counts one use of the code, provided it is still active, unexpired and below its use limit.
        """
        batch.update(
            cls.collection_name,
            {
                "_id": code,
                "status": InviteCodeStatus.ACTIVE.value,
                "$and": [
                    {"$or": [{"expires_at": None}, {"expires_at": {"$gt": now}}]},
                    {"$or": [{"max_uses": None}, {"$expr": {"$lt": ["$current_uses", "$max_uses"]}}]},
                ],
            },
            {"$inc": {"current_uses": 1}},
            expect_match=True,
        )

    @classmethod
    def stage_supersede(cls, batch: WriteBatch, code: str, now: datetime) -> None:
        batch.update(
            cls.collection_name,
            {"_id": code, "status": InviteCodeStatus.ACTIVE.value},
            {"$set": {"status": InviteCodeStatus.SUPERSEDED.value, "deactivated_at": now}},
            expect_match=True,
        )

    @classmethod
    def stage_revoke_for_group(cls, batch: WriteBatch, group_id: str, now: datetime) -> None:
        batch.update_many(
            cls.collection_name,
            {"group_id": group_id, "status": InviteCodeStatus.ACTIVE.value},
            {"$set": {"status": InviteCodeStatus.REVOKED.value, "deactivated_at": now}},
        )
