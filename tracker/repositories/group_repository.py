from datetime import datetime
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING

from tracker.models.group import GroupMemberModel, GroupModel
from tracker.repositories.common.mongo_repository import MongoRepository, translate_store_errors
from tracker.repositories.common.write_batch import WriteBatch


class GroupRepository(MongoRepository):
    collection_name = GroupModel.collection_name

    @classmethod
    @translate_store_errors
    def get_by_id(cls, group_id: str) -> Optional[GroupModel]:
        group_data = cls.get_collection().find_one({"_id": group_id})
        if group_data:
            return GroupModel(**group_data)
        return None

    @classmethod
    @translate_store_errors
    def get_by_ids(cls, group_ids: List[str]) -> List[GroupModel]:
        if not group_ids:
            return []
        cursor = cls.get_collection().find({"_id": {"$in": group_ids}}).sort("created_at", DESCENDING)
        return [GroupModel(**group_data) for group_data in cursor]

    @classmethod
    def stage_insert(cls, batch: WriteBatch, group: GroupModel) -> None:
        batch.insert(cls.collection_name, group.to_document())

    @classmethod
    def stage_add_member(cls, batch: WriteBatch, group: GroupModel, user_id: str, now: datetime) -> None:
        """
        Adds a member only while the group still has room and does not list the user yet.
        """
        batch.update(
            cls.collection_name,
            {
                "_id": group.id,
                "member_ids": {"$ne": user_id},
                "stats.member_count": {"$lt": group.settings.max_members},
            },
            {
                "$addToSet": {"member_ids": user_id},
                "$inc": {"stats.member_count": 1},
                "$set": {"stats.last_activity": now},
            },
            expect_match=True,
        )

    @classmethod
    def stage_remove_member(cls, batch: WriteBatch, group_id: str, user_id: str, now: datetime) -> None:
        batch.update(
            cls.collection_name,
            {"_id": group_id, "member_ids": user_id},
            {
                "$pull": {"member_ids": user_id},
                "$inc": {"stats.member_count": -1},
                "$set": {"stats.last_activity": now},
            },
            expect_match=True,
        )

    @classmethod
    def stage_repoint_invite_code(cls, batch: WriteBatch, group_id: str, old_code: str, new_code: str) -> None:
        batch.update(
            cls.collection_name,
            {"_id": group_id, "invite_code": old_code},
            {"$set": {"invite_code": new_code}},
            expect_match=True,
        )

    @classmethod
    def stage_delete(cls, batch: WriteBatch, group_id: str, created_by: str) -> None:
        batch.delete(cls.collection_name, {"_id": group_id, "created_by": created_by}, expect_match=True)

    @classmethod
    def stage_record_log(cls, batch: WriteBatch, group_ids: List[str], now: datetime) -> None:
        batch.update_many(
            cls.collection_name,
            {"_id": {"$in": group_ids}},
            {"$inc": {"stats.total_logs": 1}, "$set": {"stats.last_activity": now}},
        )


class GroupMemberRepository(MongoRepository):
    collection_name = GroupMemberModel.collection_name

    @classmethod
    @translate_store_errors
    def get_by_group(cls, group_id: str) -> List[GroupMemberModel]:
        cursor = cls.get_collection().find({"group_id": group_id}).sort("joined_at", ASCENDING)
        return [GroupMemberModel(**member_data) for member_data in cursor]

    @classmethod
    @translate_store_errors
    def get_leaderboard(cls, group_id: str) -> List[GroupMemberModel]:
        cursor = (
            cls.get_collection()
            .find({"group_id": group_id})
            .sort([("stats.total_logs", DESCENDING), ("joined_at", ASCENDING)])
        )
        return [GroupMemberModel(**member_data) for member_data in cursor]

    @classmethod
    @translate_store_errors
    def get_group_ids_for_user(cls, user_id: str) -> List[str]:
        cursor = cls.get_collection().find({"user_id": user_id}, {"group_id": 1}).sort("joined_at", ASCENDING)
        return [member_data["group_id"] for member_data in cursor]

    @classmethod
    def stage_insert(cls, batch: WriteBatch, member: GroupMemberModel) -> None:
        batch.insert(cls.collection_name, member.to_document())

    @classmethod
    def stage_delete(cls, batch: WriteBatch, group_id: str, user_id: str) -> None:
        batch.delete(cls.collection_name, {"_id": GroupMemberModel.build_id(group_id, user_id)}, expect_match=True)

    @classmethod
    def stage_delete_for_group(cls, batch: WriteBatch, group_id: str) -> None:
        batch.delete_many(cls.collection_name, {"group_id": group_id})

    @classmethod
    def stage_record_log(
        cls,
        batch: WriteBatch,
        group_ids: List[str],
        user_id: str,
        current_streak: int,
        longest_streak: int,
        now: datetime,
    ) -> None:
        batch.update_many(
            cls.collection_name,
            {"group_id": {"$in": group_ids}, "user_id": user_id},
            {
                "$inc": {"stats.total_logs": 1},
                "$set": {"stats.current_streak": current_streak, "last_activity": now},
                "$max": {"stats.longest_streak": longest_streak},
            },
        )
