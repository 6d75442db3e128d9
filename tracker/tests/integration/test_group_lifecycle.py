from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from tracker.constants.group import InviteCodeStatus
from tracker.dto.group_dto import CreateGroupDTO
from tracker.exceptions.group_exceptions import (
    AlreadyMemberException,
    CreatorCannotLeaveException,
    GroupAtCapacityException,
    InviteCodeExhaustedException,
    InviteCodeExpiredException,
    InviteCodeInactiveException,
    NotAuthorizedException,
)
from tracker.repositories.invite_code_repository import InviteCodeRepository
from tracker.services.group_service import GroupService
from tracker.services.invite_code_service import InviteCodeService
from tracker.services.user_service import UserService
from tracker.tests.integration.base_mongo_test import BaseMongoTestCase


class GroupLifecycleTests(BaseMongoTestCase):
    def setUp(self):
        super().setUp()
        self.user_a = "uid-a"
        self.user_b = "uid-b"
        self.user_c = "uid-c"
        for user_id, name in ((self.user_a, "Alice"), (self.user_b, "Bob"), (self.user_c, "Carol")):
            UserService.ensure_profile(user_id, f"{user_id}@example.com", name)

    def assert_member_count_consistent(self, group_id: str):
        group = self.db.groups.find_one({"_id": group_id})
        member_records = self.db.group_members.count_documents({"group_id": group_id})
        self.assertEqual(group["stats"]["member_count"], len(group["member_ids"]))
        self.assertEqual(group["stats"]["member_count"], member_records)

    def test_create_group_writes_group_membership_code_and_back_reference(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Streakers", max_members=2), self.user_a)

        group = self.db.groups.find_one({"_id": group_id})
        self.assertEqual(group["member_ids"], [self.user_a])
        self.assertEqual(group["created_by"], self.user_a)

        membership = self.db.group_members.find_one({"_id": f"{group_id}:{self.user_a}"})
        self.assertEqual(membership["role"], "admin")

        invite = self.db.invite_codes.find_one({"_id": group["invite_code"]})
        self.assertEqual(invite["status"], InviteCodeStatus.ACTIVE.value)
        self.assertEqual(invite["current_uses"], 0)

        user = self.db.users.find_one({"_id": self.user_a})
        self.assertIn(group_id, user["groups"])
        self.assert_member_count_consistent(group_id)

    def test_streakers_scenario(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Streakers", max_members=2), self.user_a)
        code = self.db.groups.find_one({"_id": group_id})["invite_code"]

        preview = GroupService.preview_group_by_invite_code(code.lower())
        self.assertEqual(preview.group.id, group_id)
        self.assertEqual(preview.group.name, "Streakers")

        self.assertEqual(GroupService.join_group_by_invite_code(code, self.user_b), group_id)
        self.assert_member_count_consistent(group_id)

        with self.assertRaises(GroupAtCapacityException):
            GroupService.join_group_by_invite_code(code, self.user_c)
        self.assert_member_count_consistent(group_id)

        new_code = InviteCodeService.generate_new_invite_code(group_id, self.user_a)
        self.assertNotEqual(new_code.code, code)
        self.assertEqual(self.db.groups.find_one({"_id": group_id})["invite_code"], new_code.code)

        with self.assertRaises(InviteCodeInactiveException):
            GroupService.join_group_by_invite_code(code, self.user_c)
        old_invite = self.db.invite_codes.find_one({"_id": code})
        self.assertEqual(old_invite["status"], InviteCodeStatus.SUPERSEDED.value)

    def test_joining_twice_fails_and_leaves_state_unchanged(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Twice"), self.user_a)
        code = self.db.groups.find_one({"_id": group_id})["invite_code"]
        GroupService.join_group_by_invite_code(code, self.user_b)
        before = self.db.groups.find_one({"_id": group_id})

        with self.assertRaises(AlreadyMemberException):
            GroupService.join_group_by_invite_code(code, self.user_b)

        after = self.db.groups.find_one({"_id": group_id})
        self.assertEqual(before["member_ids"], after["member_ids"])
        self.assertEqual(before["stats"]["member_count"], after["stats"]["member_count"])
        self.assertEqual(self.db.invite_codes.find_one({"_id": code})["current_uses"], 1)

    def test_leave_scenario(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Leavers"), self.user_a)
        code = self.db.groups.find_one({"_id": group_id})["invite_code"]
        GroupService.join_group_by_invite_code(code, self.user_b)

        with self.assertRaises(CreatorCannotLeaveException):
            GroupService.leave_group(group_id, self.user_a)

        GroupService.leave_group(group_id, self.user_b)

        group = self.db.groups.find_one({"_id": group_id})
        self.assertEqual(group["stats"]["member_count"], 1)
        self.assertNotIn(group_id, self.db.users.find_one({"_id": self.user_b})["groups"])
        self.assert_member_count_consistent(group_id)

    def test_only_creator_can_rotate_and_delete(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Guarded"), self.user_a)
        code = self.db.groups.find_one({"_id": group_id})["invite_code"]
        GroupService.join_group_by_invite_code(code, self.user_b)

        with self.assertRaises(NotAuthorizedException):
            InviteCodeService.generate_new_invite_code(group_id, self.user_b)
        with self.assertRaises(NotAuthorizedException):
            GroupService.delete_group(group_id, self.user_b)

        self.assertEqual(self.db.groups.count_documents({"_id": group_id}), 1)

    def test_delete_group_removes_everything_but_the_revoked_code(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Doomed"), self.user_a)
        code = self.db.groups.find_one({"_id": group_id})["invite_code"]
        GroupService.join_group_by_invite_code(code, self.user_b)

        GroupService.delete_group(group_id, self.user_a)

        self.assertIsNone(self.db.groups.find_one({"_id": group_id}))
        self.assertEqual(self.db.group_members.count_documents({"group_id": group_id}), 0)
        self.assertEqual(self.db.users.count_documents({"groups": group_id}), 0)

        invite = self.db.invite_codes.find_one({"_id": code})
        self.assertIsNotNone(invite)
        self.assertEqual(invite["status"], InviteCodeStatus.REVOKED.value)

    def test_get_user_groups_repairs_stale_back_reference(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Cached"), self.user_a)
        self.db.users.update_one({"_id": self.user_a}, {"$set": {"groups": ["stale-group"]}})

        groups = GroupService.get_user_groups(self.user_a)

        self.assertEqual([group.id for group in groups], [group_id])
        self.assertEqual(self.db.users.find_one({"_id": self.user_a})["groups"], [group_id])

    def stale_code_lookup(self, snapshot):
        """The first code lookup of a join sees `snapshot`, later ones read the store."""
        fresh_lookup = InviteCodeService.get_redeemable_invite_code
        pending = [snapshot]

        def lookup(code, now=None):
            if pending:
                return pending.pop()
            return fresh_lookup(code, now)

        return patch("tracker.services.group_service.InviteCodeService.get_redeemable_invite_code", side_effect=lookup)

    def test_code_with_use_limit_is_exhausted(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="One Seat"), self.user_a)
        code = InviteCodeService.generate_new_invite_code(group_id, self.user_a, max_uses=1).code

        GroupService.join_group_by_invite_code(code, self.user_b)

        with self.assertRaises(InviteCodeExhaustedException):
            GroupService.join_group_by_invite_code(code, self.user_c)

        self.assertEqual(self.db.invite_codes.find_one({"_id": code})["current_uses"], 1)
        self.assertNotIn(self.user_c, self.db.groups.find_one({"_id": group_id})["member_ids"])
        self.assert_member_count_consistent(group_id)

    def test_stale_code_snapshot_cannot_exceed_use_limit(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="One Seat"), self.user_a)
        code = InviteCodeService.generate_new_invite_code(group_id, self.user_a, max_uses=1).code
        snapshot = InviteCodeRepository.get_by_code(code)

        GroupService.join_group_by_invite_code(code, self.user_b)

        with self.stale_code_lookup(snapshot) as mock_lookup:
            with self.assertRaises(InviteCodeExhaustedException):
                GroupService.join_group_by_invite_code(code, self.user_c)
        self.assertEqual(mock_lookup.call_count, 2)

        self.assertEqual(self.db.invite_codes.find_one({"_id": code})["current_uses"], 1)
        self.assertEqual(self.db.group_members.count_documents({"group_id": group_id, "user_id": self.user_c}), 0)
        self.assertNotIn(group_id, self.db.users.find_one({"_id": self.user_c})["groups"])
        self.assert_member_count_consistent(group_id)

    def test_stale_code_snapshot_cannot_redeem_after_expiry(self):
        group_id = GroupService.create_group(CreateGroupDTO(name="Short Lived"), self.user_a)
        expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
        code = InviteCodeService.generate_new_invite_code(group_id, self.user_a, expires_at=expires_at).code
        snapshot = InviteCodeRepository.get_by_code(code)
        self.db.invite_codes.update_one(
            {"_id": code}, {"$set": {"expires_at": datetime.now(timezone.utc) - timedelta(minutes=1)}}
        )

        with self.stale_code_lookup(snapshot) as mock_lookup:
            with self.assertRaises(InviteCodeExpiredException):
                GroupService.join_group_by_invite_code(code, self.user_b)
        self.assertEqual(mock_lookup.call_count, 2)

        self.assertEqual(self.db.invite_codes.find_one({"_id": code})["current_uses"], 0)
        self.assertEqual(self.db.groups.find_one({"_id": group_id})["member_ids"], [self.user_a])
        self.assert_member_count_consistent(group_id)
