from unittest import TestCase
from unittest.mock import patch
from datetime import datetime, timezone

from rest_framework import status
from rest_framework.test import APIRequestFactory

from tracker.constants.messages import ApiErrors, AppMessages
from tracker.dto.group_dto import GroupDTO, GroupSettingsDTO, GroupStatsDTO
from tracker.dto.invite_code_dto import InviteCodeDTO, InviteCodePreviewDTO
from tracker.exceptions.group_exceptions import (
    AlreadyMemberException,
    CreatorCannotLeaveException,
    GroupAtCapacityException,
    InviteCodeInactiveException,
    NotAuthorizedException,
)
from tracker.views.group import (
    GroupDetailView,
    GroupListView,
    GroupMembersView,
    JoinGroupByInviteCodeView,
    LeaveGroupView,
)
from tracker.views.invite_code import GroupInviteCodeView, InviteCodePreviewView


def build_group_dto(group_id: str, created_by: str, invite_code: str | None = None) -> GroupDTO:
    now = datetime.now(timezone.utc)
    return GroupDTO(
        id=group_id,
        name="Streakers",
        created_by=created_by,
        created_at=now,
        invite_code=invite_code,
        settings=GroupSettingsDTO(max_members=2, is_private=False, allow_self_join=True),
        stats=GroupStatsDTO(member_count=1, total_logs=0, last_activity=now),
        member_ids=[created_by],
        is_admin=invite_code is not None,
    )


class GroupViewTestCase(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user_id = "507f1f77bcf86cd799439011"
        self.group_id = "507f1f77bcf86cd799439012"

    def authenticate(self, request):
        request.user_id = self.user_id
        request.user_email = "test@example.com"
        return request


class GroupListViewTests(GroupViewTestCase):
    @patch("tracker.views.group.GroupService.get_group")
    @patch("tracker.views.group.GroupService.create_group")
    def test_create_group(self, mock_create, mock_get_group):
        mock_create.return_value = self.group_id
        mock_get_group.return_value = build_group_dto(self.group_id, self.user_id, "ABC123")
        request = self.authenticate(
            self.factory.post("/v1/groups", {"name": "  Streakers ", "max_members": 2}, format="json")
        )

        response = GroupListView.as_view()(request)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["successMessage"], AppMessages.GROUP_CREATED)
        self.assertEqual(response.data["data"]["invite_code"], "ABC123")
        dto, creator_id = mock_create.call_args[0]
        self.assertEqual(dto.name, "Streakers")
        self.assertEqual(dto.max_members, 2)
        self.assertFalse(dto.is_private)
        self.assertEqual(creator_id, self.user_id)

    @patch("tracker.views.group.GroupService.create_group")
    def test_create_group_with_blank_name(self, mock_create):
        request = self.authenticate(self.factory.post("/v1/groups", {"name": "   "}, format="json"))

        response = GroupListView.as_view()(request)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"][0]["source"], {"parameter": "name"})
        mock_create.assert_not_called()

    @patch("tracker.views.group.GroupService.create_group")
    def test_create_group_with_capacity_out_of_range(self, mock_create):
        request = self.authenticate(self.factory.post("/v1/groups", {"name": "Big", "max_members": 1}, format="json"))

        response = GroupListView.as_view()(request)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_create.assert_not_called()

    def test_unauthenticated_request(self):
        response = GroupListView.as_view()(self.factory.get("/v1/groups"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @patch("tracker.views.group.GroupService.get_user_groups")
    def test_list_groups(self, mock_get_user_groups):
        mock_get_user_groups.return_value = [build_group_dto(self.group_id, self.user_id)]

        response = GroupListView.as_view()(self.authenticate(self.factory.get("/v1/groups")))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["groups"][0]["id"], self.group_id)
        mock_get_user_groups.assert_called_once_with(self.user_id)


class JoinGroupViewTests(GroupViewTestCase):
    @patch("tracker.views.group.GroupService.get_group")
    @patch("tracker.views.group.GroupService.join_group_by_invite_code")
    def test_join_uppercases_code(self, mock_join, mock_get_group):
        mock_join.return_value = self.group_id
        mock_get_group.return_value = build_group_dto(self.group_id, "507f1f77bcf86cd799439099")
        request = self.authenticate(self.factory.post("/v1/groups/join", {"invite_code": "abc123"}, format="json"))

        response = JoinGroupByInviteCodeView.as_view()(request)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_join.assert_called_once_with("ABC123", self.user_id)

    @patch("tracker.views.group.GroupService.join_group_by_invite_code")
    def test_join_errors_are_mapped(self, mock_join):
        cases = [
            (AlreadyMemberException(), status.HTTP_409_CONFLICT),
            (GroupAtCapacityException(), status.HTTP_409_CONFLICT),
            (InviteCodeInactiveException(), status.HTTP_400_BAD_REQUEST),
        ]
        for exception, expected_status in cases:
            with self.subTest(exception=type(exception).__name__):
                mock_join.side_effect = exception
                request = self.authenticate(
                    self.factory.post("/v1/groups/join", {"invite_code": "ABC123"}, format="json")
                )

                response = JoinGroupByInviteCodeView.as_view()(request)

                self.assertEqual(response.status_code, expected_status)
                self.assertEqual(response.data["message"], str(exception))

    def test_join_without_code(self):
        request = self.authenticate(self.factory.post("/v1/groups/join", {}, format="json"))

        response = JoinGroupByInviteCodeView.as_view()(request)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class GroupDetailViewTests(GroupViewTestCase):
    @patch("tracker.views.group.GroupService.delete_group")
    def test_delete_group(self, mock_delete):
        request = self.authenticate(self.factory.delete(f"/v1/groups/{self.group_id}"))

        response = GroupDetailView.as_view()(request, group_id=self.group_id)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        mock_delete.assert_called_once_with(self.group_id, self.user_id)

    @patch("tracker.views.group.GroupService.delete_group")
    def test_delete_group_by_non_creator(self, mock_delete):
        mock_delete.side_effect = NotAuthorizedException(ApiErrors.ONLY_CREATOR_CAN_DELETE)
        request = self.authenticate(self.factory.delete(f"/v1/groups/{self.group_id}"))

        response = GroupDetailView.as_view()(request, group_id=self.group_id)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["errors"][0]["source"], {"path": "group_id"})

    @patch("tracker.views.group.GroupService.leave_group")
    def test_creator_leave(self, mock_leave):
        mock_leave.side_effect = CreatorCannotLeaveException()
        request = self.authenticate(self.factory.post(f"/v1/groups/{self.group_id}/leave"))

        response = LeaveGroupView.as_view()(request, group_id=self.group_id)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], ApiErrors.CREATOR_CANNOT_LEAVE)

    @patch("tracker.views.group.GroupService.leave_group")
    def test_leave(self, mock_leave):
        request = self.authenticate(self.factory.post(f"/v1/groups/{self.group_id}/leave"))

        response = LeaveGroupView.as_view()(request, group_id=self.group_id)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        mock_leave.assert_called_once_with(self.group_id, self.user_id)

    @patch("tracker.views.group.GroupService.get_group_members", return_value=[])
    def test_members(self, mock_get_members):
        request = self.authenticate(self.factory.get(f"/v1/groups/{self.group_id}/members"))

        response = GroupMembersView.as_view()(request, group_id=self.group_id)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"members": [], "total": 0})


class InviteCodeViewTests(GroupViewTestCase):
    def build_invite_code_dto(self, code: str) -> InviteCodeDTO:
        return InviteCodeDTO(
            code=code,
            group_id=self.group_id,
            created_by=self.user_id,
            created_at=datetime.now(timezone.utc),
            current_uses=0,
            status="ACTIVE",
            is_active=True,
        )

    @patch("tracker.views.invite_code.InviteCodeService.generate_new_invite_code")
    def test_rotate_code(self, mock_rotate):
        mock_rotate.return_value = self.build_invite_code_dto("NEW999")
        request = self.authenticate(
            self.factory.post(f"/v1/groups/{self.group_id}/invite-code", {"max_uses": 5}, format="json")
        )

        response = GroupInviteCodeView.as_view()(request, group_id=self.group_id)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["code"], "NEW999")
        mock_rotate.assert_called_once_with(self.group_id, self.user_id, expires_at=None, max_uses=5)

    @patch("tracker.views.invite_code.InviteCodeService.generate_new_invite_code")
    def test_rotate_code_rejects_past_expiry(self, mock_rotate):
        request = self.authenticate(
            self.factory.post(
                f"/v1/groups/{self.group_id}/invite-code", {"expires_at": "2000-01-01T00:00:00Z"}, format="json"
            )
        )

        response = GroupInviteCodeView.as_view()(request, group_id=self.group_id)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_rotate.assert_not_called()

    @patch("tracker.views.invite_code.GroupService.preview_group_by_invite_code")
    def test_preview(self, mock_preview):
        mock_preview.return_value = InviteCodePreviewDTO(
            group=build_group_dto(self.group_id, self.user_id),
            invite_code=self.build_invite_code_dto("ABC123"),
        )
        request = self.authenticate(self.factory.get("/v1/invite-codes/abc123"))

        response = InviteCodePreviewView.as_view()(request, code="abc123")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["group"]["name"], "Streakers")
        mock_preview.assert_called_once_with("abc123")

    @patch("tracker.views.invite_code.GroupService.preview_group_by_invite_code", return_value=None)
    def test_preview_unknown_code(self, mock_preview):
        request = self.authenticate(self.factory.get("/v1/invite-codes/NOPE00"))

        response = InviteCodePreviewView.as_view()(request, code="NOPE00")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], ApiErrors.INVALID_INVITE_CODE)
