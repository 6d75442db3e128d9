from unittest import TestCase
from unittest.mock import patch
from datetime import datetime, timezone

from rest_framework import status
from rest_framework.test import APIRequestFactory

from tracker.constants.messages import AppMessages
from tracker.dto.poop_log_dto import PoopLogDTO
from tracker.exceptions.store_exceptions import StoreUnavailableException
from tracker.views.poop_log import PoopLogListView


class PoopLogListViewTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user_id = "507f1f77bcf86cd799439011"
        now = datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)
        self.log = PoopLogDTO(
            id="65e6d1c0a1b2c3d4e5f60718",
            user_id=self.user_id,
            timestamp=now,
            is_public=True,
            created_at=now,
            day_key="2024-03-05",
            week_key="2024-W10",
            month_key="2024-03",
            groups=["507f1f77bcf86cd799439012"],
        )

    def authenticate(self, request):
        request.user_id = self.user_id
        request.user_email = "test@example.com"
        return request

    @patch("tracker.views.poop_log.PoopLogService.log_poop")
    def test_create_log(self, mock_log_poop):
        mock_log_poop.return_value = self.log
        request = self.authenticate(
            self.factory.post("/v1/logs", {"groups": ["507f1f77bcf86cd799439012"]}, format="json")
        )

        response = PoopLogListView.as_view()(request)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["successMessage"], AppMessages.LOG_CREATED)
        self.assertEqual(response.data["data"]["day_key"], "2024-03-05")
        user_id, dto = mock_log_poop.call_args[0]
        self.assertEqual(user_id, self.user_id)
        self.assertIsNone(dto.is_public)
        self.assertEqual(dto.groups, ["507f1f77bcf86cd799439012"])

    @patch("tracker.views.poop_log.PoopLogService.get_recent_logs")
    def test_recent_logs_default_limit(self, mock_get_recent_logs):
        mock_get_recent_logs.return_value = [self.log]

        response = PoopLogListView.as_view()(self.authenticate(self.factory.get("/v1/logs")))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 1)
        mock_get_recent_logs.assert_called_once_with(self.user_id, 50)

    @patch("tracker.views.poop_log.PoopLogService.get_recent_logs")
    def test_recent_logs_limit_out_of_range(self, mock_get_recent_logs):
        response = PoopLogListView.as_view()(self.authenticate(self.factory.get("/v1/logs", {"limit": 500})))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_get_recent_logs.assert_not_called()

    @patch("tracker.views.poop_log.PoopLogService.get_recent_logs")
    def test_store_unavailable(self, mock_get_recent_logs):
        mock_get_recent_logs.side_effect = StoreUnavailableException()

        response = PoopLogListView.as_view()(self.authenticate(self.factory.get("/v1/logs")))

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
