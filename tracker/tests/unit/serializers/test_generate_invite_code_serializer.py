from unittest import TestCase
from datetime import datetime, timedelta, timezone

from tracker.constants.messages import ValidationErrors
from tracker.serializers.generate_invite_code_serializer import GenerateInviteCodeSerializer


class GenerateInviteCodeSerializerTest(TestCase):
    def test_empty_body_has_no_limits(self):
        serializer = GenerateInviteCodeSerializer(data={})

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertIsNone(serializer.validated_data["expires_at"])
        self.assertIsNone(serializer.validated_data["max_uses"])

    def test_future_expiry(self):
        expires_at = datetime.now(timezone.utc) + timedelta(days=1)
        serializer = GenerateInviteCodeSerializer(data={"expires_at": expires_at.isoformat(), "max_uses": 3})

        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["max_uses"], 3)

    def test_past_expiry(self):
        expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
        serializer = GenerateInviteCodeSerializer(data={"expires_at": expires_at.isoformat()})

        self.assertFalse(serializer.is_valid())
        self.assertEqual(str(serializer.errors["expires_at"][0]), ValidationErrors.PAST_EXPIRY)

    def test_non_positive_max_uses(self):
        serializer = GenerateInviteCodeSerializer(data={"max_uses": 0})

        self.assertFalse(serializer.is_valid())
        self.assertEqual(str(serializer.errors["max_uses"][0]), ValidationErrors.MAX_USES_POSITIVE)
