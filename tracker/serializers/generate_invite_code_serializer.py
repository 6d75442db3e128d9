from datetime import datetime, timezone

from rest_framework import serializers

from tracker.constants.messages import ValidationErrors


class GenerateInviteCodeSerializer(serializers.Serializer):
    """Optional limits for the rotated code. Without them the code never expires and has no use limit."""

    expires_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    max_uses = serializers.IntegerField(required=False, allow_null=True, default=None)

    def validate_expires_at(self, value):
        if value is not None and value <= datetime.now(timezone.utc):
            raise serializers.ValidationError(ValidationErrors.PAST_EXPIRY)
        return value

    def validate_max_uses(self, value):
        if value is not None and value < 1:
            raise serializers.ValidationError(ValidationErrors.MAX_USES_POSITIVE)
        return value
