from zoneinfo import available_timezones

from rest_framework import serializers

from tracker.constants.group import MAX_DISPLAY_NAME_LENGTH
from tracker.constants.messages import ValidationErrors


class UpdateProfileSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=MAX_DISPLAY_NAME_LENGTH, required=False)
    default_privacy = serializers.BooleanField(required=False)
    notifications = serializers.BooleanField(required=False)
    timezone = serializers.CharField(required=False)

    def validate_display_name(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.BLANK_DISPLAY_NAME)
        return value.strip()

    def validate_timezone(self, value):
        if value != "UTC" and value not in available_timezones():
            raise serializers.ValidationError(ValidationErrors.INVALID_TIMEZONE.format(value))
        return value
