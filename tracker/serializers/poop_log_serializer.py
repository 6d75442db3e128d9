from rest_framework import serializers

from tracker.constants.group import DEFAULT_LOG_HISTORY_LIMIT, MAX_LOG_HISTORY_LIMIT
from tracker.constants.messages import ValidationErrors


class CreatePoopLogSerializer(serializers.Serializer):
    timestamp = serializers.DateTimeField(required=False, allow_null=True, default=None)
    is_public = serializers.BooleanField(required=False, allow_null=True, default=None)
    groups = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class GetPoopLogsQueryParamsSerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, default=DEFAULT_LOG_HISTORY_LIMIT)

    def validate_limit(self, value):
        if not 1 <= value <= MAX_LOG_HISTORY_LIMIT:
            raise serializers.ValidationError(ValidationErrors.LIMIT_OUT_OF_RANGE.format(MAX_LOG_HISTORY_LIMIT))
        return value
