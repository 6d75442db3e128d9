from rest_framework import serializers

from tracker.constants.group import (
    DEFAULT_GROUP_SIZE,
    MAX_DESCRIPTION_LENGTH,
    MAX_GROUP_NAME_LENGTH,
    MAX_GROUP_SIZE,
    MAX_INVITE_CODE_INPUT_LENGTH,
    MIN_GROUP_SIZE,
)
from tracker.constants.messages import ValidationErrors


class CreateGroupSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=MAX_GROUP_NAME_LENGTH)
    description = serializers.CharField(
        max_length=MAX_DESCRIPTION_LENGTH, required=False, allow_blank=True, allow_null=True
    )
    is_private = serializers.BooleanField(required=False, default=False)
    allow_self_join = serializers.BooleanField(required=False, default=True)
    max_members = serializers.IntegerField(required=False, default=DEFAULT_GROUP_SIZE)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.BLANK_GROUP_NAME)
        return value.strip()

    def validate_max_members(self, value):
        if not MIN_GROUP_SIZE <= value <= MAX_GROUP_SIZE:
            raise serializers.ValidationError(
                ValidationErrors.MAX_MEMBERS_OUT_OF_RANGE.format(MIN_GROUP_SIZE, MAX_GROUP_SIZE)
            )
        return value


class JoinGroupByInviteCodeSerializer(serializers.Serializer):
    invite_code = serializers.CharField(max_length=MAX_INVITE_CODE_INPUT_LENGTH)

    def validate_invite_code(self, value):
        if not value.strip():
            raise serializers.ValidationError(ValidationErrors.BLANK_INVITE_CODE)
        return value.strip().upper()
