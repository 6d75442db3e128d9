from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.request import Request
from drf_spectacular.utils import extend_schema, OpenApiResponse

from tracker.dto.responses.error_response import ApiErrorResponse
from tracker.dto.user_dto import UpdateProfileDTO
from tracker.middlewares.jwt_auth import require_user_id
from tracker.serializers.update_profile_serializer import UpdateProfileSerializer
from tracker.services.user_service import UserService


class UserProfileView(APIView):
    @extend_schema(
        operation_id="get_user_profile",
        summary="Get my profile",
        description="Profile, settings and stats of the authenticated user.",
        tags=["users"],
        responses={
            200: OpenApiResponse(description="Profile retrieved successfully"),
            401: OpenApiResponse(response=ApiErrorResponse, description="Authentication required"),
            404: OpenApiResponse(response=ApiErrorResponse, description="User not found"),
        },
    )
    def get(self, request: Request):
        user_id = require_user_id(request)
        profile = UserService.get_profile(user_id)
        return Response(data=profile.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="update_user_profile",
        summary="Update my profile",
        description="Change the display name, default log privacy, notifications or timezone.",
        tags=["users"],
        request=UpdateProfileSerializer,
        responses={
            200: OpenApiResponse(description="Profile updated successfully"),
            400: OpenApiResponse(response=ApiErrorResponse, description="Bad request - validation error"),
            404: OpenApiResponse(response=ApiErrorResponse, description="User not found"),
        },
    )
    def patch(self, request: Request):
        user_id = require_user_id(request)
        serializer = UpdateProfileSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        profile = UserService.update_profile(user_id, UpdateProfileDTO(**serializer.validated_data))
        return Response(data=profile.model_dump(mode="json"), status=status.HTTP_200_OK)
