from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.request import Request
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from drf_spectacular.types import OpenApiTypes

from tracker.constants.messages import ApiErrors
from tracker.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse, ApiErrorSource
from tracker.dto.responses.invite_code_responses import GenerateInviteCodeResponse
from tracker.middlewares.jwt_auth import require_user_id
from tracker.serializers.generate_invite_code_serializer import GenerateInviteCodeSerializer
from tracker.services.group_service import GroupService
from tracker.services.invite_code_service import InviteCodeService


class GroupInviteCodeView(APIView):
    @extend_schema(
        operation_id="get_group_invite_code",
        summary="Get the current invite code",
        description="The group's active invite code. Only the group's creator can see it.",
        tags=["invite-codes"],
        parameters=[
            OpenApiParameter(name="group_id", type=OpenApiTypes.STR, location=OpenApiParameter.PATH),
        ],
        responses={
            200: OpenApiResponse(description="Invite code retrieved successfully"),
            403: OpenApiResponse(response=ApiErrorResponse, description="Only group admins can view the code"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Group not found"),
        },
    )
    def get(self, request: Request, group_id: str):
        user_id = require_user_id(request)
        invite_code = InviteCodeService.get_current_invite_code(group_id, user_id)
        return Response(data=invite_code.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="generate_group_invite_code",
        summary="Rotate the invite code",
        description="Issue a new invite code for the group. The previous code stops working immediately.",
        tags=["invite-codes"],
        parameters=[
            OpenApiParameter(name="group_id", type=OpenApiTypes.STR, location=OpenApiParameter.PATH),
        ],
        request=GenerateInviteCodeSerializer,
        responses={
            201: OpenApiResponse(response=GenerateInviteCodeResponse, description="Invite code generated"),
            403: OpenApiResponse(response=ApiErrorResponse, description="Only group admins can generate codes"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Group not found"),
            409: OpenApiResponse(response=ApiErrorResponse, description="Code changed concurrently"),
        },
    )
    def post(self, request: Request, group_id: str):
        user_id = require_user_id(request)
        serializer = GenerateInviteCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invite_code = InviteCodeService.generate_new_invite_code(
            group_id,
            user_id,
            expires_at=serializer.validated_data.get("expires_at"),
            max_uses=serializer.validated_data.get("max_uses"),
        )
        response = GenerateInviteCodeResponse(data=invite_code)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class InviteCodePreviewView(APIView):
    @extend_schema(
        operation_id="preview_invite_code",
        summary="Preview the group behind an invite code",
        description="Look up the group an invite code leads to without joining it.",
        tags=["invite-codes"],
        parameters=[
            OpenApiParameter(
                name="code",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.PATH,
                description="Invite code, case-insensitive",
            ),
        ],
        responses={
            200: OpenApiResponse(description="Invite code resolved"),
            400: OpenApiResponse(response=ApiErrorResponse, description="Invite code inactive, expired or exhausted"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Invalid invite code"),
        },
    )
    def get(self, request: Request, code: str):
        require_user_id(request)
        preview = GroupService.preview_group_by_invite_code(code)
        if preview is None:
            error_response = ApiErrorResponse(
                statusCode=status.HTTP_404_NOT_FOUND,
                message=ApiErrors.INVALID_INVITE_CODE,
                errors=[
                    ApiErrorDetail(
                        source={ApiErrorSource.PATH: "code"},
                        title=ApiErrors.RESOURCE_NOT_FOUND_TITLE,
                        detail=ApiErrors.INVALID_INVITE_CODE,
                    )
                ],
            )
            return Response(
                data=error_response.model_dump(mode="json", exclude_none=True), status=status.HTTP_404_NOT_FOUND
            )

        return Response(data=preview.model_dump(mode="json"), status=status.HTTP_200_OK)
