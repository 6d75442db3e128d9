from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.request import Request
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from drf_spectacular.types import OpenApiTypes

from tracker.dto.poop_log_dto import CreatePoopLogDTO
from tracker.dto.responses.error_response import ApiErrorResponse
from tracker.dto.responses.poop_log_responses import CreatePoopLogResponse, GetPoopLogsResponse
from tracker.middlewares.jwt_auth import require_user_id
from tracker.serializers.poop_log_serializer import CreatePoopLogSerializer, GetPoopLogsQueryParamsSerializer
from tracker.services.poop_log_service import PoopLogService


class PoopLogListView(APIView):
    @extend_schema(
        operation_id="get_recent_logs",
        summary="Recent logs",
        description="The authenticated user's logs, newest first.",
        tags=["logs"],
        parameters=[
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Number of logs to return, between 1 and 200 (default: 50)",
            ),
        ],
        responses={
            200: OpenApiResponse(response=GetPoopLogsResponse, description="Logs retrieved successfully"),
            400: OpenApiResponse(response=ApiErrorResponse, description="Bad request - invalid limit"),
        },
    )
    def get(self, request: Request):
        user_id = require_user_id(request)
        query = GetPoopLogsQueryParamsSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        logs = PoopLogService.get_recent_logs(user_id, query.validated_data["limit"])
        response = GetPoopLogsResponse(logs=logs, total=len(logs))
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_log",
        summary="Record a log",
        description="Record a log. Public logs can be shared with groups the user is a member of.",
        tags=["logs"],
        request=CreatePoopLogSerializer,
        responses={
            201: OpenApiResponse(response=CreatePoopLogResponse, description="Log recorded successfully"),
            400: OpenApiResponse(response=ApiErrorResponse, description="Bad request - validation error"),
        },
    )
    def post(self, request: Request):
        user_id = require_user_id(request)
        serializer = CreatePoopLogSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        log = PoopLogService.log_poop(user_id, CreatePoopLogDTO(**serializer.validated_data))
        response = CreatePoopLogResponse(data=log)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_201_CREATED)
