from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.request import Request
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from drf_spectacular.types import OpenApiTypes

from tracker.middlewares.jwt_auth import require_user_id
from tracker.serializers.create_group_serializer import CreateGroupSerializer, JoinGroupByInviteCodeSerializer
from tracker.services.group_service import GroupService
from tracker.dto.group_dto import CreateGroupDTO
from tracker.dto.responses.group_responses import (
    CreateGroupResponse,
    GetGroupLeaderboardResponse,
    GetGroupMembersResponse,
    GetUserGroupsResponse,
    JoinGroupResponse,
)
from tracker.dto.responses.error_response import ApiErrorResponse

GROUP_ID_PARAMETER = OpenApiParameter(
    name="group_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the group",
)


class GroupListView(APIView):
    @extend_schema(
        operation_id="get_user_groups",
        summary="List my groups",
        description="Groups the authenticated user is a member of, newest first.",
        tags=["groups"],
        responses={200: OpenApiResponse(response=GetUserGroupsResponse, description="Groups retrieved successfully")},
    )
    def get(self, request: Request):
        user_id = require_user_id(request)
        groups = GroupService.get_user_groups(user_id)
        response = GetUserGroupsResponse(groups=groups, total=len(groups))
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_group",
        summary="Create a new group",
        description="Create a group with the caller as its admin. A fresh invite code is issued with it.",
        tags=["groups"],
        request=CreateGroupSerializer,
        responses={
            201: OpenApiResponse(response=CreateGroupResponse, description="Group created successfully"),
            400: OpenApiResponse(response=ApiErrorResponse, description="Bad request - validation error"),
            401: OpenApiResponse(response=ApiErrorResponse, description="Authentication required"),
            500: OpenApiResponse(response=ApiErrorResponse, description="Invite code could not be generated"),
        },
    )
    def post(self, request: Request):
        user_id = require_user_id(request)
        serializer = CreateGroupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = CreateGroupDTO(**serializer.validated_data)
        group_id = GroupService.create_group(dto, user_id)

        response = CreateGroupResponse(data=GroupService.get_group(group_id, user_id))
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class JoinGroupByInviteCodeView(APIView):
    @extend_schema(
        operation_id="join_group_by_invite_code",
        summary="Join a group by invite code",
        description="Join the group an invite code belongs to. Codes are matched case-insensitively.",
        tags=["groups"],
        request=JoinGroupByInviteCodeSerializer,
        responses={
            200: OpenApiResponse(response=JoinGroupResponse, description="Joined group successfully"),
            400: OpenApiResponse(response=ApiErrorResponse, description="Invite code inactive, expired or exhausted"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Invalid invite code or group not found"),
            409: OpenApiResponse(response=ApiErrorResponse, description="Already a member or group is full"),
        },
    )
    def post(self, request: Request):
        user_id = require_user_id(request)
        serializer = JoinGroupByInviteCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group_id = GroupService.join_group_by_invite_code(serializer.validated_data["invite_code"], user_id)

        response = JoinGroupResponse(data=GroupService.get_group(group_id, user_id))
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)


class GroupDetailView(APIView):
    @extend_schema(
        operation_id="get_group_by_id",
        summary="Get group by ID",
        description="Group details. The invite code is only included for the group's creator.",
        tags=["groups"],
        parameters=[GROUP_ID_PARAMETER],
        responses={
            200: OpenApiResponse(description="Group retrieved successfully"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Group not found"),
        },
    )
    def get(self, request: Request, group_id: str):
        user_id = require_user_id(request)
        group = GroupService.get_group(group_id, user_id)
        return Response(data=group.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_group",
        summary="Delete group",
        description="Delete a group and all of its memberships. Only the creator may do this.",
        tags=["groups"],
        parameters=[GROUP_ID_PARAMETER],
        responses={
            204: OpenApiResponse(description="Group deleted successfully"),
            403: OpenApiResponse(response=ApiErrorResponse, description="Only group creators can delete groups"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Group not found"),
        },
    )
    def delete(self, request: Request, group_id: str):
        user_id = require_user_id(request)
        GroupService.delete_group(group_id, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class LeaveGroupView(APIView):
    @extend_schema(
        operation_id="leave_group",
        summary="Leave group",
        description="Leave a group. Creators cannot leave and must delete the group instead.",
        tags=["groups"],
        parameters=[GROUP_ID_PARAMETER],
        request=None,
        responses={
            204: OpenApiResponse(description="Left group successfully"),
            400: OpenApiResponse(response=ApiErrorResponse, description="Creator cannot leave"),
            403: OpenApiResponse(response=ApiErrorResponse, description="Not a member of this group"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Group not found"),
        },
    )
    def post(self, request: Request, group_id: str):
        user_id = require_user_id(request)
        GroupService.leave_group(group_id, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class GroupMembersView(APIView):
    @extend_schema(
        operation_id="get_group_members",
        summary="List group members",
        description="Members of a group in the order they joined. Only visible to members.",
        tags=["groups"],
        parameters=[GROUP_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=GetGroupMembersResponse, description="Members retrieved successfully"),
            403: OpenApiResponse(response=ApiErrorResponse, description="Not a member of this group"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Group not found"),
        },
    )
    def get(self, request: Request, group_id: str):
        user_id = require_user_id(request)
        members = GroupService.get_group_members(group_id, user_id)
        response = GetGroupMembersResponse(members=members, total=len(members))
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)


class GroupLeaderboardView(APIView):
    @extend_schema(
        operation_id="get_group_leaderboard",
        summary="Group leaderboard",
        description="Members ranked by the number of logs shared with the group.",
        tags=["groups"],
        parameters=[GROUP_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=GetGroupLeaderboardResponse, description="Leaderboard retrieved"),
            403: OpenApiResponse(response=ApiErrorResponse, description="Not a member of this group"),
            404: OpenApiResponse(response=ApiErrorResponse, description="Group not found"),
        },
    )
    def get(self, request: Request, group_id: str):
        user_id = require_user_id(request)
        entries = GroupService.get_group_leaderboard(group_id, user_id)
        response = GetGroupLeaderboardResponse(entries=entries, total=len(entries))
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)
