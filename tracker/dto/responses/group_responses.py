from typing import List
from pydantic import BaseModel

from tracker.constants.messages import AppMessages
from tracker.dto.group_dto import GroupDTO, GroupMemberDTO, LeaderboardEntryDTO


class CreateGroupResponse(BaseModel):
    statusCode: int = 201
    successMessage: str = AppMessages.GROUP_CREATED
    data: GroupDTO


class JoinGroupResponse(BaseModel):
    statusCode: int = 200
    successMessage: str = AppMessages.GROUP_JOINED
    data: GroupDTO


class GetUserGroupsResponse(BaseModel):
    groups: List[GroupDTO] = []
    total: int = 0


class GetGroupMembersResponse(BaseModel):
    members: List[GroupMemberDTO] = []
    total: int = 0


class GetGroupLeaderboardResponse(BaseModel):
    entries: List[LeaderboardEntryDTO] = []
    total: int = 0
