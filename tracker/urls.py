from django.urls import path

from tracker.views.group import (
    GroupDetailView,
    GroupLeaderboardView,
    GroupListView,
    GroupMembersView,
    JoinGroupByInviteCodeView,
    LeaveGroupView,
)
from tracker.views.health import HealthView
from tracker.views.invite_code import GroupInviteCodeView, InviteCodePreviewView
from tracker.views.poop_log import PoopLogListView
from tracker.views.user import UserProfileView

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("users/me", UserProfileView.as_view(), name="user_profile"),
    path("groups", GroupListView.as_view(), name="groups"),
    path("groups/join", JoinGroupByInviteCodeView.as_view(), name="join_group"),
    path("groups/<str:group_id>", GroupDetailView.as_view(), name="group_detail"),
    path("groups/<str:group_id>/leave", LeaveGroupView.as_view(), name="leave_group"),
    path("groups/<str:group_id>/members", GroupMembersView.as_view(), name="group_members"),
    path("groups/<str:group_id>/leaderboard", GroupLeaderboardView.as_view(), name="group_leaderboard"),
    path("groups/<str:group_id>/invite-code", GroupInviteCodeView.as_view(), name="group_invite_code"),
    path("invite-codes/<str:code>", InviteCodePreviewView.as_view(), name="invite_code_preview"),
    path("logs", PoopLogListView.as_view(), name="logs"),
]
