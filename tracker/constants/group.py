import string
from enum import Enum


class GroupRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


class InviteCodeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUPERSEDED = "SUPERSEDED"
    REVOKED = "REVOKED"


MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 100
DEFAULT_GROUP_SIZE = 20

MAX_GROUP_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 200
MAX_DISPLAY_NAME_LENGTH = 30

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_LENGTH = 6
MAX_INVITE_CODE_INPUT_LENGTH = 20

# Attempts before giving up on a unique invite code
INVITE_CODE_MAX_ATTEMPTS = 5

# Attempts before a join that keeps losing races reports a conflict
MAX_JOIN_ATTEMPTS = 3

MAX_LOG_HISTORY_LIMIT = 200
DEFAULT_LOG_HISTORY_LIMIT = 50
