# Application Messages
class AppMessages:
    GROUP_CREATED = "Group created successfully"
    GROUP_JOINED = "Joined group successfully"
    GROUP_LEFT = "Left group successfully"
    GROUP_DELETED = "Group deleted successfully"
    INVITE_CODE_GENERATED = "New invite code generated successfully"
    PROFILE_UPDATED = "Profile updated successfully"
    LOG_CREATED = "Log recorded successfully"


# Repository error messages
class RepositoryErrors:
    DB_INIT_FAILED = "Failed to initialize database: {0}"
    STORE_UNAVAILABLE = "Data store is temporarily unavailable"
    BATCH_COMMIT_FAILED = "Failed to commit batch: {0}"
    BATCH_PRECONDITION_FAILED = "A guarded write matched no document: {0}"
    INVITE_CODE_GENERATION_FAILED = "Failed to generate a unique invite code"
    CONCURRENT_UPDATE = "The group was modified concurrently, please try again"


# API error messages
class ApiErrors:
    SERVER_ERROR = "Server Error"
    UNEXPECTED_ERROR = "Unexpected Error"
    INTERNAL_SERVER_ERROR = "Internal server error"
    VALIDATION_ERROR = "Validation Error"
    RESOURCE_NOT_FOUND_TITLE = "Resource Not Found"
    FORBIDDEN_TITLE = "Forbidden"
    CONFLICT_TITLE = "Conflict"
    SERVICE_UNAVAILABLE_TITLE = "Service Unavailable"
    UNEXPECTED_ERROR_OCCURRED = "An unexpected error occurred"
    AUTHENTICATION_FAILED = "Authentication Failed"

    GROUP_NOT_FOUND = "Group not found"
    USER_NOT_FOUND = "User not found"
    INVALID_INVITE_CODE = "Invalid invite code"
    INVITE_CODE_INACTIVE = "Invite code is no longer active"
    INVITE_CODE_EXPIRED = "Invite code has expired"
    INVITE_CODE_EXHAUSTED = "Invite code has reached maximum uses"
    ALREADY_MEMBER = "You are already a member of this group"
    GROUP_AT_CAPACITY = "Group is at maximum capacity"
    CREATOR_CANNOT_LEAVE = "Group creators cannot leave their own group. Delete the group instead."
    NOT_GROUP_MEMBER = "You are not a member of this group"
    ONLY_ADMINS_CAN_GENERATE_CODES = "Only group admins can generate new invite codes"
    ONLY_ADMINS_CAN_VIEW_CODE = "Only group admins can view the invite code"
    ONLY_CREATOR_CAN_DELETE = "Only group creators can delete groups"


# Validation error messages
class ValidationErrors:
    BLANK_GROUP_NAME = "Group name must not be blank."
    GROUP_NAME_TOO_LONG = "Group name must be at most {0} characters."
    DESCRIPTION_TOO_LONG = "Description must be at most {0} characters."
    MAX_MEMBERS_OUT_OF_RANGE = "Max members must be between {0} and {1}."
    BLANK_INVITE_CODE = "Invite code must not be blank."
    INVITE_CODE_TOO_LONG = "Invite code must be at most {0} characters."
    BLANK_DISPLAY_NAME = "Display name must not be blank."
    DISPLAY_NAME_TOO_LONG = "Display name must be at most {0} characters."
    PAST_EXPIRY = "Expiry must be in the future."
    MAX_USES_POSITIVE = "Max uses must be a positive integer."
    LIMIT_OUT_OF_RANGE = "Limit must be between 1 and {0}."
    INVALID_TIMEZONE = "{0} is not a valid timezone."


# Auth error messages
class AuthErrorMessages:
    AUTHENTICATION_REQUIRED = "Authentication credentials were not provided."
    USER_NOT_AUTHENTICATED = "User not authenticated"
    NO_ACCESS_TOKEN = "No access token provided"
    TOKEN_EXPIRED = "Access token has expired"
    TOKEN_EXPIRED_TITLE = "Token Expired"
    TOKEN_INVALID = "Invalid access token"
    INVALID_TOKEN_TITLE = "Invalid Token"
    MISSING_EMAIL = "Access token does not carry an email address"
    MISSING_USER_ID = "Access token does not carry a user id"
