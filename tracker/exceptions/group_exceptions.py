from tracker.constants.messages import ApiErrors


class BaseGroupException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class GroupNotFoundException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.GROUP_NOT_FOUND):
        super().__init__(message)


class InvalidInviteCodeException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.INVALID_INVITE_CODE):
        super().__init__(message)


class InviteCodeInactiveException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.INVITE_CODE_INACTIVE):
        super().__init__(message)


class InviteCodeExpiredException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.INVITE_CODE_EXPIRED):
        super().__init__(message)


class InviteCodeExhaustedException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.INVITE_CODE_EXHAUSTED):
        super().__init__(message)


class AlreadyMemberException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.ALREADY_MEMBER):
        super().__init__(message)


class GroupAtCapacityException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.GROUP_AT_CAPACITY):
        super().__init__(message)


class CreatorCannotLeaveException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.CREATOR_CANNOT_LEAVE):
        super().__init__(message)


class NotGroupMemberException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.NOT_GROUP_MEMBER):
        super().__init__(message)


class NotAuthorizedException(BaseGroupException):
    def __init__(self, message: str = ApiErrors.FORBIDDEN_TITLE):
        super().__init__(message)
