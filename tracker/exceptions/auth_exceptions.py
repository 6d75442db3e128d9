from tracker.constants.messages import AuthErrorMessages


class BaseAuthException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class AuthenticationRequiredException(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.USER_NOT_AUTHENTICATED):
        super().__init__(message)


class TokenExpiredError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.TOKEN_EXPIRED):
        super().__init__(message)


class TokenMissingError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.NO_ACCESS_TOKEN):
        super().__init__(message)


class TokenInvalidError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.TOKEN_INVALID):
        super().__init__(message)
