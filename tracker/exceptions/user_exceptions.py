from tracker.constants.messages import ApiErrors


class UserNotFoundException(Exception):
    def __init__(self, user_id: str | None = None, message: str = ApiErrors.USER_NOT_FOUND):
        self.user_id = user_id
        self.message = message
        super().__init__(self.message)
