from tracker.constants.messages import RepositoryErrors


class StoreUnavailableException(Exception):
    def __init__(self, message: str = RepositoryErrors.STORE_UNAVAILABLE):
        self.message = message
        super().__init__(self.message)


class BatchPreconditionFailed(Exception):
    """Raised inside a transaction when a guarded write matched nothing."""

    def __init__(self, collection_name: str, filter: dict):
        self.collection_name = collection_name
        self.filter = filter
        self.message = RepositoryErrors.BATCH_PRECONDITION_FAILED.format(collection_name)
        super().__init__(self.message)


class ConcurrentUpdateException(Exception):
    def __init__(self, message: str = RepositoryErrors.CONCURRENT_UPDATE):
        self.message = message
        super().__init__(self.message)


class InviteCodeGenerationException(Exception):
    def __init__(self, message: str = RepositoryErrors.INVITE_CODE_GENERATION_FAILED):
        self.message = message
        super().__init__(self.message)
