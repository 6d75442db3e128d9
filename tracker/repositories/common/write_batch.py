import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from pymongo.client_session import ClientSession
from pymongo.errors import DuplicateKeyError, PyMongoError

from tracker.constants.messages import RepositoryErrors
from tracker.exceptions.store_exceptions import BatchPreconditionFailed, StoreUnavailableException
from tracker_project.db.config import DatabaseManager

logger = logging.getLogger(__name__)


class BatchOperationType(Enum):
    INSERT = "insert"
    UPDATE = "update"
    UPDATE_MANY = "update_many"
    UPSERT = "upsert"
    DELETE = "delete"
    DELETE_MANY = "delete_many"


@dataclass
class BatchOperation:
    type: BatchOperationType
    collection_name: str
    filter: dict = field(default_factory=dict)
    document: dict | None = None
    update: dict | None = None
    expect_match: bool = False


class WriteBatch:
    """
    Collects writes across collections and applies them in a single MongoDB transaction.

    Writes queued with `expect_match=True` act as guards: if one matches no document the
    whole transaction is aborted and BatchPreconditionFailed is raised, so a batch either
    lands completely or leaves the store untouched.
    """

    def __init__(self):
        self.operations: List[BatchOperation] = []

    def insert(self, collection_name: str, document: dict) -> "WriteBatch":
        self.operations.append(BatchOperation(BatchOperationType.INSERT, collection_name, document=document))
        return self

    def update(self, collection_name: str, filter: dict, update: dict, expect_match: bool = False) -> "WriteBatch":
        self.operations.append(
            BatchOperation(BatchOperationType.UPDATE, collection_name, filter, update=update, expect_match=expect_match)
        )
        return self

    def update_many(self, collection_name: str, filter: dict, update: dict) -> "WriteBatch":
        self.operations.append(BatchOperation(BatchOperationType.UPDATE_MANY, collection_name, filter, update=update))
        return self

    def upsert(self, collection_name: str, filter: dict, update: dict) -> "WriteBatch":
        self.operations.append(BatchOperation(BatchOperationType.UPSERT, collection_name, filter, update=update))
        return self

    def delete(self, collection_name: str, filter: dict, expect_match: bool = False) -> "WriteBatch":
        self.operations.append(
            BatchOperation(BatchOperationType.DELETE, collection_name, filter, expect_match=expect_match)
        )
        return self

    def delete_many(self, collection_name: str, filter: dict) -> "WriteBatch":
        self.operations.append(BatchOperation(BatchOperationType.DELETE_MANY, collection_name, filter))
        return self

    def __len__(self) -> int:
        return len(self.operations)

    def commit(self) -> None:
        if not self.operations:
            return

        db_manager = DatabaseManager()
        client = db_manager.get_client()

        def apply_operations(session: ClientSession):
            for operation in self.operations:
                self._apply(db_manager, operation, session)

        try:
            with client.start_session() as session:
                session.with_transaction(apply_operations)
        except (BatchPreconditionFailed, DuplicateKeyError):
            raise
        except PyMongoError as e:
            logger.error(RepositoryErrors.BATCH_COMMIT_FAILED.format(e))
            raise StoreUnavailableException() from e

    @staticmethod
    def _apply(db_manager: DatabaseManager, operation: BatchOperation, session: ClientSession) -> None:
        collection = db_manager.get_collection(operation.collection_name)

        if operation.type == BatchOperationType.INSERT:
            collection.insert_one(operation.document, session=session)
            return

        if operation.type == BatchOperationType.UPDATE:
            result = collection.update_one(operation.filter, operation.update, session=session)
            matched = result.matched_count
        elif operation.type == BatchOperationType.UPSERT:
            collection.update_one(operation.filter, operation.update, upsert=True, session=session)
            return
        elif operation.type == BatchOperationType.UPDATE_MANY:
            collection.update_many(operation.filter, operation.update, session=session)
            return
        elif operation.type == BatchOperationType.DELETE:
            result = collection.delete_one(operation.filter, session=session)
            matched = result.deleted_count
        else:
            collection.delete_many(operation.filter, session=session)
            return

        if operation.expect_match and matched == 0:
            raise BatchPreconditionFailed(operation.collection_name, operation.filter)
