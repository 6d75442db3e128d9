import functools
import logging
from abc import ABC

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from tracker.exceptions.store_exceptions import StoreUnavailableException
from tracker_project.db.config import DatabaseManager

logger = logging.getLogger(__name__)


def translate_store_errors(func):
    """
    Turns driver failures into StoreUnavailableException so callers only deal with domain errors.
    Duplicate key violations are left alone since callers rely on them for uniqueness checks.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DuplicateKeyError:
            raise
        except PyMongoError as e:
            logger.error(f"{func.__qualname__} failed: {e}")
            raise StoreUnavailableException() from e

    return wrapper


class MongoRepository(ABC):
    collection_name: str

    @classmethod
    def get_collection(cls) -> Collection:
        return DatabaseManager().get_collection(cls.collection_name)
