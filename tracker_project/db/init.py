import logging
import time

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from tracker_project.db.config import DatabaseManager

logger = logging.getLogger(__name__)

INDEXES = {
    "invite_codes": [
        [("group_id", ASCENDING), ("status", ASCENDING)],
    ],
    "group_members": [
        [("group_id", ASCENDING), ("joined_at", ASCENDING)],
        [("user_id", ASCENDING)],
    ],
    "groups": [
        [("created_at", DESCENDING)],
    ],
    "daily_stats": [
        [("user_id", ASCENDING), ("date", DESCENDING)],
    ],
    "users": [
        [("groups", ASCENDING)],
    ],
    "poop_logs": [
        [("user_id", ASCENDING), ("timestamp", DESCENDING)],
    ],
}


def ensure_indexes() -> bool:
    db_manager = DatabaseManager()
    try:
        for collection_name, indexes in INDEXES.items():
            collection = db_manager.get_collection(collection_name)
            for keys in indexes:
                collection.create_index(keys)
        logger.info("Database indexes ensured")
        return True
    except PyMongoError as e:
        logger.error(f"Error creating database indexes: {str(e)}")
        return False


def initialize_database(max_retries=5, retry_delay=2):
    """
    Initialize database collections and indexes.
    Includes retry logic for Docker environments.
    """
    db_manager = DatabaseManager()

    for attempt in range(max_retries):
        if db_manager.check_database_health():
            break
        if attempt < max_retries - 1:
            logger.warning(
                f"Database health check failed, attempt {attempt + 1}. Retrying in {retry_delay} seconds..."
            )
            time.sleep(retry_delay)
        else:
            logger.error("All database connection attempts failed")
            return False

    if not ensure_indexes():
        return False

    logger.info("Database initialization completed successfully")
    return True
