from django.apps import AppConfig
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class TrackerConfig(AppConfig):
    name = "tracker"

    def ready(self):
        """Initialize application components when Django starts"""

        if settings.TESTING:
            logger.info("Test mode detected - skipping database initialization")
            return

        from tracker_project.db.init import initialize_database

        if not initialize_database():
            logger.error("Database initialization failed, requests will fail until MongoDB is reachable")
