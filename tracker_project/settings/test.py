from .base import *

TESTING = True
DEBUG = True

# Django's own test machinery needs a relational database; application data lives in MongoDB
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Integration tests point MONGODB_URI at a testcontainers replica set
DB_NAME = "testdb"
MONGODB_SERVER_SELECTION_TIMEOUT_MS = 2000

LOGGING["loggers"]["tracker"]["level"] = "WARNING"
