"""
MongoDB connection for the document API.

Collections: person, group, listing, application.
"""
import logging
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from campus_housing.config.settings import settings

logger = logging.getLogger(__name__)

# Collection name constants (avoid typos)
COLLECTIONS = {
    "person": "person",
    "group": "group",
    "listing": "listing",
    "application": "application",
}


def require_mongodb_uri() -> str:
    """Return the configured URI; the document API cannot run without it."""
    if not settings.mongodb_uri:
        raise RuntimeError("Missing MONGODB_URI in environment.")
    return settings.mongodb_uri


class MongoConnection:
    _client: MongoClient = None

    @classmethod
    def get_client(cls) -> MongoClient:
        if cls._client is None:
            cls._client = MongoClient(require_mongodb_uri())
        return cls._client

    @classmethod
    def reset_client(cls):
        if cls._client is not None:
            cls._client.close()
        cls._client = None


def get_mongo_db() -> Database:
    return MongoConnection.get_client()[settings.mongodb_db]


def get_collection(name: str) -> Collection:
    return get_mongo_db()[COLLECTIONS[name]]


def check_mongo_connection() -> bool:
    """Ping the server. Returns False instead of raising so health checks stay up."""
    try:
        MongoConnection.get_client().admin.command("ping")
        return True
    except Exception as e:
        logger.warning(f"MongoDB connection failed: {e}")
        return False
