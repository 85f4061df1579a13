import logging
from typing import Any, Dict, List
from pymongo.collection import Collection

logger = logging.getLogger(__name__)


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Render the ObjectId primary key as a plain string for JSON output"""
    if "_id" in doc:
        doc = {**doc, "_id": str(doc["_id"])}
    return doc


class DocumentService:
    def __init__(self, collection: Collection, list_limit: int = 100):
        self.collection = collection
        self.list_limit = list_limit

    def list_documents(self) -> List[Dict[str, Any]]:
        """Return up to list_limit documents in natural order"""
        cursor = self.collection.find({}).limit(self.list_limit)
        return [serialize_document(doc) for doc in cursor]

    def insert_document(self, doc: Dict[str, Any]) -> str:
        """Insert a validated document and return its id.

        Database errors are not caught here; they reach the global
        exception handler as a 500.
        """
        result = self.collection.insert_one(doc)
        logger.info(f"Inserted document {result.inserted_id} into {self.collection.name}")
        return str(result.inserted_id)
