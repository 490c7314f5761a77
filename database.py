"""
Database access

MongoDB is used as a plain keyed store: every collection holds flat records
keyed by an opaque string id, written with a single put and read back with a
full scan. Driver failures are re-raised as StorageError.
"""

import logging
import os
from typing import Any, Dict, List, Union

from bson.errors import InvalidDocument
from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from errors import StorageError

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME")

CUSTOMERS = os.getenv("CUSTOMERS_COLLECTION", "customers")
ORDERS = os.getenv("ORDERS_COLLECTION", "orders")

db = None

if DATABASE_URL and DATABASE_NAME:
    client = MongoClient(DATABASE_URL)
    db = client[DATABASE_NAME]


def _collection(collection_name: str):
    if db is None:
        raise StorageError("Database not available. Check DATABASE_URL and DATABASE_NAME.")
    return db[collection_name]


def put_document(collection_name: str, key: str, data: Union[BaseModel, Dict[str, Any]]) -> str:
    """Write one record under `key`, replacing whatever was stored there."""
    data_dict = data.model_dump() if isinstance(data, BaseModel) else dict(data)
    data_dict["_id"] = key
    try:
        _collection(collection_name).replace_one({"_id": key}, data_dict, upsert=True)
    except (PyMongoError, InvalidDocument, OverflowError) as exc:
        logger.error("put into %s failed for key %s", collection_name, key, exc_info=True)
        raise StorageError(f"Failed to write to {collection_name}") from exc
    return key


def scan_documents(collection_name: str) -> List[Dict[str, Any]]:
    """Read every record of a collection. The storage key is not returned."""
    try:
        docs = list(_collection(collection_name).find({}))
    except PyMongoError as exc:
        logger.error("scan of %s failed", collection_name, exc_info=True)
        raise StorageError(f"Failed to read {collection_name}") from exc
    for doc in docs:
        doc.pop("_id", None)
    return docs
