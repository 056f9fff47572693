"""
Database access helpers

Opens and closes the MongoDB client and provides the small helpers the
service layer uses to turn API payloads into documents and back.
The client is created once per process (see the app lifespan in main.py)
and the collection handle is passed into the service explicitly.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel
from pymongo import AsyncMongoClient

logger = logging.getLogger(__name__)

COFFEE_SHOP_COLLECTION = "coffee_shop"


def connect(database_url: str) -> AsyncMongoClient:
    """Create the process-wide client. No network I/O happens until first use."""
    logger.info("Connecting to MongoDB")
    return AsyncMongoClient(database_url)


async def disconnect(client: AsyncMongoClient) -> None:
    logger.info("Closing MongoDB connection")
    await client.close()


def get_collection(client, database_name: str, name: str = COFFEE_SHOP_COLLECTION):
    return client[database_name][name]


def to_obj_id(id_str: str) -> Optional[ObjectId]:
    """Return the ObjectId for ``id_str``, or None if it is not ObjectId-shaped."""
    if isinstance(id_str, ObjectId):
        return id_str
    if not isinstance(id_str, str) or not ObjectId.is_valid(id_str):
        return None
    return ObjectId(id_str)


def sanitize(doc: Optional[Dict]) -> Optional[Dict]:
    """Replace Mongo's ``_id`` with a string ``id`` field."""
    if not doc:
        return doc
    d = {**doc}
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    return d


async def create_document(collection, data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Insert one document and return it with its generated ``_id``."""
    if isinstance(data, BaseModel):
        data_dict = data.model_dump()
    else:
        data_dict = dict(data)
    result = await collection.insert_one(data_dict)
    data_dict["_id"] = result.inserted_id
    return data_dict


async def get_documents(collection, filter_dict: Optional[Dict] = None) -> List[Dict[str, Any]]:
    cursor = collection.find(filter_dict or {})
    return await cursor.to_list(None)
