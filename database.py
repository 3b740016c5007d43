import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi import Request
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult
from pymongo.server_api import ServerApi

from config import Settings

logger = logging.getLogger(__name__)

QUERY_COLLECTION = "myQueryCollection"
RECOMMENDATION_COLLECTION = "recommendationCollection"


def connect(settings: Settings) -> MongoClient:
    # The driver connects lazily and pools connections internally
    client = MongoClient(
        settings.database_url,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )
    logger.info("MongoDB client created", extra={"database": settings.database_name})
    return client


def get_db(request: Request) -> Database:
    return request.app.state.db


def to_obj_id(id_str: str) -> ObjectId:
    # bson.errors.InvalidId propagates to the framework's default 500
    return ObjectId(id_str)


def sanitize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return doc
    return {k: str(v) if isinstance(v, ObjectId) else v for k, v in doc.items()}


def sanitize_many(docs) -> List[Dict[str, Any]]:
    return [sanitize(d) for d in docs]


def insert_result(res: InsertOneResult) -> Dict[str, Any]:
    return {"acknowledged": res.acknowledged, "insertedId": str(res.inserted_id)}


def update_result(res: UpdateResult) -> Dict[str, Any]:
    upserted = res.upserted_id
    return {
        "acknowledged": res.acknowledged,
        "matchedCount": res.matched_count,
        "modifiedCount": res.modified_count,
        "upsertedId": str(upserted) if upserted is not None else None,
        "upsertedCount": 0 if upserted is None else 1,
    }


def delete_result(res: DeleteResult) -> Dict[str, Any]:
    return {"acknowledged": res.acknowledged, "deletedCount": res.deleted_count}
