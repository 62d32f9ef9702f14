from __future__ import annotations
import logging

from ..config_loader import Settings
from ..mongo_client import (
    TASK_INDEXES,
    ensure_collection,
    ensure_indexes,
    get_db,
    list_indexes,
)
from ..schemas.types import IndexInfo, IndexSpec

logger = logging.getLogger(__name__)


def _warn_user_field_spelling() -> None:
    user_fields = {
        field
        for spec in TASK_INDEXES
        for field in spec.fields
        if field.lower().startswith("user")
    }
    if len(user_fields) > 1:
        logger.warning(
            "tasks indexes reference differently spelled user fields",
            extra={"stage": "bootstrap.indexes", "fields": sorted(user_fields)},
        )


def _matches(spec: IndexSpec, info: IndexInfo) -> bool:
    if spec.is_text:
        return info.is_text and info.text_fields() == sorted(spec.fields)
    return [tuple(k) for k in spec.keys] == [tuple(k) for k in info.key]


def bootstrap_mongo(settings: Settings, db=None) -> dict:
    """Create the tasks collection and its indexes, then read the indexes back.

    Runs once, in order, with no retry. Driver errors propagate to the caller
    and stop the remaining steps.
    """
    db = db if db is not None else get_db(settings)
    name = settings.mongo.collection
    logger.info(
        "using database",
        extra={"stage": "bootstrap.database", "db": settings.mongo.db},
    )

    created = ensure_collection(db, name)
    logger.info(
        "collection ready",
        extra={
            "stage": "bootstrap.collection",
            "collection": name,
            "collection_created": created,
        },
    )

    _warn_user_field_spelling()
    index_names = ensure_indexes(db, name)
    logger.info(
        "indexes ensured",
        extra={"stage": "bootstrap.indexes", "collection": name, "indexes": index_names},
    )

    indexes = list_indexes(db, name)
    logger.info(
        "indexes listed",
        extra={"stage": "bootstrap.list", "collection": name, "count": len(indexes)},
    )
    return {
        "ok": True,
        "db": settings.mongo.db,
        "collection": name,
        "collection_created": created,
        "indexes_created": index_names,
        "indexes": [i.model_dump() for i in indexes],
    }


def verify_mongo(settings: Settings, db=None) -> dict:
    db = db if db is not None else get_db(settings)
    name = settings.mongo.collection

    if name not in db.list_collection_names():
        return {
            "ok": False,
            "collection_exists": False,
            "missing": [spec.name for spec in TASK_INDEXES],
            "unexpected": [],
        }

    indexes = [i for i in list_indexes(db, name) if i.name != "_id_"]
    missing = [
        spec.name
        for spec in TASK_INDEXES
        if not any(_matches(spec, info) for info in indexes)
    ]
    unexpected = [
        info.name
        for info in indexes
        if not any(_matches(spec, info) for spec in TASK_INDEXES)
    ]
    return {
        "ok": not missing and not unexpected,
        "collection_exists": True,
        "missing": missing,
        "unexpected": unexpected,
    }
