from __future__ import annotations
import logging

from pymongo import MongoClient, ASCENDING, TEXT
from pymongo.errors import CollectionInvalid

from .config_loader import Settings
from .schemas.types import IndexInfo, IndexSpec

logger = logging.getLogger(__name__)

TASKS_COLLECTION = "tasks"

# Creation order matters only for the listing; the server keeps whatever exists.
TASK_INDEXES = [
    # tasks by user, ordered by due date. "userdId" is the deployed spelling
    IndexSpec(keys=[("userdId", ASCENDING), ("dueDate", ASCENDING)]),
    # tasks by user and status, ordered by due date
    IndexSpec(keys=[("userId", ASCENDING), ("status", ASCENDING), ("dueDate", ASCENDING)]),
    # keyword search over title and description
    IndexSpec(keys=[("title", TEXT), ("description", TEXT)]),
]


def get_client(s: Settings) -> MongoClient:
    return MongoClient(s.mongo.uri, serverSelectionTimeoutMS=s.mongo.server_selection_timeout_ms)


def get_db(s: Settings, client: MongoClient | None = None):
    return (client or get_client(s))[s.mongo.db]


def ping(client: MongoClient) -> None:
    client.admin.command("ping")


def ensure_collection(db, name: str = TASKS_COLLECTION) -> bool:
    """Create ``name`` in ``db``; return ``False`` if it already existed."""
    try:
        db.create_collection(name)
    except CollectionInvalid:
        logger.info(
            "collection already exists",
            extra={"stage": "bootstrap.collection", "collection": name},
        )
        return False
    return True


def ensure_indexes(db, collection: str = TASKS_COLLECTION) -> list[str]:
    coll = db[collection]
    return [coll.create_index(spec.keys) for spec in TASK_INDEXES]


def list_indexes(db, collection: str = TASKS_COLLECTION) -> list[IndexInfo]:
    info = db[collection].index_information()
    return [IndexInfo.from_server(name, spec) for name, spec in info.items()]
