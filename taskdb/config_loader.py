from __future__ import annotations
from pathlib import Path
import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field
import yaml

logger = logging.getLogger(__name__)

_SETTINGS_CACHE: dict[str, "Settings"] = {}


class MongoConfig(BaseModel):
    uri: str
    db: str = Field(default="task_service_db")
    collection: str = Field(default="tasks")
    server_selection_timeout_ms: int = Field(default=10_000)


class Settings(BaseModel):
    mongo: MongoConfig


def _load_yaml(path: str | os.PathLike) -> dict:
    p = Path(path)
    if not p.exists():
        logger.error(f"Config file {p} does not exist")
        return {}
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _settings_cache_key(config_path: str) -> str:
    return str(Path(config_path).resolve())


def load_settings(config_path: str = "config.yaml", *, update_cache: bool = True) -> Settings:
    load_dotenv(override=False)

    data = _load_yaml(config_path)
    mongo = data.get("mongo", {}) or {}

    # Allow env overrides for the connection
    env_overrides = {
        "mongo": {
            "uri": os.getenv("MONGO_URI") or os.getenv("MONGODB_URI") or mongo.get("uri"),
            "db": os.getenv("MONGO_DB") or mongo.get("db", "task_service_db"),
        },
    }

    merged = {
        **data,
        "mongo": {**mongo, **env_overrides["mongo"]},
    }

    settings = Settings(**merged)
    if update_cache:
        _SETTINGS_CACHE[_settings_cache_key(config_path)] = settings
    return settings


def get_cached_settings(config_path: str = "config.yaml") -> Settings | None:
    return _SETTINGS_CACHE.get(_settings_cache_key(config_path))


def clear_settings_cache():
    _SETTINGS_CACHE.clear()
