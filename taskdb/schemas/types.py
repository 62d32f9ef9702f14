from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

Direction = Union[int, str]


class Task(BaseModel):
    # Only the fields the tasks indexes refer to; no validation beyond types.
    userId: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    status: Optional[str] = None


class IndexSpec(BaseModel):
    keys: List[Tuple[str, Direction]]

    @property
    def name(self) -> str:
        """Default name the server assigns, e.g. ``userId_1_status_1_dueDate_1``."""
        return "_".join(f"{field}_{direction}" for field, direction in self.keys)

    @property
    def is_text(self) -> bool:
        return any(direction == "text" for _, direction in self.keys)

    @property
    def fields(self) -> List[str]:
        return [field for field, _ in self.keys]


class IndexInfo(BaseModel):
    name: str
    key: List[Tuple[str, Direction]]
    weights: Optional[Dict[str, int]] = None
    unique: Optional[bool] = None
    options: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_server(cls, name: str, info: dict) -> "IndexInfo":
        info = dict(info)
        key = [(field, direction) for field, direction in info.pop("key", [])]
        weights = info.pop("weights", None)
        unique = info.pop("unique", None)
        return cls(
            name=name,
            key=key,
            weights=dict(weights) if weights else None,
            unique=unique,
            options=info,
        )

    def text_fields(self) -> List[str]:
        # Real servers store text indexes as _fts/_ftsx with the fields in weights
        if self.weights:
            return sorted(self.weights)
        return sorted(field for field, direction in self.key if direction == "text")

    @property
    def is_text(self) -> bool:
        return any(direction == "text" for _, direction in self.key)
