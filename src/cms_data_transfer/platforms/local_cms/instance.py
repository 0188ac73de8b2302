"""Backing CMS instance boundary.

``CmsInstance`` is the minimum a CMS instance has to offer for the local
source provider to read from it. ``MemoryCmsInstance`` implements it on
top of a snapshot document, which is handy for tests and for replaying
exported data.
"""

import json
import logging
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ...core.validator import validate_snapshot

logger = logging.getLogger(__name__)

Schema = dict[str, Any]


@runtime_checkable
class CmsInstance(Protocol):
    """Protocol for a running CMS instance.

    Attributes:
        content_types: Content type schemas keyed by uid
        components: Reusable component schemas keyed by uid
    """

    content_types: Mapping[str, Schema]
    components: Mapping[str, Schema]

    def query(self, uid: str) -> AsyncIterator[dict[str, Any]]:
        """Stream every row stored for ``uid``."""
        ...

    def destroy(self) -> Any:
        """Shut the instance down. May return an awaitable."""
        ...


def get_model(instance: CmsInstance, uid: str) -> Schema:
    """Look up a content type or component schema by uid.

    Raises:
        KeyError: If no schema is registered under uid
    """
    if uid in instance.content_types:
        return instance.content_types[uid]
    if uid in instance.components:
        return instance.components[uid]
    raise KeyError(f"Model not found: {uid}")


@dataclass
class MemoryCmsInstance:
    """CMS instance backed by in-memory rows.

    Example:
        >>> instance = MemoryCmsInstance.from_snapshot({
        ...     'contentTypes': {'api::tag.tag': {'uid': 'api::tag.tag', 'attributes': {}}},
        ...     'data': {'api::tag.tag': [{'id': 1, 'name': 'news'}]},
        ... })
        >>> [row async for row in instance.query('api::tag.tag')]
        [{'id': 1, 'name': 'news'}]
    """

    content_types: dict[str, Schema] = field(default_factory=dict)
    components: dict[str, Schema] = field(default_factory=dict)
    data: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    destroyed: bool = False

    @classmethod
    def from_snapshot(cls, document: dict[str, Any]) -> "MemoryCmsInstance":
        """Build an instance from a snapshot document.

        Raises:
            SnapshotValidationError: If the document is malformed
        """
        validate_snapshot(document)
        return cls(
            content_types=dict(document["contentTypes"]),
            components=dict(document.get("components", {})),
            data={uid: list(rows) for uid, rows in document.get("data", {}).items()},
        )

    @classmethod
    def load_snapshot(cls, path: Path) -> "MemoryCmsInstance":
        """Read a JSON snapshot file and build an instance from it.

        Raises:
            FileNotFoundError: If path doesn't exist
            json.JSONDecodeError: If the file is not valid JSON
            SnapshotValidationError: If the document is malformed
        """
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
        logger.debug("Loaded snapshot from %s", path)
        return cls.from_snapshot(document)

    async def query(self, uid: str) -> AsyncIterator[dict[str, Any]]:
        """Stream the rows of ``uid``, one copy per row.

        Raises:
            RuntimeError: If the instance was destroyed
        """
        if self.destroyed:
            raise RuntimeError("CMS instance has been destroyed")

        for row in self.data.get(uid, []):
            yield dict(row)

    async def destroy(self) -> None:
        self.destroyed = True
