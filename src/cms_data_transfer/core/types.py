"""Type definitions for transfer stages, results and records.

The record TypedDicts mirror the JSON schemas shipped in
``cms_data_transfer/schemas/records.schema.json``.
"""

from enum import Enum
from typing import Any, Literal, TypedDict

ProviderType = Literal["source", "destination"]


class TransferStage(str, Enum):
    """Category of data flowing through a provider stream.

    Members compare and hash equal to their string value, so
    ``results["entities"]`` and ``results[TransferStage.ENTITIES]``
    address the same entry.
    """

    ENTITIES = "entities"
    LINKS = "links"
    CONFIGURATION = "configuration"
    SCHEMAS = "schemas"

    def __str__(self) -> str:
        return self.value


class StageResult(TypedDict):
    """Number of items observed for one transfer stage."""

    items: int


class EntityRecord(TypedDict):
    """Entity as emitted by the entities stream after transformation."""

    type: str  # Content type uid (e.g. 'api::article.article')
    id: Any  # Primary key of the row
    data: dict[str, Any]  # Every other column of the row


class LinkEnd(TypedDict, total=False):
    """One side of a relation."""

    type: str
    ref: Any
    field: str


class LinkRecord(TypedDict):
    """Relation between two entities."""

    kind: str  # 'relation.basic' or 'relation.morph'
    relation: str  # e.g. 'oneToMany', 'morphToMany'
    left: LinkEnd
    right: LinkEnd


class ConfigurationRecord(TypedDict):
    """Configuration row wrapped with its origin."""

    type: str  # 'core-store' or 'webhook'
    value: dict[str, Any]
