"""Core types and utilities shared by every provider.

This package contains the transfer stage and record types, the results
accumulator, error types and schema validation.
"""

from .errors import ProviderNotReadyError, SnapshotValidationError, TransferError
from .results import TransferResults
from .types import (
    ConfigurationRecord,
    EntityRecord,
    LinkRecord,
    ProviderType,
    StageResult,
    TransferStage,
)
from .validator import validate_record, validate_record_with_error_details, validate_snapshot

__all__ = [
    "ConfigurationRecord",
    "EntityRecord",
    "LinkRecord",
    "ProviderNotReadyError",
    "ProviderType",
    "SnapshotValidationError",
    "StageResult",
    "TransferError",
    "TransferResults",
    "TransferStage",
    "validate_record",
    "validate_record_with_error_details",
    "validate_snapshot",
]
