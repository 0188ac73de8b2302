"""CMS Data Transfer - source providers.

This package exposes the data of a content-management system (entities,
links, configuration and schemas) as independent, counted async streams
that a transfer engine can read and write to a destination.
"""

# Core library interface
from .lifecycle import InstanceLifecycle, LifecycleState
from .registry import ProviderRegistry
from .sources.base import SourceProvider
from .streams import StageCounter, chain, from_iterable, on_item_passthrough

# Core utilities
from .core import ProviderNotReadyError, SnapshotValidationError, TransferError
from .core import StageResult, TransferResults, TransferStage
from .core import validate_record, validate_record_with_error_details, validate_snapshot

__version__ = "0.1.0"

# Auto-discover and register all platforms
ProviderRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "ProviderRegistry",
    "SourceProvider",
    "InstanceLifecycle",
    "LifecycleState",
    # Stream composition
    "StageCounter",
    "chain",
    "from_iterable",
    "on_item_passthrough",
    # Core utilities
    "StageResult",
    "TransferResults",
    "TransferStage",
    "TransferError",
    "ProviderNotReadyError",
    "SnapshotValidationError",
    "validate_record",
    "validate_record_with_error_details",
    "validate_snapshot",
]
