"""Base abstractions for source providers.

This module defines the interface every source provider implements so a
transfer engine can read from it without knowing where the data lives.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from ..core.results import TransferResults
from ..core.types import ProviderType


class SourceProvider(ABC):
    """Abstract base class for all source providers.

    A source provider exposes the data of one backing system as
    independent streams (entities, links, configuration, schemas) and
    reports how many items went through each of them in ``results``.

    Lifecycle: ``bootstrap()`` first, then any stream operations, then
    ``close()``. Stream operations fail immediately when called before
    bootstrap.

    Attributes:
        name: Stable provider name, e.g. 'source::local-cms'
        type: Always 'source'
        results: Item counts per transfer stage, readable at any time
    """

    name: str
    type: ProviderType = "source"
    results: TransferResults

    @abstractmethod
    async def bootstrap(self) -> None:
        """Acquire whatever the provider reads from."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release what ``bootstrap()`` acquired."""
        pass

    @abstractmethod
    async def get_metadata(self) -> Any:
        """Describe the source. May return None."""
        pass

    @abstractmethod
    def stream_entities(self) -> AsyncIterator[Any]:
        """Stream every entity of the source.

        Raises:
            ProviderNotReadyError: If called before bootstrap
        """
        pass

    @abstractmethod
    def stream_links(self) -> AsyncIterator[Any]:
        """Stream every relation between entities.

        Raises:
            ProviderNotReadyError: If called before bootstrap
        """
        pass

    @abstractmethod
    def stream_configuration(self) -> AsyncIterator[Any]:
        """Stream configuration records.

        Raises:
            ProviderNotReadyError: If called before bootstrap
        """
        pass

    @abstractmethod
    def stream_schemas(self) -> AsyncIterator[Any]:
        """Stream schema descriptors.

        Raises:
            ProviderNotReadyError: If called before bootstrap
        """
        pass

    @abstractmethod
    def get_schemas(self) -> list[Any]:
        """Return every schema descriptor at once.

        Raises:
            ProviderNotReadyError: If called before bootstrap
        """
        pass
