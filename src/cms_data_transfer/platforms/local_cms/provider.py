"""Local CMS source provider.

This module provides a SourceProvider reading directly from a CMS
instance running in the same process.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union

from ...core.results import TransferResults
from ...core.types import (
    ConfigurationRecord,
    EntityRecord,
    LinkRecord,
    ProviderType,
    TransferStage,
)
from ...lifecycle import InstanceLifecycle
from ...sources.base import SourceProvider
from ...streams import StageCounter, chain, from_iterable
from .configuration import create_configuration_stream
from .entities import create_entities_stream, create_entities_transform_stream
from .instance import CmsInstance, Schema
from .links import create_links_stream

logger = logging.getLogger(__name__)


@dataclass
class LocalCmsSourceProviderOptions:
    """Options for the local CMS source provider.

    Attributes:
        get_instance: Returns the CMS instance, or an awaitable of it
        auto_destroy: Destroy the instance on close. Unset or True means
                      yes; only an explicit False keeps it running.
    """

    get_instance: Callable[[], Union[CmsInstance, Awaitable[CmsInstance]]]
    auto_destroy: bool | None = None

    def __post_init__(self) -> None:
        if not callable(self.get_instance):
            raise TypeError("get_instance must be callable")
        if self.auto_destroy is not None and not isinstance(self.auto_destroy, bool):
            raise TypeError(
                f"auto_destroy must be a bool or None, got {type(self.auto_destroy).__name__}"
            )


class LocalCmsSourceProvider(SourceProvider):
    """Source provider for a CMS instance living in this process.

    Entities, links and configuration are streamed, each through a stage
    counter that records how many items went by in ``results``. Schemas
    are small and needed up front, so they are collected eagerly.

    Example:
        >>> provider = LocalCmsSourceProvider(
        ...     LocalCmsSourceProviderOptions(get_instance=lambda: instance)
        ... )
        >>> await provider.bootstrap()
        >>> async for record in provider.stream_entities():
        ...     print(record['type'], record['id'])
        >>> await provider.close()
        >>> provider.results['entities']
        {'items': 3}
    """

    name: str = "source::local-cms"
    type: ProviderType = "source"

    def __init__(self, options: LocalCmsSourceProviderOptions):
        self.options = options
        self.results = TransferResults()
        self._lifecycle: InstanceLifecycle[CmsInstance] = InstanceLifecycle(
            options.get_instance,
            auto_destroy=options.auto_destroy,
            backing="CMS",
        )

    @property
    def instance(self) -> CmsInstance | None:
        """The backing CMS instance, None until bootstrapped."""
        return self._lifecycle.instance

    @property
    def lifecycle(self) -> InstanceLifecycle[CmsInstance]:
        return self._lifecycle

    def _transfer_counter(self, stage: TransferStage) -> StageCounter:
        return StageCounter(stage, self.results)

    async def bootstrap(self) -> None:
        await self._lifecycle.bootstrap()
        logger.info("%s bootstrapped", self.name)

    async def close(self) -> None:
        await self._lifecycle.close()
        logger.info("%s closed", self.name)

    # TODO: Describe the source instance (version, plugins) once the
    # destination side defines what it compares against.
    async def get_metadata(self) -> None:
        return None

    def stream_entities(self) -> AsyncIterator[EntityRecord]:
        instance = self._lifecycle.require("stream entities")

        return chain([
            create_entities_stream(instance),
            # Counted before the transform: raw rows, not reshaped records
            self._transfer_counter(TransferStage.ENTITIES),
            create_entities_transform_stream(),
        ])

    def stream_links(self) -> AsyncIterator[LinkRecord]:
        instance = self._lifecycle.require("stream links")

        return chain([create_links_stream(instance), self._transfer_counter(TransferStage.LINKS)])

    def stream_configuration(self) -> AsyncIterator[ConfigurationRecord]:
        instance = self._lifecycle.require("stream configuration")

        return chain([
            create_configuration_stream(instance),
            self._transfer_counter(TransferStage.CONFIGURATION),
        ])

    def get_schemas(self) -> list[Schema]:
        """Collect content type schemas followed by component schemas.

        Sets ``results['schemas']`` to the number of schemas returned,
        replacing any previous value.
        """
        instance = self._lifecycle.require("get schemas")

        schemas = [
            *instance.content_types.values(),
            *instance.components.values(),
        ]
        self.results.set_items(TransferStage.SCHEMAS, len(schemas))
        return schemas

    def stream_schemas(self) -> AsyncIterator[Schema]:
        self._lifecycle.require("stream schemas")

        return from_iterable(self.get_schemas())


def create_local_cms_source_provider(
    options: LocalCmsSourceProviderOptions | None = None, **kwargs: Any
) -> LocalCmsSourceProvider:
    """Create a local CMS source provider.

    Args:
        options: Provider options. When omitted, they are built from kwargs.
        **kwargs: ``get_instance`` and optionally ``auto_destroy``

    Returns:
        A provider that still needs ``bootstrap()``
    """
    if options is None:
        options = LocalCmsSourceProviderOptions(**kwargs)
    return LocalCmsSourceProvider(options)
