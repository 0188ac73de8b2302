"""Local CMS platform.

This platform reads entities, links, configuration and schemas from a
CMS instance running in the same process.

Usage:
    >>> from cms_data_transfer import ProviderRegistry
    >>> from cms_data_transfer.platforms.local_cms import MemoryCmsInstance
    >>>
    >>> instance = MemoryCmsInstance.load_snapshot(Path('export.json'))
    >>> provider = ProviderRegistry.create_provider(
    ...     'local-cms',
    ...     get_instance=lambda: instance,
    ...     auto_destroy=False,
    ... )
"""

from .configuration import create_configuration_stream
from .entities import create_entities_stream, create_entities_transform_stream
from .instance import CmsInstance, MemoryCmsInstance, get_model
from .links import create_links_stream, parse_entity_links
from .provider import (
    LocalCmsSourceProvider,
    LocalCmsSourceProviderOptions,
    create_local_cms_source_provider,
)

# Auto-register with the registry
from ...registry import ProviderRegistry


def _create_local_cms_provider(get_instance, auto_destroy=None) -> LocalCmsSourceProvider:
    """Factory function for creating local CMS source providers.

    Args:
        get_instance: Callable returning the CMS instance (or an awaitable of it)
        auto_destroy: Destroy the instance on close (default: yes)

    Returns:
        LocalCmsSourceProvider instance

    Raises:
        TypeError: If an option other than the two above is passed
    """
    return create_local_cms_source_provider(
        LocalCmsSourceProviderOptions(get_instance=get_instance, auto_destroy=auto_destroy)
    )


# Auto-register at module import
ProviderRegistry.register_factory('local-cms', _create_local_cms_provider)

__all__ = [
    "CmsInstance",
    "LocalCmsSourceProvider",
    "LocalCmsSourceProviderOptions",
    "MemoryCmsInstance",
    "create_configuration_stream",
    "create_entities_stream",
    "create_entities_transform_stream",
    "create_links_stream",
    "create_local_cms_source_provider",
    "get_model",
    "parse_entity_links",
]
