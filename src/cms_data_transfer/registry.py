"""Provider registry for factory-based provider creation.

This module provides a central registry for provider factories,
enabling platform-agnostic provider creation and automatic
platform discovery.
"""

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .sources.base import SourceProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Central registry for provider factories.

    Platforms register their factories when imported, and the registry
    can discover every platform shipped in the ``platforms/`` package.
    """

    _factories: dict[str, Callable[..., "SourceProvider"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "SourceProvider"]) -> None:
        """Register a factory function for creating providers.

        Args:
            name: Name of the provider (e.g., 'local-cms')
            factory: Callable that creates a provider instance

        Example:
            >>> ProviderRegistry.register_factory('local-cms', create_local_cms_source_provider)
        """
        cls._factories[name] = factory

    @classmethod
    def create_provider(cls, provider_name: str, **kwargs: Any) -> "SourceProvider":
        """Create a provider from a registered factory.

        Args:
            provider_name: Name of the registered provider
            **kwargs: Arguments passed to the provider factory

        Returns:
            Provider instance, not yet bootstrapped

        Raises:
            ValueError: If provider_name is not registered

        Example:
            >>> provider = ProviderRegistry.create_provider(
            ...     'local-cms',
            ...     get_instance=load_instance,
            ...     auto_destroy=False,
            ... )
        """
        if provider_name not in cls._factories:
            available = ', '.join(cls._factories.keys()) or 'none'
            raise ValueError(
                f"Unknown provider: '{provider_name}'. Available providers: {available}"
            )

        return cls._factories[provider_name](**kwargs)

    @classmethod
    def list_providers(cls) -> list[str]:
        """List all registered provider names.

        Example:
            >>> ProviderRegistry.list_providers()
            ['local-cms']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        Every package under platforms/ is imported, which triggers its
        auto-registration. Platforms with missing dependencies are skipped.
        """
        platforms_dir = Path(__file__).parent / 'platforms'

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / '__init__.py').exists():
                continue

            platform_name = platform_path.name

            try:
                importlib.import_module(
                    f'.platforms.{platform_name}',
                    package='cms_data_transfer'
                )
            except ImportError as e:
                logger.debug("Skipping platform %s: %s", platform_name, e)
