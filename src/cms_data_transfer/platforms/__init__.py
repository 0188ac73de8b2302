"""Platform implementations of the provider interfaces.

Each platform module auto-registers its provider factory with the
ProviderRegistry when imported.
"""

# Platform modules are imported dynamically by ProviderRegistry.discover_platforms()
# to handle missing dependencies gracefully
