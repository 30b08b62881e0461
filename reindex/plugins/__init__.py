"""
Indexer plugins.

The built-in plugins are listed in ``BUILTIN_INDEXERS``; more can be added
through the ``plugins:`` table of the config file.
"""
from functools import partial

from reindex.catalog import ObjectCatalog
from reindex.config import ReindexConfig
from reindex.plugins.base import IndexerPlugin, IndexerPluginDescriptor
from reindex.plugins.catalog import BUILTIN_INDEXERS, CatalogIndexer
from reindex.plugins.registry import DiscoveredPlugins, IndexerRegistry, load_plugin_path


def default_registry(config: ReindexConfig) -> IndexerRegistry:
    """
    Build the registry used by the command line.

    Args:
        config: Loaded configuration (catalog path and extra plugin paths)

    Returns:
        Registry with the built-in catalog plugins and configured extras
    """
    registry = IndexerRegistry()
    catalog = ObjectCatalog(config.catalog_path)

    for indexer_class in BUILTIN_INDEXERS:
        registry.register(partial(indexer_class, catalog), name=indexer_class.__name__)

    for path in config.plugins:
        registry.register_path(path)

    return registry


__all__ = [
    "IndexerPlugin",
    "IndexerPluginDescriptor",
    "IndexerRegistry",
    "DiscoveredPlugins",
    "CatalogIndexer",
    "BUILTIN_INDEXERS",
    "default_registry",
    "load_plugin_path",
]
