"""
Explicit registry of indexer plugins.

Plugins are registered by class, zero-argument factory, or a dotted
``module:attribute`` path taken from configuration. Nothing is found by
scanning loaded modules for subclasses.
"""
import importlib
import logging
from typing import Callable, List, Optional, Tuple, Type, Union

from reindex.errors import DiscoveryError
from reindex.identifiers import normalize_type
from reindex.plugins.base import IndexerPlugin, IndexerPluginDescriptor

logger = logging.getLogger(__name__)

PluginFactory = Callable[[], IndexerPlugin]


def _factory_name(factory: Union[Type[IndexerPlugin], PluginFactory]) -> str:
    return getattr(factory, '__qualname__', None) or repr(factory)


def load_plugin_path(path: str) -> PluginFactory:
    """
    Import a plugin factory from a ``module:attribute`` path.

    Args:
        path: Dotted path like ``mypkg.indexers:ProjectIndexer``

    Returns:
        The imported class or callable

    Raises:
        DiscoveryError: If the path is malformed or cannot be imported
    """
    module_name, sep, attr_name = path.partition(':')
    if not sep or not module_name or not attr_name:
        raise DiscoveryError(path, ValueError("expected 'module:attribute'"))

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr_name)
    except (ImportError, AttributeError) as e:
        raise DiscoveryError(path, e) from e

    if not callable(factory):
        raise DiscoveryError(path, TypeError(f"{path} is not callable"))

    return factory


class IndexerRegistry:
    """
    Registry of indexer plugin factories.

    Registration is cheap and never instantiates a plugin. Every call to
    ``discover_all`` builds fresh plugin instances, so nothing is cached
    between invocations.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._factories: List[Tuple[str, PluginFactory]] = []

    def register(self, plugin: Union[Type[IndexerPlugin], PluginFactory], name: str = None) -> None:
        """
        Register a plugin class or zero-argument factory.

        Args:
            plugin: Plugin class or factory returning a plugin instance
            name: Display name used in errors (default: factory qualname)
        """
        if not callable(plugin):
            raise TypeError(f"{plugin!r} is not a plugin class or factory")

        name = name or _factory_name(plugin)
        self._factories.append((name, plugin))
        logger.debug(f"Registered indexer plugin: {name}")

    def register_path(self, path: str) -> None:
        """Register a plugin from a configured ``module:attribute`` path."""
        self.register(load_plugin_path(path), name=path)

    def __len__(self) -> int:
        return len(self._factories)

    def list_plugins(self) -> List[str]:
        """Registered plugin names in registration order."""
        return [name for name, _ in self._factories]

    def discover_all(self) -> List[IndexerPluginDescriptor]:
        """
        Instantiate every registered plugin.

        Returns:
            Descriptors sorted by type tag; plugins sharing a tag keep
            their registration order

        Raises:
            DiscoveryError: If any plugin fails to instantiate or report its type
        """
        descriptors = []
        for name, factory in self._factories:
            try:
                plugin = factory()
                if not isinstance(plugin, IndexerPlugin):
                    raise TypeError(f"{type(plugin).__name__} is not an IndexerPlugin")
                type_tag = normalize_type(plugin.get_indexable_type())
            except Exception as e:
                logger.error(f"Indexer plugin {name} failed to load: {e}")
                raise DiscoveryError(name, e) from e

            descriptors.append(IndexerPluginDescriptor(type_tag=type_tag, plugin=plugin))

        # sorted() is stable, so ties keep registration order
        descriptors = sorted(descriptors, key=lambda d: d.type_tag)
        logger.debug(f"Discovered {len(descriptors)} indexer plugin(s)")
        return descriptors


class DiscoveredPlugins:
    """
    Plugin discovery shared by one invocation.

    Wraps a registry and discovers on first use; later calls return the same
    descriptors. Create one per invocation.
    """

    def __init__(self, registry: IndexerRegistry):
        self.registry = registry
        self._descriptors: Optional[List[IndexerPluginDescriptor]] = None

    def discover_all(self) -> List[IndexerPluginDescriptor]:
        """
        Descriptors from a single discovery of the wrapped registry.

        Raises:
            DiscoveryError: If the first discovery fails
        """
        if self._descriptors is None:
            self._descriptors = self.registry.discover_all()
        return list(self._descriptors)


PluginSource = Union[IndexerRegistry, DiscoveredPlugins]
