"""
Inline search indexer.

Builds the document for one identifier through the plugin handling its type
and hands it to the document store.
"""
import logging
from typing import Dict, Optional

from reindex.documents import DocumentStore, SearchDocument
from reindex.errors import IndexingError
from reindex.identifiers import ObjectIdentifier, TypeTag
from reindex.plugins.base import IndexerPlugin
from reindex.plugins.registry import PluginSource

logger = logging.getLogger(__name__)


class SearchIndexer:
    """Indexes single objects in the current process."""

    def __init__(self, registry: PluginSource, store: DocumentStore):
        """
        Initialize search indexer.

        Args:
            registry: Plugin source used to find the indexer for a type
            store: Destination for built documents
        """
        self.registry = registry
        self.store = store
        self._plugins: Optional[Dict[TypeTag, IndexerPlugin]] = None

    def _plugin_for(self, type_tag: TypeTag) -> IndexerPlugin:
        if self._plugins is None:
            plugins: Dict[TypeTag, IndexerPlugin] = {}
            for descriptor in self.registry.discover_all():
                plugins.setdefault(descriptor.type_tag, descriptor.plugin)
            self._plugins = plugins

        plugin = self._plugins.get(type_tag)
        if plugin is None:
            available = ", ".join(sorted(self._plugins)) or "none"
            raise IndexingError(f"No indexer handles type {type_tag}. Available: {available}")
        return plugin

    def index_document(self, identifier: ObjectIdentifier) -> SearchDocument:
        """
        Build and store the search document for one object.

        Raises:
            IndexingError: If no plugin handles the type or it cannot build documents
        """
        plugin = self._plugin_for(identifier.type_tag)

        try:
            document = plugin.build_document(identifier)
        except NotImplementedError as e:
            raise IndexingError(str(e)) from e

        self.store.save(document)
        logger.debug(f"Indexed {identifier} with {type(plugin).__name__}")
        return document

    def __call__(self, identifier: ObjectIdentifier) -> None:
        self.index_document(identifier)
