"""
Built-in indexer plugins backed by the object catalog.
"""
from typing import Iterator, Optional

from reindex.catalog import ObjectCatalog
from reindex.config import path_from_env
from reindex.documents import SearchDocument
from reindex.errors import IndexingError
from reindex.identifiers import ObjectIdentifier, TypeTag
from reindex.plugins.base import IndexerPlugin


def _default_catalog() -> ObjectCatalog:
    return ObjectCatalog(path_from_env("REINDEX_CATALOG_PATH", "catalog.ndjson"))


class CatalogIndexer(IndexerPlugin):
    """
    Indexer for one object type stored in the catalog.

    Subclasses only set ``TYPE_TAG``. The catalog is opened when the plugin
    is iterated, never at construction.
    """
    TYPE_TAG: TypeTag = ""

    def __init__(self, catalog: Optional[ObjectCatalog] = None):
        self._catalog = catalog

    @property
    def catalog(self) -> ObjectCatalog:
        if self._catalog is None:
            self._catalog = _default_catalog()
        return self._catalog

    def get_indexable_type(self) -> TypeTag:
        if not self.TYPE_TAG:
            raise NotImplementedError(f"{type(self).__name__} does not define TYPE_TAG")
        return self.TYPE_TAG

    def get_index_iterator(self) -> Iterator[ObjectIdentifier]:
        return self.catalog.iter_type(self.get_indexable_type())

    def build_document(self, identifier: ObjectIdentifier) -> SearchDocument:
        record = self.catalog.get(identifier)
        if record is None:
            raise IndexingError(f"Object '{identifier}' not found in catalog {self.catalog.path}")

        fields = dict(record.fields)
        fields.setdefault('name', record.name)

        return SearchDocument(
            phid=str(identifier),
            type_tag=identifier.type_tag,
            title=record.title,
            body=record.body,
            fields=fields,
        )


class TaskIndexer(CatalogIndexer):
    TYPE_TAG = "TASK"


class RevisionIndexer(CatalogIndexer):
    TYPE_TAG = "DREV"


class CommitIndexer(CatalogIndexer):
    TYPE_TAG = "CMIT"


class WikiDocumentIndexer(CatalogIndexer):
    TYPE_TAG = "WIKI"


class UserIndexer(CatalogIndexer):
    TYPE_TAG = "USER"


BUILTIN_INDEXERS = (
    TaskIndexer,
    RevisionIndexer,
    CommitIndexer,
    WikiDocumentIndexer,
    UserIndexer,
)
