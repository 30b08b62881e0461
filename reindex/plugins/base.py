"""
Indexer plugin capability.

Each plugin handles one object type: it names the type it indexes and
enumerates every object of that type that is currently indexable.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Union

from reindex.documents import SearchDocument
from reindex.identifiers import ObjectIdentifier, TypeTag


class IndexerPlugin(ABC):
    """
    Abstract base class for per-type indexers.

    Plugins are constructed with no arguments and must not touch storage or
    any other external resource until they are iterated.
    """

    @abstractmethod
    def get_indexable_type(self) -> TypeTag:
        """
        Type tag of the objects this plugin indexes.

        Returns:
            Type tag, e.g. "TASK"
        """
        pass

    @abstractmethod
    def get_index_iterator(self) -> Iterator[Union[ObjectIdentifier, str]]:
        """
        Iterate over every currently indexable object of this type.

        The iterator is lazy, finite and single-pass. Callers consume it at
        most once per resolution and never restart it.

        Returns:
            Iterator of identifiers (or their textual form)
        """
        pass

    def build_document(self, identifier: ObjectIdentifier) -> SearchDocument:
        """
        Build the search document for one object.

        Only used when indexing inline. Plugins that are enumerated but
        indexed by another process may leave this unimplemented.
        """
        raise NotImplementedError(
            f"{type(self).__name__} does not build documents for {identifier}"
        )


@dataclass(frozen=True)
class IndexerPluginDescriptor:
    """A discovered plugin and the type tag it handles."""
    type_tag: TypeTag
    plugin: IndexerPlugin

    @property
    def plugin_name(self) -> str:
        return type(self.plugin).__name__
