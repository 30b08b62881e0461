"""
Base indexing queue interface.
"""
from abc import ABC, abstractmethod

from reindex.identifiers import ObjectIdentifier


class IndexQueue(ABC):
    """
    Abstract base class for indexing queues.

    ``submit`` is idempotent from the queue's point of view but does not
    deduplicate; callers submit each identifier once.
    """

    @abstractmethod
    def submit(self, identifier: ObjectIdentifier) -> None:
        """
        Hand one identifier over for indexing.

        Args:
            identifier: Object to index
        """
        pass
