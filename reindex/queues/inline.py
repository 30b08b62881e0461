"""
Inline queue - indexes each object in the calling process.
"""
import logging
from typing import Callable

from reindex.identifiers import ObjectIdentifier
from reindex.queues.base import IndexQueue

logger = logging.getLogger(__name__)


class InlineIndexQueue(IndexQueue):
    """
    Queue that runs the indexing handler synchronously.

    ``submit`` returns only after the handler finished; handler exceptions
    propagate to the caller unchanged.
    """

    def __init__(self, handler: Callable[[ObjectIdentifier], None]):
        """
        Initialize inline queue.

        Args:
            handler: Callable that fully indexes one object
        """
        self.handler = handler

    def submit(self, identifier: ObjectIdentifier) -> None:
        logger.debug(f"Indexing inline: {identifier}")
        self.handler(identifier)
