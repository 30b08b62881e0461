"""
Indexing queues.

- InlineIndexQueue: indexes in the calling process
- SpoolIndexQueue: appends tasks to an NDJSON spool for background workers
"""
from reindex.queues.base import IndexQueue
from reindex.queues.inline import InlineIndexQueue
from reindex.queues.spool import QueuedIndexTask, SpoolIndexQueue

__all__ = ["IndexQueue", "InlineIndexQueue", "SpoolIndexQueue", "QueuedIndexTask"]
