"""
Spool queue - appends index tasks to an NDJSON file for background workers.
"""
import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from reindex.identifiers import ObjectIdentifier
from reindex.queues.base import IndexQueue

logger = logging.getLogger(__name__)


class QueuedIndexTask(BaseModel):
    """Spooled record of one deferred index task."""
    task_id: str = Field(default_factory=lambda: f"index-{uuid.uuid4().hex[:12]}")
    identifier: str
    type_tag: str
    queued_at: datetime = Field(default_factory=datetime.utcnow)


class SpoolIndexQueue(IndexQueue):
    """
    Deferred queue backed by an append-only NDJSON spool.

    ``submit`` appends one line and returns immediately. Workers consuming
    the spool own retries, ordering and concurrency.
    """

    def __init__(self, spool_path: Path):
        """
        Initialize spool queue.

        Args:
            spool_path: NDJSON spool file (created on first submit)
        """
        self.spool_path = Path(spool_path)

    def submit(self, identifier: ObjectIdentifier) -> None:
        task = QueuedIndexTask(identifier=str(identifier), type_tag=identifier.type_tag)

        self.spool_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.spool_path, 'a', encoding='utf-8') as f:
            f.write(task.model_dump_json() + '\n')

        logger.debug(f"Queued {identifier} as {task.task_id}")

    def pending(self) -> List[QueuedIndexTask]:
        """Read every spooled task in submit order."""
        if not self.spool_path.exists():
            return []

        tasks = []
        with open(self.spool_path, 'r', encoding='utf-8') as f:
            for line in f:
                if line.strip():
                    tasks.append(QueuedIndexTask(**json.loads(line)))
        return tasks
