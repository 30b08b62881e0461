"""
Index dispatch: hands resolved identifiers to an indexing queue.

The execution mode is a parameter of every dispatch call. Inline mode indexes
in this process before returning; deferred mode only enqueues.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from reindex.errors import DiscoveryError, DispatchError
from reindex.identifiers import ObjectIdentifier, group_by_type
from reindex.queues.base import IndexQueue
from reindex.reporter import ConsoleReporter, Reporter

logger = logging.getLogger(__name__)


class ExecutionMode(str, Enum):
    """Where index work runs."""
    INLINE = "inline"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class IndexTask:
    """One identifier handed off under one execution mode."""
    identifier: ObjectIdentifier
    mode: ExecutionMode


@dataclass
class DispatchReport:
    """Outcome of one dispatch call."""
    entries: List[IndexTask] = field(default_factory=list)
    failures: List[DispatchError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entries': [
                {'identifier': str(task.identifier), 'mode': task.mode.value}
                for task in self.entries
            ],
            'failures': [
                {'identifier': str(failure.identifier), 'error': str(failure.cause)}
                for failure in self.failures
            ],
        }


class IndexDispatcher:
    """
    Submits each identifier exactly once to the queue for the chosen mode.

    Failure policy:
    - fail_fast=True (default): the first failure raises DispatchError and
      stops dispatch; the partial report is attached to the error
    - fail_fast=False: failures are collected and dispatch continues; the
      returned report lists every failure
    """

    def __init__(
        self,
        inline_queue: IndexQueue,
        deferred_queue: IndexQueue,
        reporter: Optional[Reporter] = None,
        fail_fast: bool = True
    ):
        """
        Initialize dispatcher.

        Args:
            inline_queue: Queue that indexes synchronously
            deferred_queue: Queue that enqueues for background workers
            reporter: Progress sink (default: ConsoleReporter)
            fail_fast: Abort on the first failure
        """
        self.queues = {
            ExecutionMode.INLINE: inline_queue,
            ExecutionMode.DEFERRED: deferred_queue,
        }
        self.reporter = reporter or ConsoleReporter()
        self.fail_fast = fail_fast

    def dispatch(self, identifiers: Iterable[ObjectIdentifier], mode: ExecutionMode) -> DispatchReport:
        """
        Dispatch identifiers in order.

        Args:
            identifiers: Resolved identifiers (normally a ResolvedSet)
            mode: Execution mode for every identifier in this call

        Returns:
            DispatchReport

        Raises:
            DispatchError: On the first failure when fail_fast is set
            DiscoveryError: If inline indexing cannot load its plugins
        """
        mode = ExecutionMode(mode)
        queue = self.queues[mode]
        report = DispatchReport()

        ordered: List[ObjectIdentifier] = []
        seen = set()
        for value in identifiers:
            identifier = ObjectIdentifier.parse(value)
            if identifier in seen:
                logger.debug(f"Skipping duplicate identifier {identifier}")
                continue
            seen.add(identifier)
            ordered.append(identifier)

        if not ordered:
            return report

        # Grouping is only for progress output; dispatch keeps `ordered`
        for type_tag, group in group_by_type(ordered).items():
            self.reporter.write_line(f"Indexing {len(group)} object(s) of type {type_tag}.")

        for identifier in ordered:
            if mode == ExecutionMode.DEFERRED:
                self.reporter.write_line(f"Queueing '{identifier}'...")
            else:
                self.reporter.write_line(f"Indexing '{identifier}'...")

            try:
                queue.submit(identifier)
            except DiscoveryError:
                # Plugin loading fails the whole invocation, not one object
                raise
            except Exception as e:
                error = DispatchError(identifier, e, report=report)
                logger.error(f"Dispatch failed for {identifier}: {e}")
                if self.fail_fast:
                    raise error from e
                report.failures.append(error)
                continue

            report.entries.append(IndexTask(identifier=identifier, mode=mode))

        self.reporter.write_line("Done.")
        return report
