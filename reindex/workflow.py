"""
Index workflow: one invocation from scope validation to dispatch.

States: validating -> resolving -> dispatching -> done, with failed reachable
from any earlier state. Nothing is retried; re-run the invocation instead.
"""
import logging
from enum import Enum
from typing import Iterable, List, Optional

from reindex.dispatcher import DispatchReport, ExecutionMode, IndexDispatcher
from reindex.identifiers import ResolvedSet
from reindex.resolver import IdentifierResolver
from reindex.scope import ScopeRequest

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    """Lifecycle of one invocation."""
    PENDING = "pending"
    VALIDATING = "validating"
    RESOLVING = "resolving"
    DISPATCHING = "dispatching"
    DONE = "done"
    FAILED = "failed"


class IndexWorkflow:
    """
    Runs a single reindex invocation.

    A workflow instance is single use; create a new one per invocation so
    no state is shared between runs.
    """

    def __init__(self, resolver: IdentifierResolver, dispatcher: IndexDispatcher):
        """
        Initialize workflow.

        Args:
            resolver: Scope to identifier resolver
            dispatcher: Index dispatcher
        """
        self.resolver = resolver
        self.dispatcher = dispatcher
        self.state = WorkflowState.PENDING
        self.history: List[WorkflowState] = [WorkflowState.PENDING]
        self.resolved: Optional[ResolvedSet] = None

    def _transition(self, state: WorkflowState) -> None:
        logger.debug(f"Workflow state: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _start(self) -> None:
        if self.state != WorkflowState.PENDING:
            raise RuntimeError(f"Workflow already ran (state: {self.state.value})")

    def run_request(
        self,
        names: Iterable[str] = (),
        type_filter: Optional[str] = None,
        all: bool = False,
        mode: ExecutionMode = ExecutionMode.INLINE
    ) -> DispatchReport:
        """
        Validate raw selectors, then run the invocation.

        Raises:
            InvalidScopeError: If the selectors conflict or are missing
        """
        self._start()
        self._transition(WorkflowState.VALIDATING)
        try:
            scope = ScopeRequest(names=tuple(names or ()), type_filter=type_filter, all=all)
        except Exception:
            self._transition(WorkflowState.FAILED)
            raise
        return self._run(scope, mode)

    def run(self, scope: ScopeRequest, mode: ExecutionMode = ExecutionMode.INLINE) -> DispatchReport:
        """
        Resolve and dispatch an already validated scope.

        Returns:
            DispatchReport

        Raises:
            ReindexError: Any resolution or dispatch failure (state becomes failed)
        """
        self._start()
        self._transition(WorkflowState.VALIDATING)
        return self._run(scope, mode)

    def _run(self, scope: ScopeRequest, mode: ExecutionMode) -> DispatchReport:
        try:
            self._transition(WorkflowState.RESOLVING)
            self.resolved = self.resolver.resolve(scope)

            self._transition(WorkflowState.DISPATCHING)
            report = self.dispatcher.dispatch(self.resolved, mode)
        except Exception:
            self._transition(WorkflowState.FAILED)
            raise

        self._transition(WorkflowState.DONE)
        return report
