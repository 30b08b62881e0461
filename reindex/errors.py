"""
Error taxonomy for reindex invocations.

Every error carries enough context (name, identifier, plugin) to be acted on
by the caller. None of them are retried inside reindex.
"""
from typing import Any, Optional


class ReindexError(Exception):
    """Base class for all reindex failures surfaced to the caller."""


class InvalidScopeError(ReindexError):
    """Scope selectors are conflicting or missing."""


class UnknownObjectError(ReindexError):
    """An explicitly named object does not resolve to an identifier."""
    
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is not the name of a known object.")


class EmptyScopeError(ReindexError):
    """Resolution succeeded but produced nothing to index."""
    
    def __init__(self, message: str = "Nothing to index!"):
        super().__init__(message)


class DiscoveryError(ReindexError):
    """An indexer plugin could not be loaded or instantiated."""
    
    def __init__(self, plugin: str, cause: BaseException):
        self.plugin = plugin
        self.cause = cause
        super().__init__(f"Failed to load indexer plugin '{plugin}': {cause}")


class DispatchError(ReindexError):
    """A single identifier failed while being indexed or enqueued."""
    
    def __init__(self, identifier: Any, cause: BaseException, report: Optional[Any] = None):
        self.identifier = identifier
        self.cause = cause
        # Partial DispatchReport when raised in fail-fast mode
        self.report = report
        super().__init__(f"Failed to index '{identifier}': {cause}")


class IndexingError(ReindexError):
    """Building or storing a search document failed."""
