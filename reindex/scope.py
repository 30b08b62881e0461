"""
Scope requests: which objects an invocation should index.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from reindex.errors import InvalidScopeError


class ScopeKind(str, Enum):
    """Mutually exclusive scope variants."""
    BY_NAMES = "by_names"
    BY_TYPE = "by_type"
    ALL = "all"


@dataclass(frozen=True)
class ScopeRequest:
    """
    Validated scope for one invocation.

    Exactly one variant is active. Object names cannot be combined with
    ``all`` or a type filter, and at least one selector must be given.
    A type filter together with ``all`` narrows "all" to that type.
    """
    names: Tuple[str, ...] = ()
    type_filter: Optional[str] = None
    all: bool = False

    def __post_init__(self):
        if isinstance(self.names, str):
            raise InvalidScopeError(
                f"Object names must be a list of names, not the single string '{self.names}'."
            )
        names = tuple(self.names or ())
        type_filter = self.type_filter.strip() if self.type_filter else None
        object.__setattr__(self, 'names', names)
        object.__setattr__(self, 'type_filter', type_filter or None)

        if names and (self.all or self.type_filter):
            raise InvalidScopeError(
                "You can not name objects to index alongside the '--all' or '--type' flags."
            )
        if not names and not (self.all or self.type_filter):
            raise InvalidScopeError(
                "Provide one of '--all', '--type' or a list of object names."
            )

    @classmethod
    def by_names(cls, names: Iterable[str]) -> "ScopeRequest":
        return cls(names=names)

    @classmethod
    def by_type(cls, type_filter: Optional[str]) -> "ScopeRequest":
        # A missing filter means every type
        if type_filter is None:
            return cls(all=True)
        return cls(type_filter=type_filter)

    @classmethod
    def everything(cls) -> "ScopeRequest":
        return cls(all=True)

    @property
    def kind(self) -> ScopeKind:
        if self.names:
            return ScopeKind.BY_NAMES
        if self.type_filter:
            return ScopeKind.BY_TYPE
        return ScopeKind.ALL

    def describe(self) -> str:
        """Short human readable summary, used in logs."""
        if self.kind == ScopeKind.BY_NAMES:
            return f"names={list(self.names)}"
        if self.kind == ScopeKind.BY_TYPE:
            return f"type={self.type_filter}"
        return "all"
