"""
Identifier resolution: turns a ScopeRequest into a ResolvedSet.
"""
import logging
from typing import Dict, List, Optional, Protocol

from reindex.errors import EmptyScopeError, UnknownObjectError
from reindex.identifiers import ObjectIdentifier, ResolvedSet
from reindex.plugins.registry import PluginSource
from reindex.scope import ScopeKind, ScopeRequest

logger = logging.getLogger(__name__)


class NameResolver(Protocol):
    """Looks up object names, e.g. "D123", in the object store."""

    def resolve_names(self, names: List[str]) -> Dict[str, ObjectIdentifier]:
        """Return identifiers for the names found; missing names are absent."""


class IdentifierResolver:
    """
    Resolve scope requests into deduplicated identifier sets.

    Names go to the external name resolver. Type and "all" scopes drain the
    iterators of the registered indexer plugins.
    """

    def __init__(self, name_resolver: NameResolver, registry: PluginSource):
        """
        Initialize resolver.

        Args:
            name_resolver: Name to identifier lookup
            registry: Indexer plugin registry, or the invocation's DiscoveredPlugins
        """
        self.name_resolver = name_resolver
        self.registry = registry

    def resolve(self, scope: ScopeRequest) -> ResolvedSet:
        """
        Resolve a scope into identifiers.

        Args:
            scope: Validated scope request

        Returns:
            Non-empty ResolvedSet in first-seen order

        Raises:
            UnknownObjectError: If any named object does not exist
            DiscoveryError: If a plugin fails to load
            EmptyScopeError: If nothing resolves
        """
        logger.debug(f"Resolving scope: {scope.describe()}")

        if scope.kind == ScopeKind.BY_NAMES:
            resolved = self._resolve_names(list(scope.names))
        else:
            resolved = self._resolve_types(scope.type_filter)

        if not resolved:
            if scope.type_filter:
                raise EmptyScopeError(f"Nothing to index for type '{scope.type_filter}'!")
            raise EmptyScopeError()

        logger.info(f"Resolved {len(resolved)} object(s) for scope {scope.describe()}")
        return resolved

    def _resolve_names(self, names: List[str]) -> ResolvedSet:
        found = self.name_resolver.resolve_names(names)

        # Validate the literal list, duplicates included
        for name in names:
            if found.get(name) is None:
                raise UnknownObjectError(name)

        return ResolvedSet(found[name] for name in names)

    def _resolve_types(self, type_filter: Optional[str]) -> ResolvedSet:
        collected = []
        consulted = set()

        for descriptor in self.registry.discover_all():
            if type_filter:
                if descriptor.type_tag.lower() != type_filter.lower():
                    continue
                # One plugin per type when filtering
                if descriptor.type_tag in consulted:
                    logger.debug(
                        f"Skipping {descriptor.plugin_name}: type {descriptor.type_tag} already consulted"
                    )
                    continue
            consulted.add(descriptor.type_tag)

            count = 0
            for identifier in descriptor.plugin.get_index_iterator():
                collected.append(identifier)
                count += 1
            logger.debug(f"{descriptor.plugin_name} produced {count} object(s) of type {descriptor.type_tag}")

        return ResolvedSet(collected)
