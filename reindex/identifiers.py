"""
Object identifiers and resolved identifier sets.

Identifiers use the textual form ``PHID-<TYPE>-<discriminator>`` so the type
tag can always be recovered without a lookup.
"""
import secrets
import string
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple, Union

PHID_PREFIX = "PHID"
DISCRIMINATOR_LENGTH = 20

_DISCRIMINATOR_ALPHABET = string.ascii_lowercase + string.digits

# Short uppercase classifier, e.g. "TASK" or "DREV"
TypeTag = str


def normalize_type(type_tag: str) -> TypeTag:
    """Canonical form of a type tag."""
    return type_tag.strip().upper()


@dataclass(frozen=True, order=True)
class ObjectIdentifier:
    """Opaque, immutable token naming one indexable object."""
    type_tag: TypeTag
    discriminator: str

    def __post_init__(self):
        if not self.type_tag or '-' in self.type_tag:
            raise ValueError(f"Invalid type tag: {self.type_tag!r}")
        if not self.discriminator:
            raise ValueError("Identifier discriminator must not be empty")
        object.__setattr__(self, 'type_tag', normalize_type(self.type_tag))

    @classmethod
    def parse(cls, value: Union[str, "ObjectIdentifier"]) -> "ObjectIdentifier":
        """
        Parse the textual form of an identifier.

        Args:
            value: Token like ``PHID-TASK-abc123`` (or an identifier, returned as-is)

        Returns:
            ObjectIdentifier

        Raises:
            ValueError: If the token is malformed
        """
        if isinstance(value, ObjectIdentifier):
            return value

        parts = str(value).split('-', 2)
        if len(parts) != 3 or parts[0] != PHID_PREFIX:
            raise ValueError(f"Malformed object identifier: {value!r}")

        return cls(type_tag=parts[1], discriminator=parts[2])

    @classmethod
    def generate(cls, type_tag: TypeTag) -> "ObjectIdentifier":
        """Generate a fresh identifier for an object of the given type."""
        discriminator = ''.join(
            secrets.choice(_DISCRIMINATOR_ALPHABET) for _ in range(DISCRIMINATOR_LENGTH)
        )
        return cls(type_tag=type_tag, discriminator=discriminator)

    def __str__(self) -> str:
        return f"{PHID_PREFIX}-{self.type_tag}-{self.discriminator}"


def group_by_type(identifiers: Iterable[ObjectIdentifier]) -> Dict[TypeTag, List[ObjectIdentifier]]:
    """
    Group identifiers by type tag.

    Groups appear in order of first appearance of each type; identifiers keep
    their relative order inside a group.
    """
    groups: Dict[TypeTag, List[ObjectIdentifier]] = {}
    for identifier in identifiers:
        groups.setdefault(identifier.type_tag, []).append(identifier)
    return groups


class ResolvedSet:
    """
    Deduplicated identifiers in first-seen order.

    The order is what dispatch follows, so progress output is stable across
    repeated runs over unchanged inputs.
    """

    def __init__(self, identifiers: Iterable[Union[str, ObjectIdentifier]] = ()):
        seen = set()
        ordered: List[ObjectIdentifier] = []
        for value in identifiers:
            identifier = ObjectIdentifier.parse(value)
            if identifier in seen:
                continue
            seen.add(identifier)
            ordered.append(identifier)
        self._identifiers: Tuple[ObjectIdentifier, ...] = tuple(ordered)

    def __iter__(self) -> Iterator[ObjectIdentifier]:
        return iter(self._identifiers)

    def __len__(self) -> int:
        return len(self._identifiers)

    def __bool__(self) -> bool:
        return bool(self._identifiers)

    def __contains__(self, value) -> bool:
        try:
            return ObjectIdentifier.parse(value) in self._identifiers
        except ValueError:
            return False

    def __eq__(self, other) -> bool:
        if isinstance(other, ResolvedSet):
            return self._identifiers == other._identifiers
        return NotImplemented

    def __repr__(self) -> str:
        return f"ResolvedSet({[str(i) for i in self._identifiers]})"

    def group_by_type(self) -> Dict[TypeTag, List[ObjectIdentifier]]:
        """Group this set by type tag without changing its own order."""
        return group_by_type(self._identifiers)
