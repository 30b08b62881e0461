"""
NDJSON object catalog.

Local stand-in for the object database: one JSON record per line describing
an object (identifier, human name, title, body). It backs the built-in
indexer plugins and resolves object names like "D123" to identifiers.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel, Field

from reindex.identifiers import ObjectIdentifier, TypeTag, normalize_type

logger = logging.getLogger(__name__)


class CatalogRecord(BaseModel):
    """One object in the catalog."""
    phid: str
    name: str
    title: str = ""
    body: str = ""
    indexable: bool = Field(True, description="False for objects excluded from indexing")
    fields: Dict[str, str] = Field(default_factory=dict)

    @property
    def identifier(self) -> ObjectIdentifier:
        return ObjectIdentifier.parse(self.phid)


class ObjectCatalog:
    """
    Read access to an NDJSON object catalog.

    Construction only stores the path; the file is opened lazily on each
    read, so a missing catalog behaves as an empty one.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def add(self, record: CatalogRecord) -> CatalogRecord:
        """Append a record to the catalog."""
        ObjectIdentifier.parse(record.phid)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'a', encoding='utf-8') as f:
            f.write(record.model_dump_json() + '\n')
        return record

    def records(self) -> Iterator[CatalogRecord]:
        """Iterate over every record in file order."""
        if not self.path.exists():
            logger.debug(f"Catalog not found, treating as empty: {self.path}")
            return

        with open(self.path, 'r', encoding='utf-8') as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    yield CatalogRecord(**json.loads(line))
                except (ValueError, TypeError) as e:
                    raise ValueError(f"Invalid catalog record at {self.path}:{line_no}: {e}") from e

    def iter_type(self, type_tag: TypeTag) -> Iterator[ObjectIdentifier]:
        """Iterate over indexable identifiers of one type."""
        type_tag = normalize_type(type_tag)
        for record in self.records():
            if not record.indexable:
                continue
            identifier = record.identifier
            if identifier.type_tag == type_tag:
                yield identifier

    def get(self, identifier: ObjectIdentifier) -> Optional[CatalogRecord]:
        """Find the record for an identifier."""
        wanted = str(identifier)
        for record in self.records():
            if record.phid == wanted:
                return record
        return None

    def lookup_names(self, names: List[str]) -> Dict[str, ObjectIdentifier]:
        """
        Map object names to identifiers.

        A name matches a record's ``name`` or its textual identifier.
        Names without a match are absent from the result.
        """
        wanted = set(names)
        found: Dict[str, ObjectIdentifier] = {}
        for record in self.records():
            for key in (record.name, record.phid):
                if key in wanted and key not in found:
                    found[key] = record.identifier
        return found


class CatalogNameResolver:
    """Name resolver backed by an ObjectCatalog."""

    def __init__(self, catalog: ObjectCatalog):
        self.catalog = catalog

    def resolve_names(self, names: List[str]) -> Dict[str, ObjectIdentifier]:
        return self.catalog.lookup_names(names)
