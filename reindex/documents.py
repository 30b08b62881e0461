"""
Search documents and the local NDJSON document store.

The store is the hand-off point to whatever engine owns the real index; it
only appends built documents, one JSON object per line.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class SearchDocument(BaseModel):
    """Indexable representation of one object."""
    phid: str
    type_tag: str
    title: str = ""
    body: str = ""
    fields: Dict[str, str] = Field(default_factory=dict)
    indexed_at: datetime = Field(default_factory=datetime.utcnow)


class DocumentStore:
    """Append-only NDJSON store for built search documents."""

    def __init__(self, path: Path):
        """
        Initialize document store.

        Args:
            path: NDJSON file receiving documents (created on first write)
        """
        self.path = Path(path)

    def save(self, document: SearchDocument) -> None:
        """Append a document."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'a', encoding='utf-8') as f:
            f.write(document.model_dump_json() + '\n')

    def load(self, phid: Optional[str] = None) -> List[SearchDocument]:
        """
        Read stored documents back.

        Args:
            phid: Only return documents for this identifier

        Returns:
            Documents in write order
        """
        if not self.path.exists():
            return []

        documents = []
        with open(self.path, 'r', encoding='utf-8') as f:
            for line in f:
                if not line.strip():
                    continue
                document = SearchDocument(**json.loads(line))
                if phid and document.phid != phid:
                    continue
                documents.append(document)

        return documents
