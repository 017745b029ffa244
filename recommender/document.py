"""
Document input contract and the internal per-document record.

Caller documents are never decorated: tokens and vectors live on a separate
DocumentRecord keyed by the document id.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Hashable, List, Optional, Sequence

from recommender.exceptions import ValidationError
from recommender.vectors import SparseVector

REQUIRED_FIELDS = ("id", "content")
RESERVED_FIELDS = ("tokens", "vector")


@dataclass
class DocumentRecord:
    """A trained document: its id, its normalized terms and its TF-IDF vector."""
    id: Hashable
    tokens: List[str]
    vector: Optional[SparseVector] = field(default=None)


def validate_documents(documents: Sequence[Mapping]) -> None:
    """Reject the whole corpus if any document breaks the input contract."""
    if not isinstance(documents, (list, tuple)):
        raise ValidationError("Documents should be a list of mappings")

    seen = set()
    for position, document in enumerate(documents):
        if not isinstance(document, Mapping):
            raise ValidationError(f"Document at position {position} should be a mapping")

        if any(name not in document for name in REQUIRED_FIELDS):
            raise ValidationError("Documents should have fields id and content")

        if any(name in document for name in RESERVED_FIELDS):
            raise ValidationError(
                '"tokens" and "vector" properties are reserved and cannot be used as document properties'
            )

        doc_id = document["id"]
        if doc_id is None:
            raise ValidationError(f"Document at position {position} has no id")
        if not isinstance(document["content"], str):
            raise ValidationError(f"Document {doc_id!r} content should be a string")

        try:
            duplicate = doc_id in seen
        except TypeError:
            raise ValidationError(f"Document id {doc_id!r} is not hashable") from None
        if duplicate:
            raise ValidationError(f"Duplicate document id {doc_id!r}")
        seen.add(doc_id)
