"""Search data structures."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

# Token -> non-negative weight
TermVector = Dict[str, float]


class DocumentType(str, Enum):
    """Kind of indexed document."""

    ENDPOINT = "endpoint"
    SCHEMA = "schema"
    DESCRIPTION = "description"


def endpoint_document_id(service: str, method: str, path: str) -> str:
    """Build the id of an endpoint document.

    The method segment is lower-cased so that callers passing ``GET`` or
    ``get`` resolve to the same document.

    Args:
        service: Service identifier (slug)
        method: HTTP method, any casing
        path: Endpoint path

    Returns:
        Document id
    """
    return f"{service}-{method.lower()}-{path}"


def schema_document_id(service: str, name: str) -> str:
    """Build the id of a schema document."""
    return f"{service}-schema-{name}"


@dataclass(frozen=True)
class DocumentMetadata:
    """Structured metadata attached to an indexed document."""

    service: str
    type: DocumentType
    path: Optional[str] = None
    method: Optional[str] = None
    operation_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format, dropping unset optional fields."""
        data: Dict[str, Any] = {
            "service": self.service,
            "type": self.type.value,
        }
        if self.path is not None:
            data["path"] = self.path
        if self.method is not None:
            data["method"] = self.method
        if self.operation_id is not None:
            data["operationId"] = self.operation_id
        return data


@dataclass(frozen=True)
class IndexedDocument:
    """A searchable text document extracted from an API specification."""

    id: str
    content: str
    metadata: DocumentMetadata

    @property
    def service(self) -> str:
        return self.metadata.service

    @property
    def type(self) -> DocumentType:
        return self.metadata.type

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for serialization."""
        data = {"id": self.id}
        data.update(self.metadata.to_dict())
        data["content"] = self.content
        return data


@dataclass(frozen=True)
class SearchResult:
    """Represents a single ranked document with its similarity score."""

    document: IndexedDocument
    score: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for serialization."""
        data = self.document.to_dict()
        data["score"] = self.score
        return data


@dataclass
class IndexStats:
    """Snapshot of the index contents."""

    total_documents: int = 0
    total_terms: int = 0
    services: Set[str] = field(default_factory=set)
    endpoint_count: int = 0
    schema_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        services: List[str] = sorted(self.services)
        return {
            "totalDocuments": self.total_documents,
            "totalTerms": self.total_terms,
            "services": services,
            "endpoints": self.endpoint_count,
            "schemas": self.schema_count,
        }
