"""API contract indexing."""

import logging
from typing import Any, Dict, List

from ..search.search_models import DocumentType, IndexStats, SearchResult
from ..search.searcher import (
    DEFAULT_LIMIT,
    DEFAULT_SIMILAR_LIMIT,
    DEFAULT_THRESHOLD,
    SemanticSearcher,
)
from .parser import extract_documents
from .tokenizer import tokenize
from .vectorizer import TFIDFIndex

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 5


class SemanticIndex:
    """Semantic index over API specifications.

    Owns a :class:`TFIDFIndex` and the searcher reading from it. Each
    specification is indexed as one batch: all of its documents are recorded
    and the IDF table is rebuilt once. Indexing is synchronous, so a batch is
    never observed half-applied from an event loop.
    """

    def __init__(self):
        """Initialize an empty index."""
        self.index = TFIDFIndex()
        self.searcher = SemanticSearcher(self.index)

    def index_batch(self, spec: Dict[str, Any], service: str) -> int:
        """Index every document extracted from one service's specification.

        Args:
            spec: Parsed API specification
            service: Service identifier

        Returns:
            Number of documents extracted from the specification
        """
        documents = extract_documents(spec, service)
        for doc in documents:
            self.index.record_document(doc)
        self.index.rebuild_idf()

        logger.info(
            f"Indexed {len(documents)} documents from {service} "
            f"({self.index.total_documents} total)"
        )
        return len(documents)

    def search(
        self,
        query: str,
        limit: int = DEFAULT_LIMIT,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> List[SearchResult]:
        """Search the index with a natural language query."""
        return self.searcher.search(query, limit=limit, threshold=threshold)

    def find_similar(
        self, document_id: str, limit: int = DEFAULT_SIMILAR_LIMIT
    ) -> List[SearchResult]:
        """Find documents similar to an indexed document."""
        return self.searcher.find_similar(document_id, limit=limit)

    def suggestions(
        self, partial_query: str, limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> List[str]:
        """Complete the tokens of a partial query from indexed vocabulary.

        Args:
            partial_query: Partial query text
            limit: Maximum number of suggestions

        Returns:
            Distinct indexed tokens starting with any query token, in the
            order they first appear in the index
        """
        prefixes = tokenize(partial_query)
        if not prefixes or limit <= 0:
            return []

        suggestions: Dict[str, None] = {}
        for doc in self.index.documents():
            for token in tokenize(doc.content):
                if token in suggestions:
                    continue
                if any(token.startswith(prefix) for prefix in prefixes):
                    suggestions[token] = None
                    if len(suggestions) >= limit:
                        return list(suggestions)
        return list(suggestions)

    def clear(self) -> None:
        """Clear the index."""
        self.index.clear()
        logger.info("Cleared index")

    def stats(self) -> IndexStats:
        """Get statistics about the indexed content."""
        stats = IndexStats(
            total_documents=self.index.total_documents,
            total_terms=self.index.total_terms,
        )
        for doc in self.index.documents():
            stats.services.add(doc.metadata.service)
            if doc.metadata.type is DocumentType.ENDPOINT:
                stats.endpoint_count += 1
            elif doc.metadata.type is DocumentType.SCHEMA:
                stats.schema_count += 1
        return stats
