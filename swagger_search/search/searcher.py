"""API search functionality."""

import logging
import math
from typing import TYPE_CHECKING, List, Optional

from .search_models import SearchResult, TermVector

if TYPE_CHECKING:
    from ..indexing.vectorizer import TFIDFIndex

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_SIMILAR_LIMIT = 5
DEFAULT_THRESHOLD = 0.1


def cosine_similarity(vec1: TermVector, vec2: TermVector) -> float:
    """Cosine similarity of two sparse vectors.

    Tokens present in only one vector contribute nothing to the dot product
    but still count towards that vector's norm.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity, or 0.0 when either vector has zero norm
    """
    dot_product = 0.0
    norm1 = 0.0
    for token, value1 in vec1.items():
        dot_product += value1 * vec2.get(token, 0.0)
        norm1 += value1 * value1

    norm2 = sum(value * value for value in vec2.values())

    if norm1 == 0 or norm2 == 0:
        return 0.0
    return dot_product / (math.sqrt(norm1) * math.sqrt(norm2))


class SemanticSearcher:
    """Ranks indexed documents by cosine similarity of TF-IDF vectors."""

    def __init__(self, index: "TFIDFIndex"):
        """Initialize searcher.

        Args:
            index: Index to read from
        """
        self.index = index

    def _rank(
        self,
        target: TermVector,
        limit: int,
        threshold: Optional[float] = None,
        exclude_id: Optional[str] = None,
    ) -> List[SearchResult]:
        if limit <= 0:
            return []

        results = []
        for doc in self.index.documents():
            if doc.id == exclude_id:
                continue
            score = cosine_similarity(target, self.index.tfidf_vector(doc.id))
            if threshold is not None and score < threshold:
                continue
            results.append(SearchResult(document=doc, score=score))

        # sort is stable: equal scores keep insertion order
        results.sort(key=lambda result: result.score, reverse=True)
        return results[:limit]

    def search(
        self,
        query: str,
        limit: int = DEFAULT_LIMIT,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> List[SearchResult]:
        """Search documents with a natural language query.

        Args:
            query: Search query
            limit: Maximum number of results
            threshold: Minimum similarity score

        Returns:
            Results ordered by descending score
        """
        query_vector = self.index.query_vector(query)
        results = self._rank(query_vector, limit, threshold=threshold)
        logger.debug(f"Search '{query}' matched {len(results)} documents")
        return results

    def find_similar(
        self, document_id: str, limit: int = DEFAULT_SIMILAR_LIMIT
    ) -> List[SearchResult]:
        """Find documents similar to an indexed document.

        No score threshold is applied. Unknown ids yield no results.

        Args:
            document_id: Id of the reference document
            limit: Maximum number of results

        Returns:
            Results ordered by descending score, excluding the reference document
        """
        if document_id not in self.index:
            logger.debug(f"Unknown document id: {document_id}")
            return []

        target = self.index.tfidf_vector(document_id)
        return self._rank(target, limit, exclude_id=document_id)
