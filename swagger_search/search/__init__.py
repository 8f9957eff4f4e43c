"""
Semantic Search Package for Swagger Search

This package ranks indexed API documents against natural language queries using
cosine similarity of TF-IDF vectors.

Package Structure:
- search_models.py: Documents, results and statistics
- searcher.py: Similarity scoring and ranking
"""

from .search_models import (
    DocumentMetadata,
    DocumentType,
    IndexedDocument,
    IndexStats,
    SearchResult,
)

__all__ = [
    "DocumentMetadata",
    "DocumentType",
    "IndexStats",
    "IndexedDocument",
    "SearchResult",
]
