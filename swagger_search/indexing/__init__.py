"""
API Contract Indexing Package for Swagger Search

This package turns API specifications into a searchable TF-IDF index.

Key Components:
1. Parser Module:
   - Endpoint and schema document extraction
   - Specification file loading

2. Tokenizer and Vectorizer Modules:
   - Text normalization
   - Term-frequency vectors
   - Corpus IDF statistics

3. Indexer Module:
   - Per-service batch indexing
   - Search, similarity and suggestions
   - Statistics and reset

4. Background Module:
   - Sequential fetch-and-index of all services
   - Progress tracking

Example Usage:
    from swagger_search.indexing import SemanticIndex

    index = SemanticIndex()
    index.index_batch(spec, "payments")
    results = index.search("refund a payment")
"""

from .indexer import SemanticIndex
from .parser import extract_documents
from .progress import IndexingProgress, IndexingStatus
from .tokenizer import tokenize
from .vectorizer import TFIDFIndex

__all__ = [
    "IndexingProgress",
    "IndexingStatus",
    "SemanticIndex",
    "TFIDFIndex",
    "extract_documents",
    "tokenize",
]
