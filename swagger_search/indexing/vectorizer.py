"""
TF-IDF Vectorization for Swagger Search

This module maintains the term statistics behind semantic search. Each indexed
document keeps a length-normalized term-frequency vector; a corpus-wide
inverse-document-frequency table is rebuilt from scratch after every batch of
documents. TF-IDF vectors are derived on read from the stored TF vector and the
current IDF table and are never cached, so they always reflect the latest corpus.

Weighting:
- TF(token) = occurrences of token / number of tokens in the document
- IDF(token) = ln(total documents / documents containing token)
- TF-IDF(token) = TF(token) * IDF(token)

Tokens missing from the IDF table, or whose IDF is zero because they occur in
every document, are weighted with the fallback ln(total documents). A single
document corpus uses a fallback of 1.0, since ln(1) would zero every weight.

Example Usage:
    index = TFIDFIndex()
    for doc in documents:
        index.record_document(doc)
    index.rebuild_idf()

    query = index.query_vector("create payment")
    doc_vector = index.tfidf_vector(documents[0].id)
"""

import logging
import math
from collections import Counter
from typing import Dict, Iterator, List, Optional

from ..search.search_models import IndexedDocument, TermVector
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def term_frequencies(tokens: List[str]) -> TermVector:
    """Build a length-normalized term-frequency vector.

    Args:
        tokens: Document tokens

    Returns:
        Mapping of token to count divided by total token count
    """
    if not tokens:
        return {}

    total = len(tokens)
    return {token: count / total for token, count in Counter(tokens).items()}


def fallback_idf(total_documents: int) -> float:
    """Weight used for tokens without a usable IDF value."""
    if total_documents > 1:
        return math.log(total_documents)
    return float(total_documents)


def apply_idf(tf: TermVector, idf: Dict[str, float], total_documents: int) -> TermVector:
    """Weight a term-frequency vector by inverse document frequency.

    Args:
        tf: Term-frequency vector
        idf: IDF table
        total_documents: Corpus size the IDF table was computed for

    Returns:
        TF-IDF vector
    """
    fallback = fallback_idf(total_documents)
    return {token: value * (idf.get(token) or fallback) for token, value in tf.items()}


class TFIDFIndex:
    """In-memory TF-IDF index over extracted documents."""

    def __init__(self):
        """Initialize an empty index."""
        self._documents: Dict[str, IndexedDocument] = {}
        self._tf_vectors: Dict[str, TermVector] = {}
        self._idf: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    @property
    def total_documents(self) -> int:
        """Number of stored documents."""
        return len(self._documents)

    @property
    def total_terms(self) -> int:
        """Vocabulary size as of the last IDF rebuild."""
        return len(self._idf)

    @property
    def idf(self) -> Dict[str, float]:
        """Read-only copy of the IDF table."""
        return dict(self._idf)

    def documents(self) -> Iterator[IndexedDocument]:
        """Iterate over stored documents in insertion order."""
        return iter(self._documents.values())

    def get_document(self, document_id: str) -> Optional[IndexedDocument]:
        """Get a stored document by id."""
        return self._documents.get(document_id)

    def tf_vector(self, document_id: str) -> TermVector:
        """Get the stored term-frequency vector of a document."""
        return dict(self._tf_vectors.get(document_id, {}))

    def record_document(self, doc: IndexedDocument) -> None:
        """Store a document and its term-frequency vector.

        Re-recording an existing id replaces the document and recomputes its
        vector. The IDF table is not touched; call :meth:`rebuild_idf` once
        the batch is complete.

        Args:
            doc: Document to store
        """
        self._documents[doc.id] = doc
        self._tf_vectors[doc.id] = term_frequencies(tokenize(doc.content))

    def rebuild_idf(self) -> None:
        """Recompute document frequencies and the IDF table from all documents."""
        total = self.total_documents
        document_frequency: Counter = Counter()
        for vector in self._tf_vectors.values():
            document_frequency.update(vector.keys())

        self._idf = {
            token: math.log(total / df) for token, df in document_frequency.items()
        }
        logger.debug(f"Rebuilt IDF table: {len(self._idf)} terms over {total} documents")

    def tfidf_vector(self, document_id: str) -> TermVector:
        """Derive the TF-IDF vector of a stored document.

        Args:
            document_id: Document id

        Returns:
            TF-IDF vector, empty for unknown ids
        """
        tf = self._tf_vectors.get(document_id)
        if not tf:
            return {}
        return apply_idf(tf, self._idf, self.total_documents)

    def query_vector(self, text: str) -> TermVector:
        """Build the TF-IDF vector of free text against the current IDF table."""
        tf = term_frequencies(tokenize(text))
        return apply_idf(tf, self._idf, self.total_documents)

    def clear(self) -> None:
        """Remove all documents, vectors and IDF statistics."""
        self._documents.clear()
        self._tf_vectors.clear()
        self._idf.clear()
