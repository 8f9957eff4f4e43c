"""Tests for cosine similarity ranking."""

import math

import pytest

from swagger_search.indexing.vectorizer import TFIDFIndex
from swagger_search.search.search_models import (
    DocumentMetadata,
    DocumentType,
    IndexedDocument,
)
from swagger_search.search.searcher import SemanticSearcher, cosine_similarity


def make_document(doc_id: str, content: str) -> IndexedDocument:
    return IndexedDocument(
        id=doc_id,
        content=content,
        metadata=DocumentMetadata(service="svc", type=DocumentType.ENDPOINT),
    )


@pytest.fixture
def searcher() -> SemanticSearcher:
    index = TFIDFIndex()
    for doc_id, content in [
        ("refund", "refund payment to customer"),
        ("charge", "charge payment card"),
        ("invoice", "send invoice email"),
        ("users", "list users accounts"),
        ("empty", "?? !!"),
    ]:
        index.record_document(make_document(doc_id, content))
    index.rebuild_idf()
    return SemanticSearcher(index)


def test_cosine_similarity_identical_vectors():
    vector = {"payment": 0.3, "refund": 0.7}
    assert cosine_similarity(vector, vector) == pytest.approx(1.0)


def test_cosine_similarity_disjoint_vectors():
    assert cosine_similarity({"payment": 1.0}, {"invoice": 1.0}) == 0.0


def test_cosine_similarity_partial_overlap():
    v1 = {"payment": 1.0, "refund": 1.0}
    v2 = {"payment": 1.0}
    assert cosine_similarity(v1, v2) == pytest.approx(1 / math.sqrt(2))


def test_cosine_similarity_zero_norm():
    assert cosine_similarity({}, {"payment": 1.0}) == 0.0
    assert cosine_similarity({"payment": 1.0}, {}) == 0.0
    assert cosine_similarity({"payment": 0.0}, {"payment": 0.0}) == 0.0


def test_search_ranks_by_score(searcher):
    results = searcher.search("refund payment", limit=10, threshold=0.0)
    scores = [result.score for result in results]

    assert results[0].document.id == "refund"
    assert scores == sorted(scores, reverse=True)


def test_search_threshold_filters(searcher):
    results = searcher.search("refund payment", threshold=0.1)

    assert [result.document.id for result in results] == ["refund", "charge"]
    assert all(result.score >= 0.1 for result in results)


def test_search_threshold_monotonic(searcher):
    counts = [
        len(searcher.search("payment invoice users", limit=10, threshold=threshold))
        for threshold in (0.0, 0.05, 0.1, 0.3, 0.6, 0.9, 1.1)
    ]
    assert counts == sorted(counts, reverse=True)


@pytest.mark.parametrize("limit", [0, 1, 2, 3, 10])
def test_search_respects_limit(searcher, limit):
    assert len(searcher.search("payment", limit=limit, threshold=0)) <= limit


def test_search_ties_keep_insertion_order(searcher):
    results = searcher.search("nothing matches this", limit=10, threshold=0)

    assert [result.document.id for result in results] == [
        "refund",
        "charge",
        "invoice",
        "users",
        "empty",
    ]
    assert all(result.score == 0 for result in results)


def test_search_is_deterministic(searcher):
    first = searcher.search("customer payment", limit=3, threshold=0)
    second = searcher.search("customer payment", limit=3, threshold=0)
    assert first == second


def test_search_empty_query(searcher):
    assert searcher.search("", threshold=0.1) == []


def test_empty_document_never_matches(searcher):
    results = searcher.search("payment", limit=10, threshold=0)
    empty = [result for result in results if result.document.id == "empty"][0]
    assert empty.score == 0


def test_find_similar_excludes_itself(searcher):
    results = searcher.find_similar("refund", limit=10)

    assert "refund" not in [result.document.id for result in results]
    assert results[0].document.id == "charge"
    assert len(results) == 4


def test_find_similar_has_no_threshold(searcher):
    results = searcher.find_similar("invoice", limit=10)
    assert [result.score for result in results] == [0, 0, 0, 0]


def test_find_similar_respects_limit(searcher):
    assert len(searcher.find_similar("refund", limit=2)) == 2


def test_find_similar_unknown_id(searcher):
    assert searcher.find_similar("does-not-exist", 5) == []


def test_self_similarity(searcher):
    index = searcher.index
    for doc in index.documents():
        if doc.id == "empty":
            continue
        vector = index.tfidf_vector(doc.id)
        assert cosine_similarity(vector, vector) == pytest.approx(1.0)
