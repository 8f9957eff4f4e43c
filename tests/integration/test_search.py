"""Integration tests for search functionality."""

import pytest

from swagger_search.indexing.indexer import SemanticIndex
from swagger_search.search.search_models import DocumentType

PAYMENTS_SPEC = {
    "openapi": "3.0.0",
    "paths": {
        "/payments": {
            "get": {
                "summary": "Create payment",
                "description": "payment processing",
            }
        }
    },
}

USERS_SPEC = {
    "openapi": "3.0.0",
    "paths": {
        "/users": {
            "get": {
                "summary": "List users",
                "operationId": "listUsers",
            }
        }
    },
}

ORDERS_SPEC = {
    "swagger": "2.0",
    "paths": {
        "/orders": {
            "get": {
                "summary": "List orders",
                "operationId": "listOrders",
            }
        }
    },
    "definitions": {
        "Invoice": {
            "description": "Billing document",
            "properties": {"amount": {}, "currency": {}},
        }
    },
}


@pytest.fixture
def index() -> SemanticIndex:
    return SemanticIndex()


def test_single_endpoint_is_found(index):
    """A one-document corpus still ranks its only document."""
    index.index_batch(PAYMENTS_SPEC, "payments")

    results = index.search("payment processing", limit=10, threshold=0.1)

    assert [result.document.id for result in results] == ["payments-get-/payments"]
    assert results[0].document.content.startswith(
        "GET /payments | Create payment | payment processing"
    )


def test_identical_endpoints_are_fully_similar(index):
    index.index_batch(USERS_SPEC, "accounts")
    index.index_batch(USERS_SPEC, "directory")

    results = index.find_similar("accounts-get-/users", limit=5)

    assert len(results) == 1
    assert results[0].document.id == "directory-get-/users"
    assert results[0].score == pytest.approx(1.0)


def test_query_matches_only_schema(index):
    index.index_batch(ORDERS_SPEC, "orders")

    results = index.search("invoice billing amount", limit=10, threshold=0.1)

    assert [result.document.id for result in results] == ["orders-schema-Invoice"]
    assert results[0].document.metadata.type is DocumentType.SCHEMA


def test_indexing_another_service_keeps_existing_documents(
    index, petstore_spec, users_spec
):
    index.index_batch(petstore_spec, "petstore")
    before = {
        result.document.id: result.document
        for result in index.find_similar("petstore-get-/pets", limit=100)
    }

    index.index_batch(users_spec, "users")
    after = {
        result.document.id: result.document
        for result in index.find_similar("petstore-get-/pets", limit=100)
    }

    assert set(before) <= set(after)
    for doc_id, document in before.items():
        assert after[doc_id] == document
    assert any(doc_id.startswith("users-") for doc_id in after)


def test_search_is_deterministic(semantic_index):
    first = semantic_index.search("list pets by status", limit=5, threshold=0)
    second = semantic_index.search("list pets by status", limit=5, threshold=0)

    assert first == second


def test_search_ranking(semantic_index):
    results = semantic_index.search("pet", limit=10, threshold=0)

    assert all(
        results[i].score >= results[i + 1].score for i in range(len(results) - 1)
    )
    assert results[0].document.metadata.service == "petstore"


def test_threshold_monotonicity(semantic_index):
    previous = None
    for threshold in (0.0, 0.05, 0.1, 0.2, 0.4, 0.8):
        count = len(semantic_index.search("user account", limit=100, threshold=threshold))
        if previous is not None:
            assert count <= previous
        previous = count


def test_self_similarity(semantic_index):
    from swagger_search.search.searcher import cosine_similarity

    for doc in semantic_index.index.documents():
        vector = semantic_index.index.tfidf_vector(doc.id)
        assert cosine_similarity(vector, vector) == pytest.approx(1.0)


def test_empty_corpus_after_clear(semantic_index):
    semantic_index.clear()

    assert semantic_index.search("anything", 10, 0) == []
    assert semantic_index.stats().total_documents == 0
    assert semantic_index.find_similar("petstore-get-/pets", 5) == []
