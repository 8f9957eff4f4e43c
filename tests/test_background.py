"""Tests for background indexing."""

import asyncio

import httpx
import pytest

from swagger_search.indexing.background import BackgroundIndexer
from swagger_search.indexing.indexer import SemanticIndex
from swagger_search.indexing.progress import IndexingProgress, IndexingStatus
from swagger_search.services.fetcher import SwaggerFetcher
from swagger_search.services.registry import ServiceRegistry, SwaggerService


def test_progress_lifecycle():
    progress = IndexingProgress()
    assert progress.status is IndexingStatus.PENDING

    progress.start(3)
    progress.advance()
    assert progress.in_progress
    assert progress.describe() == "1/3"
    assert progress.to_dict() == {"current": 1, "total": 3}

    progress.finish()
    assert progress.complete
    assert not progress.in_progress


@pytest.mark.asyncio
async def test_index_service(fetcher):
    indexer = BackgroundIndexer(fetcher, SemanticIndex(), start_delay=0, delay=0)

    assert await indexer.index_service("petstore") == 6
    assert await indexer.index_service("broken") == 0


@pytest.mark.asyncio
async def test_run_indexes_every_service(fetcher):
    index = SemanticIndex()
    progress = IndexingProgress()
    indexer = BackgroundIndexer(fetcher, index, progress, start_delay=0, delay=0)

    await indexer.run()

    assert progress.status is IndexingStatus.COMPLETE
    assert progress.describe() == "3/3"
    stats = index.stats()
    assert stats.total_documents == 10
    assert stats.services == {"petstore", "users"}


@pytest.mark.asyncio
async def test_stop_cancels_running_task(fetcher):
    progress = IndexingProgress()
    indexer = BackgroundIndexer(
        fetcher, SemanticIndex(), progress, start_delay=60, delay=0
    )

    task = indexer.start()
    await asyncio.sleep(0)
    assert progress.in_progress

    await indexer.stop()

    assert task.cancelled()
    assert progress.status is IndexingStatus.FAILED


@pytest.mark.asyncio
async def test_start_is_idempotent_while_running(fetcher):
    indexer = BackgroundIndexer(fetcher, SemanticIndex(), start_delay=60, delay=0)

    first = indexer.start()
    second = indexer.start()

    assert first is second
    await indexer.stop()


@pytest.mark.asyncio
async def test_malformed_service_url_does_not_stop_indexing(petstore_spec):
    registry = ServiceRegistry(
        [
            SwaggerService(
                name="Bad", slug="bad", base_url="http://[::1", openapi_path="/openapi.json"
            ),
            SwaggerService(
                name="Petstore",
                slug="petstore",
                base_url="https://petstore.example.com",
                openapi_path="/openapi.json",
            ),
        ]
    )
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=petstore_spec))
    )
    index = SemanticIndex()
    progress = IndexingProgress()
    indexer = BackgroundIndexer(
        SwaggerFetcher(registry, client=client), index, progress, start_delay=0, delay=0
    )

    await indexer.run()

    assert progress.status is IndexingStatus.COMPLETE
    assert index.stats().services == {"petstore"}
    await client.aclose()


@pytest.mark.asyncio
async def test_unexpected_error_skips_only_that_service(fetcher, monkeypatch):
    index = SemanticIndex()
    progress = IndexingProgress()
    indexer = BackgroundIndexer(fetcher, index, progress, start_delay=0, delay=0)
    index_batch = index.index_batch

    def failing_index_batch(spec, service):
        if service == "petstore":
            raise RuntimeError("boom")
        return index_batch(spec, service)

    monkeypatch.setattr(index, "index_batch", failing_index_batch)

    await indexer.run()

    assert progress.status is IndexingStatus.COMPLETE
    assert progress.describe() == "3/3"
    assert index.stats().services == {"users"}
