"""Background population of the semantic index."""

import asyncio
import logging
from typing import Optional

from ..errors import SwaggerSearchError
from ..services.fetcher import SwaggerFetcher
from .indexer import SemanticIndex
from .progress import IndexingProgress

logger = logging.getLogger(__name__)


class BackgroundIndexer:
    """Fetches and indexes every registered service, one at a time.

    Services are indexed sequentially with a pause between them so that the
    polled services are not hit all at once. Queries may run against the
    partially built index meanwhile; ``progress`` tells callers how far along
    indexing is.
    """

    def __init__(
        self,
        fetcher: SwaggerFetcher,
        index: SemanticIndex,
        progress: Optional[IndexingProgress] = None,
        start_delay: float = 1.0,
        delay: float = 0.1,
    ):
        """Initialize background indexer.

        Args:
            fetcher: Specification fetcher
            index: Index to populate
            progress: Progress tracker to update
            start_delay: Seconds to wait before the first fetch
            delay: Seconds to wait between services
        """
        self.fetcher = fetcher
        self.index = index
        self.progress = progress or IndexingProgress()
        self.start_delay = start_delay
        self.delay = delay
        self._task: Optional[asyncio.Task] = None

    async def index_service(self, slug: str) -> int:
        """Fetch and index one service.

        Returns:
            Number of documents indexed, 0 if the fetch failed
        """
        document = await self.fetcher.fetch_swagger(slug)
        if document is None:
            return 0
        return self.index.index_batch(document, slug)

    async def run(self) -> None:
        """Index all registered services."""
        services = self.fetcher.registry.get_services()
        self.progress.start(len(services))
        logger.info("Starting background indexing of swagger documents...")

        try:
            if self.start_delay > 0:
                await asyncio.sleep(self.start_delay)

            for service in services:
                self.progress.advance()
                try:
                    await self.index_service(service.slug)
                except SwaggerSearchError as e:
                    logger.error(f"Failed to index {service.slug}: {e}")
                except Exception:
                    logger.exception(f"Unexpected error indexing {service.slug}")

                if self.delay > 0:
                    await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            logger.info(f"Indexing cancelled at {self.progress.describe()}")
            self.progress.fail()
            raise
        except Exception:
            logger.exception("Indexing failed")
            self.progress.fail()
            raise

        stats = self.index.stats()
        self.progress.finish()
        logger.info(
            f"Indexing complete: {stats.total_documents} documents "
            f"from {len(stats.services)} services"
        )

    def start(self) -> asyncio.Task:
        """Schedule :meth:`run` on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Cancel a running indexing task and wait for it to finish."""
        if self._task is None or self._task.done():
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
