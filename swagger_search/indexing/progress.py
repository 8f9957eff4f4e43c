"""Progress tracking for background indexing."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class IndexingStatus(str, Enum):
    """Background indexing state."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class IndexingProgress:
    """Tracks which service the background indexer is on.

    Lives outside the index: the index only knows what it holds, not how
    much is still to come.
    """

    total: int = 0
    current: int = 0
    status: IndexingStatus = IndexingStatus.PENDING

    @property
    def in_progress(self) -> bool:
        return self.status is IndexingStatus.IN_PROGRESS

    @property
    def complete(self) -> bool:
        return self.status is IndexingStatus.COMPLETE

    def start(self, total: int) -> None:
        self.total = total
        self.current = 0
        self.status = IndexingStatus.IN_PROGRESS

    def advance(self) -> None:
        self.current += 1

    def finish(self) -> None:
        self.status = IndexingStatus.COMPLETE

    def fail(self) -> None:
        self.status = IndexingStatus.FAILED

    def describe(self) -> str:
        """Progress as "current/total"."""
        return f"{self.current}/{self.total}"

    def to_dict(self) -> Dict[str, Any]:
        return {"current": self.current, "total": self.total}
