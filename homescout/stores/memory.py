"""In-memory dataset stores.

``InMemoryDatasetStore`` holds the datasets of a single conversation.
``ConversationCache`` hands out one store per conversation and bounds
memory with TTL eviction of idle conversations and LRU eviction when the
conversation count exceeds its capacity.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from homescout.core.constants import DEFAULT_CONVERSATION_TTL_SECONDS, DEFAULT_MAX_CONVERSATIONS
from homescout.stores.base import DatasetStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from homescout.models.dataset import Dataset

logger = logging.getLogger("homescout.stores.memory")


class InMemoryDatasetStore(DatasetStore):
    """Dict-backed dataset store for one conversation."""

    def __init__(self, conversation_id: str = "") -> None:
        self.conversation_id = conversation_id
        self._datasets: dict[str, Dataset] = {}

    async def get(self, name: str) -> Dataset | None:
        return self._datasets.get(name)

    async def put(self, name: str, dataset: Dataset) -> None:
        if name in self._datasets:
            logger.info(
                "Replacing dataset | conversation=%s | name=%s",
                self.conversation_id,
                name,
            )
        self._datasets[name] = dataset

    async def names(self) -> list[str]:
        return list(self._datasets)

    def __len__(self) -> int:
        return len(self._datasets)


class ConversationCache:
    """Bounded per-conversation dataset stores with TTL and LRU eviction.

    Conversations idle for longer than *ttl_seconds* are evicted on the
    next access.  When more than *max_conversations* are live, the least
    recently used one is evicted.
    """

    def __init__(
        self,
        *,
        max_conversations: int = DEFAULT_MAX_CONVERSATIONS,
        ttl_seconds: float = DEFAULT_CONVERSATION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_conversations <= 0:
            msg = f"max_conversations must be > 0, got {max_conversations}"
            raise ValueError(msg)
        if ttl_seconds <= 0:
            msg = f"ttl_seconds must be > 0, got {ttl_seconds}"
            raise ValueError(msg)
        self._max = max_conversations
        self._ttl = ttl_seconds
        self._clock = clock
        self._stores: dict[str, InMemoryDatasetStore] = {}
        self._last_access: dict[str, float] = {}

    def store_for(self, conversation_id: str) -> InMemoryDatasetStore:
        """Return the conversation's store, creating it on first use."""
        self._last_access[conversation_id] = self._clock()
        store = self._stores.get(conversation_id)
        if store is None:
            store = InMemoryDatasetStore(conversation_id)
            self._stores[conversation_id] = store
            logger.debug("Conversation store created | conversation=%s", conversation_id)
        self._gc()
        return store

    def evict(self, conversation_id: str) -> bool:
        """Drop a conversation's datasets.  Returns whether it existed."""
        found = conversation_id in self._stores
        self._stores.pop(conversation_id, None)
        self._last_access.pop(conversation_id, None)
        return found

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._stores

    def __len__(self) -> int:
        return len(self._stores)

    def _gc(self) -> None:
        """Evict expired conversations, then LRU if still over capacity."""
        now = self._clock()
        expired = [cid for cid, ts in self._last_access.items() if now - ts > self._ttl]
        for cid in expired:
            self.evict(cid)
            logger.info("Conversation expired | conversation=%s", cid)

        while len(self._last_access) > self._max:
            oldest = min(self._last_access, key=self._last_access.__getitem__)
            self.evict(oldest)
            logger.info("Conversation evicted (capacity) | conversation=%s", oldest)
