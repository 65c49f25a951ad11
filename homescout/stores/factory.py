"""Dataset store factory: selects the configured store backend.

Usage::

    from homescout.stores.factory import DatasetStoreFactory

    stores = DatasetStoreFactory(HomescoutConfig.from_env())
    store = stores.for_conversation("conv-123")

The backend is read from the ``DATASET_STORE`` environment variable via
``HomescoutConfig.dataset_store``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from homescout.core.constants import BLOB_STORE, MEMORY_STORE
from homescout.stores.blob import BlobDatasetStore
from homescout.stores.memory import ConversationCache

if TYPE_CHECKING:
    from collections.abc import Callable

    from azure.storage.blob import BlobServiceClient

    from homescout.core.config import HomescoutConfig
    from homescout.stores.base import DatasetStore

logger = logging.getLogger(__name__)


class DatasetStoreFactory:
    """Hands out the dataset store of a conversation.

    The in-memory backend keeps one ``ConversationCache`` for the lifetime
    of the factory.  The blob backend creates its ``BlobServiceClient``
    lazily through *blob_client_factory* on first use.
    """

    def __init__(
        self,
        config: HomescoutConfig,
        *,
        blob_client_factory: Callable[[], BlobServiceClient] | None = None,
    ) -> None:
        self._config = config
        self._cache = ConversationCache(
            max_conversations=config.max_conversations,
            ttl_seconds=config.conversation_ttl_seconds,
        )
        self._blob_client_factory = blob_client_factory
        self._blob_client: BlobServiceClient | None = None

    @property
    def backend(self) -> str:
        return self._config.dataset_store

    def for_conversation(self, conversation_id: str) -> DatasetStore:
        """Return the dataset store for *conversation_id*.

        Raises:
            ValueError: If the configured backend is unknown.
        """
        if self.backend == MEMORY_STORE:
            return self._cache.store_for(conversation_id)
        if self.backend == BLOB_STORE:
            return BlobDatasetStore(
                conversation_id,
                blob_service_client=self._get_blob_client(),
                container=self._config.dataset_container,
            )
        msg = f"Unknown dataset store backend: {self.backend!r}"
        raise ValueError(msg)

    def _get_blob_client(self) -> BlobServiceClient:
        if self._blob_client is None:
            if self._blob_client_factory is None:
                from homescout.core.ingress import get_blob_service_client

                self._blob_client_factory = get_blob_service_client
            self._blob_client = self._blob_client_factory()
            logger.info("Blob dataset store enabled | container=%s", self._config.dataset_container)
        return self._blob_client
