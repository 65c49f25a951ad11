"""Dataset stores.

Implements the narrow lookup interface the tools depend on:
- DatasetResolver: ``resolve_dataset(name)`` only
- DatasetStore: resolver plus ``get`` / ``put`` / ``names``
- InMemoryDatasetStore / ConversationCache: per-conversation, TTL + LRU bounded
- BlobDatasetStore: Azure Blob Storage persistence
"""

from homescout.stores.base import DatasetResolver, DatasetStore
from homescout.stores.blob import BlobDatasetStore
from homescout.stores.factory import DatasetStoreFactory
from homescout.stores.memory import ConversationCache, InMemoryDatasetStore

__all__ = [
    "BlobDatasetStore",
    "ConversationCache",
    "DatasetResolver",
    "DatasetStore",
    "DatasetStoreFactory",
    "InMemoryDatasetStore",
]
