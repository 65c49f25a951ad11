"""Azure Blob Storage dataset store.

Persists each dataset as one compact JSON blob at
``<conversation_id>/<dataset_name>.json`` so that datasets survive
worker recycling and are shared between Function instances.  The Azure
SDK client is synchronous; calls run in a worker thread so they do not
block the event loop while a tool awaits several datasets at once.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import TYPE_CHECKING, Any

from homescout.core.constants import DEFAULT_DATASET_CONTAINER
from homescout.core.exceptions import DatasetStoreError
from homescout.models.dataset import Dataset
from homescout.stores.base import DatasetStore

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

logger = logging.getLogger("homescout.stores.blob")

BLOB_SUFFIX = ".json"


class BlobDatasetStore(DatasetStore):
    """Dataset store for one conversation backed by a blob container."""

    def __init__(
        self,
        conversation_id: str,
        *,
        blob_service_client: BlobServiceClient,
        container: str = DEFAULT_DATASET_CONTAINER,
    ) -> None:
        if not conversation_id:
            msg = "conversation_id must be non-empty"
            raise ValueError(msg)
        self.conversation_id = conversation_id
        self._client = blob_service_client
        self._container = container

    def blob_path(self, name: str) -> str:
        """Blob path of dataset *name* within the container."""
        return f"{self.conversation_id}/{name}{BLOB_SUFFIX}"

    async def get(self, name: str) -> Dataset | None:
        return await asyncio.to_thread(self._read, name)

    async def put(self, name: str, dataset: Dataset) -> None:
        await asyncio.to_thread(self._write, name, dataset)

    async def names(self) -> list[str]:
        return await asyncio.to_thread(self._list)

    # ------------------------------------------------------------------
    # Blocking SDK calls
    # ------------------------------------------------------------------

    def _read(self, name: str) -> Dataset | None:
        from azure.core.exceptions import ResourceNotFoundError

        blob_path = self.blob_path(name)
        try:
            blob_client = self._client.get_blob_client(container=self._container, blob=blob_path)
            data = blob_client.download_blob().readall()
        except ResourceNotFoundError:
            return None
        except Exception as exc:
            msg = f"Failed to download dataset blob {self._container}/{blob_path}: {exc}"
            raise DatasetStoreError(msg, correlation_id=self.conversation_id) from exc

        try:
            raw: Any = json.loads(data)
        except (json.JSONDecodeError, TypeError) as exc:
            msg = f"Failed to decode dataset JSON from {self._container}/{blob_path}: {exc}"
            raise DatasetStoreError(msg, correlation_id=self.conversation_id) from exc

        if not isinstance(raw, dict):
            msg = f"Dataset at {self._container}/{blob_path} is not an object: {type(raw).__name__}"
            raise DatasetStoreError(msg, correlation_id=self.conversation_id)

        try:
            return Dataset.from_dict(raw)
        except TypeError as exc:
            msg = f"Dataset at {self._container}/{blob_path} is malformed: {exc}"
            raise DatasetStoreError(msg, correlation_id=self.conversation_id) from exc

    def _write(self, name: str, dataset: Dataset) -> None:
        blob_path = self.blob_path(name)
        serialized = json.dumps(dataset.to_dict(), separators=(",", ":")).encode("utf-8")

        container_client = self._client.get_container_client(self._container)
        with contextlib.suppress(Exception):
            container_client.create_container()

        try:
            blob_client = self._client.get_blob_client(container=self._container, blob=blob_path)
            blob_client.upload_blob(serialized, overwrite=True)
        except Exception as exc:
            msg = f"Failed to upload dataset blob {self._container}/{blob_path}: {exc}"
            raise DatasetStoreError(msg, correlation_id=self.conversation_id) from exc

        logger.info(
            "Dataset stored | container=%s | path=%s | features=%d | size=%d bytes",
            self._container,
            blob_path,
            len(dataset.features),
            len(serialized),
        )

    def _list(self) -> list[str]:
        prefix = f"{self.conversation_id}/"
        container_client = self._client.get_container_client(self._container)
        try:
            blob_names = [blob.name for blob in container_client.list_blobs(name_starts_with=prefix)]
        except Exception as exc:
            msg = f"Failed to list datasets under {self._container}/{prefix}: {exc}"
            raise DatasetStoreError(msg, correlation_id=self.conversation_id) from exc
        return [
            name[len(prefix) : -len(BLOB_SUFFIX)]
            for name in blob_names
            if name.startswith(prefix) and name.endswith(BLOB_SUFFIX)
        ]
