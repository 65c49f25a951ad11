"""Tests for the Azure Blob Storage dataset store.

Validates:
- Datasets are written as compact JSON under ``<conversation>/<name>.json``
- Reads hydrate datasets and map a missing blob to ``None``
- Download, decode and shape failures raise ``DatasetStoreError``
- Listing strips the conversation prefix and ``.json`` suffix
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import ResourceNotFoundError

from homescout.core.exceptions import DatasetStoreError
from homescout.models.dataset import Dataset
from homescout.stores.blob import BlobDatasetStore


def _make_blob_service_mock(download: bytes | Exception | None = None) -> MagicMock:
    """Create a mock BlobServiceClient whose blob download returns *download*."""
    blob_service = MagicMock()
    container_client = MagicMock()
    blob_client = MagicMock()
    blob_service.get_container_client.return_value = container_client
    blob_service.get_blob_client.return_value = blob_client
    if isinstance(download, Exception):
        blob_client.download_blob.side_effect = download
    elif download is not None:
        blob_client.download_blob.return_value.readall.return_value = download
    return blob_service


class TestBlobDatasetStoreWrite:
    @pytest.mark.asyncio()
    async def test_put_uploads_compact_json(self, make_point) -> None:
        blob_service = _make_blob_service_mock()
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service, container="ds")
        dataset = Dataset.from_features([make_point(1, 2, id="a")])

        await store.put("ps1", dataset)

        blob_service.get_blob_client.assert_called_once_with(container="ds", blob="conv-1/ps1.json")
        blob_client = blob_service.get_blob_client.return_value
        args, kwargs = blob_client.upload_blob.call_args
        assert kwargs == {"overwrite": True}
        assert b" " not in args[0]
        assert json.loads(args[0]) == dataset.to_dict()

    @pytest.mark.asyncio()
    async def test_existing_container_tolerated(self) -> None:
        blob_service = _make_blob_service_mock()
        blob_service.get_container_client.return_value.create_container.side_effect = (
            RuntimeError("ContainerAlreadyExists")
        )
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service)

        await store.put("ps1", Dataset.from_features([]))

        blob_service.get_blob_client.return_value.upload_blob.assert_called_once()

    @pytest.mark.asyncio()
    async def test_upload_failure_raises(self) -> None:
        blob_service = _make_blob_service_mock()
        blob_service.get_blob_client.return_value.upload_blob.side_effect = OSError("network")
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service)

        with pytest.raises(DatasetStoreError, match="Failed to upload") as exc_info:
            await store.put("ps1", Dataset.from_features([]))
        assert exc_info.value.retryable is True
        assert exc_info.value.correlation_id == "conv-1"


class TestBlobDatasetStoreRead:
    @pytest.mark.asyncio()
    async def test_get_hydrates_dataset(self, make_point) -> None:
        dataset = Dataset.from_features([make_point(1, 2, id="a")])
        blob_service = _make_blob_service_mock(json.dumps(dataset.to_dict()).encode())
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service)

        assert await store.get("ps1") == dataset
        features = await store.resolve_dataset("ps1")
        assert [f["properties"]["id"] for f in features] == ["a"]

    @pytest.mark.asyncio()
    async def test_missing_blob_is_none(self) -> None:
        blob_service = _make_blob_service_mock(ResourceNotFoundError("not found"))
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service)

        assert await store.get("ps1") is None
        assert await store.resolve_dataset("ps1") is None

    @pytest.mark.asyncio()
    async def test_download_failure_raises(self) -> None:
        blob_service = _make_blob_service_mock(OSError("timeout"))
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service)

        with pytest.raises(DatasetStoreError, match="Failed to download"):
            await store.get("ps1")

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        ("payload", "match"),
        [
            (b"{not json", "Failed to decode"),
            (b"[1, 2]", "not an object"),
            (b'{"type": "geojson", "content": []}', "malformed"),
        ],
    )
    async def test_bad_payload_raises(self, payload: bytes, match: str) -> None:
        store = BlobDatasetStore("conv-1", blob_service_client=_make_blob_service_mock(payload))

        with pytest.raises(DatasetStoreError, match=match):
            await store.get("ps1")


class TestBlobDatasetStoreNames:
    @pytest.mark.asyncio()
    async def test_names_strip_prefix_and_suffix(self) -> None:
        blob_service = _make_blob_service_mock()
        blob_service.get_container_client.return_value.list_blobs.return_value = [
            SimpleNamespace(name="conv-1/ps1.json"),
            SimpleNamespace(name="conv-1/findPlace_ps1.json"),
            SimpleNamespace(name="conv-1/notes.txt"),
        ]
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service)

        assert await store.names() == ["ps1", "findPlace_ps1"]
        blob_service.get_container_client.return_value.list_blobs.assert_called_once_with(
            name_starts_with="conv-1/"
        )

    @pytest.mark.asyncio()
    async def test_list_failure_raises(self) -> None:
        blob_service = _make_blob_service_mock()
        blob_service.get_container_client.return_value.list_blobs.side_effect = OSError("down")
        store = BlobDatasetStore("conv-1", blob_service_client=blob_service)

        with pytest.raises(DatasetStoreError, match="Failed to list"):
            await store.names()


class TestBlobDatasetStoreInit:
    def test_empty_conversation_rejected(self) -> None:
        with pytest.raises(ValueError, match="conversation_id"):
            BlobDatasetStore("", blob_service_client=MagicMock())

    def test_blob_path(self) -> None:
        store = BlobDatasetStore("conv-1", blob_service_client=MagicMock())
        assert store.blob_path("buyHouse_abc") == "conv-1/buyHouse_abc.json"
