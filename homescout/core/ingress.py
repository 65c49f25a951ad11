"""Thin ingress boundary helpers for the Azure Functions HTTP entrypoints.

Centralises the transport concerns so that ``function_app.py`` contains
only route bindings and handoff:

- **deserialize_request_body**: normalises a JSON body given as bytes,
  string or already-parsed dict.
- **build_tool_request**: constructs the canonical ``ToolRequest`` from
  a tool-call body, validating required fields.
- **build_dataset_upload**: validates a dataset upload body.
- **get_blob_service_client**: creates an ``azure.storage.blob``
  client from the ``AzureWebJobsStorage`` environment variable, failing
  fast with a structured error if unconfigured.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from typing import TYPE_CHECKING, Any, TypedDict

from homescout.core.exceptions import ContractError
from homescout.models.dataset import Dataset

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

logger = logging.getLogger("homescout.core.ingress")


class ToolRequest(TypedDict):
    """Canonical tool-call request handed to the ``ToolExecutor``."""

    conversation_id: str
    tool_name: str
    args: dict[str, Any]
    correlation_id: str


# ---------------------------------------------------------------------------
# Body deserialisation
# ---------------------------------------------------------------------------


def deserialize_request_body(raw: bytes | str | dict[str, Any] | object) -> dict[str, Any]:
    """Normalise an HTTP request body to a plain dict.

    Args:
        raw: The body as bytes, a JSON string, or an already-parsed dict.

    Returns:
        Parsed dict payload.

    Raises:
        ContractError: If *raw* is not a JSON object.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Request body is not valid UTF-8: {exc}"
            raise ContractError(msg, stage="ingress", code="INVALID_ENCODING") from exc
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, ValueError) as exc:
            msg = f"Request body is not valid JSON: {exc}"
            raise ContractError(msg, stage="ingress", code="INVALID_JSON") from exc
        if not isinstance(parsed, dict):
            msg = f"Request body JSON must be an object, got {type(parsed).__name__}"
            raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")
        return parsed
    if isinstance(raw, dict):
        return raw
    msg = f"Unexpected request body type: {type(raw).__name__}"
    raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")


# ---------------------------------------------------------------------------
# Tool request builder
# ---------------------------------------------------------------------------


def build_tool_request(
    body: dict[str, Any],
    *,
    tool_name: str,
    correlation_id: str = "",
) -> ToolRequest:
    """Build a canonical ``ToolRequest`` from a tool-call body.

    The body is ``{"conversationId": str, "args": {...}}``.  A missing
    ``args`` means "no arguments" and is left to the tool to reject.

    Raises:
        ContractError: If the tool name or conversation id is missing, or
            ``args`` is not an object.
    """
    if not tool_name.strip():
        msg = "Tool request missing tool name"
        raise ContractError(msg, stage="ingress", code="MISSING_TOOL_NAME")

    conversation_id = str(body.get("conversationId", "") or "").strip()
    if not conversation_id:
        msg = "Tool request missing required field: conversationId"
        raise ContractError(msg, stage="ingress", code="MISSING_CONVERSATION_ID")

    args = body.get("args", {})
    if args is None:
        args = {}
    if not isinstance(args, dict):
        msg = f"Tool request args must be an object, got {type(args).__name__}"
        raise ContractError(msg, stage="ingress", code="INVALID_TOOL_ARGS")

    request = ToolRequest(
        conversation_id=conversation_id,
        tool_name=tool_name.strip(),
        args=args,
        correlation_id=correlation_id or uuid.uuid4().hex,
    )

    logger.debug(
        "Built tool request | tool=%s | conversation=%s | correlation_id=%s",
        request["tool_name"],
        request["conversation_id"],
        request["correlation_id"],
    )
    return request


def build_dataset_upload(body: dict[str, Any]) -> Dataset:
    """Validate a ``{type, content}`` dataset upload body.

    Raises:
        ContractError: If the body is not a geojson dataset.
    """
    if not Dataset.is_dataset_dict(body):
        msg = "Dataset body must be {type: 'geojson', content: FeatureCollection}"
        raise ContractError(msg, stage="ingress", code="INVALID_DATASET")
    features = body["content"].get("features")
    if not isinstance(features, list):
        msg = "Dataset content must be a FeatureCollection with a features list"
        raise ContractError(msg, stage="ingress", code="INVALID_DATASET")
    return Dataset.from_dict(body)


# ---------------------------------------------------------------------------
# Blob service client factory
# ---------------------------------------------------------------------------


def get_blob_service_client() -> BlobServiceClient:
    """Create a ``BlobServiceClient`` from the ``AzureWebJobsStorage`` env var.

    Raises:
        ContractError: If the environment variable is not set.
    """
    from azure.storage.blob import BlobServiceClient

    connection_string = os.environ.get("AzureWebJobsStorage", "")  # noqa: SIM112
    if not connection_string:
        msg = "AzureWebJobsStorage environment variable is not set"
        raise ContractError(msg, stage="ingress", code="MISSING_CONNECTION_STRING")

    return BlobServiceClient.from_connection_string(connection_string)
