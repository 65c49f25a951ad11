"""Azure Functions entry point: Homescout geospatial tools.

This module registers the HTTP functions using the Python v2 programming
model.

All business logic lives in the homescout package. This file is purely
the wiring layer between Azure Functions bindings and application code.
"""

from __future__ import annotations

import json
import logging

import azure.functions as func

from homescout.core.config import HomescoutConfig
from homescout.core.exceptions import ContractError, HomescoutError, ValidationError
from homescout.core.ingress import (
    build_dataset_upload,
    build_tool_request,
    deserialize_request_body,
)
from homescout.orchestrators.tool_executor import ToolExecutor
from homescout.stores.factory import DatasetStoreFactory
from homescout.tools.registry import tool_definitions

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

logger = logging.getLogger("homescout.function_app")

_config = HomescoutConfig.from_env()
_stores = DatasetStoreFactory(_config)


def _json_response(payload: object, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(payload),
        status_code=status_code,
        mimetype="application/json",
    )


def _error_response(exc: HomescoutError) -> func.HttpResponse:
    status = 400 if isinstance(exc, (ContractError, ValidationError)) else 500
    if exc.retryable:
        status = 503
    return _json_response({"error": exc.to_error_dict()}, status_code=status)


def _request_body(req: func.HttpRequest) -> dict[str, object]:
    return deserialize_request_body(req.get_body() or b"{}")


# ---------------------------------------------------------------------------
# HTTP: Tool definitions
# ---------------------------------------------------------------------------


@app.function_name("list_tools")
@app.route(route="tools", methods=["GET"])
def list_tools_http(req: func.HttpRequest) -> func.HttpResponse:  # noqa: ARG001
    """Return the function-calling definitions of every registered tool."""
    return _json_response({"tools": tool_definitions()})


# ---------------------------------------------------------------------------
# HTTP: Tool call
# ---------------------------------------------------------------------------


@app.function_name("call_tool")
@app.route(route="tools/{tool_name}", methods=["POST"])
async def call_tool_http(req: func.HttpRequest) -> func.HttpResponse:
    """Run a tool for a conversation and return its ``ToolResult``.

    Body: ``{"conversationId": str, "args": {...}}``.  Tool-level failures
    come back as ``200`` with ``llmResult.success == false``; only
    malformed requests and storage failures produce error statuses.
    """
    try:
        request = build_tool_request(
            _request_body(req),
            tool_name=req.route_params.get("tool_name", ""),
            correlation_id=req.headers.get("x-correlation-id", ""),
        )
    except HomescoutError as exc:
        logger.warning("Rejected tool request | code=%s | error=%s", exc.code, exc.message)
        return _error_response(exc)

    logger.info(
        "Tool request received | tool=%s | conversation=%s | correlation_id=%s",
        request["tool_name"],
        request["conversation_id"],
        request["correlation_id"],
    )

    try:
        executor = ToolExecutor(
            _stores.for_conversation(request["conversation_id"]),
            conversation_id=request["conversation_id"],
        )
        result = await executor.execute(request["tool_name"], request["args"])
    except HomescoutError as exc:
        exc.correlation_id = exc.correlation_id or request["correlation_id"]
        logger.exception(
            "Tool request failed | tool=%s | correlation_id=%s",
            request["tool_name"],
            request["correlation_id"],
        )
        return _error_response(exc)

    return _json_response(result)


# ---------------------------------------------------------------------------
# HTTP: Conversation datasets
# ---------------------------------------------------------------------------


@app.function_name("put_dataset")
@app.route(route="conversations/{conversation_id}/datasets/{dataset_name}", methods=["PUT"])
async def put_dataset_http(req: func.HttpRequest) -> func.HttpResponse:
    """Register a dataset produced upstream (e.g. a places search)."""
    conversation_id = req.route_params.get("conversation_id", "")
    dataset_name = req.route_params.get("dataset_name", "")
    if not conversation_id or not dataset_name:
        return func.HttpResponse("Missing conversation_id or dataset_name", status_code=400)

    try:
        dataset = build_dataset_upload(_request_body(req))
        await _stores.for_conversation(conversation_id).put(dataset_name, dataset)
    except HomescoutError as exc:
        logger.warning(
            "Dataset upload failed | conversation=%s | dataset=%s | code=%s",
            conversation_id,
            dataset_name,
            exc.code,
        )
        return _error_response(exc)

    logger.info(
        "Dataset uploaded | conversation=%s | dataset=%s | features=%d",
        conversation_id,
        dataset_name,
        len(dataset.features),
    )
    return _json_response({"datasetName": dataset_name}, status_code=201)


@app.function_name("get_dataset")
@app.route(route="conversations/{conversation_id}/datasets/{dataset_name}", methods=["GET"])
async def get_dataset_http(req: func.HttpRequest) -> func.HttpResponse:
    """Return a stored dataset of a conversation, or 404."""
    conversation_id = req.route_params.get("conversation_id", "")
    dataset_name = req.route_params.get("dataset_name", "")
    if not conversation_id or not dataset_name:
        return func.HttpResponse("Missing conversation_id or dataset_name", status_code=400)

    try:
        dataset = await _stores.for_conversation(conversation_id).get(dataset_name)
    except HomescoutError as exc:
        logger.exception(
            "Dataset lookup failed | conversation=%s | dataset=%s",
            conversation_id,
            dataset_name,
        )
        return _error_response(exc)

    if dataset is None:
        return func.HttpResponse("Dataset not found", status_code=404)

    return _json_response(dataset.to_dict())
