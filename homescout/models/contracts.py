"""Canonical payload contracts for the tool boundary.

Every tool returns a ``ToolResult`` dict: an ``llmResult`` block that is
fed back to the language model, and an optional ``additionalData``
block that is forwarded to the dataset store and the map client.  Key
names are camelCase because the LLM runtime and the mobile client read
them verbatim.

Design notes:
- ``TypedDict`` over ``dataclass`` because results are JSON on the wire.
- ``additionalData`` also carries the produced dataset under its own
  (dynamic) name, which a ``TypedDict`` cannot express; the dynamic
  entry is added with a plain ``dict`` update.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

# ---------------------------------------------------------------------------
# LLM-facing results
# ---------------------------------------------------------------------------


class LlmResult(TypedDict):
    """Result block returned to the language model."""

    success: bool
    datasetName: NotRequired[str]
    summary: NotRequired[str]
    redfinDescription: NotRequired[str]


class ToolResult(TypedDict):
    """Complete output of a tool execution."""

    llmResult: LlmResult
    additionalData: NotRequired[dict[str, Any]]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def failure_result(summary: str) -> ToolResult:
    """Build a ``success: false`` result carrying *summary* as the message."""
    return {"llmResult": {"success": False, "summary": summary}}


def dataset_additional_data(
    dataset_name: str,
    dataset: dict[str, Any],
    **extra: str,
) -> dict[str, Any]:
    """Build an ``additionalData`` block exposing *dataset* by name and inline.

    Args:
        dataset_name: The produced dataset name.
        dataset: Serialised ``{type, content}`` dataset.
        **extra: Additional string fields (e.g. ``redfinUrl``).
    """
    data: dict[str, Any] = {**extra, "datasetName": dataset_name}
    data[dataset_name] = dataset
    return data
