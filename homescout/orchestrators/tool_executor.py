"""Tool executor: run a named tool against a conversation's dataset store.

Sits between the LLM runtime (or the HTTP entry point) and the tools:

1. Look up the tool by name and bind it to the conversation's store.
2. Execute it with the raw arguments (the tool validates them and turns
   every failure into a ``success: false`` result).
3. Record every geojson dataset found in ``additionalData`` into the
   store under its key, so later tool calls can resolve it by name.

Only new results are written; datasets a tool read are never touched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homescout.core.exceptions import UnknownToolError
from homescout.models.contracts import failure_result
from homescout.models.dataset import Dataset, DatasetName
from homescout.tools.registry import get_tool

if TYPE_CHECKING:
    from homescout.models.contracts import ToolResult
    from homescout.stores.base import DatasetStore

logger = logging.getLogger("homescout.orchestrators.tool_executor")


class ToolExecutor:
    """Execute tools for one conversation and record their datasets.

    Usage::

        executor = ToolExecutor(store, conversation_id="conv-1")
        result = await executor.execute("findPlace", {"placesDatasetName": "ps1"})
    """

    def __init__(self, store: DatasetStore, *, conversation_id: str = "") -> None:
        self._store = store
        self.conversation_id = conversation_id
        self._last_output: ToolResult | None = None
        self._last_tool: str = ""

    @property
    def store(self) -> DatasetStore:
        return self._store

    @property
    def last_output(self) -> ToolResult | None:
        """The most recent tool result of this executor, if any."""
        return self._last_output

    @property
    def last_tool(self) -> str:
        return self._last_tool

    async def execute(self, tool_name: str, raw_args: dict[str, Any]) -> ToolResult:
        """Run *tool_name* with *raw_args* and record produced datasets.

        Returns:
            The tool's ``ToolResult``.  An unknown tool name yields a
            ``success: false`` result.

        Raises:
            DatasetStoreError: If a produced dataset cannot be stored.
        """
        try:
            tool = get_tool(tool_name, self._store)
        except UnknownToolError as exc:
            logger.warning(
                "Unknown tool requested | conversation=%s | tool=%s",
                self.conversation_id,
                tool_name,
            )
            return failure_result(exc.message)

        result = await tool.execute(raw_args)
        stored = await self.record_outputs(result)

        self._last_output = result
        self._last_tool = tool_name

        logger.info(
            "Tool executed | conversation=%s | tool=%s | success=%s | datasets_stored=%d",
            self.conversation_id,
            tool_name,
            result["llmResult"]["success"],
            len(stored),
        )
        return result

    async def record_outputs(self, result: ToolResult) -> list[str]:
        """Store every geojson dataset in ``additionalData``.  Returns their names."""
        additional = result.get("additionalData") or {}
        stored: list[str] = []
        for key, value in additional.items():
            if not Dataset.is_dataset_dict(value):
                continue
            await self._store.put(key, Dataset.from_dict(value))
            stored.append(key)
            logger.debug(
                "Dataset recorded | conversation=%s | name=%s | producer=%s",
                self.conversation_id,
                key,
                _producer_of(key),
            )
        return stored


def _producer_of(dataset_name: str) -> str:
    """Producing tool encoded in a ``<prefix>_<key>`` dataset name, or ``"unknown"``."""
    try:
        return DatasetName.parse(dataset_name).prefix
    except ValueError:
        return "unknown"
