"""Tool registry: looks up tool classes by the name the LLM calls them by.

The registry maps a tool name to a zero-argument loader returning the
tool *class*.  Built-in tools are registered on first use; extra tools
(or test doubles) can be plugged in with ``register_tool``.

Usage::

    from homescout.tools.registry import get_tool

    tool = get_tool("buyHouse", store)
    result = await tool.execute(raw_args)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homescout.core.constants import BUY_HOUSE, FIND_PLACE
from homescout.core.exceptions import UnknownToolError

if TYPE_CHECKING:
    from collections.abc import Callable

    from homescout.stores.base import DatasetResolver
    from homescout.tools.base import Tool

logger = logging.getLogger(__name__)

_TOOL_REGISTRY: dict[str, Callable[[], type[Tool[Any]]]] = {}


def _register_builtin_tools() -> None:
    """Register the built-in tools (lazy imports)."""

    def _find_place() -> type[Tool[Any]]:
        from homescout.tools.find_place import FindPlaceTool

        return FindPlaceTool

    def _buy_house() -> type[Tool[Any]]:
        from homescout.tools.buy_house import BuyHouseTool

        return BuyHouseTool

    _TOOL_REGISTRY[FIND_PLACE] = _find_place
    _TOOL_REGISTRY[BUY_HOUSE] = _buy_house


def _ensure_registry() -> None:
    """Initialise the tool registry once (idempotent)."""
    if not _TOOL_REGISTRY:
        _register_builtin_tools()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_tool(name: str, loader: Callable[[], type[Tool[Any]]]) -> None:
    """Register a tool class under *name*.

    Args:
        name: Tool name as called by the language model.
        loader: A zero-argument callable that returns the tool class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Tool name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _TOOL_REGISTRY[name] = loader
    logger.debug("Registered tool: %s", name)


def unregister_tool(name: str) -> None:
    """Remove a tool from the registry (no-op if absent)."""
    _TOOL_REGISTRY.pop(name, None)


def get_tool_class(name: str) -> type[Tool[Any]]:
    """Return the tool class registered under *name*.

    Raises:
        UnknownToolError: If no tool is registered under *name*.
    """
    _ensure_registry()
    loader = _TOOL_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_TOOL_REGISTRY))
        msg = f"Unknown tool: {name!r}. Available: {available}"
        raise UnknownToolError(msg)
    return loader()


def get_tool(name: str, resolver: DatasetResolver) -> Tool[Any]:
    """Create the tool *name* bound to *resolver*.

    Raises:
        UnknownToolError: If no tool is registered under *name*.
    """
    return get_tool_class(name)(resolver)


def list_tools() -> list[str]:
    """Return the names of all registered tools."""
    _ensure_registry()
    return sorted(_TOOL_REGISTRY)


def tool_definitions() -> list[dict[str, Any]]:
    """Function-calling definitions of every registered tool, sorted by name."""
    return [get_tool_class(name).definition() for name in list_tools()]
