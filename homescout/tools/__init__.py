"""Dataset-producing tools called by the LLM runtime.

- Tool: abstract base (argument validation, failure-to-result conversion)
- FindPlaceTool (``findPlace``): place search filtered by a spatial join
- BuyHouseTool (``buyHouse``): amenity analysis in 5/10-minute drive bands
- PolygonSet / is_point_in_polygons: spatial containment filter
- registry: tool lookup by name and function-calling definitions
"""

from homescout.tools.base import Tool
from homescout.tools.buy_house import BuyHouseTool
from homescout.tools.containment import PolygonSet, is_point_in_polygons
from homescout.tools.find_place import FindPlaceTool
from homescout.tools.registry import (
    get_tool,
    list_tools,
    register_tool,
    tool_definitions,
)

__all__ = [
    "BuyHouseTool",
    "FindPlaceTool",
    "PolygonSet",
    "Tool",
    "get_tool",
    "is_point_in_polygons",
    "list_tools",
    "register_tool",
    "tool_definitions",
]
