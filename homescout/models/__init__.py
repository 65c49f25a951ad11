"""Data models and schemas.

Defines the data structures exchanged by the tools:
- Feature helpers: GeoJSON feature dicts treated as value objects
- Dataset / DatasetName: named geojson datasets and their typed identifiers
- Contracts: ``ToolResult`` / ``LlmResult`` result shapes
- Arguments: pydantic argument models for ``findPlace`` and ``buyHouse``
"""

from homescout.models.arguments import BuyHouseArgs, FindPlaceArgs, ToolArguments
from homescout.models.contracts import LlmResult, ToolResult, failure_result
from homescout.models.dataset import Dataset, DatasetName, geojson_dataset

__all__ = [
    "BuyHouseArgs",
    "Dataset",
    "DatasetName",
    "FindPlaceArgs",
    "LlmResult",
    "ToolArguments",
    "ToolResult",
    "failure_result",
    "geojson_dataset",
]
