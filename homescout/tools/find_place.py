"""``findPlace`` tool: filter a place search to an area and overlay an isochrone.

Combines three datasets produced earlier in the conversation:

- the places found by the place-search tool (required),
- a spatial-join result whose features carry ``Count`` and ``id``
  (optional): only places whose ``id`` appears on a feature with
  ``Count > 0`` are kept, ordered by ``distance``,
- an isochrone (optional): its polygons are appended after the places
  for map rendering; it does not filter anything.

The result is registered as ``findPlace_<places dataset name>``.  The
name is a pure function of the places dataset so repeated calls with the
same inputs address the same logical output.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from homescout.core.constants import FIND_PLACE, FIND_PLACE_DATASET_PREFIX
from homescout.core.exceptions import DatasetNotFoundError
from homescout.models.arguments import FindPlaceArgs
from homescout.models.contracts import dataset_additional_data
from homescout.models.dataset import DatasetName, geojson_dataset
from homescout.models.feature import feature_id, numeric_property
from homescout.tools.base import Tool

if TYPE_CHECKING:
    from homescout.models.contracts import ToolResult
    from homescout.models.feature import Feature

logger = logging.getLogger("homescout.tools.find_place")

COUNT_PROPERTY = "Count"
DISTANCE_PROPERTY = "distance"


class FindPlaceTool(Tool[FindPlaceArgs]):
    """Place search filtered by a spatial join, with an optional isochrone overlay."""

    name = FIND_PLACE
    description = (
        "Find places using placeSearch tool and spatialJoin tool.\n"
        "- the placeSearch tool will be used to search for the places.\n"
        "- the spatialJoin tool will be used to filter the places that are within "
        "the search area.\n"
        "- the datasetName of the spatialJoin tool will be returned as the "
        "datasetName of the findPlace tool.\n"
    )
    args_model = FindPlaceArgs
    error_prefix = "Error finding places"

    async def run(self, args: FindPlaceArgs) -> ToolResult:
        places = await self.resolve(args.places_dataset_name)
        if places is None:
            raise DatasetNotFoundError(
                args.places_dataset_name,
                f"No geometries found for places dataset: {args.places_dataset_name}",
                stage=self.name,
            )

        filtered = places
        if args.spatial_filter_dataset_name:
            spatial_filter = await self.resolve(args.spatial_filter_dataset_name)
            if spatial_filter:
                filtered = sort_by_distance(filter_by_spatial_join(places, spatial_filter))
            else:
                logger.warning(
                    "Spatial filter dataset empty, places not filtered | dataset=%s",
                    args.spatial_filter_dataset_name,
                )

        features = list(filtered)
        isochrone = await self.resolve(args.isochrone_dataset_name)
        if isochrone:
            features.extend(isochrone)

        dataset_name = str(DatasetName.derived(FIND_PLACE_DATASET_PREFIX, args.places_dataset_name))

        logger.info(
            "findPlace completed | places=%d | kept=%d | isochrone_features=%d | dataset=%s",
            len(places),
            len(filtered),
            len(isochrone or []),
            dataset_name,
        )

        return {
            "llmResult": {
                "success": True,
                "datasetName": dataset_name,
                "summary": describe_places(len(filtered)),
            },
            "additionalData": dataset_additional_data(dataset_name, geojson_dataset(features)),
        }


def filter_by_spatial_join(places: list[Feature], spatial_filter: list[Feature]) -> list[Feature]:
    """Keep the places whose ``id`` matches a spatial-join feature with ``Count > 0``."""
    matched_ids: set[object] = set()
    for feature in spatial_filter:
        if numeric_property(feature, COUNT_PROPERTY, default=0.0) <= 0:
            continue
        fid = _hashable_id(feature)
        if fid is not None:
            matched_ids.add(fid)

    return [place for place in places if _hashable_id(place) in matched_ids]


def sort_by_distance(places: list[Feature]) -> list[Feature]:
    """Stable ascending sort by ``distance``; missing or non-numeric distances go last."""
    return sorted(places, key=lambda place: numeric_property(place, DISTANCE_PROPERTY, math.inf))


def describe_places(count: int) -> str:
    """LLM-facing sentence reporting how many places were found."""
    if count == 1:
        return "Here is 1 place that is within the search area"
    return f"Here are {count} places that are within the search area"


def _hashable_id(feature: Feature) -> object:
    """``properties.id``, or ``None`` when absent or unusable as a set member."""
    value = feature_id(feature)
    try:
        hash(value)
    except TypeError:
        return None
    return value
