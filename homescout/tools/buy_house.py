"""``buyHouse`` tool: nearby-amenity analysis for a property listing.

Fuses a Redfin listing (description + URL) with seven amenity datasets
and two drive-time polygons around the property:

1. Both drive-time polygon datasets must resolve, or the analysis stops.
2. The seven category datasets are resolved concurrently; a missing one
   contributes no places.
3. Each place is attributed to exactly one band, the innermost it falls
   in: the 5-minute band, or the 10-minute band if it is inside the
   10-minute polygon but outside the 5-minute one.
4. The combined collection is drawn in a fixed order (5-minute polygon,
   5-minute places, 10-minute polygon, 10-minute places) because the map
   client relies on draw order for overlays.

Every output feature is a copy of its input with ``category``, ``color``
and ``distance`` (places) or ``category``, ``color`` and ``opacity``
(band polygons) set.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from homescout.core.constants import (
    AMENITY_CATEGORIES,
    BUY_HOUSE,
    BUY_HOUSE_DATASET_PREFIX,
    FIVE_MINUTE_BAND,
    TEN_MINUTE_BAND,
    UNKNOWN_DISTANCE,
)
from homescout.core.exceptions import DatasetNotFoundError
from homescout.models.arguments import BuyHouseArgs
from homescout.models.contracts import dataset_additional_data
from homescout.models.dataset import DatasetName, geojson_dataset
from homescout.models.feature import properties_of, with_properties
from homescout.tools.base import Tool
from homescout.tools.containment import PolygonSet
from homescout.tools.summary import create_summary

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from homescout.core.constants import AmenityCategory, DriveBand
    from homescout.models.contracts import ToolResult
    from homescout.models.feature import Feature

logger = logging.getLogger("homescout.tools.buy_house")


class BuyHouseTool(Tool[BuyHouseArgs]):
    """Bucket amenities around a property into exclusive 5/10-minute drive bands."""

    name = BUY_HOUSE
    description = (
        "Analyze a property for home buying by combining Redfin information with "
        "nearby amenities data.\n"
        "- Uses 5 minutes drive distance polygon to filter all categories of places\n"
        "- Uses 10 minutes drive distance polygon to filter additional categories\n"
        "- Creates a combined GeoJSON with the distance polygons and filtered points\n"
        "- Returns Redfin description and summary of nearby amenities\n"
    )
    args_model = BuyHouseArgs
    error_prefix = "Error analyzing property"

    async def run(self, args: BuyHouseArgs) -> ToolResult:
        five_min_polygons = await self._require_band(
            FIVE_MINUTE_BAND, args.five_mins_drive_dataset_name
        )
        ten_min_polygons = await self._require_band(
            TEN_MINUTE_BAND, args.ten_mins_drive_dataset_name
        )

        resolved = await asyncio.gather(
            *(self.resolve(name) for name in args.category_dataset_names())
        )
        category_places = [
            (category, places or [])
            for category, places in zip(AMENITY_CATEGORIES, resolved, strict=True)
        ]

        inner = PolygonSet.from_features(five_min_polygons)
        outer = PolygonSet.from_features(ten_min_polygons)

        places_5min = collect_band_places(
            category_places, band=FIVE_MINUTE_BAND, within=inner.contains
        )
        places_10min = collect_band_places(
            category_places,
            band=TEN_MINUTE_BAND,
            within=lambda place: outer.contains(place) and not inner.contains(place),
        )

        features = [
            *style_band_polygons(five_min_polygons, FIVE_MINUTE_BAND),
            *places_5min,
            *style_band_polygons(ten_min_polygons, TEN_MINUTE_BAND),
            *places_10min,
        ]

        summary = create_summary(
            [(FIVE_MINUTE_BAND, places_5min), (TEN_MINUTE_BAND, places_10min)]
        )
        dataset_name = str(DatasetName.unique(BUY_HOUSE_DATASET_PREFIX))

        logger.info(
            "buyHouse completed | places_5min=%d | places_10min=%d | features=%d | dataset=%s",
            len(places_5min),
            len(places_10min),
            len(features),
            dataset_name,
        )

        return {
            "llmResult": {
                "success": True,
                "redfinDescription": args.redfin_description,
                "summary": summary,
            },
            "additionalData": dataset_additional_data(
                dataset_name,
                geojson_dataset(features),
                redfinUrl=args.redfin_url,
                redfinDescription=args.redfin_description,
            ),
        }

    async def _require_band(self, band: DriveBand, dataset_name: str) -> list[Feature]:
        """Resolve a drive-time polygon dataset.

        Raises:
            DatasetNotFoundError: If the dataset is missing or empty.
        """
        polygons = await self.resolve(dataset_name)
        if not polygons:
            msg = (
                f"No {band.minutes} minutes drive distance polygon found "
                f"for dataset: {dataset_name}"
            )
            raise DatasetNotFoundError(dataset_name, msg, stage=self.name)
        return polygons


def collect_band_places(
    category_places: Sequence[tuple[AmenityCategory, Sequence[Feature]]],
    *,
    band: DriveBand,
    within: Callable[[Feature], bool],
) -> list[Feature]:
    """Select and tag the places of one band, grouped in category order.

    Args:
        category_places: ``(category, places)`` pairs in category order.
        band: The band being collected (for logging).
        within: Predicate deciding whether a place belongs to the band.
    """
    collected: list[Feature] = []
    for category, places in category_places:
        if not places:
            continue
        kept = [tag_place(place, category) for place in places if within(place)]
        logger.info(
            "Spatial filtering | band=%s | category=%s | total=%d | kept=%d",
            band.label,
            category.name,
            len(places),
            len(kept),
        )
        collected.extend(kept)
    return collected


def tag_place(place: Feature, category: AmenityCategory) -> Feature:
    """Copy *place* with its category, colour and carried-through distance."""
    distance = properties_of(place).get("distance")
    if distance is None or distance == "":
        distance = UNKNOWN_DISTANCE
    return with_properties(place, category=category.name, color=category.color, distance=distance)


def style_band_polygons(polygons: Sequence[Feature], band: DriveBand) -> list[Feature]:
    """Copy the band polygons with the band label, colour and opacity."""
    return [
        with_properties(polygon, category=band.label, color=band.color, opacity=band.opacity)
        for polygon in polygons
    ]
