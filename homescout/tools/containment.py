"""Spatial containment filter: is a place inside any of a set of polygons.

Drive-time isochrones arrive as GeoJSON Polygon or MultiPolygon
features.  ``PolygonSet`` builds their shapely geometries once and
prepares them, so testing hundreds of places against the same band
does not rebuild the polygon for each place.

Malformed input never raises.  A place without a usable Point geometry
is simply not contained; a polygon shapely cannot build is skipped; a
geometry error during the test is logged and counts as not contained.
Points on a polygon boundary count as inside.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from shapely import prepare
from shapely.errors import ShapelyError
from shapely.geometry import Point, shape

from homescout.models.feature import POINT, POLYGON_TYPES, geometry_type

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapely.geometry.base import BaseGeometry

    from homescout.models.feature import Feature

logger = logging.getLogger("homescout.tools.containment")

# Minimum coordinate components for a point (lon, lat)
MIN_POINT_COMPONENTS = 2

_GEOMETRY_ERRORS = (ShapelyError, ValueError, TypeError, AttributeError, IndexError, KeyError)


class PolygonSet:
    """An ordered set of polygons supporting "contained in any" queries."""

    def __init__(self, geometries: list[BaseGeometry]) -> None:
        self._geometries = geometries

    @classmethod
    def from_features(cls, features: Iterable[Feature]) -> PolygonSet:
        """Build a ``PolygonSet`` from GeoJSON features.

        Features whose geometry is not a Polygon or MultiPolygon are
        ignored.  Polygons shapely cannot build are skipped with a warning.
        """
        geometries: list[BaseGeometry] = []
        for index, feature in enumerate(features):
            gtype = geometry_type(feature)
            if gtype not in POLYGON_TYPES:
                logger.debug("Ignoring non-polygon feature | index=%d | type=%s", index, gtype)
                continue
            try:
                geometry = shape(feature["geometry"])
                prepare(geometry)
            except _GEOMETRY_ERRORS as exc:
                logger.warning("Skipping malformed polygon | index=%d | error=%s", index, exc)
                continue
            geometries.append(geometry)
        return cls(geometries)

    def __len__(self) -> int:
        return len(self._geometries)

    def __bool__(self) -> bool:
        return bool(self._geometries)

    def contains(self, feature: Feature) -> bool:
        """Return ``True`` if *feature* is a Point inside any polygon of the set."""
        if not self._geometries:
            return False
        point = point_of(feature)
        if point is None:
            return False
        try:
            return any(geometry.covers(point) for geometry in self._geometries)
        except _GEOMETRY_ERRORS as exc:
            logger.warning("Error in spatial filtering | error=%s", exc)
            return False


def point_of(feature: Feature) -> Point | None:
    """Return the shapely Point of a Point feature, or ``None`` if unusable."""
    if geometry_type(feature) != POINT:
        return None
    coordinates = feature["geometry"].get("coordinates")
    if not isinstance(coordinates, list | tuple) or len(coordinates) < MIN_POINT_COMPONENTS:
        return None
    try:
        lon = float(coordinates[0])
        lat = float(coordinates[1])
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return None
    return Point(lon, lat)


def is_point_in_polygons(point: Feature, polygons: Iterable[Feature]) -> bool:
    """Return ``True`` if the Point feature *point* lies inside any of *polygons*."""
    return PolygonSet.from_features(polygons).contains(point)
