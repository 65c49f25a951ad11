"""GeoJSON feature helpers.

Features travel through the tools as plain GeoJSON dicts, exactly as
the upstream place-search, spatial-join and isochrone tools produce
them.  They are treated as value objects: every transform returns a
shallow copy with a fresh ``properties`` dict, and input features are
never mutated.
"""

from __future__ import annotations

import math
from typing import Any

Feature = dict[str, Any]
FeatureCollection = dict[str, Any]

POINT = "Point"
POLYGON = "Polygon"
MULTIPOLYGON = "MultiPolygon"
POLYGON_TYPES = frozenset({POLYGON, MULTIPOLYGON})


def properties_of(feature: Feature) -> dict[str, Any]:
    """Return the feature's property bag, or an empty dict if absent."""
    props = feature.get("properties")
    return props if isinstance(props, dict) else {}


def geometry_type(feature: Feature) -> str:
    """Return the GeoJSON geometry type, or ``""`` if the geometry is missing."""
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return ""
    return str(geometry.get("type", ""))


def feature_id(feature: Feature) -> Any:
    """Return ``properties.id`` verbatim (``None`` when absent)."""
    return properties_of(feature).get("id")


def with_properties(feature: Feature, **overrides: Any) -> Feature:
    """Return a shallow copy of *feature* with *overrides* merged into its properties."""
    return {**feature, "properties": {**properties_of(feature), **overrides}}


def numeric_property(feature: Feature, key: str, default: float = math.nan) -> float:
    """Return a property as ``float``, or *default* when absent or non-numeric.

    Numeric strings (``"120.5"``) are accepted.  Booleans and ``NaN``
    count as absent.
    """
    value = properties_of(feature).get(key)
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(number) else number


def feature_collection(features: list[Feature]) -> FeatureCollection:
    """Wrap *features* in a GeoJSON ``FeatureCollection``."""
    return {"type": "FeatureCollection", "features": list(features)}
