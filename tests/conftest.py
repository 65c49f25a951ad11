"""Shared pytest fixtures for the homescout test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from homescout.models.dataset import Dataset
from homescout.stores.memory import InMemoryDatasetStore

Feature = dict[str, Any]

# ---------------------------------------------------------------------------
# GeoJSON builders
# ---------------------------------------------------------------------------


def _point_feature(lon: float, lat: float, **properties: Any) -> Feature:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": dict(properties),
    }


def _square_feature(
    min_x: float, min_y: float, max_x: float, max_y: float, **properties: Any
) -> Feature:
    ring = [[min_x, min_y], [max_x, min_y], [max_x, max_y], [min_x, max_y], [min_x, min_y]]
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": dict(properties),
    }


@pytest.fixture()
def make_point() -> Callable[..., Feature]:
    """Builder for GeoJSON Point features: ``make_point(lon, lat, **props)``."""
    return _point_feature


@pytest.fixture()
def make_square() -> Callable[..., Feature]:
    """Builder for rectangular Polygon features: ``make_square(x0, y0, x1, y1, **props)``."""
    return _square_feature


# ---------------------------------------------------------------------------
# Drive band polygons
# ---------------------------------------------------------------------------


@pytest.fixture()
def five_minute_polygon() -> Feature:
    """Inner drive band: the square (-1, -1)..(1, 1)."""
    return _square_feature(-1, -1, 1, 1, name="5 min")


@pytest.fixture()
def ten_minute_polygon() -> Feature:
    """Outer drive band: the square (-2, -2)..(2, 2), enclosing the inner band."""
    return _square_feature(-2, -2, 2, 2, name="10 min")


# ---------------------------------------------------------------------------
# Dataset store
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> InMemoryDatasetStore:
    """An empty in-memory dataset store for one conversation."""
    return InMemoryDatasetStore("conv-test")


@pytest.fixture()
def seed(store: InMemoryDatasetStore) -> Callable[..., Any]:
    """Coroutine that stores a feature list as a geojson dataset: ``await seed(name, features)``."""

    async def _seed(name: str, features: list[Feature]) -> None:
        await store.put(name, Dataset.from_features(features))

    return _seed
