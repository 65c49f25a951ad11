"""Tests for the findPlace tool.

Validates:
- Spatial-join filtering keeps only ids with Count > 0, sorted by distance
- Passthrough when no spatial filter is given or it resolves empty
- Isochrone features are appended after the places
- Missing places dataset and invalid arguments produce failure results
- Input datasets are not mutated and the output name is deterministic
"""

from __future__ import annotations

import pytest

from homescout.core.constants import GEOJSON_DATASET_TYPE
from homescout.tools.find_place import (
    FindPlaceTool,
    describe_places,
    filter_by_spatial_join,
    sort_by_distance,
)


def _join(fid, count) -> dict:
    return {"type": "Feature", "geometry": None, "properties": {"id": fid, "Count": count}}


def _features(result) -> list[dict]:
    name = result["llmResult"]["datasetName"]
    dataset = result["additionalData"][name]
    assert dataset["type"] == GEOJSON_DATASET_TYPE
    return dataset["content"]["features"]


class TestFilterBySpatialJoin:
    def test_keeps_positive_counts(self, make_point) -> None:
        places = [make_point(0, 0, id="a"), make_point(1, 1, id="b")]
        kept = filter_by_spatial_join(places, [_join("a", 1), _join("b", 0)])
        assert [p["properties"]["id"] for p in kept] == ["a"]

    def test_numeric_string_count(self, make_point) -> None:
        kept = filter_by_spatial_join([make_point(0, 0, id=7)], [_join(7, "2")])
        assert len(kept) == 1

    def test_place_without_id_dropped(self, make_point) -> None:
        kept = filter_by_spatial_join([make_point(0, 0)], [_join(None, 3)])
        assert kept == []

    def test_unhashable_id_does_not_raise(self, make_point) -> None:
        kept = filter_by_spatial_join([make_point(0, 0, id=["x"])], [_join(["x"], 1)])
        assert kept == []


class TestSortByDistance:
    def test_ascending_with_missing_last(self, make_point) -> None:
        places = [
            make_point(0, 0, id="far", distance=900),
            make_point(0, 0, id="none"),
            make_point(0, 0, id="near", distance="120.5"),
            make_point(0, 0, id="bad", distance="n/a"),
        ]
        ordered = [p["properties"]["id"] for p in sort_by_distance(places)]
        assert ordered == ["near", "far", "none", "bad"]

    def test_stable_for_equal_distances(self, make_point) -> None:
        places = [make_point(0, 0, id=i, distance=5) for i in range(4)]
        assert [p["properties"]["id"] for p in sort_by_distance(places)] == [0, 1, 2, 3]


class TestDescribePlaces:
    def test_singular(self) -> None:
        assert describe_places(1) == "Here is 1 place that is within the search area"

    def test_plural(self) -> None:
        assert describe_places(0) == "Here are 0 places that are within the search area"
        assert describe_places(3) == "Here are 3 places that are within the search area"


class TestFindPlaceTool:
    """End-to-end behaviour against an in-memory dataset store."""

    @pytest.mark.asyncio()
    async def test_filters_and_sorts(self, store, seed, make_point) -> None:
        await seed(
            "ps1",
            [
                make_point(0, 0, id=1, distance=300),
                make_point(1, 1, id=2, distance=100),
                make_point(2, 2, id=3, distance=50),
            ],
        )
        await seed("sj1", [_join(1, 1), _join(2, 2), _join(3, 0)])

        result = await FindPlaceTool(store).execute(
            {"placesDatasetName": "ps1", "spatialFilterDatasetName": "sj1"}
        )

        llm = result["llmResult"]
        assert llm["success"] is True
        assert llm["datasetName"] == "findPlace_ps1"
        assert llm["summary"] == "Here are 2 places that are within the search area"
        assert result["additionalData"]["datasetName"] == "findPlace_ps1"
        assert [f["properties"]["id"] for f in _features(result)] == [2, 1]

    @pytest.mark.asyncio()
    async def test_no_spatial_filter_passes_through(self, store, seed, make_point) -> None:
        places = [make_point(0, 0, id=1, distance=9), make_point(1, 1, id=2, distance=1)]
        await seed("ps1", places)

        result = await FindPlaceTool(store).execute({"placesDatasetName": "ps1"})

        assert result["llmResult"]["success"] is True
        assert [f["properties"]["id"] for f in _features(result)] == [1, 2]

    @pytest.mark.asyncio()
    async def test_unknown_argument_keys_ignored(self, store, seed, make_point) -> None:
        await seed("ps1", [make_point(0, 0, id=1)])

        result = await FindPlaceTool(store).execute(
            {"placesDatasetName": "ps1", "reason": "user asked"}
        )

        assert result["llmResult"]["success"] is True
        assert result["llmResult"]["datasetName"] == "findPlace_ps1"

    @pytest.mark.asyncio()
    async def test_empty_spatial_filter_passes_through(self, store, seed, make_point) -> None:
        await seed("ps1", [make_point(0, 0, id=1)])
        await seed("sj_empty", [])

        result = await FindPlaceTool(store).execute(
            {"placesDatasetName": "ps1", "spatialFilterDatasetName": "sj_empty"}
        )

        assert result["llmResult"]["summary"] == "Here is 1 place that is within the search area"

    @pytest.mark.asyncio()
    async def test_unknown_spatial_filter_passes_through(self, store, seed, make_point) -> None:
        await seed("ps1", [make_point(0, 0, id=1), make_point(1, 1, id=2)])

        result = await FindPlaceTool(store).execute(
            {"placesDatasetName": "ps1", "spatialFilterDatasetName": "missing"}
        )

        assert result["llmResult"]["success"] is True
        assert len(_features(result)) == 2

    @pytest.mark.asyncio()
    async def test_isochrone_appended(self, store, seed, make_point, make_square) -> None:
        await seed("ps1", [make_point(0, 0, id=1)])
        await seed("iso1", [make_square(-1, -1, 1, 1, contour=10)])

        result = await FindPlaceTool(store).execute(
            {"placesDatasetName": "ps1", "isochroneDatasetName": "iso1"}
        )

        features = _features(result)
        assert [f["geometry"]["type"] for f in features] == ["Point", "Polygon"]
        assert result["llmResult"]["summary"] == "Here is 1 place that is within the search area"

    @pytest.mark.asyncio()
    async def test_empty_places_is_success(self, store, seed) -> None:
        await seed("ps1", [])

        result = await FindPlaceTool(store).execute({"placesDatasetName": "ps1"})

        assert result["llmResult"]["success"] is True
        assert result["llmResult"]["summary"] == "Here are 0 places that are within the search area"

    @pytest.mark.asyncio()
    async def test_missing_places_dataset(self, store) -> None:
        result = await FindPlaceTool(store).execute({"placesDatasetName": "nope"})

        assert result == {
            "llmResult": {
                "success": False,
                "summary": "No geometries found for places dataset: nope",
            }
        }

    @pytest.mark.asyncio()
    async def test_missing_required_argument(self, store) -> None:
        result = await FindPlaceTool(store).execute({})

        assert result["llmResult"]["success"] is False
        assert "placesDatasetName" in result["llmResult"]["summary"]
        assert "additionalData" not in result

    @pytest.mark.asyncio()
    async def test_repeat_call_is_deterministic(self, store, seed, make_point) -> None:
        await seed("ps1", [make_point(0, 0, id=1, distance=3), make_point(1, 1, id=2, distance=1)])
        await seed("sj1", [_join(1, 1), _join(2, 1)])
        tool = FindPlaceTool(store)
        args = {"placesDatasetName": "ps1", "spatialFilterDatasetName": "sj1"}

        first = await tool.execute(args)
        second = await tool.execute(args)

        assert first == second

    @pytest.mark.asyncio()
    async def test_inputs_not_mutated(self, store, seed, make_point) -> None:
        await seed("ps1", [make_point(0, 0, id=1, distance=3)])
        await seed("sj1", [_join(1, 1)])
        before = (await store.get("ps1")).to_dict()
        snapshot = repr(before)

        result = await FindPlaceTool(store).execute(
            {"placesDatasetName": "ps1", "spatialFilterDatasetName": "sj1"}
        )
        _features(result)[0]["properties"]["touched"] = True

        assert repr((await store.get("ps1")).to_dict()) == snapshot


class TestFindPlaceScenarios:
    """Five places at distances 50, 10, 30, 20, 40."""

    @pytest.fixture()
    def places(self, make_point) -> list[dict]:
        return [
            make_point(float(i), float(i), id=f"p{i}", distance=d)
            for i, d in enumerate([50, 10, 30, 20, 40])
        ]

    @pytest.mark.asyncio()
    async def test_unfiltered_places_retained(self, store, seed, places) -> None:
        await seed("ps1", places)

        result = await FindPlaceTool(store).execute({"placesDatasetName": "ps1"})

        features = _features(result)
        assert len(features) == 5
        assert [f["properties"]["distance"] for f in features] == [50, 10, 30, 20, 40]

    @pytest.mark.asyncio()
    async def test_three_matches_sorted(self, store, seed, places) -> None:
        await seed("ps1", places)
        await seed(
            "sj1",
            [_join("p0", 1), _join("p1", 0), _join("p2", 4), _join("p3", 0), _join("p4", 2)],
        )

        result = await FindPlaceTool(store).execute(
            {"placesDatasetName": "ps1", "spatialFilterDatasetName": "sj1"}
        )

        features = _features(result)
        assert [f["properties"]["id"] for f in features] == ["p2", "p4", "p0"]
        assert [f["properties"]["distance"] for f in features] == [30, 40, 50]
