"""Named dataset model and typed dataset identifiers.

A dataset is the unit that tools exchange through the conversation's
dataset store: ``{"type": "geojson", "content": FeatureCollection}``
addressed by a string name.  Downstream UI consumers key off the string
form (``findPlace_<places dataset>``, ``buyHouse_<id>``), so
``DatasetName`` keeps the prefix and key apart internally and only
renders the joined string at the boundary.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from homescout.core.constants import DATASET_NAME_SEPARATOR, GEOJSON_DATASET_TYPE
from homescout.models.feature import Feature, feature_collection


@dataclass(frozen=True, slots=True)
class DatasetName:
    """Typed identifier for a dataset produced by a tool.

    Attributes:
        prefix: Name of the producing tool (e.g. ``"buyHouse"``).
        key: Source-derived or generated suffix.
    """

    prefix: str
    key: str

    def __str__(self) -> str:
        return f"{self.prefix}{DATASET_NAME_SEPARATOR}{self.key}"

    @classmethod
    def derived(cls, prefix: str, source: str) -> DatasetName:
        """Name deterministically derived from a source dataset name."""
        return cls(prefix=prefix, key=source)

    @classmethod
    def unique(cls, prefix: str) -> DatasetName:
        """Name with a freshly generated suffix, unique per call."""
        return cls(prefix=prefix, key=uuid.uuid4().hex[:12])

    @classmethod
    def parse(cls, value: str) -> DatasetName:
        """Split an external ``<prefix>_<key>`` string into a ``DatasetName``.

        Raises:
            ValueError: If *value* has no separator or an empty part.
        """
        prefix, sep, key = value.partition(DATASET_NAME_SEPARATOR)
        if not sep or not prefix or not key:
            msg = f"Dataset name {value!r} is not of the form <prefix>{DATASET_NAME_SEPARATOR}<key>"
            raise ValueError(msg)
        return cls(prefix=prefix, key=key)


@dataclass(frozen=True, slots=True)
class Dataset:
    """A typed, immutable dataset as held by a dataset store.

    Attributes:
        type: Dataset type; tools only read ``"geojson"`` datasets.
        content: The dataset body (a FeatureCollection for geojson).
    """

    type: str = GEOJSON_DATASET_TYPE
    content: dict[str, Any] = field(default_factory=lambda: feature_collection([]))

    @classmethod
    def from_features(cls, features: list[Feature]) -> Dataset:
        """Build a geojson dataset from a feature list."""
        return cls(type=GEOJSON_DATASET_TYPE, content=feature_collection(features))

    @property
    def is_geojson(self) -> bool:
        return self.type == GEOJSON_DATASET_TYPE

    @property
    def features(self) -> list[Feature]:
        """Features of a geojson dataset (empty for other types)."""
        if not self.is_geojson:
            return []
        raw = self.content.get("features", [])
        return [f for f in raw if isinstance(f, dict)] if isinstance(raw, list) else []

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the ``{type, content}`` wire shape."""
        return {"type": self.type, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Dataset:
        """Deserialise from the ``{type, content}`` wire shape.

        Raises:
            TypeError: If ``type`` is not a string or ``content`` is not a dict.
        """
        dataset_type = data.get("type", GEOJSON_DATASET_TYPE)
        if not isinstance(dataset_type, str):
            msg = f"type must be a str, got {type(dataset_type).__name__}"
            raise TypeError(msg)

        content = data.get("content", {})
        if not isinstance(content, dict):
            msg = f"content must be a dict, got {type(content).__name__}"
            raise TypeError(msg)

        return cls(type=dataset_type, content=content)

    @staticmethod
    def is_dataset_dict(value: object) -> bool:
        """Return ``True`` if *value* looks like a serialised geojson dataset."""
        return (
            isinstance(value, dict)
            and value.get("type") == GEOJSON_DATASET_TYPE
            and isinstance(value.get("content"), dict)
        )


def geojson_dataset(features: list[Feature]) -> dict[str, Any]:
    """Serialised geojson dataset for embedding in a tool result."""
    return Dataset.from_features(features).to_dict()
