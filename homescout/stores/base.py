"""Dataset resolver and dataset store interfaces.

Tools never hold references to datasets.  They receive a
``DatasetResolver`` at construction and resolve dataset names to
feature lists at call time.  The resolver is the only thing the tools
know about the conversation's storage; capacity, eviction and
persistence are the store's business.

Lifecycle of a dataset:
    1. An upstream tool (place search, spatial join, isochrone) produces
       a dataset and the executor ``put``s it under its name.
    2. ``findPlace`` / ``buyHouse`` ``resolve_dataset`` the names they are
       given and build a new dataset.
    3. The executor ``put``s the new dataset under a new name.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from homescout.models.feature import with_properties

if TYPE_CHECKING:
    from homescout.models.dataset import Dataset
    from homescout.models.feature import Feature

logger = logging.getLogger("homescout.stores.base")


class DatasetResolver(abc.ABC):
    """Resolve a dataset name to its features."""

    @abc.abstractmethod
    async def resolve_dataset(self, name: str) -> list[Feature] | None:
        """Return the features of dataset *name*.

        Must not raise for an unknown name.

        Returns:
            Copies of the dataset's features with fresh property bags,
            or ``None`` when the name is unknown or the dataset is not
            geojson.
        """


class DatasetStore(DatasetResolver):
    """A resolver that can also record new datasets.

    Subclasses implement ``get``, ``put`` and ``names``; name resolution
    is shared.
    """

    @abc.abstractmethod
    async def get(self, name: str) -> Dataset | None:
        """Return the dataset stored under *name*, or ``None``."""

    @abc.abstractmethod
    async def put(self, name: str, dataset: Dataset) -> None:
        """Store *dataset* under *name*, replacing any previous dataset."""

    @abc.abstractmethod
    async def names(self) -> list[str]:
        """Return the names of all stored datasets."""

    async def resolve_dataset(self, name: str) -> list[Feature] | None:
        dataset = await self.get(name)
        if dataset is None:
            logger.debug("Dataset not found | name=%s", name)
            return None
        if not dataset.is_geojson:
            logger.warning("Dataset is not geojson | name=%s | type=%s", name, dataset.type)
            return None
        return [with_properties(feature) for feature in dataset.features]
