"""Natural-language amenity summary for ``buyHouse``.

Counts categorised places per drive band and renders one sentence per
non-empty band, e.g.::

    Within 5 minutes drive: 3 amenities (2 schools, 1 park).

Categories with a zero count are left out, bands with no places are
left out, and when both bands are empty the fixed
``NO_AMENITIES_SUMMARY`` sentence is returned.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from homescout.core.constants import AMENITY_CATEGORIES, NO_AMENITIES_SUMMARY
from homescout.models.feature import properties_of

if TYPE_CHECKING:
    from collections.abc import Sequence

    from homescout.core.constants import AmenityCategory, DriveBand
    from homescout.models.feature import Feature


def count_categories(
    places: Sequence[Feature],
    categories: Sequence[AmenityCategory] = AMENITY_CATEGORIES,
) -> dict[str, int]:
    """Count *places* per category name, in category order (zeros included)."""
    counts = Counter(properties_of(place).get("category") for place in places)
    return {category.name: counts.get(category.name, 0) for category in categories}


def describe_band(
    band: DriveBand,
    counts: dict[str, int],
    categories: Sequence[AmenityCategory] = AMENITY_CATEGORIES,
) -> str:
    """Render one band sentence, or ``""`` if the band has no places."""
    total = sum(counts.values())
    if total == 0:
        return ""
    parts = [
        category.describe(counts[category.name])
        for category in categories
        if counts.get(category.name, 0) > 0
    ]
    return f"Within {band.minutes} minutes drive: {total} amenities ({', '.join(parts)})."


def create_summary(bands: Sequence[tuple[DriveBand, Sequence[Feature]]]) -> str:
    """Summarise the categorised places of each band.

    Args:
        bands: ``(band, places)`` pairs, innermost band first.

    Returns:
        Band sentences joined by a space, or ``NO_AMENITIES_SUMMARY``.
    """
    sentences = [describe_band(band, count_categories(places)) for band, places in bands]
    sentences = [s for s in sentences if s]
    if not sentences:
        return NO_AMENITIES_SUMMARY
    return " ".join(sentences)
