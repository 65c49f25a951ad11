"""Shared constants: single source of truth.

Centralises tool names, dataset name prefixes, the amenity category
table and the drive-time band definitions used by the tools, the summary
writer and the map client (which keys colours and categories off these
exact strings).
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Tool names (external contract with the LLM runtime)
# ---------------------------------------------------------------------------

FIND_PLACE: str = "findPlace"
BUY_HOUSE: str = "buyHouse"

# ---------------------------------------------------------------------------
# Dataset naming
# ---------------------------------------------------------------------------

FIND_PLACE_DATASET_PREFIX: str = "findPlace"
"""Prefix of datasets produced by ``findPlace`` (``findPlace_<places dataset>``)."""

BUY_HOUSE_DATASET_PREFIX: str = "buyHouse"
"""Prefix of datasets produced by ``buyHouse`` (``buyHouse_<unique id>``)."""

DATASET_NAME_SEPARATOR: str = "_"

GEOJSON_DATASET_TYPE: str = "geojson"

# ---------------------------------------------------------------------------
# Dataset store defaults
# ---------------------------------------------------------------------------

MEMORY_STORE: str = "memory"
BLOB_STORE: str = "blob"

DEFAULT_DATASET_CONTAINER: str = "homescout-datasets"
"""Default blob container for persisted conversation datasets."""

DEFAULT_CONVERSATION_TTL_SECONDS: int = 2 * 60 * 60
DEFAULT_MAX_CONVERSATIONS: int = 100

# ---------------------------------------------------------------------------
# Feature property values
# ---------------------------------------------------------------------------

UNKNOWN_DISTANCE: str = "Unknown"


@dataclass(frozen=True, slots=True)
class AmenityCategory:
    """A place category analysed by ``buyHouse``.

    Attributes:
        name: Display name written to ``properties.category``.
        noun: Singular noun used in the summary (``"grocery store"``).
        color: Hex colour written to ``properties.color``.
    """

    name: str
    noun: str
    color: str

    def describe(self, count: int) -> str:
        """Return ``"<count> <noun>"`` with the noun pluralised when needed."""
        return f"{count} {self.noun}{'s' if count > 1 else ''}"


@dataclass(frozen=True, slots=True)
class DriveBand:
    """A drive-time polygon band.

    Attributes:
        label: Category label written to the band polygon's properties.
        minutes: Drive time in minutes, used in messages and the summary.
        color: Hex fill colour for the band polygon.
        opacity: Fill opacity for the band polygon.
    """

    label: str
    minutes: int
    color: str
    opacity: float = 0.3


SCHOOLS = AmenityCategory("Schools", "school", "#ff9ff3")
GROCERY_STORES = AmenityCategory("Grocery Stores", "grocery store", "#54a0ff")
PARKS = AmenityCategory("Parks", "park", "#5f27cd")
CLINICS = AmenityCategory("Clinics", "clinic", "#00d2d3")
HOSPITALS = AmenityCategory("Hospitals", "hospital", "#ff6348")
GYMS = AmenityCategory("Gyms", "gym", "#ffa502")
RESTAURANTS = AmenityCategory("Restaurants", "restaurant", "#2ed573")

AMENITY_CATEGORIES: tuple[AmenityCategory, ...] = (
    SCHOOLS,
    GROCERY_STORES,
    PARKS,
    CLINICS,
    HOSPITALS,
    GYMS,
    RESTAURANTS,
)
"""Categories in output and summary order."""

FIVE_MINUTE_BAND = DriveBand("5_minutes_drive_area", 5, "#ff6b6b")
TEN_MINUTE_BAND = DriveBand("10_minutes_drive_area", 10, "#4ecdc4")

NO_AMENITIES_SUMMARY: str = "No nearby amenities found within the specified distances."
