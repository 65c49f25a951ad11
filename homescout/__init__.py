"""homescout: geospatial tools for a place-finding and home-buying assistant.

Backs an LLM chat assistant with two tools that operate on named GeoJSON
datasets produced earlier in a conversation (place searches, spatial
joins, drive-time isochrones):

- ``findPlace``: filter a place search by a spatial join and overlay an
  isochrone for map rendering.
- ``buyHouse``: bucket seven amenity categories into exclusive 5- and
  10-minute drive bands around a property and summarise them.
"""

__version__ = "0.1.0"
