"""Stable display keys for tiles."""

import logging

from dashboard_tiles.errors import MissingDestinationError
from dashboard_tiles.models import Tile

logger = logging.getLogger(__name__)

DASHBOARD_TILE_PREF_KEY_PREFIX = "dashboard_tile_pref_"


def resolve_key(tile: Tile, prefix: str = DASHBOARD_TILE_PREF_KEY_PREFIX) -> str:
    """Compute the key used both for display and for click dispatch.

    A caller-declared key is authoritative and returned verbatim. Otherwise
    the key is derived from the intent's target class name.

    Args:
        tile: Tile to key
        prefix: Namespace prefix for derived keys

    Returns:
        Stable key string

    Raises:
        MissingDestinationError: If the tile has no key and no intent component
    """
    if tile.key:
        return tile.key

    if tile.intent is None:
        raise MissingDestinationError(tile.title, "no key and no intent")
    if tile.intent.component is None:
        raise MissingDestinationError(tile.title, "no key and intent has no component")

    return prefix + tile.intent.component.class_name
