"""Sort order for tiles.

Tile priority is declared on a "larger is more important" scale while
display order is ascending, so the order is the negated priority.
"""

from typing import Optional

from dashboard_tiles.models import DEFAULT_ORDER, Tile

PRIORITY_GROUP_SIZE = 100


def _intent_package(tile: Tile) -> Optional[str]:
    # Action-only intents have no component and never qualify for the exemption.
    if tile.intent is None or tile.intent.component is None:
        return None
    return tile.intent.component.package_name


def compute_order(tile: Tile, base_order: int, caller_package: str) -> int:
    """Compute the final display order of a tile.

    Args:
        tile: Tile being bound
        base_order: Offset for externally declared tiles, or DEFAULT_ORDER
        caller_package: Package of the screen showing the tile

    Returns:
        Order to sort ascending by; DEFAULT_ORDER when the tile declares
        no priority
    """
    if tile.priority == 0:
        return DEFAULT_ORDER

    order = -tile.priority
    if _intent_package(tile) == caller_package:
        return order
    if base_order == DEFAULT_ORDER:
        return order
    return order + base_order


def priority_group(order: int, group_size: int = PRIORITY_GROUP_SIZE) -> int:
    """Bucket an order into its priority group, truncating toward zero."""
    if group_size <= 0:
        raise ValueError(f"group_size must be positive, got {group_size}")
    return int(order / group_size)
