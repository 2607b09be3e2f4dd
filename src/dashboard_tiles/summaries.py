"""Refresh display items from tiles that publish dynamic content.

Some tiles point at a content URI for their summary or icon instead of a
static value. After binding, the caller can refresh those items.
"""

import dataclasses
import logging
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from dashboard_tiles.models import Category, DisplayItem

logger = logging.getLogger(__name__)


class SummaryProvider(Protocol):
    def get_summary(self, uri: str) -> Optional[str]:
        """Current summary text published at ``uri``."""
        ...


class IconProvider(Protocol):
    def get_icon(self, package_name: Optional[str], uri: str) -> Optional[Tuple[str, str]]:
        """``(owning package, icon reference)`` published at ``uri``."""
        ...


def refresh_from_tiles(
    items: Sequence[DisplayItem],
    category: Optional[Category],
    summary_provider: SummaryProvider,
    icon_provider: Optional[IconProvider] = None,
    caller_package: Optional[str] = None,
) -> List[DisplayItem]:
    """Return ``items`` with dynamic summaries and icons applied.

    Only tiles with a declared key that matches a displayed item take part.
    A summary replaces the item's only when it changed; a missing summary
    clears an existing one. An icon is applied only when it belongs to the
    tile's target package or the caller package.

    Args:
        items: Items as bound for the category
        category: Category the items came from
        summary_provider: Resolves summary URIs
        icon_provider: Resolves icon URIs (optional)
        caller_package: Package of the hosting screen

    Returns:
        New list; unchanged items are passed through as-is
    """
    if category is None or not category.tiles:
        return list(items)

    index: Dict[str, int] = {item.key: i for i, item in enumerate(items)}
    refreshed = list(items)

    for tile in category.tiles:
        if not tile.key or tile.key not in index:
            continue
        position = index[tile.key]
        item = refreshed[position]
        changes = {}

        if tile.icon_uri and icon_provider is not None:
            package_name = tile.intent.target_package if tile.intent else None
            icon = icon_provider.get_icon(package_name, tile.icon_uri)
            if icon is not None:
                icon_package, icon_ref = icon
                if icon_package and icon_package in (package_name, caller_package):
                    changes["icon"] = icon_ref
                else:
                    logger.debug(f"Ignoring icon for {tile.key} owned by {icon_package}")

        if tile.summary_uri:
            summary = summary_provider.get_summary(tile.summary_uri)
            if summary != item.summary:
                changes["summary"] = summary

        if changes:
            refreshed[position] = dataclasses.replace(item, **changes)
            logger.debug(f"Refreshed {sorted(changes)} for {tile.key}")

    return refreshed
