"""Binding tiles to display items."""

import logging
from dataclasses import dataclass
from typing import Optional

from dashboard_tiles.keys import DASHBOARD_TILE_PREF_KEY_PREFIX, resolve_key
from dashboard_tiles.launch import LaunchResolver, effective_intent
from dashboard_tiles.models import (
    DEFAULT_ORDER,
    DisplayItem,
    FragmentDestination,
    IntentDestination,
    IntentSpec,
    LaunchPlan,
    Tile,
)
from dashboard_tiles.ordering import compute_order

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FragmentNavigation:
    """Request for the caller to push the named screen."""

    fragment_class_name: str


@dataclass(eq=False)
class NavigateInPlace:
    """Activation for tiles that open one of the caller's own screens."""

    fragment_class_name: str

    def activate(self) -> FragmentNavigation:
        return FragmentNavigation(self.fragment_class_name)


@dataclass(eq=False)
class ResolveAndLaunch:
    """Activation that hands the tile to the launch resolver."""

    tile: Tile
    intent: IntentSpec
    resolver: LaunchResolver

    def activate(self) -> LaunchPlan:
        return self.resolver.resolve(self.tile, self.intent)


class EntryBinder:
    """Produces display items from tiles.

    Args:
        resolver: Launch resolver bound into intent activations
        caller_package: Package of the screen hosting the items
        key_prefix: Namespace prefix for derived keys
    """

    def __init__(
        self,
        resolver: LaunchResolver,
        caller_package: str,
        key_prefix: str = DASHBOARD_TILE_PREF_KEY_PREFIX,
    ):
        self.resolver = resolver
        self.caller_package = caller_package
        self.key_prefix = key_prefix

    def bind(
        self,
        tile: Tile,
        override_key: Optional[str] = None,
        base_order: int = DEFAULT_ORDER,
        caller_package: Optional[str] = None,
    ) -> DisplayItem:
        """Bind ``tile`` to a new display item.

        Raises:
            MissingDestinationError: No override key and the tile cannot be keyed
        """
        key = override_key if override_key else resolve_key(tile, self.key_prefix)
        order = compute_order(tile, base_order, caller_package or self.caller_package)

        destination = tile.destination
        if isinstance(destination, FragmentDestination):
            activation = NavigateInPlace(destination.fragment_class_name)
        elif isinstance(destination, IntentDestination):
            activation = ResolveAndLaunch(tile, effective_intent(tile), self.resolver)
        else:
            logger.debug(f"Tile '{tile.title}' has no destination, binding inert item {key}")
            activation = None

        return DisplayItem(
            key=key,
            title=tile.title,
            summary=tile.summary,
            icon=tile.icon,
            order=order,
            activation=activation,
        )
