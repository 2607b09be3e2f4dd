"""Tile registry.

Aggregates tiles from an entry source into display items per category and
routes activations to the launch resolver.

Example:
    >>> registry = TileRegistry.create(source, metrics, DashboardConfig())
    >>> items = registry.get_items_for_category("homepage")
    >>> plan = items[0].activate()
"""

import logging
from typing import List, Optional, Sequence

from dashboard_tiles.binder import EntryBinder
from dashboard_tiles.config import DashboardConfig
from dashboard_tiles.errors import MissingDestinationError
from dashboard_tiles.keys import resolve_key
from dashboard_tiles.launch import ComponentLookup, LaunchResolver
from dashboard_tiles.metrics import ActivationLogger
from dashboard_tiles.models import (
    DEFAULT_ORDER,
    EXTRA_SHOW_MENU,
    FLAG_ACTIVITY_CLEAR_TASK,
    Category,
    ComponentName,
    Direct,
    DisplayItem,
    IntentSpec,
    LaunchPlan,
    NoOp,
    NoOpReason,
    Tile,
)
from dashboard_tiles.ordering import priority_group
from dashboard_tiles.sources import EntrySource

logger = logging.getLogger(__name__)


class TileRegistry:
    """Serves bound dashboard tiles for settings screens."""

    def __init__(
        self,
        source: EntrySource,
        binder: EntryBinder,
        resolver: LaunchResolver,
        config: Optional[DashboardConfig] = None,
    ):
        """Initialize registry.

        Args:
            source: Supplies tiles per category
            binder: Turns tiles into display items
            resolver: Resolves activations into launch plans
            config: Registry settings
        """
        self.source = source
        self.binder = binder
        self.resolver = resolver
        self.config = config or DashboardConfig()

    @classmethod
    def create(
        cls,
        source: EntrySource,
        activation_logger: ActivationLogger,
        config: Optional[DashboardConfig] = None,
        component_lookup: Optional[ComponentLookup] = None,
    ) -> "TileRegistry":
        """Wire a registry and its collaborators from configuration."""
        config = config or DashboardConfig()
        resolver = LaunchResolver(
            activation_logger,
            caller_user=config.caller_user,
            component_lookup=component_lookup,
        )
        binder = EntryBinder(resolver, config.caller_package, key_prefix=config.key_prefix)
        return cls(source, binder, resolver, config)

    def is_enabled(self) -> bool:
        return self.config.enabled

    @property
    def extra_intent_action(self) -> Optional[str]:
        return self.config.extra_intent_action

    def get_tiles_for_category(self, key: str) -> Optional[Category]:
        """Category ``key`` as the source reports it, or None when unknown."""
        for category in self.source.get_categories():
            if category.key == key:
                return category
        return None

    def get_all_categories(self) -> Sequence[Category]:
        return self.source.get_categories()

    def get_items_for_category(
        self, key: str, base_order: int = DEFAULT_ORDER
    ) -> List[DisplayItem]:
        """Bind every tile of category ``key``.

        Tiles that cannot be keyed are skipped.

        Args:
            key: Category key
            base_order: Offset applied to tiles from other packages

        Returns:
            Display items in source order; empty when disabled or no tiles
        """
        if not self.is_enabled():
            return []

        tiles = self.source.get_entries(key)
        if not tiles:
            logger.debug(f"Tile list is empty, skipping category {key}")
            return []

        items: List[DisplayItem] = []
        for tile in tiles:
            try:
                items.append(self.binder.bind(tile, base_order=base_order))
            except MissingDestinationError as e:
                logger.warning(f"Skipping tile in category {key}: {e}")
        return items

    @staticmethod
    def sorted_items(items: Sequence[DisplayItem]) -> List[DisplayItem]:
        """Ascending by order; items without an explicit order keep insertion order last."""
        return sorted(items, key=lambda item: item.order)

    def get_priority_group(self, item: DisplayItem) -> int:
        return priority_group(item.order, self.config.priority_group_size)

    def get_dashboard_key_for_tile(self, tile: Optional[Tile]) -> Optional[str]:
        """Key for ``tile``, or None when it cannot be keyed."""
        if tile is None:
            return None
        try:
            return resolve_key(tile, self.config.key_prefix)
        except MissingDestinationError:
            return None

    def find_tile(self, category_key: str, item_key: str) -> Optional[Tile]:
        """Tile of a category whose display key is ``item_key``.

        With duplicate keys the later tile shadows the earlier one.
        """
        found = None
        for tile in self.source.get_entries(category_key):
            if self.get_dashboard_key_for_tile(tile) == item_key:
                found = tile
        return found

    def _settings_root_plan(self) -> Direct:
        component = ComponentName.unflatten(
            f"{self.config.caller_package}/{self.config.settings_root_class}"
        )
        intent = IntentSpec(
            action=self.config.settings_root_action,
            component=component,
            flags=(FLAG_ACTIVITY_CLEAR_TASK,),
        )
        return Direct(intent=intent, component=component)

    def open_tile(self, tile: Optional[Tile]) -> LaunchPlan:
        """Plan for opening ``tile`` from outside a dashboard screen.

        No tile opens the settings root. The tile's intent is launched with
        the drawer menu shown and the task cleared.
        """
        if tile is None:
            return self._settings_root_plan()
        if tile.intent is None:
            return NoOp(reason=NoOpReason.NO_DESTINATION, tile_title=tile.title)

        intent = (
            tile.intent.with_extra(EXTRA_SHOW_MENU, True)
            .with_flags(FLAG_ACTIVITY_CLEAR_TASK)
        )
        return self.resolver.resolve(tile, intent)
