"""Data models for dashboard tiles."""

from dashboard_tiles.models.display import DEFAULT_ORDER, Activation, DisplayItem
from dashboard_tiles.models.plan import (
    AsUser,
    ChooseProfile,
    Direct,
    LaunchPlan,
    NoOp,
    NoOpReason,
)
from dashboard_tiles.models.tile import (
    EXTRA_SHOW_MENU,
    FLAG_ACTIVITY_CLEAR_TASK,
    Category,
    ComponentName,
    Destination,
    FragmentDestination,
    IntentDestination,
    IntentSpec,
    Tile,
    UserHandle,
)

__all__ = [
    "DEFAULT_ORDER",
    "EXTRA_SHOW_MENU",
    "FLAG_ACTIVITY_CLEAR_TASK",
    "Activation",
    "AsUser",
    "Category",
    "ChooseProfile",
    "ComponentName",
    "Destination",
    "Direct",
    "DisplayItem",
    "FragmentDestination",
    "IntentDestination",
    "IntentSpec",
    "LaunchPlan",
    "NoOp",
    "NoOpReason",
    "Tile",
    "UserHandle",
]
