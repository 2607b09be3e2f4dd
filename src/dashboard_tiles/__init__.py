"""Dashboard tiles.

Registry and launch resolution for settings entries contributed by
independent components.
"""

from dashboard_tiles.binder import (
    EntryBinder,
    FragmentNavigation,
    NavigateInPlace,
    ResolveAndLaunch,
)
from dashboard_tiles.config import ConfigLoader, DashboardConfig, load_config
from dashboard_tiles.errors import (
    ConfigError,
    MissingDestinationError,
    ProfileSelectionRequiredError,
    ProfileUnavailableError,
    TileError,
    UnresolvableComponentError,
)
from dashboard_tiles.keys import DASHBOARD_TILE_PREF_KEY_PREFIX, resolve_key
from dashboard_tiles.launch import ActivityLauncher, LaunchResolver, LaunchState
from dashboard_tiles.metrics import (
    ActivationLogger,
    LoggingLogWriter,
    MetricsEvent,
    MetricsFeatureProvider,
    RecordingLogWriter,
)
from dashboard_tiles.ordering import compute_order, priority_group
from dashboard_tiles.profiles import ActivationController, ProfileSelector
from dashboard_tiles.registry import TileRegistry
from dashboard_tiles.sources import EntrySource, ManifestEntrySource, StaticEntrySource
from dashboard_tiles.summaries import refresh_from_tiles

__version__ = "0.1.0"

__all__ = [
    # Binding
    "EntryBinder",
    "FragmentNavigation",
    "NavigateInPlace",
    "ResolveAndLaunch",
    # Config
    "ConfigLoader",
    "DashboardConfig",
    "load_config",
    # Errors
    "ConfigError",
    "MissingDestinationError",
    "ProfileSelectionRequiredError",
    "ProfileUnavailableError",
    "TileError",
    "UnresolvableComponentError",
    # Keys and ordering
    "DASHBOARD_TILE_PREF_KEY_PREFIX",
    "resolve_key",
    "compute_order",
    "priority_group",
    # Launch
    "ActivityLauncher",
    "LaunchResolver",
    "LaunchState",
    "ActivationController",
    "ProfileSelector",
    # Metrics
    "ActivationLogger",
    "LoggingLogWriter",
    "MetricsEvent",
    "MetricsFeatureProvider",
    "RecordingLogWriter",
    # Registry and sources
    "TileRegistry",
    "EntrySource",
    "ManifestEntrySource",
    "StaticEntrySource",
    "refresh_from_tiles",
]
