"""Pytest configuration and shared fixtures."""

from unittest.mock import MagicMock

import pytest

from dashboard_tiles.binder import EntryBinder
from dashboard_tiles.config import DashboardConfig
from dashboard_tiles.launch import LaunchResolver
from dashboard_tiles.metrics import MetricsFeatureProvider, RecordingLogWriter
from dashboard_tiles.models import Category, IntentSpec, Tile, UserHandle
from dashboard_tiles.registry import TileRegistry
from dashboard_tiles.sources import StaticEntrySource

CALLER_PACKAGE = "pkg.B"


@pytest.fixture
def caller_user():
    """The user the settings app runs as."""
    return UserHandle(identifier=0, label="Personal")


@pytest.fixture
def user_a():
    return UserHandle(identifier=10, label="Work")


@pytest.fixture
def user_b():
    return UserHandle(identifier=11, label="School")


@pytest.fixture
def recorder():
    """In-memory metrics writer."""
    return RecordingLogWriter()


@pytest.fixture
def metrics(recorder):
    return MetricsFeatureProvider([recorder])


@pytest.fixture
def resolver(metrics, caller_user):
    return LaunchResolver(metrics, caller_user=caller_user)


@pytest.fixture
def binder(resolver):
    return EntryBinder(resolver, CALLER_PACKAGE)


@pytest.fixture
def launcher():
    """Activity launcher (mocked)."""
    return MagicMock()


@pytest.fixture
def foo_tile():
    """Third-party tile without a declared key."""
    return Tile(
        title="Foo",
        summary="Foo settings",
        intent=IntentSpec(component="pkg.A/.Foo"),
        priority=10,
        owning_package="pkg.A",
    )


@pytest.fixture
def sample_categories(foo_tile):
    """Categories as an entry source would report them."""
    return [
        Category(
            key="homepage",
            title="Home",
            tiles=(
                foo_tile,
                Tile(
                    key="network",
                    title="Network",
                    fragment_class_name="pkg.B.NetworkDashboardFragment",
                    priority=50,
                    owning_package=CALLER_PACKAGE,
                ),
                Tile(title="Broken", owning_package="pkg.C"),
            ),
        ),
        Category(key="empty", title="Nothing here"),
    ]


@pytest.fixture
def source(sample_categories):
    return StaticEntrySource(sample_categories)


@pytest.fixture
def config(caller_user):
    return DashboardConfig(caller_package=CALLER_PACKAGE, caller_user_id=caller_user.identifier)


@pytest.fixture
def registry(source, metrics, config):
    return TileRegistry.create(source, metrics, config)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
