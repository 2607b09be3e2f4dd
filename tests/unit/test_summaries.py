"""Unit tests for dynamic summary refresh."""

from unittest.mock import MagicMock

import pytest

from dashboard_tiles.models import Category, DisplayItem, IntentSpec, Tile
from dashboard_tiles.summaries import refresh_from_tiles


def dynamic_tile(**kwargs) -> Tile:
    defaults = dict(
        key="vpn",
        title="VPN",
        intent=IntentSpec(component="pkg.A/.Vpn"),
        owning_package="pkg.A",
        summary_uri="content://pkg.A/summary",
    )
    defaults.update(kwargs)
    return Tile(**defaults)


@pytest.mark.unit
class TestRefreshFromTiles:
    """Test refresh_from_tiles."""

    def test_updates_changed_summary(self):
        items = [DisplayItem(key="vpn", title="VPN", summary="Off")]
        provider = MagicMock()
        provider.get_summary.return_value = "Connected"

        refreshed = refresh_from_tiles(items, Category(key="c", tiles=(dynamic_tile(),)), provider)

        assert refreshed[0].summary == "Connected"
        assert items[0].summary == "Off"
        provider.get_summary.assert_called_once_with("content://pkg.A/summary")

    def test_unchanged_summary_keeps_item(self):
        item = DisplayItem(key="vpn", title="VPN", summary="Off")
        provider = MagicMock()
        provider.get_summary.return_value = "Off"

        refreshed = refresh_from_tiles([item], Category(key="c", tiles=(dynamic_tile(),)), provider)

        assert refreshed[0] is item

    def test_missing_summary_clears(self):
        provider = MagicMock()
        provider.get_summary.return_value = None

        refreshed = refresh_from_tiles(
            [DisplayItem(key="vpn", title="VPN", summary="Off")],
            Category(key="c", tiles=(dynamic_tile(),)),
            provider,
        )

        assert refreshed[0].summary is None

    def test_tiles_without_key_or_match_are_ignored(self):
        provider = MagicMock()
        tiles = (dynamic_tile(key=None), dynamic_tile(key="other"))

        refreshed = refresh_from_tiles([DisplayItem(key="vpn", title="VPN")], Category(key="c", tiles=tiles), provider)

        assert refreshed == [DisplayItem(key="vpn", title="VPN")]
        provider.get_summary.assert_not_called()

    def test_icon_from_target_package(self):
        """Test icons are applied only for the target or caller package."""
        summaries = MagicMock()
        summaries.get_summary.return_value = None
        icons = MagicMock()
        icons.get_icon.return_value = ("pkg.A", "res://vpn")
        tile = dynamic_tile(summary_uri=None, icon_uri="content://pkg.A/icon")

        refreshed = refresh_from_tiles(
            [DisplayItem(key="vpn", title="VPN")], Category(key="c", tiles=(tile,)), summaries, icons
        )

        assert refreshed[0].icon == "res://vpn"
        icons.get_icon.assert_called_once_with("pkg.A", "content://pkg.A/icon")

    def test_icon_owner_checked_against_intent_package(self):
        """Test an explicit intent package takes precedence over the component."""
        icons = MagicMock()
        icons.get_icon.return_value = ("pkg.Z", "res://vpn")
        tile = dynamic_tile(
            summary_uri=None,
            icon_uri="content://pkg.Z/icon",
            intent=IntentSpec(component="pkg.A/.Vpn", package="pkg.Z"),
        )

        refreshed = refresh_from_tiles(
            [DisplayItem(key="vpn", title="VPN")], Category(key="c", tiles=(tile,)), MagicMock(), icons
        )

        assert refreshed[0].icon == "res://vpn"
        icons.get_icon.assert_called_once_with("pkg.Z", "content://pkg.Z/icon")

    def test_icon_from_foreign_package_ignored(self):
        icons = MagicMock()
        icons.get_icon.return_value = ("pkg.evil", "res://evil")
        tile = dynamic_tile(summary_uri=None, icon_uri="content://pkg.A/icon")

        refreshed = refresh_from_tiles(
            [DisplayItem(key="vpn", title="VPN")],
            Category(key="c", tiles=(tile,)),
            MagicMock(),
            icons,
            caller_package="pkg.B",
        )

        assert refreshed[0].icon is None

    def test_activation_survives_refresh(self):
        activation = MagicMock()
        provider = MagicMock()
        provider.get_summary.return_value = "On"

        refreshed = refresh_from_tiles(
            [DisplayItem(key="vpn", title="VPN", activation=activation)],
            Category(key="c", tiles=(dynamic_tile(),)),
            provider,
        )

        assert refreshed[0].activation is activation

    def test_empty_category(self):
        items = [DisplayItem(key="vpn", title="VPN")]

        assert refresh_from_tiles(items, None, MagicMock()) == items
