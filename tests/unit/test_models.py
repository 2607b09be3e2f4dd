"""Unit tests for tile models."""

import pytest
from pydantic import ValidationError

from dashboard_tiles.models import (
    ChooseProfile,
    ComponentName,
    DisplayItem,
    FragmentDestination,
    IntentDestination,
    IntentSpec,
    NoOp,
    NoOpReason,
    Tile,
    UserHandle,
)


@pytest.mark.unit
class TestComponentName:
    """Test component name parsing and flattening."""

    def test_unflatten_short_form(self):
        """Test a leading dot expands with the package."""
        component = ComponentName.unflatten("pkg.A/.Foo")

        assert component.package_name == "pkg.A"
        assert component.class_name == "pkg.A.Foo"

    def test_unflatten_full_form(self):
        component = ComponentName.unflatten("pkg.A/other.Bar")

        assert component.package_name == "pkg.A"
        assert component.class_name == "other.Bar"

    def test_unflatten_rejects_malformed(self):
        """Test strings without both parts are rejected."""
        for value in ("pkg.A", "/.Foo", "pkg.A/"):
            with pytest.raises(ValueError):
                ComponentName.unflatten(value)

    def test_flatten(self):
        component = ComponentName(package_name="pkg.A", class_name="pkg.A.Foo")

        assert component.flatten_to_string() == "pkg.A/pkg.A.Foo"
        assert component.flatten_to_short_string() == "pkg.A/.Foo"

    def test_short_string_keeps_foreign_class(self):
        """Test classes outside the package are not abbreviated."""
        component = ComponentName(package_name="pkg.A", class_name="other.Bar")

        assert component.flatten_to_short_string() == "pkg.A/other.Bar"


@pytest.mark.unit
class TestIntentSpec:
    """Test intent copies."""

    def test_component_accepts_string(self):
        intent = IntentSpec(component="pkg.A/.Foo")

        assert intent.component == ComponentName(package_name="pkg.A", class_name="pkg.A.Foo")
        assert intent.target_package == "pkg.A"

    def test_target_package_prefers_explicit_package(self):
        intent = IntentSpec(component="pkg.A/.Foo", package="pkg.Z")

        assert intent.target_package == "pkg.Z"

    def test_target_package_falls_back_to_package(self):
        intent = IntentSpec(action="pkg.ACTION", package="pkg.Z")

        assert intent.target_package == "pkg.Z"

    def test_with_action_returns_copy(self):
        """Test the source intent is left untouched."""
        intent = IntentSpec(action="old", component="pkg.A/.Foo")
        updated = intent.with_action("new")

        assert updated.action == "new"
        assert intent.action == "old"

    def test_with_extra_and_flags(self):
        intent = IntentSpec(component="pkg.A/.Foo", flags=("a",))
        updated = intent.with_extra("k", 1).with_flags("a", "b")

        assert updated.extras == {"k": 1}
        assert updated.flags == ("a", "b")
        assert intent.extras == {}

    def test_intent_is_frozen(self):
        intent = IntentSpec(action="x")

        with pytest.raises(ValidationError):
            intent.action = "y"


@pytest.mark.unit
class TestTile:
    """Test tile destinations."""

    def test_fragment_takes_precedence(self):
        """Test the fragment form wins when both are present."""
        tile = Tile(
            title="Both",
            fragment_class_name="pkg.B.Screen",
            intent=IntentSpec(component="pkg.A/.Foo"),
            owning_package="pkg.A",
        )

        assert tile.destination == FragmentDestination(fragment_class_name="pkg.B.Screen")

    def test_intent_destination(self, foo_tile):
        assert isinstance(foo_tile.destination, IntentDestination)
        assert foo_tile.destination.intent == foo_tile.intent

    def test_no_destination(self):
        tile = Tile(title="Nothing", owning_package="pkg.A")

        assert tile.destination is None

    def test_defaults(self):
        tile = Tile(title="T", owning_package="pkg.A")

        assert tile.priority == 0
        assert tile.eligible_user_handles == ()
        assert tile.key is None

    def test_user_handles_coerced_to_tuple(self, user_a, user_b):
        tile = Tile(title="T", owning_package="pkg.A", eligible_user_handles=[user_a, user_b])

        assert tile.eligible_user_handles == (user_a, user_b)

    def test_with_user_handles(self, foo_tile, user_b):
        updated = foo_tile.with_user_handles([user_b])

        assert updated.eligible_user_handles == (user_b,)
        assert foo_tile.eligible_user_handles == ()


@pytest.mark.unit
class TestPlansAndItems:
    """Test plan and display item invariants."""

    def test_choose_profile_requires_two_candidates(self, foo_tile, user_a):
        with pytest.raises(ValidationError):
            ChooseProfile(tile=foo_tile, intent=foo_tile.intent, candidate_users=(user_a,))

    def test_user_handle_rejects_negative_id(self):
        with pytest.raises(ValidationError):
            UserHandle(identifier=-1)

    def test_inert_item_activates_to_noop(self):
        item = DisplayItem(key="k", title="T")

        assert item.is_inert is True
        assert item.activate() == NoOp(reason=NoOpReason.NO_DESTINATION)

    def test_item_equality_ignores_activation(self):
        first = DisplayItem(key="k", title="T", activation=object())
        second = DisplayItem(key="k", title="T", activation=object())

        assert first == second
        assert first.activation is not second.activation
