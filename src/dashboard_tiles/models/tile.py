"""Tile domain models.

A tile is a declared, immutable navigation target contributed by some
component. Tiles are owned by the entry source and are read-only to the
registry: every "modification" below returns a copy.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

FLAG_ACTIVITY_CLEAR_TASK = "activity_clear_task"
EXTRA_SHOW_MENU = "show_drawer_menu"


class UserHandle(BaseModel):
    """One of the user contexts (profiles) active on the device."""

    model_config = ConfigDict(frozen=True)

    identifier: int = Field(..., ge=0, description="Numeric user id")
    label: Optional[str] = Field(None, description="Human readable profile name")

    def __str__(self) -> str:
        if self.label:
            return f"{self.label} ({self.identifier})"
        return f"user {self.identifier}"


class ComponentName(BaseModel):
    """Fully-qualified target component of an intent."""

    model_config = ConfigDict(frozen=True)

    package_name: str = Field(..., min_length=1)
    class_name: str = Field(..., min_length=1)

    @classmethod
    def unflatten(cls, value: str) -> "ComponentName":
        """Parse ``"pkg/cls"`` or the short ``"pkg/.cls"`` form.

        Raises:
            ValueError: If the string has no package or class part.
        """
        package, sep, class_name = value.partition("/")
        if not sep or not package or not class_name:
            raise ValueError(f"Malformed component name: {value!r}")
        if class_name.startswith("."):
            class_name = package + class_name
        return cls(package_name=package, class_name=class_name)

    def flatten_to_string(self) -> str:
        return f"{self.package_name}/{self.class_name}"

    def flatten_to_short_string(self) -> str:
        """Flatten, abbreviating a class that lives inside the package."""
        prefix = self.package_name + "."
        if self.class_name.startswith(prefix):
            return f"{self.package_name}/{self.class_name[len(self.package_name):]}"
        return self.flatten_to_string()


class IntentSpec(BaseModel):
    """Description of an activity launch request."""

    model_config = ConfigDict(frozen=True)

    action: Optional[str] = None
    component: Optional[ComponentName] = None
    package: Optional[str] = Field(None, description="Package restriction for implicit intents")
    extras: Dict[str, Any] = Field(default_factory=dict)
    flags: Tuple[str, ...] = ()

    @field_validator("component", mode="before")
    @classmethod
    def parse_component(cls, v: Any) -> Any:
        """Accept the flattened string form, e.g. ``"pkg.A/.Foo"``."""
        if isinstance(v, str):
            return ComponentName.unflatten(v)
        return v

    @property
    def target_package(self) -> Optional[str]:
        """Explicit package restriction, else the component's package."""
        if self.package:
            return self.package
        if self.component is not None:
            return self.component.package_name
        return None

    def with_action(self, action: str) -> "IntentSpec":
        return self.model_copy(update={"action": action}, deep=True)

    def with_extra(self, name: str, value: Any) -> "IntentSpec":
        extras = dict(self.extras)
        extras[name] = value
        return self.model_copy(update={"extras": extras})

    def with_flags(self, *flags: str) -> "IntentSpec":
        merged = list(self.flags)
        for flag in flags:
            if flag not in merged:
                merged.append(flag)
        return self.model_copy(update={"flags": tuple(merged)})


class FragmentDestination(BaseModel):
    """Navigate in place to a named screen of the caller."""

    model_config = ConfigDict(frozen=True)

    fragment_class_name: str


class IntentDestination(BaseModel):
    """Launch an external activity described by an intent."""

    model_config = ConfigDict(frozen=True)

    intent: IntentSpec


Destination = Union[FragmentDestination, IntentDestination]


class Tile(BaseModel):
    """A declared navigation target."""

    model_config = ConfigDict(frozen=True)

    key: Optional[str] = Field(None, description="Caller-declared stable identifier")
    title: str
    summary: Optional[str] = None
    icon: Optional[str] = Field(None, description="Image reference")

    fragment_class_name: Optional[str] = None
    intent: Optional[IntentSpec] = None
    intent_action: Optional[str] = Field(None, description="Overrides the intent action")

    priority: int = Field(0, description="Higher value is more important")
    owning_package: str
    eligible_user_handles: Tuple[UserHandle, ...] = ()

    # Content hooks for summaries/icons refreshed after binding
    summary_uri: Optional[str] = None
    icon_uri: Optional[str] = None

    @property
    def destination(self) -> Optional[Destination]:
        """Closed destination variant; the fragment form wins over the intent."""
        if self.fragment_class_name:
            return FragmentDestination(fragment_class_name=self.fragment_class_name)
        if self.intent is not None:
            return IntentDestination(intent=self.intent)
        return None

    def with_user_handles(self, handles: List[UserHandle]) -> "Tile":
        return self.model_copy(update={"eligible_user_handles": tuple(handles)})


class Category(BaseModel):
    """Named, ordered collection of tiles for one settings area."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: Optional[str] = None
    tiles: Tuple[Tile, ...] = ()

    def get_tiles_count(self) -> int:
        return len(self.tiles)
