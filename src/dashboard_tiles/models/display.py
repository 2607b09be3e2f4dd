"""Renderer-facing projection of a tile."""

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from dashboard_tiles.models.plan import NoOp, NoOpReason

# Android's Preference.DEFAULT_ORDER: "no explicit order, keep insertion order".
DEFAULT_ORDER = 2**31 - 1


class Activation(Protocol):
    """Capability bound to a display item at bind time."""

    def activate(self) -> Any:
        ...


@dataclass(frozen=True)
class DisplayItem:
    """Bindable item consumed by the caller's renderer.

    ``key`` is the stable identity for diffing re-renders. ``activation`` is
    excluded from equality so that binding the same tile twice gives equal
    items that still carry independent activation instances.
    """

    key: str
    title: str
    summary: Optional[str] = None
    icon: Optional[str] = None
    order: int = DEFAULT_ORDER
    activation: Optional[Activation] = field(default=None, compare=False, repr=False)

    @property
    def has_explicit_order(self) -> bool:
        return self.order != DEFAULT_ORDER

    @property
    def is_inert(self) -> bool:
        return self.activation is None

    def activate(self) -> Any:
        """Run the bound activation; inert items resolve to a no-op."""
        if self.activation is None:
            return NoOp(reason=NoOpReason.NO_DESTINATION)
        return self.activation.activate()
