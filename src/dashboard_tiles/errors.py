"""Exceptions raised by the tile registry and launch resolution."""


class TileError(Exception):
    """Base class for all dashboard tile errors."""


class MissingDestinationError(TileError):
    """Tile has neither a usable key nor a resolvable destination.

    Callers skip the tile instead of binding it.
    """

    def __init__(self, tile_title: str, reason: str = "no key and no intent component"):
        self.tile_title = tile_title
        self.reason = reason
        super().__init__(f"Tile '{tile_title}' cannot be keyed: {reason}")


class UnresolvableComponentError(TileError):
    """Intent target cannot be mapped to any installed package."""

    def __init__(self, tile_title: str):
        self.tile_title = tile_title
        super().__init__(f"Nothing to open for tile '{tile_title}'")


class ProfileSelectionRequiredError(TileError):
    """A plan that needs a profile choice was dispatched directly."""


class ProfileUnavailableError(TileError):
    """The profile picked for a launch is no longer active."""

    def __init__(self, user, tile_title: str):
        self.user = user
        self.tile_title = tile_title
        super().__init__(f"{user} is no longer available to open '{tile_title}'")


class ConfigError(TileError):
    """Invalid configuration or tile manifest."""
