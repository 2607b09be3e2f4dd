"""CLI for inspecting a tile manifest.

Lists categories, shows bound items in display order and resolves taps,
which is handy when checking how a third-party tile will be placed.
"""

import logging
import sys
from typing import Optional

import click

from dashboard_tiles.binder import FragmentNavigation
from dashboard_tiles.config import DashboardConfig, load_config
from dashboard_tiles.errors import ConfigError, TileError
from dashboard_tiles.metrics import LoggingLogWriter, MetricsFeatureProvider
from dashboard_tiles.models import ChooseProfile, IntentSpec, NoOp, UserHandle
from dashboard_tiles.registry import TileRegistry
from dashboard_tiles.sources import ManifestEntrySource

logger = logging.getLogger(__name__)


class EchoLauncher:
    """Launcher that prints what would be started."""

    def start(self, intent: IntentSpec, user_handle: Optional[UserHandle]) -> None:
        target = intent.component.flatten_to_short_string() if intent.component else intent.action
        suffix = f" as {user_handle}" if user_handle else ""
        click.echo(f"Launching {target}{suffix}")


def _build_registry(ctx: click.Context) -> TileRegistry:
    config: DashboardConfig = ctx.obj["config"]
    try:
        source = ManifestEntrySource(ctx.obj["manifest"])
    except ConfigError as e:
        logger.error(f"Failed to load manifest: {e}")
        sys.exit(1)
    metrics = MetricsFeatureProvider([LoggingLogWriter()])
    return TileRegistry.create(source, metrics, config)


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config YAML file")
@click.option("--manifest", required=True, type=click.Path(dir_okay=False), help="Tile manifest YAML")
@click.option("--caller-package", help="Override the hosting package")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, config_path, manifest, caller_package, verbose):
    """Dashboard tile registry CLI."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if caller_package:
        config = config.model_copy(update={"caller_package": caller_package})

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["manifest"] = manifest


@cli.command()
@click.pass_context
def categories(ctx):
    """List categories and their tile counts."""
    registry = _build_registry(ctx)
    for category in registry.get_all_categories():
        title = f" ({category.title})" if category.title else ""
        click.echo(f"{category.key}{title}: {category.get_tiles_count()} tile(s)")


@cli.command()
@click.argument("category")
@click.option("--base-order", type=int, default=None, help="Offset for tiles from other packages")
@click.pass_context
def items(ctx, category, base_order):
    """Show the bound items of CATEGORY in display order."""
    registry = _build_registry(ctx)
    kwargs = {} if base_order is None else {"base_order": base_order}
    bound = registry.sorted_items(registry.get_items_for_category(category, **kwargs))

    if not bound:
        click.echo(f"No tiles in {category}")
        return

    for item in bound:
        order = str(item.order) if item.has_explicit_order else "-"
        kind = "inert" if item.is_inert else type(item.activation).__name__
        click.echo(f"{order:>8}  {item.key}  {item.title}  [{kind}]")


@cli.command()
@click.argument("category")
@click.argument("key")
@click.option("--user", "selected_user", type=int, default=None, help="User id to pick when several profiles apply")
@click.pass_context
def tap(ctx, category, key, selected_user):
    """Resolve a tap on the item KEY of CATEGORY."""
    registry = _build_registry(ctx)
    tile = registry.find_tile(category, key)
    if tile is None:
        click.echo(f"No tile {key} in {category}", err=True)
        sys.exit(1)

    result = registry.binder.bind(tile).activate()

    if isinstance(result, FragmentNavigation):
        click.echo(f"Navigate to {result.fragment_class_name}")
        return

    if isinstance(result, ChooseProfile):
        candidates = ", ".join(str(u) for u in result.candidate_users)
        click.echo(f"Choose profile: {candidates}")
        if selected_user is None:
            return
        chosen = next((u for u in result.candidate_users if u.identifier == selected_user), None)
        if chosen is None:
            click.echo(f"User {selected_user} is not a candidate", err=True)
            sys.exit(1)
        result = registry.resolver.resolve_for_user(result.tile, chosen, result.intent)

    if isinstance(result, NoOp):
        click.echo(f"Nothing to open ({result.reason.value})")
        return

    try:
        registry.resolver.dispatch(result, EchoLauncher())
    except TileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Logged launch of {result.component.flatten_to_short_string()}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
