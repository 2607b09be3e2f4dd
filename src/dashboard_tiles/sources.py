"""Entry sources.

The registry never discovers tiles itself; it asks an ``EntrySource`` for
a fresh snapshot on every request.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

import yaml
from pydantic import ValidationError

from dashboard_tiles.errors import ConfigError
from dashboard_tiles.models import Category, Tile

logger = logging.getLogger(__name__)


class EntrySource(Protocol):
    """Supplies declared tiles per category."""

    def get_entries(self, category_key: str) -> Sequence[Tile]:
        """Ordered tiles of a category; empty when unknown."""
        ...

    def get_categories(self) -> Sequence[Category]:
        """All known categories, in source order."""
        ...


class StaticEntrySource:
    """In-memory entry source."""

    def __init__(self, categories: Optional[Sequence[Category]] = None):
        self._categories: List[Category] = list(categories or [])

    def add_category(self, category: Category) -> None:
        self._categories = [c for c in self._categories if c.key != category.key]
        self._categories.append(category)
        logger.debug(f"Added category {category.key} with {category.get_tiles_count()} tile(s)")

    def get_category(self, category_key: str) -> Optional[Category]:
        for category in self._categories:
            if category.key == category_key:
                return category
        return None

    def get_entries(self, category_key: str) -> Sequence[Tile]:
        category = self.get_category(category_key)
        return category.tiles if category else ()

    def get_categories(self) -> Sequence[Category]:
        return tuple(self._categories)


class ManifestEntrySource(StaticEntrySource):
    """Entry source backed by a YAML tile manifest.

    Manifest layout::

        categories:
          - key: homepage
            title: Home
            tiles:
              - title: Wi-Fi
                intent: {component: "pkg.net/.WifiSettings"}
                priority: 10
                owning_package: pkg.net
    """

    def __init__(self, manifest_path: Union[str, Path]):
        self.manifest_path = Path(manifest_path).expanduser()
        super().__init__(self._load())

    @staticmethod
    def parse(data: Dict[str, Any]) -> List[Category]:
        """Validate manifest data into categories.

        Raises:
            ConfigError: If the manifest is malformed
        """
        if not isinstance(data, dict):
            raise ConfigError("Tile manifest must be a mapping")
        raw_categories = data.get("categories") or []
        if not isinstance(raw_categories, list):
            raise ConfigError("'categories' must be a list")

        try:
            return [Category.model_validate(raw) for raw in raw_categories]
        except ValidationError as e:
            raise ConfigError(f"Invalid tile manifest: {e}") from e

    def _load(self) -> List[Category]:
        try:
            with open(self.manifest_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise ConfigError(f"Tile manifest not found: {self.manifest_path}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Tile manifest {self.manifest_path} is not valid YAML: {e}") from e

        categories = self.parse(data)
        logger.info(f"Loaded {len(categories)} categories from {self.manifest_path}")
        return categories

    def reload(self) -> None:
        """Re-read the manifest from disk."""
        self._categories = self._load()
