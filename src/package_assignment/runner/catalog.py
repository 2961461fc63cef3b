"""Load package definition catalogs from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from package_assignment.algorithms.range_validator import find_overlaps
from package_assignment.core.errors import CatalogError, DefinitionInputError
from package_assignment.core.models import PackageDefinition, parse_definition

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = Path(__file__).resolve().parent / "default_catalog.yaml"


def load_catalog(path: Path | str | None = None) -> list[PackageDefinition]:
    """
    Read package definitions from a YAML file.

    The file holds either a list of definitions or a mapping with a
    ``packages`` list. Entries without an ``id`` get ``package-<n>``.

    Args:
        path: Catalog file; defaults to the bundled seed catalog.

    Returns:
        Definitions sorted by ``sort_order`` (file order breaks ties).

    Raises:
        CatalogError: If the file is unreadable or an entry is invalid.
    """
    path = Path(path) if path is not None else DEFAULT_CATALOG
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogError(f"Cannot read catalog {path}: {exc}") from exc

    entries = raw.get("packages") if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise CatalogError(f"Catalog {path} must contain a list of packages")

    definitions = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            raise CatalogError(f"Catalog entry #{index} is not a mapping")
        entry.setdefault("id", f"package-{index}")
        try:
            definitions.append(parse_definition(entry))
        except DefinitionInputError as exc:
            raise CatalogError(f"Catalog entry #{index} ({exc.field}): {exc.message}") from exc

    for a, b in find_overlaps(definitions):
        logger.warning("Catalog %s: %s overlaps %s", path.name, a.label, b.label)

    return sorted(definitions, key=lambda p: p.sort_order)
