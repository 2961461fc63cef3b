"""Command line entry point: ``package-assign``.

Subcommands:
    calculate  — decompose a quantity into packages and print the breakdown
    select     — show which package a single quantity maps to
    validate   — check a candidate quantity range against the catalog
    audit      — list overlapping active ranges in the catalog

The catalog comes from a YAML file (bundled seed catalog by default) or,
with ``--remote``, from the configured data service.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from package_assignment.algorithms.decomposition import calculate_packages
from package_assignment.algorithms.range_validator import find_overlaps, validate_quantity_range
from package_assignment.algorithms.selector import select_with_tier
from package_assignment.core.errors import PackageAssignmentError
from package_assignment.core.models import DecompositionRequest, PackageDefinition, QuantityRange
from package_assignment.monitoring import configure_logging, export_to_csv, export_to_json, format_breakdown
from package_assignment.runner.catalog import load_catalog
from package_assignment.runner.config import AppConfig
from package_assignment.store.client import DataServiceClient
from package_assignment.store.repository import PackageDefinitionStore

logger = logging.getLogger(__name__)


async def fetch_remote_catalog(config: AppConfig) -> list[PackageDefinition]:
    """Load the catalog from the data service configured in ``config``."""
    if not config.has_data_service:
        raise PackageAssignmentError("No data service configured (set PACKAGE_ASSIGNMENT_DATA_URL)")

    async with DataServiceClient(
        config.data_service_url,
        config.data_service_key,
        table=config.table,
        timeout=config.timeout_seconds,
    ) as client:
        store = PackageDefinitionStore(client)
        result = await store.refresh()
    if not result.success:
        raise PackageAssignmentError(result.error)
    return result.data


def _load_definitions(args: argparse.Namespace, config: AppConfig) -> list[PackageDefinition]:
    if args.remote:
        return asyncio.run(fetch_remote_catalog(config))
    return load_catalog(args.catalog or config.catalog_path)


def _cmd_calculate(args: argparse.Namespace, config: AppConfig, definitions: list[PackageDefinition]) -> int:
    weight = args.weight if args.weight is not None else config.default_weight_per_item
    request = DecompositionRequest(
        total_quantity=args.quantity,
        weight_per_item=weight,
        packages=tuple(definitions),
    )
    result = calculate_packages(request, include_item_count=args.with_items)
    print(format_breakdown(result))

    if args.json:
        export_to_json(result, args.json)
        print(f"✓ Saved breakdown to {args.json}")
    if args.csv:
        export_to_csv(result, args.csv)
        print(f"✓ Saved breakdown to {args.csv}")
    return 0


def _cmd_select(args: argparse.Namespace, config: AppConfig, definitions: list[PackageDefinition]) -> int:
    chosen, tier = select_with_tier(args.quantity, definitions)
    if chosen is None:
        print("No active package definitions")
        return 1
    print(f"{chosen.label} [{tier.value}]")
    return 0


def _cmd_validate(args: argparse.Namespace, config: AppConfig, definitions: list[PackageDefinition]) -> int:
    if args.min < 1 or args.max < args.min:
        print("Range must satisfy 1 <= min <= max", file=sys.stderr)
        return 2
    check = validate_quantity_range(QuantityRange(args.min, args.max), definitions, exclude_id=args.exclude_id)
    if not check.valid:
        print(check.message)
        return 1
    print(f"Range {args.min}-{args.max} is free")
    return 0


def _cmd_audit(args: argparse.Namespace, config: AppConfig, definitions: list[PackageDefinition]) -> int:
    overlaps = find_overlaps(definitions)
    for a, b in overlaps:
        print(f"{a.label} overlaps {b.label}")
    defaults = [p for p in definitions if p.is_active and p.is_default]
    if len(defaults) > 1:
        print(f"Multiple defaults: {', '.join(p.name for p in defaults)}")
    if overlaps or len(defaults) > 1:
        return 1
    print(f"{len(definitions)} definitions, no overlapping active ranges")
    return 0


COMMANDS = {
    "calculate": _cmd_calculate,
    "select": _cmd_select,
    "validate": _cmd_validate,
    "audit": _cmd_audit,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="package-assign", description="Assign shipping packages to orders")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--catalog", help="YAML package catalog (default: bundled seed catalog)")
    parser.add_argument("--remote", action="store_true", help="Load the catalog from the data service")
    parser.add_argument("--log-level", help="Override the configured log level")

    sub = parser.add_subparsers(dest="command", required=True)

    calc = sub.add_parser("calculate", help="Decompose a quantity into packages")
    calc.add_argument("--quantity", type=int, required=True, help="Total items to ship")
    calc.add_argument("--weight", type=float, help="Weight per item in pounds")
    calc.add_argument("--with-items", action="store_true", help="Append the item count to the summary")
    calc.add_argument("--json", help="Write the breakdown to this JSON file")
    calc.add_argument("--csv", help="Write the breakdown to this CSV file")

    select = sub.add_parser("select", help="Pick the package for one quantity")
    select.add_argument("--quantity", type=int, required=True)

    validate = sub.add_parser("validate", help="Check a candidate range for overlaps")
    validate.add_argument("--min", type=int, required=True)
    validate.add_argument("--max", type=int, required=True)
    validate.add_argument("--exclude-id", help="Definition being edited")

    sub.add_parser("audit", help="Report overlapping active ranges")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = AppConfig.load(args.config)
        configure_logging(args.log_level or config.log_level, config.log_file)
        definitions = _load_definitions(args, config)
        return COMMANDS[args.command](args, config, definitions)
    except (PackageAssignmentError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
