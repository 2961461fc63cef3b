"""Export decomposition results to JSON and CSV files."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from package_assignment.core.models import DecompositionResult

CSV_FIELDS = [
    "index", "name", "item_count", "length", "width", "height",
    "dimension_unit", "weight", "weight_unit",
]


def export_to_json(result: DecompositionResult, output_path: Path | str) -> None:
    """Write the full package breakdown as JSON.

    Example:
        >>> export_to_json(DecompositionResult(summary="No package configuration available"), "/tmp/breakdown.json")  # doctest: +SKIP
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w") as f:
        json.dump(result.to_dict(), f, indent=2)


def export_to_csv(result: DecompositionResult, output_path: Path | str) -> None:
    """Write one CSV row per package instance (headers only when empty)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for index, p in enumerate(result.packages, start=1):
            entry = p.to_dict()
            writer.writerow({
                "index": index,
                "name": entry["name"],
                "item_count": entry["item_count"],
                "length": entry["dimensions"]["length"],
                "width": entry["dimensions"]["width"],
                "height": entry["dimensions"]["height"],
                "dimension_unit": entry["dimensions"]["unit"],
                "weight": entry["weight"]["value"],
                "weight_unit": entry["weight"]["unit"],
            })
