"""
Package definition store: administrative CRUD over the data service.

Keeps an in-memory copy of the catalog ordered by ``sort_order`` and enforces
the cross-record rules the algorithms depend on:

- Active ranges never overlap (checked on create, edit and activation).
- At most one definition is the default. Switching the default clears every
  other default first and puts them back if the final write fails. This is a
  two-step write, not a transaction: two administrators switching defaults
  at the same moment can briefly leave two defaults behind.
- Reordering writes one row at a time. A failure part-way reloads the
  catalog from the service; completed writes are not rolled back.

Every mutating call returns a StoreResult. Persistence failures are reported
there (and logged), never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence

from package_assignment.algorithms.decomposition import calculate_packages
from package_assignment.algorithms.range_validator import RangeCheck, RangeLike, validate_quantity_range
from package_assignment.algorithms.selector import select_package_for_quantity
from package_assignment.core.errors import DataServiceError, DefinitionInputError
from package_assignment.core.models import (
    DecompositionRequest,
    DecompositionResult,
    PackageDefinition,
    parse_definition,
    parse_definition_input,
)
from package_assignment.store.client import DataServiceClient, eq, is_true, neq

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a store operation.

    Attributes:
        success: Whether the operation completed.
        data:    Operation payload (a definition, or the catalog list).
        error:   Message suitable for showing inline to an administrator.
        field:   Offending field for input errors, else None.
    """
    success: bool
    data: Any = None
    error: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "StoreResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, field: Optional[str] = None) -> "StoreResult":
        return cls(success=False, error=error, field=field)


def reorder_positions(ordered_ids: Sequence[str]) -> dict[str, int]:
    """Map each id to its new 1-based position.

    Example:
        >>> reorder_positions(["b", "a", "c"])
        {'b': 1, 'a': 2, 'c': 3}
    """
    return {package_id: index for index, package_id in enumerate(ordered_ids, start=1)}


class PackageDefinitionStore:
    """Catalog of package definitions backed by the remote data service."""

    def __init__(self, client: DataServiceClient):
        self.client = client
        self._definitions: list[PackageDefinition] = []
        self.last_error: Optional[str] = None

    # ── reads ────────────────────────────────────────────────────────────────

    @property
    def definitions(self) -> list[PackageDefinition]:
        """All definitions in ``sort_order``."""
        return list(self._definitions)

    def active_definitions(self) -> list[PackageDefinition]:
        return [p for p in self._definitions if p.is_active]

    def get(self, package_id: str) -> Optional[PackageDefinition]:
        return next((p for p in self._definitions if p.id == package_id), None)

    async def refresh(self) -> StoreResult:
        """Reload the catalog from the data service."""
        try:
            rows = await self.client.list_rows(order="sort_order")
            definitions = [parse_definition(row) for row in rows]
        except DataServiceError as exc:
            return self._failed(f"Failed to fetch packages: {exc.message}")
        except DefinitionInputError as exc:
            return self._failed(f"Malformed package row ({exc.field}): {exc.message}")

        self._definitions = sorted(definitions, key=lambda p: p.sort_order)
        self.last_error = None
        logger.info("Loaded %d package definitions", len(self._definitions))
        return StoreResult.ok(self.definitions)

    # ── pure helpers over the cached catalog ─────────────────────────────────

    def validate_quantity_ranges(self, candidate: RangeLike, exclude_id: Optional[str] = None) -> RangeCheck:
        """Check ``candidate`` against the cached active definitions."""
        return validate_quantity_range(candidate, self._definitions, exclude_id=exclude_id)

    def select_package_for_quantity(self, quantity: int) -> Optional[PackageDefinition]:
        return select_package_for_quantity(quantity, self._definitions)

    def calculate(self, total_quantity: int, weight_per_item: float, include_item_count: bool = False) -> DecompositionResult:
        request = DecompositionRequest(
            total_quantity=total_quantity,
            weight_per_item=weight_per_item,
            packages=tuple(self.active_definitions()),
        )
        return calculate_packages(request, include_item_count=include_item_count)

    # ── writes ───────────────────────────────────────────────────────────────

    async def create(self, payload: Mapping[str, Any]) -> StoreResult:
        """Validate and insert a new definition."""
        try:
            draft = parse_definition_input(payload)
        except DefinitionInputError as exc:
            return self._failed(exc.message, field=exc.field)

        check = self.validate_quantity_ranges(draft.quantity_range)
        if not check.valid:
            return self._failed(check.message, field="min_quantity")

        row = draft.to_row()
        if not payload.get("sort_order"):
            row["sort_order"] = max((p.sort_order for p in self._definitions), default=0) + 1

        try:
            if draft.is_default:
                created = await self._switch_default(None, lambda: self.client.insert_row(row))
            else:
                created = await self.client.insert_row(row)
        except DataServiceError as exc:
            await self.refresh()
            return self._failed(f"Failed to create package: {exc.message}")

        definition = parse_definition(created)
        logger.info("Created package %s", definition.label)
        await self.refresh()
        return StoreResult.ok(definition)

    async def update(self, package_id: str, updates: Mapping[str, Any]) -> StoreResult:
        """Apply ``updates`` to an existing definition after re-validating it."""
        current = self.get(package_id)
        if current is None:
            return self._failed(f"Package {package_id} not found")

        try:
            draft = parse_definition_input({**current.editable_fields(), **updates})
        except DefinitionInputError as exc:
            return self._failed(exc.message, field=exc.field)

        check = self.validate_quantity_ranges(draft.quantity_range, exclude_id=package_id)
        if not check.valid:
            return self._failed(check.message, field="min_quantity")

        validated = draft.to_row()
        changes = {key: validated[key] for key in updates if key in validated}
        if not changes:
            return StoreResult.ok(current)

        def write() -> Awaitable[list[dict[str, Any]]]:
            return self.client.update_rows({"id": eq(package_id)}, changes)

        try:
            if changes.get("is_default"):
                rows = await self._switch_default(package_id, write)
            else:
                rows = await write()
        except DataServiceError as exc:
            await self.refresh()
            return self._failed(f"Failed to update package: {exc.message}")

        logger.info("Updated package %s: %s", package_id, sorted(changes))
        await self.refresh()
        return StoreResult.ok(parse_definition(rows[0]) if rows else self.get(package_id))

    async def set_active(self, package_id: str, active: bool) -> StoreResult:
        """Toggle a definition; activation is checked for range overlap."""
        return await self.update(package_id, {"is_active": active})

    async def set_as_default(self, package_id: str) -> StoreResult:
        """Make ``package_id`` the only default definition."""
        return await self.update(package_id, {"is_default": True})

    async def delete(self, package_id: str) -> StoreResult:
        try:
            await self.client.delete_rows({"id": eq(package_id)})
        except DataServiceError as exc:
            return self._failed(f"Failed to delete package: {exc.message}")

        self._definitions = [p for p in self._definitions if p.id != package_id]
        logger.info("Deleted package %s", package_id)
        return StoreResult.ok()

    async def reorder(self, ordered_ids: Sequence[str]) -> StoreResult:
        """
        Persist a new display order.

        Args:
            ordered_ids: Every known definition id, in the new order.

        Returns:
            StoreResult with the reordered catalog. On a failed write the
            catalog is reloaded and the result reports the failure; callers
            should treat the persisted order as whatever ``definitions`` now
            shows.
        """
        known = {p.id for p in self._definitions}
        if len(ordered_ids) != len(known) or set(ordered_ids) != known:
            return self._failed("Reorder must list every package exactly once")

        positions = reorder_positions(ordered_ids)
        try:
            for package_id, position in positions.items():
                await self.client.update_rows({"id": eq(package_id)}, {"sort_order": position})
        except DataServiceError as exc:
            logger.warning("Reorder interrupted (%s); reloading catalog", exc.message)
            await self.refresh()
            return self._failed(f"Failed to reorder packages: {exc.message}")

        by_id = {p.id: p for p in self._definitions}
        self._definitions = [
            by_id[package_id].model_copy(update={"sort_order": positions[package_id]})
            for package_id in ordered_ids
        ]
        return StoreResult.ok(self.definitions)

    # ── internals ────────────────────────────────────────────────────────────

    async def _switch_default(self, keep_id: Optional[str], write: Callable[[], Awaitable[Any]]) -> Any:
        """Clear other defaults, run ``write``, and restore them if it fails."""
        filters = {"is_default": is_true()}
        if keep_id is not None:
            filters["id"] = neq(keep_id)
        cleared = await self.client.update_rows(filters, {"is_default": False})

        try:
            return await write()
        except DataServiceError:
            previous = [str(row["id"]) for row in cleared]
            if previous:
                logger.warning("Default switch failed; restoring previous default %s", previous)
                try:
                    await self.client.update_rows({"id": f"in.({','.join(previous)})"}, {"is_default": True})
                except DataServiceError as exc:
                    logger.error("Could not restore previous default %s: %s", previous, exc.message)
            raise

    def _failed(self, error: str, field: Optional[str] = None) -> StoreResult:
        self.last_error = error
        return StoreResult.fail(error, field=field)
