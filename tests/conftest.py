"""Shared fixtures: the reference catalog and an in-memory data service."""

import json
import os
import sys
from typing import Callable, Optional

import httpx
import pytest
import pytest_asyncio

# Allow running the tests from a checkout without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from package_assignment.core.models import PackageDefinition
from package_assignment.store.client import DataServiceClient
from package_assignment.store.repository import PackageDefinitionStore


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------

def make_definition(id, name, min_q, max_q, empty_weight=0.5, is_default=False, is_active=True, sort_order=0):
    return PackageDefinition(
        id=id,
        name=name,
        length=12.0,
        width=10.0,
        height=6.0,
        empty_weight=empty_weight,
        min_quantity=min_q,
        max_quantity=max_q,
        is_default=is_default,
        is_active=is_active,
        sort_order=sort_order,
    )


@pytest.fixture
def small():
    return make_definition("small", "Small", 1, 4, empty_weight=0.25, sort_order=1)


@pytest.fixture
def medium():
    return make_definition("medium", "Medium", 5, 10, empty_weight=0.5, sort_order=2)


@pytest.fixture
def large():
    return make_definition("large", "Large", 11, 20, empty_weight=0.75, is_default=True, sort_order=3)


@pytest.fixture
def catalog(small, medium, large):
    """Small[1,4], Medium[5,10], Large[11,20] (default)."""
    return [small, medium, large]


# ---------------------------------------------------------------------------
# In-memory data service
# ---------------------------------------------------------------------------

def _text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class FakeDataService:
    """
    Minimal PostgREST-style table served through httpx.MockTransport.

    Supports eq./neq./is./in. filters, ``order=<col>.asc`` and
    ``Prefer: return=representation``. ``fail_when`` lets a test make
    selected requests answer HTTP 500.
    """

    def __init__(self, rows: Optional[list] = None):
        self.rows = [dict(r) for r in rows or []]
        self.requests: list[tuple[str, dict, Optional[dict]]] = []
        self.fail_when: Optional[Callable[[str, dict, Optional[dict]], bool]] = None
        self._next_id = 1

    @staticmethod
    def _matches(row: dict, params: dict) -> bool:
        for key, condition in params.items():
            if key in ("select", "order"):
                continue
            op, _, value = condition.partition(".")
            actual = _text(row.get(key))
            if op == "eq" and actual != value:
                return False
            if op == "neq" and actual == value:
                return False
            if op == "is" and actual != value:
                return False
            if op == "in" and actual not in value.strip("()").split(","):
                return False
        return True

    def __call__(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, params, body))

        if self.fail_when is not None and self.fail_when(request.method, params, body):
            return httpx.Response(500, json={"message": "simulated outage"})

        matching = [r for r in self.rows if self._matches(r, params)]

        if request.method == "GET":
            order = params.get("order", "").split(".")[0]
            if order:
                matching = sorted(matching, key=lambda r: r.get(order) or 0)
            return httpx.Response(200, json=matching)

        if request.method == "POST":
            row = {"id": f"pkg-{self._next_id}", **body}
            self._next_id += 1
            self.rows.append(row)
            return httpx.Response(201, json=[row])

        if request.method == "PATCH":
            for row in matching:
                row.update(body)
            return httpx.Response(200, json=matching)

        if request.method == "DELETE":
            self.rows = [r for r in self.rows if r not in matching]
            return httpx.Response(204)

        return httpx.Response(405)

    def row(self, package_id: str) -> dict:
        return next(r for r in self.rows if r["id"] == package_id)

    def writes(self) -> list:
        return [r for r in self.requests if r[0] != "GET"]


@pytest.fixture
def seed_rows():
    """Rows as the data service returns them (decimals as strings)."""
    return [
        {"id": "small", "name": "Small Box", "length": "8.00", "width": "6.00", "height": "4.00",
         "empty_weight": "0.25", "min_quantity": 1, "max_quantity": 4,
         "is_default": False, "is_active": True, "sort_order": 1},
        {"id": "large", "name": "Large Box", "length": "16.00", "width": "12.00", "height": "8.00",
         "empty_weight": "0.75", "min_quantity": 13, "max_quantity": 24,
         "is_default": False, "is_active": True, "sort_order": 3},
        {"id": "medium", "name": "Medium Box", "length": "12.00", "width": "10.00", "height": "6.00",
         "empty_weight": "0.50", "min_quantity": 5, "max_quantity": 12,
         "is_default": True, "is_active": True, "sort_order": 2},
        {"id": "retired", "name": "Retired Tube", "length": "30.00", "width": "4.00", "height": "4.00",
         "empty_weight": "0.40", "min_quantity": 3, "max_quantity": 8,
         "is_default": None, "is_active": False, "sort_order": 4},
    ]


@pytest.fixture
def fake_service(seed_rows):
    return FakeDataService(seed_rows)


@pytest_asyncio.fixture
async def store(fake_service):
    """A store already loaded from the fake service."""
    client = DataServiceClient(
        "https://data.example.test",
        "test-key",
        transport=httpx.MockTransport(fake_service),
    )
    store = PackageDefinitionStore(client)
    result = await store.refresh()
    assert result.success, result.error
    yield store
    await client.aclose()
