"""Pytest configuration and fixtures."""

import random

import pytest
from unittest.mock import MagicMock

from stockmaster.data import seed
from stockmaster.models.operation import Operation, OperationItem, OperationStatus
from stockmaster.models.product import Product
from stockmaster.services.inventory_service import InventoryService
from stockmaster.services.notifications import NotificationCenter
from stockmaster.services.store import InventoryStore


class FakeClock:
    """Manually advanced clock for notification expiry."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def advance(self, seconds: float):
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    """Small deterministic store: base products, sample operations, named contacts."""
    return InventoryStore(
        products=seed.base_products(),
        operations=seed.sample_operations(),
        contacts=seed.base_contacts()
    )


@pytest.fixture
def service(store, clock):
    """InventoryService over the small store with a fake notification clock."""
    return InventoryService(
        store=store,
        notifications=NotificationCenter(ttl_seconds=5.0, clock=clock),
        rng=random.Random(7)
    )


@pytest.fixture
def make_operation(store):
    """Insert a Draft operation directly into the store."""
    counter = {"n": 0}

    def _make(op_type, items, source="Main Warehouse", dest="Production Floor", status=OperationStatus.DRAFT):
        counter["n"] += 1
        op = Operation(
            id=f"t{counter['n']}",
            type=op_type,
            status=status,
            reference=f"TEST/{counter['n']}",
            source_location=source,
            dest_location=dest,
            items=[OperationItem(pid, qty) for pid, qty in items]
        )
        store.add_operation(op)
        return op

    return _make


@pytest.fixture
def snapshot(store):
    """Capture (stock, location) of every product and the status of every operation."""
    def _snapshot():
        return (
            {p.id: (p.stock, p.location) for p in store.products},
            {o.id: o.status for o in store.operations}
        )
    return _snapshot


@pytest.fixture
def sample_product():
    return Product(
        id="p-test",
        name="Copper Wire",
        sku="RM-900",
        barcode="12345678",
        category="Raw Material",
        uom="Meters",
        stock=30,
        location="Main Warehouse",
        price=2.5,
        min_stock_rule=40
    )


@pytest.fixture
def mock_ai_client():
    """Mock generative model client."""
    client = MagicMock()
    client.generate_text.return_value = "Inventory is healthy."
    return client
