"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from replenishment_engine import data
from replenishment_engine.app import app, get_service
from replenishment_engine.ids import SequentialIdGenerator
from replenishment_engine.models import Product, StockRecord, Supplier, SupplierOffer
from replenishment_engine.service import ReplenishmentService
from replenishment_engine.store import InMemoryStore

FIXED_NOW = datetime(2025, 7, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def bottle() -> Product:
    return Product(
        product_id="P001",
        name="Eco-Friendly Water Bottle",
        unit_cost=500,
        retail_price=999,
        safety_stock_fraction=0.15,
        average_daily_sales=10,
    )


@pytest.fixture
def suppliers():
    """Three suppliers for P001 with lead times 7, 3 and 10 days."""
    return [
        Supplier(
            supplier_id="S001",
            name="Global Supply Co.",
            average_lead_time_days=7,
            on_time_rate=0.95,
            offers={"P001": SupplierOffer(price=480, moq=50)},
        ),
        Supplier(
            supplier_id="S002",
            name="Rapid Parts Inc.",
            average_lead_time_days=3,
            on_time_rate=0.85,
            offers={"P001": SupplierOffer(price=520, moq=30)},
        ),
        Supplier(
            supplier_id="S003",
            name="Budget Wholesale",
            average_lead_time_days=10,
            on_time_rate=0.90,
            offers={"P001": SupplierOffer(price=450, moq=100)},
        ),
    ]


@pytest.fixture
def stock_record():
    def _make(product_id: str = "P001", on_hand: int = 50) -> StockRecord:
        return StockRecord(
            product_id=product_id,
            quantity_on_hand=on_hand,
            warehouse_location="A1",
            last_updated="2025-07-14T08:00:00Z",
        )

    return _make


@pytest.fixture
def store() -> InMemoryStore:
    return data.sample_store()


@pytest.fixture
def service(store: InMemoryStore, now: datetime) -> ReplenishmentService:
    clock = lambda: now  # noqa: E731
    return ReplenishmentService(
        store,
        clock=clock,
        po_ids=SequentialIdGenerator("PO", start=2, clock=clock),
        reminder_ids=SequentialIdGenerator("REM", clock=clock),
        return_ids=SequentialIdGenerator("RT", start=1, clock=clock),
    )


@pytest.fixture
def client(service: ReplenishmentService) -> Generator[TestClient, None, None]:
    """Test client bound to a fresh sample store and a fixed clock."""
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
