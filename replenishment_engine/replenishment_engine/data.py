from __future__ import annotations

from .ids import to_iso, utc_now
from .models import (
    Product,
    PurchaseOrder,
    ReturnTicket,
    StockRecord,
    Supplier,
    SupplierOffer,
)
from .store import InMemoryStore


def sample_products() -> list[Product]:
    return [
        Product(
            product_id="P001",
            name="Eco-Friendly Water Bottle",
            sku="EFWB001",
            description="Sustainable and insulated water bottle.",
            unit_cost=500,
            retail_price=999,
            safety_stock_fraction=0.15,
            average_daily_sales=10,
        ),
        Product(
            product_id="P002",
            name="Smart Home Hub 2.0",
            sku="SHH2001",
            description="Central control for smart devices.",
            unit_cost=2500,
            retail_price=4999,
            safety_stock_fraction=0.20,
            average_daily_sales=3,
        ),
        Product(
            product_id="P003",
            name="Organic Coffee Beans (500g)",
            sku="OCB5001",
            description="Ethically sourced arabica beans.",
            unit_cost=300,
            retail_price=599,
            safety_stock_fraction=0.10,
            average_daily_sales=25,
        ),
        Product(
            product_id="P004",
            name="Ergonomic Office Chair",
            sku="EOC001",
            description="Adjustable chair for long working hours.",
            unit_cost=8000,
            retail_price=14999,
            safety_stock_fraction=0.25,
            average_daily_sales=1,
        ),
    ]


def sample_stock() -> list[StockRecord]:
    now = to_iso(utc_now())
    return [
        StockRecord("P001", quantity_on_hand=80, warehouse_location="A1", last_updated=now),
        StockRecord("P002", quantity_on_hand=10, warehouse_location="B2", last_updated=now),
        StockRecord("P003", quantity_on_hand=150, warehouse_location="C3", last_updated=now),
        StockRecord("P004", quantity_on_hand=2, warehouse_location="D4", last_updated=now),
    ]


def sample_suppliers() -> list[Supplier]:
    return [
        Supplier(
            supplier_id="S001",
            name="Global Supply Co.",
            contact_person="Alice Smith",
            email="alice@globalsupply.com",
            phone="9876543210",
            average_lead_time_days=7,
            on_time_rate=0.95,
            offers={
                "P001": SupplierOffer(price=480, moq=50),
                "P002": SupplierOffer(price=2400, moq=5),
                "P003": SupplierOffer(price=290, moq=100),
            },
        ),
        Supplier(
            supplier_id="S002",
            name="Rapid Parts Inc.",
            contact_person="Bob Johnson",
            email="bob@rapidparts.com",
            phone="9123456789",
            average_lead_time_days=3,
            on_time_rate=0.85,
            offers={
                "P001": SupplierOffer(price=520, moq=30),
                "P002": SupplierOffer(price=2600, moq=3),
                "P004": SupplierOffer(price=7900, moq=1),
            },
        ),
        Supplier(
            supplier_id="S003",
            name="Budget Wholesale",
            contact_person="Charlie Brown",
            email="charlie@budgetwholesale.com",
            phone="9988776655",
            average_lead_time_days=10,
            on_time_rate=0.90,
            offers={
                "P001": SupplierOffer(price=450, moq=100),
                "P003": SupplierOffer(price=280, moq=200),
                "P004": SupplierOffer(price=7500, moq=1),
            },
        ),
    ]


def sample_purchase_orders() -> list[PurchaseOrder]:
    return [
        PurchaseOrder(
            po_id="PO-20250601-001",
            supplier_id="S001",
            product_id="P003",
            quantity_ordered=200,
            order_date="2025-06-01T09:00:00Z",
            expected_delivery_date="2025-06-08T09:00:00Z",
            status="delayed",
        ),
        PurchaseOrder(
            po_id="PO-20250701-002",
            supplier_id="S002",
            product_id="P001",
            quantity_ordered=50,
            order_date="2025-07-01T10:00:00Z",
            expected_delivery_date="2025-07-04T10:00:00Z",
            status="pending",
        ),
    ]


def sample_returns() -> list[ReturnTicket]:
    return [
        ReturnTicket(
            return_id="RT-20250615-001",
            product_id="P001",
            quantity_returned=5,
            return_reason="damaged_in_transit",
            return_date="2025-06-15T14:30:00Z",
            supplier_id="S001",
        ),
    ]


def sample_store() -> InMemoryStore:
    return InMemoryStore(
        products=sample_products(),
        stock=sample_stock(),
        suppliers=sample_suppliers(),
        purchase_orders=sample_purchase_orders(),
        returns=sample_returns(),
    )
