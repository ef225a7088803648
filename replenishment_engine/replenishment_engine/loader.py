from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import List

from .ids import to_iso, utc_now
from .models import (
    PENDING,
    PO_STATUSES,
    Product,
    PurchaseOrder,
    ReturnTicket,
    StockRecord,
    Supplier,
    SupplierOffer,
)
from .store import InMemoryStore

logger = logging.getLogger(__name__)


def load_products(data: bytes | None) -> List[Product]:
    if not data:
        return []
    payload = json.loads(data.decode("utf-8"))
    out = []
    for item in payload:
        out.append(
            Product(
                product_id=item["product_id"],
                name=item.get("name", item["product_id"]),
                sku=item.get("sku", ""),
                description=item.get("description", ""),
                unit_cost=float(item.get("unit_cost", 0)),
                retail_price=float(item.get("retail_price", 0)),
                safety_stock_fraction=float(item.get("safety_stock_percentage", 0)),
                average_daily_sales=float(item.get("average_daily_sales_last_30_days", 0)),
            )
        )
    return out


def load_suppliers(data: bytes | None) -> List[Supplier]:
    if not data:
        return []
    payload = json.loads(data.decode("utf-8"))
    out = []
    for item in payload:
        offers = {
            product_id: SupplierOffer(price=float(detail["price"]), moq=int(detail.get("moq", 1)))
            for product_id, detail in item.get("products_supplied", {}).items()
        }
        out.append(
            Supplier(
                supplier_id=item["supplier_id"],
                name=item.get("name", item["supplier_id"]),
                contact_person=item.get("contact_person", ""),
                email=item.get("email", ""),
                phone=item.get("phone", ""),
                average_lead_time_days=int(item.get("average_lead_time_days", 0)),
                on_time_rate=float(item.get("historical_on_time_delivery_rate", 0)),
                offers=offers,
            )
        )
    return out


def _stock_from_mapping(item) -> StockRecord:
    return StockRecord(
        product_id=item["product_id"],
        quantity_on_hand=int(item.get("quantity_on_hand") or 0),
        warehouse_location=item.get("warehouse_location") or "",
        last_updated=item.get("last_updated_timestamp") or to_iso(utc_now()),
    )


def load_stock(data: bytes | None) -> List[StockRecord]:
    if not data:
        return []
    text = data.decode("utf-8")
    if text.strip().startswith("["):
        return [_stock_from_mapping(item) for item in json.loads(text)]
    reader = csv.DictReader(io.StringIO(text))
    return [_stock_from_mapping(row) for row in reader]


def load_purchase_orders(data: bytes | None) -> List[PurchaseOrder]:
    if not data:
        return []
    payload = json.loads(data.decode("utf-8"))
    out = []
    for item in payload:
        status = item.get("status", PENDING)
        if status not in PO_STATUSES:
            logger.warning("unknown_po_status po=%s status=%s treated_as=%s", item["po_id"], status, PENDING)
            status = PENDING
        out.append(
            PurchaseOrder(
                po_id=item["po_id"],
                supplier_id=item["supplier_id"],
                product_id=item["product_id"],
                quantity_ordered=int(item["quantity_ordered"]),
                order_date=item.get("order_date", ""),
                # kept verbatim; the status report flags unreadable dates
                expected_delivery_date=item.get("expected_delivery_date", ""),
                actual_delivery_date=item.get("actual_delivery_date"),
                status=status,
            )
        )
    return out


def load_returns(data: bytes | None) -> List[ReturnTicket]:
    if not data:
        return []
    payload = json.loads(data.decode("utf-8"))
    out = []
    for item in payload:
        out.append(
            ReturnTicket(
                return_id=item["return_id"],
                product_id=item["product_id"],
                quantity_returned=int(item.get("quantity_returned", 0)),
                return_reason=item.get("return_reason", ""),
                return_date=item.get("return_date", ""),
                supplier_id=item.get("supplier_id"),
            )
        )
    return out


def _read(directory: Path, *names: str) -> bytes | None:
    for name in names:
        path = directory / name
        if path.exists():
            return path.read_bytes()
    return None


def load_store(directory: str | Path) -> InMemoryStore:
    """Build a store from ``products.json``, ``stock.json`` (or ``stock.csv``),
    ``suppliers.json``, ``purchase_orders.json`` and ``returns.json``.
    Missing files yield empty collections."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"data directory not found: {directory}")
    return InMemoryStore(
        products=load_products(_read(directory, "products.json")),
        stock=load_stock(_read(directory, "stock.json", "stock.csv")),
        suppliers=load_suppliers(_read(directory, "suppliers.json")),
        purchase_orders=load_purchase_orders(_read(directory, "purchase_orders.json")),
        returns=load_returns(_read(directory, "returns.json")),
    )
