from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional, Protocol

from .models import (
    Product,
    PurchaseOrder,
    ReturnTicket,
    StockRecord,
    Supplier,
    SupplierReminder,
)


class EntityStore(Protocol):
    lock: threading.RLock

    def get_product(self, product_id: str) -> Optional[Product]: ...
    def list_products(self) -> List[Product]: ...
    def get_stock(self, product_id: str) -> Optional[StockRecord]: ...
    def list_stock(self) -> List[StockRecord]: ...
    def update_stock(self, record: StockRecord) -> None: ...
    def get_supplier(self, supplier_id: str) -> Optional[Supplier]: ...
    def list_suppliers(self) -> List[Supplier]: ...
    def get_purchase_order(self, po_id: str) -> Optional[PurchaseOrder]: ...
    def list_purchase_orders(self) -> List[PurchaseOrder]: ...
    def append_purchase_order(self, po: PurchaseOrder) -> None: ...
    def update_purchase_order(self, po: PurchaseOrder) -> None: ...
    def list_reminders(self) -> List[SupplierReminder]: ...
    def append_reminder(self, reminder: SupplierReminder) -> None: ...
    def list_returns(self) -> List[ReturnTicket]: ...
    def append_return(self, ticket: ReturnTicket) -> None: ...


class InMemoryStore:
    """Dict-backed store. Mutations are serialized by a single re-entrant lock;
    ``list_*`` hands out copies of the containers, not of the records."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        stock: Iterable[StockRecord] = (),
        suppliers: Iterable[Supplier] = (),
        purchase_orders: Iterable[PurchaseOrder] = (),
        reminders: Iterable[SupplierReminder] = (),
        returns: Iterable[ReturnTicket] = (),
    ):
        self._lock = threading.RLock()
        self._products: Dict[str, Product] = {p.product_id: p for p in products}
        self._stock: Dict[str, StockRecord] = {s.product_id: s for s in stock}
        self._suppliers: Dict[str, Supplier] = {s.supplier_id: s for s in suppliers}
        self._purchase_orders: Dict[str, PurchaseOrder] = {po.po_id: po for po in purchase_orders}
        self._reminders: List[SupplierReminder] = list(reminders)
        self._returns: List[ReturnTicket] = list(returns)

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def list_products(self) -> List[Product]:
        with self._lock:
            return list(self._products.values())

    def get_stock(self, product_id: str) -> Optional[StockRecord]:
        return self._stock.get(product_id)

    def list_stock(self) -> List[StockRecord]:
        with self._lock:
            return list(self._stock.values())

    def update_stock(self, record: StockRecord) -> None:
        with self._lock:
            self._stock[record.product_id] = record

    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        return self._suppliers.get(supplier_id)

    def list_suppliers(self) -> List[Supplier]:
        with self._lock:
            return list(self._suppliers.values())

    def get_purchase_order(self, po_id: str) -> Optional[PurchaseOrder]:
        return self._purchase_orders.get(po_id)

    def list_purchase_orders(self) -> List[PurchaseOrder]:
        with self._lock:
            return list(self._purchase_orders.values())

    def append_purchase_order(self, po: PurchaseOrder) -> None:
        with self._lock:
            if po.po_id in self._purchase_orders:
                raise ValueError(f"duplicate purchase order id {po.po_id}")
            self._purchase_orders[po.po_id] = po

    def update_purchase_order(self, po: PurchaseOrder) -> None:
        with self._lock:
            if po.po_id not in self._purchase_orders:
                raise KeyError(po.po_id)
            self._purchase_orders[po.po_id] = po

    def list_reminders(self) -> List[SupplierReminder]:
        with self._lock:
            return list(self._reminders)

    def append_reminder(self, reminder: SupplierReminder) -> None:
        with self._lock:
            self._reminders.append(reminder)

    def list_returns(self) -> List[ReturnTicket]:
        with self._lock:
            return list(self._returns)

    def append_return(self, ticket: ReturnTicket) -> None:
        with self._lock:
            self._returns.append(ticket)
