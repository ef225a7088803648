from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, Protocol

from . import config, errors
from .documents import purchase_order_pdf
from .errors import NotFound
from .ids import IdGenerator, SequentialIdGenerator, sequence_start, utc_now
from .inventory import adjust_stock, record_return
from .models import (
    PlacedOrder,
    PoStatusReport,
    PurchaseOrder,
    ReorderSuggestion,
    ReturnTicket,
    StockRecord,
    SupplierReminder,
)
from .orders import confirm_delivery, mark_shipped, place_order
from .planner import reorder_suggestions
from .reminders import record_reminder
from .scoring import parse_goal
from .store import EntityStore
from .tracking import status_report


class ReminderNotifier(Protocol):
    def send(self, reminder: SupplierReminder) -> bool:
        ...


class ReplenishmentService:
    """Caller-facing operations. Each call snapshots the store and hands the
    snapshot to the pure calculators in ``planner``, ``scoring`` and
    ``tracking``."""

    def __init__(
        self,
        store: EntityStore,
        clock: Callable[[], datetime] = utc_now,
        po_ids: Optional[IdGenerator] = None,
        reminder_ids: Optional[IdGenerator] = None,
        return_ids: Optional[IdGenerator] = None,
        notifier: Optional[ReminderNotifier] = None,
        default_lead_time_days: int = config.DEFAULT_LEAD_TIME_DAYS,
        default_goal: str = config.DEFAULT_GOAL,
    ):
        self.store = store
        self.clock = clock
        po_start = sequence_start("PO", [po.po_id for po in store.list_purchase_orders()])
        reminder_start = sequence_start("REM", [r.reminder_id for r in store.list_reminders()])
        return_start = sequence_start("RT", [t.return_id for t in store.list_returns()])
        self.po_ids = po_ids or SequentialIdGenerator("PO", start=po_start, clock=clock)
        self.reminder_ids = reminder_ids or SequentialIdGenerator("REM", start=reminder_start, clock=clock)
        self.return_ids = return_ids or SequentialIdGenerator("RT", start=return_start, clock=clock)
        self.notifier = notifier
        self.default_lead_time_days = default_lead_time_days
        self.default_goal = parse_goal(default_goal)

    def get_reorder_suggestions(self) -> List[ReorderSuggestion]:
        return reorder_suggestions(
            self.store.list_products(),
            self.store.list_stock(),
            self.store.list_suppliers(),
            self.default_lead_time_days,
        )

    def place_order(self, product_id: str, quantity: int, goal: Optional[str] = None) -> PlacedOrder:
        return place_order(
            self.store,
            product_id,
            quantity,
            goal or self.default_goal,
            ids=self.po_ids,
            now=self.clock(),
        )

    def get_po_status_report(self) -> List[PoStatusReport]:
        return status_report(self.store.list_purchase_orders(), self.clock())

    def send_supplier_reminder(
        self, po_id: str, supplier_id: str, message: Optional[str] = None
    ) -> SupplierReminder:
        reminder = record_reminder(
            self.store, po_id, supplier_id, message, ids=self.reminder_ids, now=self.clock()
        )
        if self.notifier is not None:
            self.notifier.send(reminder)
        return reminder

    def mark_shipped(self, po_id: str) -> PurchaseOrder:
        return mark_shipped(self.store, po_id)

    def confirm_delivery(self, po_id: str, delivered_at: Optional[datetime] = None) -> PurchaseOrder:
        return confirm_delivery(self.store, po_id, delivered_at, now=self.clock())

    def adjust_stock(self, product_id: str, change: int) -> StockRecord:
        return adjust_stock(self.store, product_id, change, now=self.clock())

    def record_return(
        self, product_id: str, quantity_returned: int, reason: str, supplier_id: Optional[str] = None
    ) -> ReturnTicket:
        return record_return(
            self.store, product_id, quantity_returned, reason, supplier_id, ids=self.return_ids, now=self.clock()
        )

    def purchase_order_document(self, po_id: str) -> bytes:
        po = self.store.get_purchase_order(po_id)
        if po is None:
            raise NotFound(f"Purchase order {po_id} not found.", errors.PURCHASE_ORDER_NOT_FOUND)
        supplier = self.store.get_supplier(po.supplier_id)
        if supplier is None:
            raise NotFound(f"Supplier {po.supplier_id} not found.")
        return purchase_order_pdf(po, supplier, self.store.get_product(po.product_id))
