from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union


PENDING = "pending"
SHIPPED = "shipped"
DELIVERED = "delivered"
DELAYED = "delayed"
PO_STATUSES = (PENDING, SHIPPED, DELIVERED, DELAYED)


@dataclass
class Product:
    product_id: str
    name: str
    unit_cost: float
    retail_price: float
    safety_stock_fraction: float  # 0.15 means 15% of a day's demand
    average_daily_sales: float  # trailing 30 day average
    sku: str = ""
    description: str = ""


@dataclass
class StockRecord:
    product_id: str
    quantity_on_hand: int
    warehouse_location: str
    last_updated: str  # ISO-8601


@dataclass
class SupplierOffer:
    price: float
    moq: int


@dataclass
class Supplier:
    supplier_id: str
    name: str
    average_lead_time_days: int
    on_time_rate: float  # historical on-time delivery, 0-1
    offers: Dict[str, SupplierOffer] = field(default_factory=dict)  # product_id -> offer
    contact_person: str = ""
    email: str = ""
    phone: str = ""

    def offer_for(self, product_id: str) -> Optional[SupplierOffer]:
        return self.offers.get(product_id)


@dataclass
class PurchaseOrder:
    po_id: str
    supplier_id: str
    product_id: str
    quantity_ordered: int
    order_date: str
    expected_delivery_date: str
    actual_delivery_date: Optional[str] = None
    status: str = PENDING


@dataclass(frozen=True)
class SupplierReminder:
    reminder_id: str
    po_id: str
    supplier_id: str
    message: str
    sent_at: str


@dataclass
class ReturnTicket:
    return_id: str
    product_id: str
    quantity_returned: int
    return_reason: str
    return_date: str
    supplier_id: Optional[str] = None


@dataclass
class ReorderSuggestion:
    product_id: str
    product_name: str
    current_quantity_on_hand: int
    average_daily_sales: float
    avg_lead_time_days: int
    safety_stock_fraction: float
    calculated_reorder_point: int
    suggested_order_quantity: int
    reason: str


@dataclass
class SupplierChoice:
    supplier: Supplier
    score: float
    offer: SupplierOffer


@dataclass
class PlacedOrder:
    purchase_order: PurchaseOrder
    supplier: Supplier
    score: float
    goal: str
    message: str
    chosen_supplier_reason: str


# Effective PO status, recomputed on every query.


@dataclass(frozen=True)
class OnSchedule:
    status: str
    message: str


@dataclass(frozen=True)
class Delayed:
    days_overdue: int
    message: str
    status: str = DELAYED


@dataclass(frozen=True)
class Delivered:
    delivered_on: Optional[str]
    message: str
    status: str = DELIVERED


StatusAssessment = Union[OnSchedule, Delayed, Delivered]


@dataclass
class PoStatusReport:
    purchase_order: PurchaseOrder
    assessment: StatusAssessment

    def to_dict(self) -> dict:
        po = self.purchase_order
        out = {
            "po_id": po.po_id,
            "product_id": po.product_id,
            "supplier_id": po.supplier_id,
            "quantity_ordered": po.quantity_ordered,
            "order_date": po.order_date,
            "expected_delivery_date": po.expected_delivery_date,
            "current_status": self.assessment.status,
        }
        if isinstance(self.assessment, Delayed):
            out["days_overdue"] = self.assessment.days_overdue
        out["message"] = self.assessment.message
        return out
