from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from . import errors
from .errors import InvalidArgument, NotFound
from .ids import IdGenerator, to_iso
from .inventory import adjust_stock
from .models import DELIVERED, PENDING, SHIPPED, PlacedOrder, PurchaseOrder
from .planner import eligible_suppliers_for
from .scoring import OptimizationGoal, parse_goal, select_supplier
from .store import EntityStore
from .tracking import parse_timestamp

logger = logging.getLogger(__name__)


def _require_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidArgument("Invalid request: product_id and a positive quantity are required.")
    return quantity


def place_order(
    store: EntityStore,
    product_id: str,
    quantity: int,
    goal: Union[str, OptimizationGoal, None] = OptimizationGoal.BALANCE,
    *,
    ids: IdGenerator,
    now: datetime,
) -> PlacedOrder:
    if not product_id:
        raise InvalidArgument("Invalid request: product_id and a positive quantity are required.")
    quantity = _require_quantity(quantity)
    goal = parse_goal(goal)

    product = store.get_product(product_id)
    if product is None:
        raise NotFound("Product not found.", errors.PRODUCT_NOT_FOUND)

    eligible = eligible_suppliers_for(product_id, store.list_suppliers())
    if not eligible:
        raise NotFound(
            f"No suppliers found for product {product_id}. Cannot place order.",
            errors.NO_SUPPLIER_OFFERS_PRODUCT,
        )

    choice = select_supplier(product_id, quantity, goal, eligible)
    if choice is None:
        raise NotFound(
            f"No suitable supplier found for product {product_id} with requested quantity "
            f"({quantity}) meeting MOQs.",
            errors.NO_SUPPLIER_MEETS_MOQ,
        )

    supplier = choice.supplier
    expected = now + timedelta(days=supplier.average_lead_time_days)
    po = PurchaseOrder(
        po_id=ids.next_id(),
        supplier_id=supplier.supplier_id,
        product_id=product_id,
        quantity_ordered=quantity,
        order_date=to_iso(now),
        expected_delivery_date=to_iso(expected),
        actual_delivery_date=None,
        status=PENDING,
    )
    # stock moves on delivery only, so open orders never hide a shortage
    store.append_purchase_order(po)
    logger.info(
        "order_placed po=%s product=%s supplier=%s qty=%s goal=%s score=%.2f",
        po.po_id,
        product_id,
        supplier.supplier_id,
        quantity,
        goal.value,
        choice.score,
    )

    return PlacedOrder(
        purchase_order=po,
        supplier=supplier,
        score=choice.score,
        goal=goal.value,
        message=(
            f"Order placed for {quantity} units of {product.name} from {supplier.name.rstrip('.')}. "
            f"Chosen for: {goal.value} optimization."
        ),
        chosen_supplier_reason=(
            f"Best score ({choice.score}) based on {goal.value}. Price: {choice.offer.price}, "
            f"Lead Time: {supplier.average_lead_time_days} days, "
            f"Reliability: {supplier.on_time_rate * 100:g}%."
        ),
    )


def _get_po(store: EntityStore, po_id: str) -> PurchaseOrder:
    if not po_id:
        raise InvalidArgument("Invalid request: po_id is required.")
    po = store.get_purchase_order(po_id)
    if po is None:
        raise NotFound(f"Purchase order {po_id} not found.", errors.PURCHASE_ORDER_NOT_FOUND)
    return po


def mark_shipped(store: EntityStore, po_id: str) -> PurchaseOrder:
    with store.lock:
        po = _get_po(store, po_id)
        if po.status == DELIVERED:
            raise InvalidArgument(f"Purchase order {po_id} was already delivered.")
        updated = replace(po, status=SHIPPED)
        store.update_purchase_order(updated)
    logger.info("order_shipped po=%s", po_id)
    return updated


def confirm_delivery(
    store: EntityStore,
    po_id: str,
    delivered_at: Optional[datetime] = None,
    *,
    now: datetime,
) -> PurchaseOrder:
    """Close ``po_id`` as delivered and book its quantity into stock."""
    delivered_at = delivered_at or now
    if delivered_at.tzinfo is None:
        delivered_at = delivered_at.replace(tzinfo=timezone.utc)

    # status check and stock booking must happen under one lock hold
    with store.lock:
        po = _get_po(store, po_id)
        if po.status == DELIVERED:
            raise InvalidArgument(f"Purchase order {po_id} was already delivered.")
        if delivered_at < parse_timestamp(po.order_date):
            raise InvalidArgument("Delivery date cannot precede the order date.")
        updated = replace(po, status=DELIVERED, actual_delivery_date=to_iso(delivered_at))
        adjust_stock(store, po.product_id, po.quantity_ordered, now=now)
        store.update_purchase_order(updated)
    logger.info("delivery_confirmed po=%s product=%s qty=%s", po_id, po.product_id, po.quantity_ordered)
    return updated
