from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from . import errors
from .errors import InvalidArgument, NotFound
from .ids import IdGenerator, to_iso
from .models import ReturnTicket, StockRecord
from .store import EntityStore

logger = logging.getLogger(__name__)


def adjust_stock(store: EntityStore, product_id: str, change: int, *, now: datetime) -> StockRecord:
    with store.lock:
        rec = store.get_stock(product_id)
        if rec is None:
            raise NotFound(f"No stock record for product {product_id}.", errors.PRODUCT_NOT_FOUND)
        new_qty = rec.quantity_on_hand + change
        if new_qty < 0:
            raise InvalidArgument(
                f"Stock for {product_id} cannot go below zero (on hand {rec.quantity_on_hand}, change {change})."
            )
        updated = replace(rec, quantity_on_hand=new_qty, last_updated=to_iso(now))
        store.update_stock(updated)
    logger.info("stock_adjusted product=%s change=%s on_hand=%s", product_id, change, new_qty)
    return updated


def record_return(
    store: EntityStore,
    product_id: str,
    quantity_returned: int,
    reason: str,
    supplier_id: Optional[str] = None,
    *,
    ids: IdGenerator,
    now: datetime,
) -> ReturnTicket:
    if not product_id or not reason:
        raise InvalidArgument("Invalid request: product_id and return_reason are required.")
    if isinstance(quantity_returned, bool) or not isinstance(quantity_returned, int) or quantity_returned <= 0:
        raise InvalidArgument("Invalid request: quantity_returned must be a positive integer.")
    if store.get_product(product_id) is None:
        raise NotFound("Product not found.", errors.PRODUCT_NOT_FOUND)

    ticket = ReturnTicket(
        return_id=ids.next_id(),
        product_id=product_id,
        quantity_returned=quantity_returned,
        return_reason=reason,
        return_date=to_iso(now),
        supplier_id=supplier_id or None,
    )
    store.append_return(ticket)
    logger.info("return_recorded id=%s product=%s qty=%s", ticket.return_id, product_id, quantity_returned)
    return ticket
