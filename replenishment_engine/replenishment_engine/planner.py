from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence

from .models import Product, ReorderSuggestion, StockRecord, Supplier

logger = logging.getLogger(__name__)

DEFAULT_LEAD_TIME_DAYS = 7


def eligible_suppliers_for(product_id: str, suppliers: Iterable[Supplier]) -> List[Supplier]:
    return [s for s in suppliers if s.offer_for(product_id) is not None]


def _stock_lookup(stock: Iterable[StockRecord]) -> Dict[str, StockRecord]:
    lookup: Dict[str, StockRecord] = {}
    for rec in stock:
        lookup[rec.product_id] = rec
    return lookup


def average_lead_time(suppliers: Sequence[Supplier], default: int = DEFAULT_LEAD_TIME_DAYS) -> int:
    if not suppliers:
        return default
    total = sum(s.average_lead_time_days for s in suppliers)
    return math.ceil(total / len(suppliers))


def reorder_point(average_daily_sales: float, lead_time_days: int, safety_stock_fraction: float) -> int:
    """Units needed to cover demand over the lead time plus a safety buffer
    of ``safety_stock_fraction`` days of demand."""
    return math.ceil(
        average_daily_sales * lead_time_days + average_daily_sales * safety_stock_fraction
    )


def minimum_moq(product_id: str, suppliers: Iterable[Supplier]) -> int:
    moqs = [s.offers[product_id].moq for s in suppliers if product_id in s.offers]
    return min(moqs) if moqs else 1


def suggest_reorder(
    product: Product,
    stock_record: StockRecord,
    eligible_suppliers: Sequence[Supplier],
    default_lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
) -> Optional[ReorderSuggestion]:
    if not eligible_suppliers:
        logger.warning(
            "no_supplier product=%s default_lead_time_days=%s", product.product_id, default_lead_time_days
        )
    avg_lead = average_lead_time(eligible_suppliers, default_lead_time_days)
    # zero-day suppliers would otherwise shrink the lead window to nothing
    effective_lead = max(1, avg_lead)

    on_hand = stock_record.quantity_on_hand
    point = reorder_point(product.average_daily_sales, effective_lead, product.safety_stock_fraction)
    if on_hand >= point:
        return None

    qty = point - on_hand
    if qty <= 0:
        qty = 1
    qty = max(qty, minimum_moq(product.product_id, eligible_suppliers))

    return ReorderSuggestion(
        product_id=product.product_id,
        product_name=product.name,
        current_quantity_on_hand=on_hand,
        average_daily_sales=product.average_daily_sales,
        avg_lead_time_days=avg_lead,
        safety_stock_fraction=product.safety_stock_fraction,
        calculated_reorder_point=point,
        suggested_order_quantity=qty,
        reason=f"Current stock ({on_hand}) is below calculated reorder point ({point}).",
    )


def reorder_suggestions(
    products: Iterable[Product],
    stock: Iterable[StockRecord],
    suppliers: Iterable[Supplier],
    default_lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
) -> List[ReorderSuggestion]:
    stock_map = _stock_lookup(stock)
    supplier_list = list(suppliers)
    suggestions: List[ReorderSuggestion] = []

    for product in products:
        rec = stock_map.get(product.product_id)
        if rec is None:
            logger.warning("no_stock_record product=%s skipped", product.product_id)
            continue
        eligible = eligible_suppliers_for(product.product_id, supplier_list)
        suggestion = suggest_reorder(product, rec, eligible, default_lead_time_days)
        if suggestion is not None:
            suggestions.append(suggestion)

    return suggestions
