from __future__ import annotations

import enum
import logging
import math
from typing import Iterable, Optional, Union

from .errors import InvalidArgument
from .models import SupplierChoice, Supplier

logger = logging.getLogger(__name__)


class OptimizationGoal(str, enum.Enum):
    COST = "cost"
    SPEED = "speed"
    RELIABILITY = "reliability"
    BALANCE = "balance"


def parse_goal(value: Union[str, OptimizationGoal, None]) -> OptimizationGoal:
    if value is None or value == "":
        return OptimizationGoal.BALANCE
    if isinstance(value, OptimizationGoal):
        return value
    try:
        return OptimizationGoal(str(value).lower())
    except ValueError:
        choices = ", ".join(g.value for g in OptimizationGoal)
        raise InvalidArgument(f"Unknown optimization goal '{value}'. Expected one of: {choices}.") from None


def _inverse(numerator: float, value: float) -> float:
    # float division semantics: a zero lead time is infinitely fast
    if value == 0:
        return math.inf
    return numerator / value


def score_offer(goal: OptimizationGoal, price: float, lead_time: float, reliability: float) -> float:
    """Higher is better. Each goal has one dominant term plus small
    corrections from the other two factors so that ties are rare."""
    if goal is OptimizationGoal.COST:
        return _inverse(1000, price) + reliability * 10 + (100 - lead_time) / 10
    if goal is OptimizationGoal.SPEED:
        return _inverse(1000, lead_time) + reliability * 10 + _inverse(1000, price) / 100
    if goal is OptimizationGoal.RELIABILITY:
        return reliability * 1000 + _inverse(1000, price) / 100 + (100 - lead_time) / 10
    return reliability * 500 + _inverse(1000, price) + _inverse(100, lead_time)


def select_supplier(
    product_id: str,
    quantity: int,
    goal: Union[str, OptimizationGoal, None],
    eligible_suppliers: Iterable[Supplier],
) -> Optional[SupplierChoice]:
    """Pick the best supplier able to take an order of ``quantity`` units.

    Suppliers whose MOQ exceeds the quantity are dropped, not penalised.
    On equal scores the supplier seen first wins.
    """
    goal = parse_goal(goal)
    best: Optional[SupplierChoice] = None

    for supplier in eligible_suppliers:
        offer = supplier.offer_for(product_id)
        if offer is None:
            continue
        if quantity < offer.moq:
            logger.warning(
                "supplier_skipped supplier=%s product=%s moq=%s requested=%s",
                supplier.supplier_id,
                product_id,
                offer.moq,
                quantity,
            )
            continue
        score = score_offer(goal, offer.price, supplier.average_lead_time_days, supplier.on_time_rate)
        if best is None or score > best.score:
            best = SupplierChoice(supplier=supplier, score=score, offer=offer)

    return best
