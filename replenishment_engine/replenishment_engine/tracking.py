from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .errors import DataQualityError
from .models import (
    DELIVERED,
    Delayed,
    Delivered,
    OnSchedule,
    PoStatusReport,
    PurchaseOrder,
    StatusAssessment,
)

logger = logging.getLogger(__name__)


def parse_timestamp(value: Optional[str]) -> datetime:
    if not value or not isinstance(value, str):
        raise DataQualityError(f"invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        ts = datetime.fromisoformat(text)
    except ValueError:
        raise DataQualityError(f"invalid timestamp: {value!r}") from None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def effective_status(po: PurchaseOrder, now: datetime) -> StatusAssessment:
    """Status of ``po`` as observed at ``now``. Never touches ``po``.

    Raises DataQualityError when the expected delivery date cannot be read.
    """
    expected = parse_timestamp(po.expected_delivery_date)

    if po.status == DELIVERED:
        delivered_on = po.actual_delivery_date
        return Delivered(
            delivered_on=delivered_on,
            message=f"PO was delivered on {delivered_on or 'unknown date'}.",
        )

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if expected < now:
        days_overdue = (now - expected).days
        if days_overdue > 0:
            return Delayed(
                days_overdue=days_overdue,
                message=f"PO is delayed by {days_overdue} days. Expected by {po.expected_delivery_date}.",
            )
        # same-day boundary: keep the recorded status
        return OnSchedule(status=po.status, message="PO expected today or very soon.")

    return OnSchedule(
        status=po.status,
        message=f"PO is currently {po.status}. Expected by {po.expected_delivery_date}.",
    )


def status_report(purchase_orders: Iterable[PurchaseOrder], now: datetime) -> List[PoStatusReport]:
    reports: List[PoStatusReport] = []
    for po in purchase_orders:
        try:
            assessment = effective_status(po, now)
        except DataQualityError as exc:
            logger.warning("invalid_expected_delivery_date po=%s detail=%s skipped", po.po_id, exc)
            continue
        reports.append(PoStatusReport(purchase_order=po, assessment=assessment))
    return reports
