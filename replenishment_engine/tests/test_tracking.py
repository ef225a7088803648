"""Tests for effective PO status."""

from copy import deepcopy
from datetime import datetime, timedelta, timezone

import pytest

from replenishment_engine.errors import DataQualityError
from replenishment_engine.ids import to_iso
from replenishment_engine.models import Delayed, Delivered, OnSchedule, PurchaseOrder
from replenishment_engine.tracking import effective_status, parse_timestamp, status_report


def make_po(expected, status="pending", actual=None, po_id="PO-20250701-001") -> PurchaseOrder:
    return PurchaseOrder(
        po_id=po_id,
        supplier_id="S001",
        product_id="P001",
        quantity_ordered=50,
        order_date="2025-06-20T09:00:00Z",
        expected_delivery_date=expected if isinstance(expected, str) else to_iso(expected),
        actual_delivery_date=actual,
        status=status,
    )


class TestParseTimestamp:
    def test_zulu_suffix(self):
        assert parse_timestamp("2025-06-08T09:00:00Z") == datetime(2025, 6, 8, 9, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2025-06-08T09:00:00").tzinfo == timezone.utc

    @pytest.mark.parametrize("value", ["", None, "not a date", "2025-13-45"])
    def test_invalid(self, value):
        with pytest.raises(DataQualityError):
            parse_timestamp(value)


class TestEffectiveStatus:
    """Tests for effective_status."""

    def test_ten_days_overdue(self, now):
        result = effective_status(make_po(now - timedelta(days=10)), now)
        assert isinstance(result, Delayed)
        assert result.status == "delayed"
        assert result.days_overdue == 10
        assert result.message.startswith("PO is delayed by 10 days.")

    def test_shipped_can_be_delayed(self, now):
        result = effective_status(make_po(now - timedelta(days=2, hours=5), status="shipped"), now)
        assert isinstance(result, Delayed)
        assert result.days_overdue == 2

    def test_same_day_keeps_recorded_status(self, now):
        result = effective_status(make_po(now - timedelta(hours=3), status="shipped"), now)
        assert isinstance(result, OnSchedule)
        assert result.status == "shipped"
        assert result.message == "PO expected today or very soon."

    def test_future_expected_date(self, now):
        result = effective_status(make_po(now + timedelta(days=3)), now)
        assert result == OnSchedule(
            status="pending",
            message=f"PO is currently pending. Expected by {to_iso(now + timedelta(days=3))}.",
        )

    def test_expected_exactly_now_is_not_late(self, now):
        assert effective_status(make_po(now), now).status == "pending"

    def test_recorded_delayed_is_recomputed(self, now):
        late = effective_status(make_po(now - timedelta(days=4), status="delayed"), now)
        assert isinstance(late, Delayed) and late.days_overdue == 4
        later = effective_status(make_po(now + timedelta(days=1), status="delayed"), now)
        assert isinstance(later, OnSchedule) and later.status == "delayed"

    @pytest.mark.parametrize("offset_days", [-30, -1, 0, 5])
    def test_delivered_always_delivered(self, now, offset_days):
        po = make_po(now + timedelta(days=offset_days), status="delivered", actual="2025-07-01T10:00:00Z")
        result = effective_status(po, now)
        assert isinstance(result, Delivered)
        assert result.status == "delivered"
        assert result.message == "PO was delivered on 2025-07-01T10:00:00Z."

    def test_delivered_without_date(self, now):
        result = effective_status(make_po(now, status="delivered"), now)
        assert result.message == "PO was delivered on unknown date."

    def test_pure_function(self, now):
        po = make_po(now - timedelta(days=10))
        snapshot = deepcopy(po)
        first = effective_status(po, now)
        second = effective_status(po, now)
        assert first == second
        effective_status(po, now + timedelta(days=30))
        effective_status(po, now - timedelta(days=30))
        assert po == snapshot

    def test_naive_now_treated_as_utc(self, now):
        result = effective_status(make_po(now - timedelta(days=1)), now.replace(tzinfo=None))
        assert result.days_overdue == 1


class TestStatusReport:
    """Tests for status_report."""

    def test_invalid_dates_are_skipped(self, now, caplog):
        orders = [
            make_po(now - timedelta(days=10), po_id="PO-A"),
            make_po("garbage", po_id="PO-B"),
            make_po(now + timedelta(days=1), po_id="PO-C"),
        ]
        with caplog.at_level("WARNING", logger="replenishment_engine.tracking"):
            reports = status_report(orders, now)
        assert [r.purchase_order.po_id for r in reports] == ["PO-A", "PO-C"]
        assert "po=PO-B" in caplog.text

    def test_days_overdue_only_when_delayed(self, now):
        reports = status_report(
            [make_po(now - timedelta(days=10), po_id="PO-A"), make_po(now + timedelta(days=1), po_id="PO-C")],
            now,
        )
        delayed, on_time = (r.to_dict() for r in reports)
        assert delayed["current_status"] == "delayed"
        assert delayed["days_overdue"] == 10
        assert on_time["current_status"] == "pending"
        assert "days_overdue" not in on_time

    def test_report_fields(self, now):
        row = status_report([make_po(now + timedelta(days=1))], now)[0].to_dict()
        assert set(row) == {
            "po_id",
            "product_id",
            "supplier_id",
            "quantity_ordered",
            "order_date",
            "expected_delivery_date",
            "current_status",
            "message",
        }
