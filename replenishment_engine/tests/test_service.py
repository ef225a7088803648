"""Tests for ReplenishmentService, the reminder webhook and the CLI."""

import json
from unittest.mock import MagicMock, patch

import requests

from replenishment_engine import run
from replenishment_engine.models import SupplierReminder
from replenishment_engine.notify import WebhookNotifier


class TestReplenishmentService:
    def test_default_id_generators_continue_store_counts(self, store):
        from replenishment_engine.service import ReplenishmentService

        service = ReplenishmentService(store)
        po_id = service.place_order("P001", 50).purchase_order.po_id
        assert po_id.startswith("PO-") and po_id.endswith("-003")

    def test_status_report_uses_clock(self, service):
        reports = service.get_po_status_report()
        assert [r.assessment.status for r in reports] == ["delayed", "delayed"]

    def test_notifier_receives_reminder(self, service):
        notifier = MagicMock()
        service.notifier = notifier
        reminder = service.send_supplier_reminder("PO-20250601-001", "S001")
        notifier.send.assert_called_once_with(reminder)

    def test_suggestions_shrink_after_delivery(self, service):
        before = [s.product_id for s in service.get_reorder_suggestions()]
        placed = service.place_order("P002", 10)
        assert [s.product_id for s in service.get_reorder_suggestions()] == before
        service.confirm_delivery(placed.purchase_order.po_id)
        assert "P002" not in [s.product_id for s in service.get_reorder_suggestions()]


class TestWebhookNotifier:
    def _reminder(self):
        return SupplierReminder("REM-1", "PO-1", "S001", "hello", "2025-07-14T12:00:00Z")

    def test_posts_json(self):
        with patch("replenishment_engine.notify.requests.post") as post:
            post.return_value = MagicMock(status_code=200, text="")
            assert WebhookNotifier("http://hooks.test/reminders/", timeout=3).send(self._reminder())
        post.assert_called_once()
        args, kwargs = post.call_args
        assert args[0] == "http://hooks.test/reminders"
        assert kwargs["json"]["reminder_id"] == "REM-1"
        assert kwargs["timeout"] == 3

    def test_error_status_is_logged(self, caplog):
        with patch("replenishment_engine.notify.requests.post") as post:
            post.return_value = MagicMock(status_code=500, text="boom")
            assert WebhookNotifier("http://hooks.test").send(self._reminder()) is False
        assert "status=500" in caplog.text

    def test_transport_error_is_logged(self, caplog):
        with patch("replenishment_engine.notify.requests.post", side_effect=requests.ConnectionError("down")):
            assert WebhookNotifier("http://hooks.test").send(self._reminder()) is False
        assert "reminder_webhook_error" in caplog.text


class TestCli:
    def test_suggestions_writes_report(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(run.config, "OUTPUT_DIR", tmp_path)
        assert run.main(["suggestions"]) == 0
        written = json.loads((tmp_path / "reorder_suggestions.json").read_text())
        assert [row["product_id"] for row in written] == ["P002", "P003", "P004"]
        assert "report written to" in capsys.readouterr().out

    def test_order_error_exit_code(self, capsys):
        assert run.main(["order", "P003", "50"]) == 1
        assert "meeting MOQs" in capsys.readouterr().err

    def test_remind(self, capsys):
        assert run.main(["remind", "PO-20250601-001", "S001", "--message", "ping"]) == 0
        assert json.loads(capsys.readouterr().out)["message"] == "ping"

    def test_missing_data_dir_reports_error(self, tmp_path, capsys):
        assert run.main(["--data-dir", str(tmp_path / "missing"), "suggestions"]) == 1
        assert "error=data directory not found" in capsys.readouterr().err
