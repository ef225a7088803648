from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from . import config, data, loader
from .errors import DataQualityError, InvalidArgument, NotFound
from .logging_setup import configure_logging
from .models import PlacedOrder, PurchaseOrder
from .notify import WebhookNotifier
from .service import ReplenishmentService

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Replenishment Engine", version="0.3.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class CreateOrderRequest(BaseModel):
    product_id: str = ""
    quantity: Any = None
    optimization_goal: Optional[str] = None


class SupplierReminderRequest(BaseModel):
    po_id: str = ""
    supplier_id: str = ""
    message: Optional[str] = None


class DeliveryRequest(BaseModel):
    delivered_at: Optional[datetime] = None


class ReturnRequest(BaseModel):
    product_id: str = ""
    quantity_returned: Any = None
    return_reason: str = ""
    supplier_id: Optional[str] = None


class StockAdjustRequest(BaseModel):
    change: int


def _build_service() -> ReplenishmentService:
    if config.DATA_DIR:
        store = loader.load_store(config.DATA_DIR)
        logger.info("data_loaded dir=%s", config.DATA_DIR)
    else:
        store = data.sample_store()
    notifier = None
    if config.REMINDER_WEBHOOK_URL:
        notifier = WebhookNotifier(config.REMINDER_WEBHOOK_URL, timeout=config.REMINDER_WEBHOOK_TIMEOUT)
    return ReplenishmentService(store, notifier=notifier)


# Simple in-memory state shared across requests
current_service: ReplenishmentService = _build_service()


def get_service() -> ReplenishmentService:
    return current_service


def _placed_order_to_dict(placed: PlacedOrder) -> dict:
    out = asdict(placed.purchase_order)
    out["message"] = placed.message
    out["chosen_supplier_reason"] = placed.chosen_supplier_reason
    return out


def _po_to_dict(po: PurchaseOrder) -> dict:
    return asdict(po)


@app.exception_handler(InvalidArgument)
async def _invalid_argument(request: Request, exc: InvalidArgument):
    return JSONResponse({"error": exc.message}, status_code=400)


@app.exception_handler(NotFound)
async def _not_found(request: Request, exc: NotFound):
    logger.info("not_found path=%s reason=%s", request.url.path, exc.reason)
    return JSONResponse({"error": exc.message}, status_code=404)


@app.exception_handler(DataQualityError)
async def _data_quality(request: Request, exc: DataQualityError):
    logger.warning("data_quality path=%s detail=%s", request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=422)


HTML_PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Replenishment Engine</title>
  <style>
    body { font-family: sans-serif; background: #0f172a; color: #e2e8f0; margin: 2rem; }
    table { border-collapse: collapse; margin-bottom: 2rem; }
    td, th { border: 1px solid #334155; padding: 0.3rem 0.6rem; }
    .delayed { color: #f87171; }
  </style>
</head>
<body>
  <h1>Replenishment Engine</h1>
  <h2>Reorder suggestions</h2>
  <table id="suggestions"><tr><th>Product</th><th>On hand</th><th>Reorder point</th><th>Suggested qty</th></tr></table>
  <h2>Purchase orders</h2>
  <table id="orders"><tr><th>PO</th><th>Product</th><th>Supplier</th><th>Status</th><th>Message</th></tr></table>
  <script>
    function addRow(table, cells, cls) {
      const tr = document.createElement('tr');
      if (cls) tr.className = cls;
      cells.forEach(c => { const td = document.createElement('td'); td.textContent = c; tr.appendChild(td); });
      table.appendChild(tr);
    }
    fetch('/api/inventory/reorder-suggestions').then(r => r.json()).then(rows => {
      const t = document.getElementById('suggestions');
      rows.forEach(s => addRow(t, [s.product_name, s.current_quantity_on_hand, s.calculated_reorder_point, s.suggested_order_quantity]));
    });
    fetch('/api/inventory/check-po-status').then(r => r.json()).then(rows => {
      const t = document.getElementById('orders');
      rows.forEach(p => addRow(t, [p.po_id, p.product_id, p.supplier_id, p.current_status, p.message], p.current_status));
    });
  </script>
</body>
</html>
"""


@app.get("/", response_class=HTMLResponse)
async def index():
    return HTML_PAGE


@app.get("/api/inventory/reorder-suggestions")
def reorder_suggestions(service: ReplenishmentService = Depends(get_service)):
    return [asdict(s) for s in service.get_reorder_suggestions()]


@app.post("/api/inventory/create-order")
def create_order(body: CreateOrderRequest, service: ReplenishmentService = Depends(get_service)):
    placed = service.place_order(body.product_id, body.quantity, body.optimization_goal)
    return _placed_order_to_dict(placed)


@app.get("/api/inventory/check-po-status")
def check_po_status(service: ReplenishmentService = Depends(get_service)):
    return [report.to_dict() for report in service.get_po_status_report()]


@app.post("/api/inventory/send-supplier-reminder")
def send_supplier_reminder(body: SupplierReminderRequest, service: ReplenishmentService = Depends(get_service)):
    reminder = service.send_supplier_reminder(body.po_id, body.supplier_id, body.message)
    out = asdict(reminder)
    out["reminder_message"] = reminder.message
    out["message"] = (
        f"Reminder {reminder.reminder_id} successfully sent to supplier {reminder.supplier_id} "
        f"for PO {reminder.po_id}."
    )
    return out


@app.post("/api/inventory/purchase-orders/{po_id}/ship")
def ship_purchase_order(po_id: str, service: ReplenishmentService = Depends(get_service)):
    return _po_to_dict(service.mark_shipped(po_id))


@app.post("/api/inventory/purchase-orders/{po_id}/deliver")
def deliver_purchase_order(
    po_id: str,
    body: Optional[DeliveryRequest] = None,
    service: ReplenishmentService = Depends(get_service),
):
    delivered_at = body.delivered_at if body else None
    return _po_to_dict(service.confirm_delivery(po_id, delivered_at))


@app.get("/api/inventory/purchase-orders/{po_id}/po.pdf")
def purchase_order_pdf(po_id: str, service: ReplenishmentService = Depends(get_service)):
    pdf_bytes = service.purchase_order_document(po_id)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{po_id}.pdf"'},
    )


@app.post("/api/inventory/returns")
def create_return(body: ReturnRequest, service: ReplenishmentService = Depends(get_service)):
    ticket = service.record_return(body.product_id, body.quantity_returned, body.return_reason, body.supplier_id)
    return asdict(ticket)


@app.post("/api/inventory/stock/{product_id}/adjust")
def adjust_stock(product_id: str, body: StockAdjustRequest, service: ReplenishmentService = Depends(get_service)):
    return asdict(service.adjust_stock(product_id, body.change))
