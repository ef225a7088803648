from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from .errors import InvalidArgument
from .ids import IdGenerator, to_iso
from .models import SupplierReminder
from .store import EntityStore

logger = logging.getLogger(__name__)


def default_message(po_id: str) -> str:
    return f"Urgent: Following up on delayed Purchase Order {po_id}. Please provide an update."


def record_reminder(
    store: EntityStore,
    po_id: str,
    supplier_id: str,
    message: Optional[str] = None,
    *,
    ids: IdGenerator,
    now: datetime,
) -> SupplierReminder:
    # ids are taken on trust; the PO and supplier are not looked up
    if not po_id or not supplier_id:
        raise InvalidArgument("Invalid request: po_id and supplier_id are required.")
    reminder = SupplierReminder(
        reminder_id=ids.next_id(),
        po_id=po_id,
        supplier_id=supplier_id,
        message=message or default_message(po_id),
        sent_at=to_iso(now),
    )
    store.append_reminder(reminder)
    logger.info(
        "reminder_recorded id=%s po=%s supplier=%s message=%r",
        reminder.reminder_id,
        po_id,
        supplier_id,
        reminder.message,
    )
    return reminder
