from __future__ import annotations

import logging
from dataclasses import asdict

import requests

from .models import SupplierReminder

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """Forwards recorded reminders to an HTTP endpoint.

    Delivery is best effort: the reminder is already in the store when
    ``send`` runs, so failures are logged and reported as ``False``.
    """

    def __init__(self, url: str, timeout: float = 10):
        self.url = url.rstrip("/")
        self.timeout = timeout

    def send(self, reminder: SupplierReminder) -> bool:
        try:
            response = requests.post(self.url, json=asdict(reminder), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("reminder_webhook_error reminder=%s detail=%s", reminder.reminder_id, exc)
            return False
        if response.status_code not in (200, 201, 202, 204):
            snippet = response.text[:200] if response.text else ""
            logger.warning(
                "reminder_webhook_error reminder=%s status=%s detail=%s",
                reminder.reminder_id,
                response.status_code,
                snippet,
            )
            return False
        return True
