"""Notification dispatcher that writes notifications to the log instead of delivering them."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)


class LoggingNotificationDispatcher(INotificationDispatcher):
    def __init__(self) -> None:
        self.sent_notifications: List[Dict[str, Any]] = []  # Kept for inspection in tests

    @Logger.io
    async def send_notification(self, *, kind: str, data: Dict[str, Any]) -> None:
        self.sent_notifications.append(
            {'kind': kind, 'data': data, 'sent_at': datetime.now(timezone.utc)}
        )
        Logger.base.info(f'📧 [NOTIFY] {kind}: {data}')
