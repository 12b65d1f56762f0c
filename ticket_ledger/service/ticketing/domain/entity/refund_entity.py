from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs

from ticket_ledger.platform.exception.exceptions import InvalidStatusError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.domain.entity.purchase_entity import Purchase
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_ledger.service.ticketing.domain.enum.refund_status import (
    RefundSettlement,
    RefundStatus,
)
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus


DECIDABLE_STATUSES = (RefundStatus.COMPLETED, RefundStatus.REJECTED)


@attrs.define
class Refund:
    ticket_id: int
    purchase_id: int
    payment_method: str
    amount: Decimal
    previous_ticket_status: TicketStatus
    status: RefundStatus = RefundStatus.REQUESTED
    settlement: Optional[RefundSettlement] = None
    id: Optional[int] = None
    requested_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, ticket: Ticket, purchase: Purchase) -> 'Refund':
        """Open a refund request, snapshotting what the ticket was bought with"""
        ticket.validate_can_request_refund()
        if ticket.id is None or purchase.id is None:
            raise ValueError('Refund requires persisted ticket and purchase')
        return cls(
            ticket_id=ticket.id,
            purchase_id=purchase.id,
            payment_method=purchase.payment_method,
            amount=ticket.price,
            previous_ticket_status=ticket.status,
            status=RefundStatus.REQUESTED,
            requested_at=datetime.now(timezone.utc),
        )

    @property
    def is_open(self) -> bool:
        return self.status == RefundStatus.REQUESTED

    @staticmethod
    def parse_decision(decision: str) -> RefundStatus:
        """
        Raises:
            InvalidStatusError: decision is not completed / rejected
        """
        try:
            status = RefundStatus(decision)
        except ValueError:
            status = None
        if status not in DECIDABLE_STATUSES:
            raise InvalidStatusError(
                f'Invalid refund decision: {decision!r} (expected completed or rejected)'
            )
        return status
