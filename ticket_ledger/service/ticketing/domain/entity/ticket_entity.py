from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from ticket_ledger.platform.exception.exceptions import InvalidStatusError
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus


_NOT_REFUNDABLE_REASONS = {
    TicketStatus.CANCELLED: 'Ticket already has a pending cancellation',
    TicketStatus.CHECKED_IN: 'Ticket has already been used',
    TicketStatus.REFUNDED: 'Ticket has already been refunded',
}


@attrs.define
class Ticket:
    purchase_id: int
    event_id: int
    user_id: int
    ticket_type_name: str
    price: Decimal
    status: TicketStatus
    id: Optional[int] = None
    checked_in_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_checked_in(self) -> bool:
        return self.status == TicketStatus.CHECKED_IN

    def validate_can_request_refund(self) -> None:
        """
        Raises:
            InvalidStatusError: ticket is not in a refundable state
        """
        if self.status != TicketStatus.PURCHASED:
            raise InvalidStatusError(
                _NOT_REFUNDABLE_REASONS.get(
                    self.status, f'Ticket cannot be refunded from status {self.status}'
                )
            )
