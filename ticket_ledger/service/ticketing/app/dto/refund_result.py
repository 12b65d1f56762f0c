from typing import Tuple

import attrs

from ticket_ledger.service.ticketing.domain.entity.refund_entity import Refund
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_ledger.service.ticketing.domain.value_object.pagination import Pagination


@attrs.define(frozen=True)
class ApproveRefundResult:
    """State of the ticket and its refund as committed by the approval."""

    ticket: Ticket
    refund: Refund
    message: str


@attrs.define(frozen=True)
class PendingRefundsPage:
    refunds: Tuple[Refund, ...]
    pagination: Pagination
