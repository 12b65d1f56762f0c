from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

import attrs

from ticket_ledger.service.ticketing.domain.enum.purchase_status import PurchaseStatus
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus


@attrs.define
class PurchaseItem:
    purchase_id: int
    event_id: int
    ticket_type_name: str
    quantity: int
    unit_price: Decimal
    id: Optional[int] = None

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@attrs.define
class Purchase:
    user_id: int
    order_number: str
    total: Decimal
    payment_method: str
    status: PurchaseStatus = PurchaseStatus.COMPLETED
    payment_reference: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def is_visible_to(self, *, requester_id: int, is_admin: bool) -> bool:
        return is_admin or self.user_id == requester_id

    @staticmethod
    def rollup_status(ticket_statuses: Iterable[TicketStatus]) -> PurchaseStatus:
        """
        Derive the purchase status from its tickets after a refund settles.

        All tickets refunded -> refunded, some -> partially_refunded,
        none -> completed.
        """
        statuses = list(ticket_statuses)
        refunded = sum(1 for status in statuses if status == TicketStatus.REFUNDED)
        if statuses and refunded == len(statuses):
            return PurchaseStatus.REFUNDED
        if refunded:
            return PurchaseStatus.PARTIALLY_REFUNDED
        return PurchaseStatus.COMPLETED
