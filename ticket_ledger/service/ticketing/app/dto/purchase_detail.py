"""Purchase read models."""

from typing import Optional

import attrs

from ticket_ledger.service.ticketing.domain.entity.event_entity import Event
from ticket_ledger.service.ticketing.domain.entity.purchase_entity import Purchase, PurchaseItem
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_ledger.service.ticketing.domain.value_object.pagination import Pagination


CREDIT_PURCHASE_EVENT_NAME = 'Credit Purchase'


@attrs.define(frozen=True)
class PurchaseDetail:
    """
    A purchase with everything it owns, read in one transaction.

    event is the event of the first item; None when the purchase has no
    items (e.g. a credit top-up) or the event row is gone.
    """

    purchase: Purchase
    items: tuple[PurchaseItem, ...]
    event: Optional[Event]
    tickets: tuple[Ticket, ...]


@attrs.define(frozen=True)
class PurchaseSummary:
    purchase: Purchase
    event_name: str
    ticket_count: int


@attrs.define(frozen=True)
class PurchaseHistoryPage:
    purchases: tuple[PurchaseSummary, ...]
    pagination: Pagination
