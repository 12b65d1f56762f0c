"""
Shared builders for ticketing unit tests

Use cases receive an ImmediateTransactionRunner: it hands each unit of work
a stand-in scope without any database, so tests only see repository calls.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Awaitable, Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import attrs

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.service.ticketing.domain.entity.credit_transaction_entity import (
    CreditTransaction,
)
from ticket_ledger.service.ticketing.domain.entity.event_entity import Event
from ticket_ledger.service.ticketing.domain.entity.purchase_entity import Purchase
from ticket_ledger.service.ticketing.domain.entity.refund_entity import Refund
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus


class ImmediateTransactionRunner:
    """Runs units of work against a fake scope and records how many were opened."""

    def __init__(self) -> None:
        self.scope = MagicMock(spec=Scope)
        self.opened = 0
        self.joined = 0

    async def run(
        self, unit_of_work: Callable[[Any], Awaitable[Any]], *, scope: Optional[Any] = None
    ) -> Any:
        if scope is not None:
            self.joined += 1
            return await unit_of_work(scope)
        self.opened += 1
        return await unit_of_work(self.scope)


@attrs.define
class RepositoryMocks:
    credit_transaction_repo: AsyncMock = attrs.field(factory=AsyncMock)
    ticket_repo: AsyncMock = attrs.field(factory=AsyncMock)
    refund_repo: AsyncMock = attrs.field(factory=AsyncMock)
    purchase_repo: AsyncMock = attrs.field(factory=AsyncMock)
    event_query_repo: AsyncMock = attrs.field(factory=AsyncMock)
    notification_dispatcher: AsyncMock = attrs.field(factory=AsyncMock)


def make_ticket(
    *,
    id: int = 10,
    status: TicketStatus = TicketStatus.PURCHASED,
    user_id: int = 1,
    purchase_id: int = 100,
    event_id: int = 5,
    price: Decimal = Decimal('50.00'),
) -> Ticket:
    return Ticket(
        id=id,
        purchase_id=purchase_id,
        event_id=event_id,
        user_id=user_id,
        ticket_type_name='General Admission',
        price=price,
        status=status,
    )


def make_purchase(
    *,
    id: int = 100,
    user_id: int = 1,
    payment_method: str = 'credits',
    order_number: str = 'ORD-000100',
) -> Purchase:
    return Purchase(
        id=id,
        user_id=user_id,
        order_number=order_number,
        total=Decimal('50.00'),
        payment_method=payment_method,
    )


def make_event(
    *,
    id: int = 5,
    starts_in: timedelta = timedelta(days=30),
    cancellation_policy: Optional[str] = None,
) -> Event:
    return Event(
        id=id,
        name='Summer Fest',
        venue='Riverside Park',
        starts_at=datetime.now(timezone.utc) + starts_in,
        cancellation_policy=cancellation_policy,
    )


def make_refund(
    *,
    id: int = 7,
    ticket_id: int = 10,
    purchase_id: int = 100,
    payment_method: str = 'credits',
    amount: Decimal = Decimal('50.00'),
    previous_ticket_status: TicketStatus = TicketStatus.PURCHASED,
) -> Refund:
    return Refund(
        id=id,
        ticket_id=ticket_id,
        purchase_id=purchase_id,
        payment_method=payment_method,
        amount=amount,
        previous_ticket_status=previous_ticket_status,
    )


def make_credit_transaction(
    *,
    id: int = 1,
    user_id: int = 1,
    amount: str = '10.00',
    type: str = 'bonus',
    reference_type: Optional[str] = None,
    reference_id: Optional[int] = None,
) -> CreditTransaction:
    return CreditTransaction(
        id=id,
        user_id=user_id,
        amount=Decimal(amount),
        type=type,
        reference_type=reference_type,
        reference_id=reference_id,
        created_at=datetime.now(timezone.utc),
    )
