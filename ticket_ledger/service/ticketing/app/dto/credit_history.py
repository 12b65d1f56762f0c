"""Credit history read models."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from ticket_ledger.service.ticketing.domain.entity.credit_transaction_entity import (
    CreditTransaction,
)
from ticket_ledger.service.ticketing.domain.value_object.credit_label import label_for
from ticket_ledger.service.ticketing.domain.value_object.pagination import Pagination


@attrs.define(frozen=True)
class OrderReference:
    purchase_id: int
    order_number: str


@attrs.define(frozen=True)
class CreditHistoryEntry:
    """
    One ledger row decorated for display.

    purchase_id / order_number are filled only for entries that point at
    a payment and whose purchase could be resolved.
    """

    id: int
    amount: Decimal
    type: str
    type_label: str
    action_text: str
    is_addition: bool
    created_at: Optional[datetime]
    description: Optional[str] = None
    reference_type: Optional[str] = None
    reference_id: Optional[int] = None
    purchase_id: Optional[int] = None
    order_number: Optional[str] = None

    @classmethod
    def from_transaction(
        cls, transaction: CreditTransaction, *, order: Optional[OrderReference] = None
    ) -> 'CreditHistoryEntry':
        label = label_for(transaction.type)
        return cls(
            id=transaction.id or 0,
            amount=transaction.amount,
            type=transaction.type,
            type_label=label.type_label,
            action_text=label.action_text(transaction.amount),
            is_addition=transaction.is_addition,
            created_at=transaction.created_at,
            description=transaction.description,
            reference_type=transaction.reference_type,
            reference_id=transaction.reference_id,
            purchase_id=order.purchase_id if order else None,
            order_number=order.order_number if order else None,
        )


@attrs.define(frozen=True)
class CreditHistoryPage:
    entries: tuple[CreditHistoryEntry, ...]
    pagination: Pagination
