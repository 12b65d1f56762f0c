from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

import attrs

from ticket_ledger.platform.exception.exceptions import DomainError, InvalidAmountError
from ticket_ledger.platform.logging.loguru_io import Logger


_CENT = Decimal('0.01')
# Largest magnitude a NUMERIC(12, 2) column holds
MAX_MONEY = Decimal('9999999999.99')


def to_money(value: Decimal | int | float | str) -> Decimal:
    """
    Raises:
        InvalidAmountError: value is not a finite number or exceeds MAX_MONEY
    """
    try:
        amount = Decimal(str(value))
        if not amount.is_finite():
            raise InvalidAmountError(f'Invalid credit amount: {value!r}')
        money = amount.quantize(_CENT)
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(f'Invalid credit amount: {value!r}') from e
    if abs(money) > MAX_MONEY:
        raise InvalidAmountError(f'Credit amount out of range: {value!r}')
    return money


@attrs.define(frozen=True)
class CreditTransaction:
    """One immutable ledger row. Positive amounts add credit, negative amounts spend it."""

    user_id: int
    amount: Decimal
    type: str
    description: Optional[str] = None
    reference_type: Optional[str] = None
    reference_id: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        amount: Decimal | int | float | str,
        type: str,
        description: Optional[str] = None,
        reference_type: Optional[str] = None,
        reference_id: Optional[int] = None,
    ) -> 'CreditTransaction':
        money = to_money(amount)
        if money == 0:
            raise InvalidAmountError('Credit transaction amount must be non-zero')
        if not type:
            raise DomainError('Credit transaction type is required')
        return cls(
            user_id=user_id,
            amount=money,
            type=type,
            description=description,
            reference_type=reference_type,
            reference_id=reference_id,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_addition(self) -> bool:
        return self.amount > 0
