from decimal import Decimal
from typing import Optional

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_credit_transaction_repo import (
    ICreditTransactionRepo,
)
from ticket_ledger.service.ticketing.domain.entity.credit_transaction_entity import (
    CreditTransaction,
)


class RecordCreditTransactionUseCase:
    """
    Append one entry to a user's credit ledger.

    The ledger row and the user's running balance move together: both
    writes go through the same scope, so they commit or roll back as one.
    Callers already inside a unit of work (refund approval, admin
    adjustment) pass their scope and the entry joins their transaction.
    """

    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        credit_transaction_repo: ICreditTransactionRepo,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.credit_transaction_repo = credit_transaction_repo

    @Logger.io
    async def execute(
        self,
        *,
        user_id: int,
        amount: Decimal | int | float | str,
        type: str,
        description: Optional[str] = None,
        reference_type: Optional[str] = None,
        reference_id: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> CreditTransaction:
        # Validate before touching the store; a zero amount never reaches the ledger
        transaction = CreditTransaction.create(
            user_id=user_id,
            amount=amount,
            type=type,
            description=description,
            reference_type=reference_type,
            reference_id=reference_id,
        )

        async def _append(unit_scope: Scope) -> CreditTransaction:
            return await self.credit_transaction_repo.append(
                scope=unit_scope, transaction=transaction
            )

        return await self.transaction_runner.run(_append, scope=scope)
