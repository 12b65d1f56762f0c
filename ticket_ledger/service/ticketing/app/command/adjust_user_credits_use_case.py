from decimal import Decimal
from typing import Optional

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.exception.exceptions import ForbiddenError, NotFoundError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.command.record_credit_transaction_use_case import (
    RecordCreditTransactionUseCase,
)
from ticket_ledger.service.ticketing.app.interface.i_credit_transaction_repo import (
    ICreditTransactionRepo,
)
from ticket_ledger.service.ticketing.domain.enum.credit_transaction_type import (
    CreditTransactionType,
)
from ticket_ledger.service.ticketing.domain.enum.user_role import UserRole


class AdjustUserCreditsUseCase:
    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        credit_transaction_repo: ICreditTransactionRepo,
        record_credit_transaction: RecordCreditTransactionUseCase,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.credit_transaction_repo = credit_transaction_repo
        self.record_credit_transaction = record_credit_transaction

    @Logger.io
    async def execute(
        self,
        *,
        user_id: int,
        amount: Decimal | int | float | str,
        requester_role: str,
        description: Optional[str] = None,
        requester_id: Optional[int] = None,
    ) -> Decimal:
        """
        Manually add (positive amount) or deduct (negative amount) credits.

        Returns:
            The user's balance after the adjustment

        Raises:
            ForbiddenError: requester is not an admin
            InvalidAmountError: amount is zero or not a number
            NotFoundError: user does not exist
        """
        if requester_role != UserRole.ADMIN:
            raise ForbiddenError('Admin access required to adjust credits')

        async def _adjust(scope: Scope) -> Decimal:
            await self.record_credit_transaction.execute(
                scope=scope,
                user_id=user_id,
                amount=amount,
                type=CreditTransactionType.ADMIN_ADJUSTMENT,
                description=description or f'Manual adjustment by admin {requester_id}',
            )
            balance = await self.credit_transaction_repo.get_balance(user_id=user_id, scope=scope)
            if balance is None:
                raise NotFoundError(f'User {user_id} not found')
            return balance

        balance = await self.transaction_runner.run(_adjust)
        Logger.base.info(
            f'💳 [CREDITS] Admin adjusted user {user_id} by {amount}, balance {balance}'
        )
        return balance
