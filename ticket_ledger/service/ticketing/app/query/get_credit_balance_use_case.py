from decimal import Decimal

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.exception.exceptions import NotFoundError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_credit_transaction_repo import (
    ICreditTransactionRepo,
)


class GetCreditBalanceUseCase:
    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        credit_transaction_repo: ICreditTransactionRepo,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.credit_transaction_repo = credit_transaction_repo

    @Logger.io
    async def execute(self, *, user_id: int) -> Decimal:
        async def _read(scope: Scope) -> Decimal | None:
            return await self.credit_transaction_repo.get_balance(scope=scope, user_id=user_id)

        balance = await self.transaction_runner.run(_read)
        if balance is None:
            raise NotFoundError(f'User {user_id} not found')
        return balance
