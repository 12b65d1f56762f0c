from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.platform.exception.exceptions import NotFoundError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_credit_transaction_repo import (
    ICreditTransactionRepo,
)
from ticket_ledger.service.ticketing.domain.entity.credit_transaction_entity import (
    CreditTransaction,
)
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest
from ticket_ledger.service.ticketing.driven_adapter.model.credit_transaction_model import (
    CreditTransactionModel,
)
from ticket_ledger.service.ticketing.driven_adapter.model.user_model import UserModel


class CreditTransactionRepoImpl(ICreditTransactionRepo):
    @staticmethod
    def _to_entity(db_transaction: CreditTransactionModel) -> CreditTransaction:
        return CreditTransaction(
            id=db_transaction.id,
            user_id=db_transaction.user_id,
            amount=Decimal(db_transaction.amount),
            type=db_transaction.type,
            description=db_transaction.description,
            reference_type=db_transaction.reference_type,
            reference_id=db_transaction.reference_id,
            created_at=db_transaction.created_at,
        )

    @Logger.io
    async def get_balance(self, *, scope: Scope, user_id: int) -> Optional[Decimal]:
        result = await scope.session.execute(
            select(UserModel.credits).where(UserModel.id == user_id)
        )
        credits = result.scalar_one_or_none()
        return None if credits is None else Decimal(credits)

    @Logger.io
    async def append(self, *, scope: Scope, transaction: CreditTransaction) -> CreditTransaction:
        session = scope.session

        # Balance first: on PostgreSQL this row lock orders concurrent ledger writes per user
        result = await session.execute(
            update(UserModel)
            .where(UserModel.id == transaction.user_id)
            .values(credits=UserModel.credits + transaction.amount)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundError(f'User {transaction.user_id} not found')

        db_transaction = CreditTransactionModel(
            user_id=transaction.user_id,
            amount=transaction.amount,
            type=transaction.type,
            description=transaction.description,
            reference_type=transaction.reference_type,
            reference_id=transaction.reference_id,
            created_at=transaction.created_at,
        )
        session.add(db_transaction)
        await session.flush()
        return CreditTransactionRepoImpl._to_entity(db_transaction)

    @Logger.io
    async def list_for_user(
        self, *, scope: Scope, user_id: int, page_request: PageRequest
    ) -> Tuple[List[CreditTransaction], int]:
        session = scope.session
        total_result = await session.execute(
            select(func.count(CreditTransactionModel.id)).where(
                CreditTransactionModel.user_id == user_id
            )
        )
        total = total_result.scalar_one()

        result = await session.execute(
            select(CreditTransactionModel)
            .where(CreditTransactionModel.user_id == user_id)
            .order_by(CreditTransactionModel.created_at.desc(), CreditTransactionModel.id.desc())
            .offset(page_request.offset)
            .limit(page_request.limit)
        )
        transactions = [CreditTransactionRepoImpl._to_entity(row) for row in result.scalars().all()]
        return transactions, total
