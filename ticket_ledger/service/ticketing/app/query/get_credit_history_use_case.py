from typing import Any, List, Optional, Tuple

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.dto.credit_history import (
    CreditHistoryEntry,
    CreditHistoryPage,
    OrderReference,
)
from ticket_ledger.service.ticketing.app.interface.i_credit_transaction_repo import (
    ICreditTransactionRepo,
)
from ticket_ledger.service.ticketing.app.interface.i_purchase_repo import IPurchaseRepo
from ticket_ledger.service.ticketing.domain.entity.credit_transaction_entity import (
    CreditTransaction,
)
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest, Pagination


PAYMENT_REFERENCE_TYPE = 'payment'


class GetCreditHistoryUseCase:
    """
    Paginated credit ledger of one user, newest first, decorated for display.

    Entries that reference a payment are linked to the purchase that
    payment paid for. The link is best-effort: a failed lookup is logged
    and leaves purchase_id / order_number empty.
    """

    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        credit_transaction_repo: ICreditTransactionRepo,
        purchase_repo: IPurchaseRepo,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.credit_transaction_repo = credit_transaction_repo
        self.purchase_repo = purchase_repo

    @Logger.io
    async def execute(
        self, *, user_id: int, page: Any = None, limit: Any = None
    ) -> CreditHistoryPage:
        page_request = PageRequest.from_raw(page, limit)

        async def _read(scope: Scope) -> Tuple[List[CreditTransaction], int]:
            return await self.credit_transaction_repo.list_for_user(
                scope=scope, user_id=user_id, page_request=page_request
            )

        transactions, total = await self.transaction_runner.run(_read)

        entries = []
        for transaction in transactions:
            order = await self._resolve_order(transaction)
            entries.append(CreditHistoryEntry.from_transaction(transaction, order=order))

        return CreditHistoryPage(
            entries=tuple(entries),
            pagination=Pagination.build(request=page_request, total=total),
        )

    async def _resolve_order(self, transaction: CreditTransaction) -> Optional[OrderReference]:
        if transaction.reference_type != PAYMENT_REFERENCE_TYPE or not transaction.reference_id:
            return None

        payment_reference = str(transaction.reference_id)

        async def _lookup(scope: Scope) -> Optional[OrderReference]:
            return await self.purchase_repo.find_order_by_payment_reference(
                scope=scope, payment_reference=payment_reference
            )

        try:
            # Own transaction per lookup: a failure here must not poison the page read
            return await self.transaction_runner.run(_lookup)
        except Exception as e:
            Logger.base.warning(
                f'🔎 [CREDITS] Could not resolve purchase for payment {payment_reference}: {e}'
            )
            return None
