from typing import Any, List, Tuple

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.dto.purchase_detail import (
    PurchaseHistoryPage,
    PurchaseSummary,
)
from ticket_ledger.service.ticketing.app.interface.i_purchase_repo import IPurchaseRepo
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest, Pagination


class ListPurchaseHistoryUseCase:
    def __init__(
        self, *, transaction_runner: TransactionRunner, purchase_repo: IPurchaseRepo
    ) -> None:
        self.transaction_runner = transaction_runner
        self.purchase_repo = purchase_repo

    @Logger.io
    async def execute(
        self, *, user_id: int, page: Any = None, limit: Any = None
    ) -> PurchaseHistoryPage:
        page_request = PageRequest.from_raw(page, limit)

        async def _read(scope: Scope) -> Tuple[List[PurchaseSummary], int]:
            return await self.purchase_repo.list_summaries_for_user(
                scope=scope, user_id=user_id, page_request=page_request
            )

        summaries, total = await self.transaction_runner.run(_read)
        return PurchaseHistoryPage(
            purchases=tuple(summaries),
            pagination=Pagination.build(request=page_request, total=total),
        )
