from typing import Any, List, Tuple

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.exception.exceptions import ForbiddenError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.dto.refund_result import PendingRefundsPage
from ticket_ledger.service.ticketing.app.interface.i_refund_repo import IRefundRepo
from ticket_ledger.service.ticketing.domain.entity.refund_entity import Refund
from ticket_ledger.service.ticketing.domain.enum.user_role import UserRole
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest, Pagination


class ListPendingRefundsUseCase:
    """Admin queue of refund requests still waiting for approve / reject."""

    def __init__(self, *, transaction_runner: TransactionRunner, refund_repo: IRefundRepo) -> None:
        self.transaction_runner = transaction_runner
        self.refund_repo = refund_repo

    @Logger.io
    async def execute(
        self, *, requester_role: str, page: Any = None, limit: Any = None
    ) -> PendingRefundsPage:
        """
        Raises:
            ForbiddenError: requester is not an admin
        """
        if requester_role != UserRole.ADMIN:
            raise ForbiddenError('Admin access required to list refund requests')

        page_request = PageRequest.from_raw(page, limit)

        async def _read(scope: Scope) -> Tuple[List[Refund], int]:
            return await self.refund_repo.list_open(scope=scope, page_request=page_request)

        refunds, total = await self.transaction_runner.run(_read)
        return PendingRefundsPage(
            refunds=tuple(refunds),
            pagination=Pagination.build(request=page_request, total=total),
        )
