from typing import Any

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.exception.exceptions import ForbiddenError, NotFoundError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.dto.purchase_detail import PurchaseDetail
from ticket_ledger.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from ticket_ledger.service.ticketing.app.interface.i_purchase_repo import IPurchaseRepo
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo
from ticket_ledger.service.ticketing.domain.enum.user_role import UserRole


class GetPurchaseUseCase:
    """
    Full purchase aggregate: purchase, items, event of the first item, tickets.

    Everything is read in one transaction so the parts are mutually
    consistent. Visible to the purchase owner and to admins.
    """

    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        purchase_repo: IPurchaseRepo,
        ticket_repo: ITicketRepo,
        event_query_repo: IEventQueryRepo,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.purchase_repo = purchase_repo
        self.ticket_repo = ticket_repo
        self.event_query_repo = event_query_repo

    @Logger.io
    async def execute(
        self, *, purchase_id: Any, requester_id: int, requester_role: str
    ) -> PurchaseDetail:
        try:
            parsed_id = int(purchase_id)
        except (TypeError, ValueError):
            raise NotFoundError(f'Purchase {purchase_id} not found') from None

        async def _read(scope: Scope) -> PurchaseDetail:
            purchase = await self.purchase_repo.get_by_id(scope=scope, purchase_id=parsed_id)
            if purchase is None:
                raise NotFoundError(f'Purchase {purchase_id} not found')
            if not purchase.is_visible_to(
                requester_id=requester_id, is_admin=requester_role == UserRole.ADMIN
            ):
                raise ForbiddenError('Not authorized to view this purchase')

            items = await self.purchase_repo.list_items(scope=scope, purchase_id=parsed_id)
            event = (
                await self.event_query_repo.get_by_id(scope=scope, event_id=items[0].event_id)
                if items
                else None
            )
            tickets = await self.ticket_repo.list_for_purchase(scope=scope, purchase_id=parsed_id)
            return PurchaseDetail(
                purchase=purchase, items=tuple(items), event=event, tickets=tuple(tickets)
            )

        return await self.transaction_runner.run(_read)
