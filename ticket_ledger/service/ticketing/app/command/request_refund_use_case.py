from datetime import datetime, timezone

from ticket_ledger.platform.config.core_setting import settings
from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStatusError,
    NotFoundError,
)
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from ticket_ledger.service.ticketing.app.interface.i_purchase_repo import IPurchaseRepo
from ticket_ledger.service.ticketing.app.interface.i_refund_repo import IRefundRepo
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo
from ticket_ledger.service.ticketing.domain.entity.refund_entity import Refund
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus


class RequestRefundUseCase:
    """
    Ticket holder asks for their money back.

    Flow (one transaction):
    1. Load the ticket (row-locked) and check ownership
    2. Ticket must still be purchased and the event's refund window open
    3. Ticket -> cancelled (pending until an admin decides)
    4. Open a refund request snapshotting payment method, price and prior status
    """

    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        ticket_repo: ITicketRepo,
        purchase_repo: IPurchaseRepo,
        event_query_repo: IEventQueryRepo,
        refund_repo: IRefundRepo,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.ticket_repo = ticket_repo
        self.purchase_repo = purchase_repo
        self.event_query_repo = event_query_repo
        self.refund_repo = refund_repo

    @Logger.io
    async def execute(self, *, ticket_id: int, requester_id: int) -> Refund:
        async def _request(scope: Scope) -> Refund:
            ticket = await self.ticket_repo.get_by_id(
                ticket_id=ticket_id, scope=scope, for_update=True
            )
            if ticket is None:
                raise NotFoundError(f'Ticket {ticket_id} not found')
            if ticket.user_id != requester_id:
                raise ForbiddenError('Only the ticket holder can request a refund')
            ticket.validate_can_request_refund()

            event = await self.event_query_repo.get_by_id(event_id=ticket.event_id, scope=scope)
            if event is not None and not event.is_refund_window_open(
                now=datetime.now(timezone.utc),
                default_days=settings.DEFAULT_REFUND_WINDOW_DAYS,
            ):
                raise InvalidStatusError('Refund window for this event has closed')

            purchase = await self.purchase_repo.get_by_id(
                purchase_id=ticket.purchase_id, scope=scope
            )
            if purchase is None:
                raise NotFoundError(f'Purchase {ticket.purchase_id} not found')

            refund = Refund.create(ticket=ticket, purchase=purchase)

            moved = await self.ticket_repo.transition_status(
                scope=scope,
                ticket_id=ticket_id,
                from_status=TicketStatus.PURCHASED,
                to_status=TicketStatus.CANCELLED,
            )
            if not moved:
                raise ConflictError(f'Ticket {ticket_id} changed while requesting a refund')

            return await self.refund_repo.create(scope=scope, refund=refund)

        refund = await self.transaction_runner.run(_request)
        Logger.base.info(f'🎫 [REFUND] Requested refund {refund.id} for ticket {ticket_id}')
        return refund
