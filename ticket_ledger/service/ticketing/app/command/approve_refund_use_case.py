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
from ticket_ledger.service.ticketing.app.command.record_credit_transaction_use_case import (
    RecordCreditTransactionUseCase,
)
from ticket_ledger.service.ticketing.app.dto.refund_result import ApproveRefundResult
from ticket_ledger.service.ticketing.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from ticket_ledger.service.ticketing.app.interface.i_purchase_repo import IPurchaseRepo
from ticket_ledger.service.ticketing.app.interface.i_refund_repo import IRefundRepo
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo
from ticket_ledger.service.ticketing.domain.entity.purchase_entity import Purchase
from ticket_ledger.service.ticketing.domain.entity.refund_entity import Refund
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_ledger.service.ticketing.domain.enum.credit_transaction_type import (
    CreditTransactionType,
)
from ticket_ledger.service.ticketing.domain.enum.refund_status import (
    RefundSettlement,
    RefundStatus,
)
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus
from ticket_ledger.service.ticketing.domain.enum.user_role import UserRole


# A refund can settle a ticket that is still purchased or pending cancellation
REFUNDABLE_TICKET_STATUSES = (TicketStatus.PURCHASED, TicketStatus.CANCELLED)

REFUND_REFERENCE_TYPE = 'refund'


class ApproveRefundUseCase:
    """
    Admin decision on an open refund request.

    Flow (one transaction, rolled back as a whole on any error):
    1. Load the ticket row-locked; concurrent decisions on it queue here
    2. Validate the decision and find the open refund request
    3. requested -> completed / rejected (conditional; losing a race is a conflict)
    4. completed: ticket -> refunded, settle to credits or mark external,
       roll the purchase status up
       rejected: ticket back to the status it had before the request
    5. Re-read ticket and refund

    The holder is notified only after commit; a failed notification is
    logged and never undoes the decision.
    """

    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        ticket_repo: ITicketRepo,
        refund_repo: IRefundRepo,
        purchase_repo: IPurchaseRepo,
        record_credit_transaction: RecordCreditTransactionUseCase,
        notification_dispatcher: INotificationDispatcher,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.ticket_repo = ticket_repo
        self.refund_repo = refund_repo
        self.purchase_repo = purchase_repo
        self.record_credit_transaction = record_credit_transaction
        self.notification_dispatcher = notification_dispatcher

    @Logger.io
    async def execute(
        self, *, ticket_id: int, decision: str, requester_role: str
    ) -> ApproveRefundResult:
        if requester_role != UserRole.ADMIN:
            raise ForbiddenError('Admin access required to decide refunds')

        async def _decide(scope: Scope) -> ApproveRefundResult:
            ticket = await self.ticket_repo.get_by_id(
                ticket_id=ticket_id, scope=scope, for_update=True
            )
            if ticket is None:
                raise NotFoundError(f'Ticket {ticket_id} not found')

            new_status = Refund.parse_decision(decision)

            refund = await self.refund_repo.get_open_for_ticket(scope=scope, ticket_id=ticket_id)
            if refund is None or refund.id is None:
                raise InvalidStatusError(f'No pending refund request for ticket {ticket_id}')
            if ticket.status not in REFUNDABLE_TICKET_STATUSES:
                raise InvalidStatusError(
                    f'Ticket {ticket_id} cannot be refunded from status {ticket.status}'
                )

            decided = await self.refund_repo.decide(
                scope=scope,
                refund_id=refund.id,
                status=new_status,
                decided_at=datetime.now(timezone.utc),
            )
            if not decided:
                raise ConflictError(f'Refund {refund.id} was decided concurrently')

            if new_status == RefundStatus.COMPLETED:
                await self._complete(scope=scope, ticket=ticket, refund=refund)
            else:
                await self._reject(scope=scope, ticket=ticket, refund=refund)

            updated_ticket = await self.ticket_repo.get_by_id(ticket_id=ticket_id, scope=scope)
            updated_refund = await self.refund_repo.get_by_id(refund_id=refund.id, scope=scope)
            assert updated_ticket and updated_refund, 'Decided refund must be readable in scope'
            return ApproveRefundResult(
                ticket=updated_ticket,
                refund=updated_refund,
                message=f'Refund status updated to {new_status}',
            )

        result = await self.transaction_runner.run(_decide)
        Logger.base.info(f'💸 [REFUND] Refund {result.refund.id} {result.refund.status}')

        await self._notify(result)
        return result

    async def _complete(self, *, scope: Scope, ticket: Ticket, refund: Refund) -> None:
        assert refund.id is not None
        moved = await self.ticket_repo.transition_status(
            scope=scope,
            ticket_id=refund.ticket_id,
            from_status=ticket.status,
            to_status=TicketStatus.REFUNDED,
        )
        if not moved:
            raise ConflictError(f'Ticket {refund.ticket_id} changed while completing its refund')

        if refund.payment_method.lower() in settings.CREDIT_SETTLED_PAYMENT_METHODS:
            await self.record_credit_transaction.execute(
                scope=scope,
                user_id=ticket.user_id,
                amount=refund.amount,
                type=CreditTransactionType.REFUND,
                description=f'Refund for ticket {refund.ticket_id}',
                reference_type=REFUND_REFERENCE_TYPE,
                reference_id=refund.id,
            )
            settlement = RefundSettlement.CREDIT
        else:
            # Money goes back through the payment provider; nothing is posted to the ledger
            settlement = RefundSettlement.EXTERNAL
        await self.refund_repo.mark_settlement(
            scope=scope, refund_id=refund.id, settlement=settlement
        )

        statuses = await self.ticket_repo.list_statuses_for_purchase(
            purchase_id=refund.purchase_id, scope=scope
        )
        await self.purchase_repo.update_status(
            scope=scope,
            purchase_id=refund.purchase_id,
            status=Purchase.rollup_status(statuses),
        )

    async def _reject(self, *, scope: Scope, ticket: Ticket, refund: Refund) -> None:
        if ticket.status == refund.previous_ticket_status:
            return
        moved = await self.ticket_repo.transition_status(
            scope=scope,
            ticket_id=refund.ticket_id,
            from_status=ticket.status,
            to_status=refund.previous_ticket_status,
        )
        if not moved:
            raise ConflictError(f'Ticket {refund.ticket_id} changed while rejecting its refund')

    async def _notify(self, result: ApproveRefundResult) -> None:
        try:
            await self.notification_dispatcher.send_notification(
                kind=f'refund_{result.refund.status}',
                data={
                    'user_id': result.ticket.user_id,
                    'ticket_id': result.ticket.id,
                    'refund_id': result.refund.id,
                    'amount': str(result.refund.amount),
                    'settlement': result.refund.settlement,
                },
            )
        except Exception as e:
            Logger.base.warning(
                f'📭 [REFUND] Notification for refund {result.refund.id} failed: {e}'
            )
