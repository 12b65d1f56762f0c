from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_refund_repo import IRefundRepo
from ticket_ledger.service.ticketing.domain.entity.refund_entity import Refund
from ticket_ledger.service.ticketing.domain.enum.refund_status import (
    RefundSettlement,
    RefundStatus,
)
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest
from ticket_ledger.service.ticketing.driven_adapter.model.refund_model import RefundModel


class RefundRepoImpl(IRefundRepo):
    @staticmethod
    def _to_entity(db_refund: RefundModel) -> Refund:
        return Refund(
            id=db_refund.id,
            ticket_id=db_refund.ticket_id,
            purchase_id=db_refund.purchase_id,
            payment_method=db_refund.payment_method,
            amount=Decimal(db_refund.amount),
            previous_ticket_status=TicketStatus(db_refund.previous_ticket_status),
            status=RefundStatus(db_refund.status),
            settlement=RefundSettlement(db_refund.settlement) if db_refund.settlement else None,
            requested_at=db_refund.requested_at,
            decided_at=db_refund.decided_at,
        )

    @Logger.io
    async def create(self, *, scope: Scope, refund: Refund) -> Refund:
        session = scope.session
        db_refund = RefundModel(
            ticket_id=refund.ticket_id,
            purchase_id=refund.purchase_id,
            status=refund.status,
            payment_method=refund.payment_method,
            amount=refund.amount,
            previous_ticket_status=refund.previous_ticket_status,
            requested_at=refund.requested_at,
        )
        session.add(db_refund)
        await session.flush()
        return RefundRepoImpl._to_entity(db_refund)

    @Logger.io
    async def get_by_id(self, *, scope: Scope, refund_id: int) -> Optional[Refund]:
        result = await scope.session.execute(
            select(RefundModel)
            .where(RefundModel.id == refund_id)
            .execution_options(populate_existing=True)
        )
        db_refund = result.scalar_one_or_none()
        return RefundRepoImpl._to_entity(db_refund) if db_refund else None

    @Logger.io
    async def get_open_for_ticket(self, *, scope: Scope, ticket_id: int) -> Optional[Refund]:
        result = await scope.session.execute(
            select(RefundModel)
            .where(
                RefundModel.ticket_id == ticket_id,
                RefundModel.status == RefundStatus.REQUESTED,
            )
            .order_by(RefundModel.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        db_refund = result.scalar_one_or_none()
        return RefundRepoImpl._to_entity(db_refund) if db_refund else None

    @Logger.io
    async def list_open(
        self, *, scope: Scope, page_request: PageRequest
    ) -> Tuple[List[Refund], int]:
        session = scope.session
        total_result = await session.execute(
            select(func.count(RefundModel.id)).where(RefundModel.status == RefundStatus.REQUESTED)
        )
        total = total_result.scalar_one()

        result = await session.execute(
            select(RefundModel)
            .where(RefundModel.status == RefundStatus.REQUESTED)
            .order_by(RefundModel.requested_at.desc(), RefundModel.id.desc())
            .offset(page_request.offset)
            .limit(page_request.limit)
            .execution_options(populate_existing=True)
        )
        refunds = [RefundRepoImpl._to_entity(db_refund) for db_refund in result.scalars().all()]
        return refunds, total

    @Logger.io
    async def decide(
        self,
        *,
        scope: Scope,
        refund_id: int,
        status: RefundStatus,
        decided_at: datetime,
    ) -> bool:
        result = await scope.session.execute(
            update(RefundModel)
            .where(RefundModel.id == refund_id, RefundModel.status == RefundStatus.REQUESTED)
            .values(status=status, decided_at=decided_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def mark_settlement(
        self, *, scope: Scope, refund_id: int, settlement: RefundSettlement
    ) -> None:
        await scope.session.execute(
            update(RefundModel)
            .where(RefundModel.id == refund_id)
            .values(settlement=settlement)
            .execution_options(synchronize_session=False)
        )
