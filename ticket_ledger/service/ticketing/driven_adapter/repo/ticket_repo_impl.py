from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import case, func, select, update

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.platform.exception.exceptions import InvalidStatusError, NotFoundError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.dto.check_in_stats import EventTicketCounts
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus
from ticket_ledger.service.ticketing.driven_adapter.model.ticket_model import TicketModel


VALID_TICKET_STATUSES = (TicketStatus.PURCHASED, TicketStatus.CHECKED_IN)


class TicketRepoImpl(ITicketRepo):
    @staticmethod
    def _to_entity(db_ticket: TicketModel) -> Ticket:
        return Ticket(
            id=db_ticket.id,
            purchase_id=db_ticket.purchase_id,
            event_id=db_ticket.event_id,
            user_id=db_ticket.user_id,
            ticket_type_name=db_ticket.ticket_type_name,
            price=Decimal(db_ticket.price),
            status=TicketStatus(db_ticket.status),
            checked_in_at=db_ticket.checked_in_at,
            created_at=db_ticket.created_at,
            updated_at=db_ticket.updated_at,
        )

    @Logger.io
    async def get_by_id(
        self, *, scope: Scope, ticket_id: int, for_update: bool = False
    ) -> Optional[Ticket]:
        # populate_existing: pick up conditional UPDATEs issued earlier in the same scope
        stmt = (
            select(TicketModel)
            .where(TicketModel.id == ticket_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            # FOR UPDATE on PostgreSQL; SQLite already holds the write lock
            stmt = stmt.with_for_update()
        result = await scope.session.execute(stmt)
        db_ticket = result.scalar_one_or_none()
        return TicketRepoImpl._to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def find_purchased(self, *, scope: Scope, ticket_id: int) -> Optional[Ticket]:
        result = await scope.session.execute(
            select(TicketModel).where(
                TicketModel.id == ticket_id, TicketModel.status == TicketStatus.PURCHASED
            )
        )
        db_ticket = result.scalar_one_or_none()
        return TicketRepoImpl._to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def mark_checked_in(self, *, scope: Scope, ticket_id: int) -> Ticket:
        now = datetime.now(timezone.utc)
        result = await scope.session.execute(
            update(TicketModel)
            .where(TicketModel.id == ticket_id, TicketModel.status == TicketStatus.PURCHASED)
            .values(status=TicketStatus.CHECKED_IN, checked_in_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        changed = result.rowcount  # type: ignore[attr-defined]

        ticket = await self.get_by_id(scope=scope, ticket_id=ticket_id)
        if ticket is None:
            raise NotFoundError(f'Ticket {ticket_id} not found')
        if changed == 0 and not ticket.is_checked_in:
            raise InvalidStatusError(
                f'Ticket {ticket_id} cannot be checked in from {ticket.status}'
            )
        return ticket

    @Logger.io
    async def transition_status(
        self,
        *,
        scope: Scope,
        ticket_id: int,
        from_status: TicketStatus,
        to_status: TicketStatus,
    ) -> bool:
        result = await scope.session.execute(
            update(TicketModel)
            .where(TicketModel.id == ticket_id, TicketModel.status == from_status)
            .values(status=to_status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def list_statuses_for_purchase(
        self, *, scope: Scope, purchase_id: int
    ) -> List[TicketStatus]:
        result = await scope.session.execute(
            select(TicketModel.status).where(TicketModel.purchase_id == purchase_id)
        )
        return [TicketStatus(status) for status in result.scalars().all()]

    @Logger.io
    async def list_for_purchase(self, *, scope: Scope, purchase_id: int) -> List[Ticket]:
        result = await scope.session.execute(
            select(TicketModel)
            .where(TicketModel.purchase_id == purchase_id)
            .order_by(TicketModel.id)
        )
        return [TicketRepoImpl._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get_event_counts(self, *, scope: Scope, event_id: int) -> EventTicketCounts:
        result = await scope.session.execute(
            select(
                func.count(TicketModel.id),
                func.sum(case((TicketModel.status.in_(VALID_TICKET_STATUSES), 1), else_=0)),
                func.sum(case((TicketModel.status == TicketStatus.CHECKED_IN, 1), else_=0)),
            ).where(TicketModel.event_id == event_id)
        )
        total, valid, checked_in = result.one()
        return EventTicketCounts(
            total_tickets=int(total or 0),
            valid_tickets=int(valid or 0),
            checked_in_count=int(checked_in or 0),
        )

    @Logger.io
    async def list_recent_check_ins(
        self, *, scope: Scope, event_id: int, limit: int
    ) -> List[Ticket]:
        result = await scope.session.execute(
            select(TicketModel)
            .where(
                TicketModel.event_id == event_id,
                TicketModel.status == TicketStatus.CHECKED_IN,
                TicketModel.checked_in_at.is_not(None),
            )
            .order_by(TicketModel.checked_in_at.desc(), TicketModel.id.desc())
            .limit(limit)
        )
        return [TicketRepoImpl._to_entity(row) for row in result.scalars().all()]
