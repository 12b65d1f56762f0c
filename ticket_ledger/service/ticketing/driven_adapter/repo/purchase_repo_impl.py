from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select, update

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.dto.credit_history import OrderReference
from ticket_ledger.service.ticketing.app.dto.purchase_detail import (
    CREDIT_PURCHASE_EVENT_NAME,
    PurchaseSummary,
)
from ticket_ledger.service.ticketing.app.interface.i_purchase_repo import IPurchaseRepo
from ticket_ledger.service.ticketing.domain.entity.purchase_entity import Purchase, PurchaseItem
from ticket_ledger.service.ticketing.domain.enum.purchase_status import PurchaseStatus
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest
from ticket_ledger.service.ticketing.driven_adapter.model.event_model import EventModel
from ticket_ledger.service.ticketing.driven_adapter.model.purchase_model import (
    PurchaseItemModel,
    PurchaseModel,
)
from ticket_ledger.service.ticketing.driven_adapter.model.ticket_model import TicketModel


class PurchaseRepoImpl(IPurchaseRepo):
    @staticmethod
    def _to_entity(db_purchase: PurchaseModel) -> Purchase:
        return Purchase(
            id=db_purchase.id,
            user_id=db_purchase.user_id,
            order_number=db_purchase.order_number,
            total=Decimal(db_purchase.total),
            status=PurchaseStatus(db_purchase.status),
            payment_method=db_purchase.payment_method,
            payment_reference=db_purchase.payment_reference,
            created_at=db_purchase.created_at,
        )

    @staticmethod
    def _to_item_entity(db_item: PurchaseItemModel) -> PurchaseItem:
        return PurchaseItem(
            id=db_item.id,
            purchase_id=db_item.purchase_id,
            event_id=db_item.event_id,
            ticket_type_name=db_item.ticket_type_name,
            quantity=db_item.quantity,
            unit_price=Decimal(db_item.unit_price),
        )

    @Logger.io
    async def get_by_id(self, *, scope: Scope, purchase_id: int) -> Optional[Purchase]:
        result = await scope.session.execute(
            select(PurchaseModel)
            .where(PurchaseModel.id == purchase_id)
            .execution_options(populate_existing=True)
        )
        db_purchase = result.scalar_one_or_none()
        return PurchaseRepoImpl._to_entity(db_purchase) if db_purchase else None

    @Logger.io
    async def list_items(self, *, scope: Scope, purchase_id: int) -> List[PurchaseItem]:
        result = await scope.session.execute(
            select(PurchaseItemModel)
            .where(PurchaseItemModel.purchase_id == purchase_id)
            .order_by(PurchaseItemModel.id)
        )
        return [PurchaseRepoImpl._to_item_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_summaries_for_user(
        self, *, scope: Scope, user_id: int, page_request: PageRequest
    ) -> Tuple[List[PurchaseSummary], int]:
        session = scope.session
        total_result = await session.execute(
            select(func.count(PurchaseModel.id)).where(PurchaseModel.user_id == user_id)
        )
        total = total_result.scalar_one()

        result = await session.execute(
            select(PurchaseModel)
            .where(PurchaseModel.user_id == user_id)
            .order_by(PurchaseModel.created_at.desc(), PurchaseModel.id.desc())
            .offset(page_request.offset)
            .limit(page_request.limit)
        )
        db_purchases = result.scalars().all()
        purchase_ids = [db_purchase.id for db_purchase in db_purchases]
        if not purchase_ids:
            return [], total

        # Event name of each purchase's first item
        event_names: Dict[int, str] = {}
        name_result = await session.execute(
            select(PurchaseItemModel.purchase_id, EventModel.name)
            .join(EventModel, EventModel.id == PurchaseItemModel.event_id)
            .where(PurchaseItemModel.purchase_id.in_(purchase_ids))
            .order_by(PurchaseItemModel.id)
        )
        for purchase_id, event_name in name_result.all():
            event_names.setdefault(purchase_id, event_name)

        count_result = await session.execute(
            select(TicketModel.purchase_id, func.count(TicketModel.id))
            .where(TicketModel.purchase_id.in_(purchase_ids))
            .group_by(TicketModel.purchase_id)
        )
        ticket_counts: Dict[int, int] = {
            purchase_id: count for purchase_id, count in count_result.all()
        }

        summaries = [
            PurchaseSummary(
                purchase=PurchaseRepoImpl._to_entity(db_purchase),
                event_name=event_names.get(db_purchase.id, CREDIT_PURCHASE_EVENT_NAME),
                ticket_count=ticket_counts.get(db_purchase.id, 0),
            )
            for db_purchase in db_purchases
        ]
        return summaries, total

    @Logger.io
    async def find_order_by_payment_reference(
        self, *, scope: Scope, payment_reference: str
    ) -> Optional[OrderReference]:
        result = await scope.session.execute(
            select(PurchaseModel.id, PurchaseModel.order_number)
            .where(PurchaseModel.payment_reference == payment_reference)
            .order_by(PurchaseModel.id)
            .limit(1)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return OrderReference(purchase_id=row.id, order_number=row.order_number)

    @Logger.io
    async def update_status(
        self, *, scope: Scope, purchase_id: int, status: PurchaseStatus
    ) -> None:
        await scope.session.execute(
            update(PurchaseModel)
            .where(PurchaseModel.id == purchase_id)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
