from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from ticket_ledger.platform.exception.exceptions import ForbiddenError, NotFoundError
from ticket_ledger.service.ticketing.app.dto.purchase_detail import PurchaseSummary
from ticket_ledger.service.ticketing.app.query.get_purchase_use_case import GetPurchaseUseCase
from ticket_ledger.service.ticketing.app.query.list_purchase_history_use_case import (
    ListPurchaseHistoryUseCase,
)
from ticket_ledger.service.ticketing.domain.entity.purchase_entity import PurchaseItem
from test.service.ticketing.unit.fixtures import (
    ImmediateTransactionRunner,
    RepositoryMocks,
    make_event,
    make_purchase,
    make_ticket,
)


@pytest.fixture
def get_purchase(runner: ImmediateTransactionRunner, repos: RepositoryMocks) -> GetPurchaseUseCase:
    repos.purchase_repo.get_by_id = AsyncMock(return_value=make_purchase(user_id=1))
    repos.purchase_repo.list_items = AsyncMock(
        return_value=[
            PurchaseItem(
                id=1,
                purchase_id=100,
                event_id=5,
                ticket_type_name='General Admission',
                quantity=2,
                unit_price=Decimal('25.00'),
            )
        ]
    )
    repos.event_query_repo.get_by_id = AsyncMock(return_value=make_event())
    repos.ticket_repo.list_for_purchase = AsyncMock(
        return_value=[make_ticket(id=10), make_ticket(id=11)]
    )
    return GetPurchaseUseCase(
        transaction_runner=runner,  # type: ignore[arg-type]
        purchase_repo=repos.purchase_repo,
        ticket_repo=repos.ticket_repo,
        event_query_repo=repos.event_query_repo,
    )


class TestGetPurchase:
    @pytest.mark.asyncio
    async def test_owner_sees_full_aggregate(
        self,
        get_purchase: GetPurchaseUseCase,
        runner: ImmediateTransactionRunner,
        repos: RepositoryMocks,
    ) -> None:
        detail = await get_purchase.execute(
            purchase_id='100', requester_id=1, requester_role='user'
        )

        assert detail.purchase.id == 100
        assert detail.items[0].subtotal == Decimal('50.00')
        assert detail.event is not None and detail.event.name == 'Summer Fest'
        assert [t.id for t in detail.tickets] == [10, 11]
        repos.event_query_repo.get_by_id.assert_awaited_once_with(scope=runner.scope, event_id=5)
        assert runner.opened == 1

    @pytest.mark.asyncio
    async def test_admin_sees_any_purchase(self, get_purchase: GetPurchaseUseCase) -> None:
        detail = await get_purchase.execute(
            purchase_id=100, requester_id=42, requester_role='admin'
        )

        assert detail.purchase.user_id == 1

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self, get_purchase: GetPurchaseUseCase) -> None:
        with pytest.raises(ForbiddenError, match='Not authorized to view this purchase'):
            await get_purchase.execute(purchase_id=100, requester_id=2, requester_role='user')

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_not_found(
        self, get_purchase: GetPurchaseUseCase, runner: ImmediateTransactionRunner
    ) -> None:
        with pytest.raises(NotFoundError):
            await get_purchase.execute(purchase_id='abc', requester_id=1, requester_role='user')

        assert runner.opened == 0

    @pytest.mark.asyncio
    async def test_missing_purchase(
        self, get_purchase: GetPurchaseUseCase, repos: RepositoryMocks
    ) -> None:
        repos.purchase_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await get_purchase.execute(purchase_id=100, requester_id=1, requester_role='user')

    @pytest.mark.asyncio
    async def test_purchase_without_items_has_no_event(
        self, get_purchase: GetPurchaseUseCase, repos: RepositoryMocks
    ) -> None:
        repos.purchase_repo.list_items = AsyncMock(return_value=[])
        repos.ticket_repo.list_for_purchase = AsyncMock(return_value=[])

        detail = await get_purchase.execute(purchase_id=100, requester_id=1, requester_role='user')

        assert detail.event is None
        assert detail.items == ()
        repos.event_query_repo.get_by_id.assert_not_called()


class TestListPurchaseHistory:
    @pytest.mark.asyncio
    async def test_pagination_is_built_from_total(
        self, runner: ImmediateTransactionRunner, repos: RepositoryMocks
    ) -> None:
        summary = PurchaseSummary(
            purchase=make_purchase(), event_name='Summer Fest', ticket_count=2
        )
        repos.purchase_repo.list_summaries_for_user = AsyncMock(return_value=([summary], 11))
        use_case = ListPurchaseHistoryUseCase(
            transaction_runner=runner,  # type: ignore[arg-type]
            purchase_repo=repos.purchase_repo,
        )

        history = await use_case.execute(user_id=1, page=1, limit=10)

        assert history.purchases == (summary,)
        assert history.pagination.total_pages == 2
        assert history.pagination.has_more
