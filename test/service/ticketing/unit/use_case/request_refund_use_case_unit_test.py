from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from ticket_ledger.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStatusError,
    NotFoundError,
)
from ticket_ledger.service.ticketing.app.command.request_refund_use_case import (
    RequestRefundUseCase,
)
from ticket_ledger.service.ticketing.domain.enum import RefundStatus, TicketStatus
from test.service.ticketing.unit.fixtures import (
    ImmediateTransactionRunner,
    RepositoryMocks,
    make_event,
    make_purchase,
    make_ticket,
)


@pytest.fixture
def use_case(runner: ImmediateTransactionRunner, repos: RepositoryMocks) -> RequestRefundUseCase:
    repos.ticket_repo.get_by_id = AsyncMock(return_value=make_ticket())
    repos.event_query_repo.get_by_id = AsyncMock(return_value=make_event())
    repos.purchase_repo.get_by_id = AsyncMock(return_value=make_purchase(payment_method='card'))
    repos.ticket_repo.transition_status = AsyncMock(return_value=True)
    repos.refund_repo.create = AsyncMock(side_effect=lambda *, scope, refund: refund)
    return RequestRefundUseCase(
        transaction_runner=runner,  # type: ignore[arg-type]
        ticket_repo=repos.ticket_repo,
        purchase_repo=repos.purchase_repo,
        event_query_repo=repos.event_query_repo,
        refund_repo=repos.refund_repo,
    )


class TestRequestRefund:
    @pytest.mark.asyncio
    async def test_holder_opens_refund_and_ticket_goes_pending(
        self,
        use_case: RequestRefundUseCase,
        runner: ImmediateTransactionRunner,
        repos: RepositoryMocks,
    ) -> None:
        refund = await use_case.execute(ticket_id=10, requester_id=1)

        assert refund.status == RefundStatus.REQUESTED
        assert refund.payment_method == 'card'
        assert refund.previous_ticket_status == TicketStatus.PURCHASED
        repos.ticket_repo.get_by_id.assert_awaited_once_with(
            ticket_id=10, scope=runner.scope, for_update=True
        )
        repos.ticket_repo.transition_status.assert_awaited_once_with(
            scope=runner.scope,
            ticket_id=10,
            from_status=TicketStatus.PURCHASED,
            to_status=TicketStatus.CANCELLED,
        )
        assert runner.opened == 1

    @pytest.mark.asyncio
    async def test_missing_ticket(
        self, use_case: RequestRefundUseCase, repos: RepositoryMocks
    ) -> None:
        repos.ticket_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await use_case.execute(ticket_id=10, requester_id=1)

    @pytest.mark.asyncio
    async def test_only_holder_may_request(
        self, use_case: RequestRefundUseCase, repos: RepositoryMocks
    ) -> None:
        with pytest.raises(ForbiddenError):
            await use_case.execute(ticket_id=10, requester_id=2)

        repos.refund_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_used_ticket_cannot_be_refunded(
        self, use_case: RequestRefundUseCase, repos: RepositoryMocks
    ) -> None:
        repos.ticket_repo.get_by_id = AsyncMock(
            return_value=make_ticket(status=TicketStatus.CHECKED_IN)
        )

        with pytest.raises(InvalidStatusError, match='already been used'):
            await use_case.execute(ticket_id=10, requester_id=1)

    @pytest.mark.asyncio
    async def test_closed_window(
        self, use_case: RequestRefundUseCase, repos: RepositoryMocks
    ) -> None:
        repos.event_query_repo.get_by_id = AsyncMock(
            return_value=make_event(starts_in=timedelta(hours=6))
        )

        with pytest.raises(InvalidStatusError, match='Refund window'):
            await use_case.execute(ticket_id=10, requester_id=1)

        repos.ticket_repo.transition_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_event_skips_window_check(
        self, use_case: RequestRefundUseCase, repos: RepositoryMocks
    ) -> None:
        repos.event_query_repo.get_by_id = AsyncMock(return_value=None)

        refund = await use_case.execute(ticket_id=10, requester_id=1)

        assert refund.is_open

    @pytest.mark.asyncio
    async def test_concurrent_status_change_is_a_conflict(
        self, use_case: RequestRefundUseCase, repos: RepositoryMocks
    ) -> None:
        repos.ticket_repo.transition_status = AsyncMock(return_value=False)

        with pytest.raises(ConflictError):
            await use_case.execute(ticket_id=10, requester_id=1)

        repos.refund_repo.create.assert_not_called()
