from unittest.mock import AsyncMock

import pytest

from ticket_ledger.platform.exception.exceptions import InfrastructureError
from ticket_ledger.service.ticketing.app.dto.credit_history import OrderReference
from ticket_ledger.service.ticketing.app.query.get_credit_history_use_case import (
    GetCreditHistoryUseCase,
)
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest
from test.service.ticketing.unit.fixtures import (
    ImmediateTransactionRunner,
    RepositoryMocks,
    make_credit_transaction,
)


@pytest.fixture
def use_case(
    runner: ImmediateTransactionRunner, repos: RepositoryMocks
) -> GetCreditHistoryUseCase:
    return GetCreditHistoryUseCase(
        transaction_runner=runner,  # type: ignore[arg-type]
        credit_transaction_repo=repos.credit_transaction_repo,
        purchase_repo=repos.purchase_repo,
    )


class TestCreditHistory:
    @pytest.mark.asyncio
    async def test_entries_are_labelled(
        self, use_case: GetCreditHistoryUseCase, repos: RepositoryMocks
    ) -> None:
        repos.credit_transaction_repo.list_for_user = AsyncMock(
            return_value=(
                [
                    make_credit_transaction(id=2, amount='50.00', type='refund'),
                    make_credit_transaction(id=1, amount='-5.00', type='mystery'),
                ],
                2,
            )
        )

        history = await use_case.execute(user_id=1)

        refund, unknown = history.entries
        assert (refund.type_label, refund.action_text, refund.is_addition) == (
            'Refund',
            'Credits received from refund',
            True,
        )
        assert (unknown.type_label, unknown.action_text, unknown.is_addition) == (
            'Credit adjustment',
            'Credits used',
            False,
        )
        assert refund.order_number is None
        repos.purchase_repo.find_order_by_payment_reference.assert_not_called()

    @pytest.mark.asyncio
    async def test_raw_paging_input_is_sanitized(
        self, use_case: GetCreditHistoryUseCase, repos: RepositoryMocks
    ) -> None:
        repos.credit_transaction_repo.list_for_user = AsyncMock(return_value=([], 0))

        history = await use_case.execute(user_id=1, page='invalid', limit='invalid')

        assert repos.credit_transaction_repo.list_for_user.call_args.kwargs[
            'page_request'
        ] == PageRequest(page=1, limit=10)
        assert history.entries == ()
        assert history.pagination.total == 0
        assert not history.pagination.has_more

    @pytest.mark.asyncio
    async def test_payment_entries_link_to_their_purchase(
        self,
        use_case: GetCreditHistoryUseCase,
        runner: ImmediateTransactionRunner,
        repos: RepositoryMocks,
    ) -> None:
        repos.credit_transaction_repo.list_for_user = AsyncMock(
            return_value=(
                [
                    make_credit_transaction(
                        amount='-25.00', type='purchase', reference_type='payment', reference_id=31
                    )
                ],
                1,
            )
        )
        repos.purchase_repo.find_order_by_payment_reference = AsyncMock(
            return_value=OrderReference(purchase_id=100, order_number='ORD-000100')
        )

        history = await use_case.execute(user_id=1)

        assert history.entries[0].purchase_id == 100
        assert history.entries[0].order_number == 'ORD-000100'
        assert (
            repos.purchase_repo.find_order_by_payment_reference.call_args.kwargs[
                'payment_reference'
            ]
            == '31'
        )
        # page read plus one lookup, each in its own transaction
        assert runner.opened == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'failure',
        [
            InfrastructureError('Database error: connection reset'),
            OverflowError('Python int too large to convert to SQLite INTEGER'),
        ],
    )
    async def test_failed_lookup_leaves_link_empty(
        self, use_case: GetCreditHistoryUseCase, repos: RepositoryMocks, failure: Exception
    ) -> None:
        """
        Given: a payment entry whose purchase lookup fails
        When: the history is read
        Then: the entry is still returned, just without purchase_id / order_number
        """
        repos.credit_transaction_repo.list_for_user = AsyncMock(
            return_value=(
                [
                    make_credit_transaction(
                        amount='-25.00', type='purchase', reference_type='payment', reference_id=31
                    )
                ],
                1,
            )
        )
        repos.purchase_repo.find_order_by_payment_reference = AsyncMock(side_effect=failure)

        history = await use_case.execute(user_id=1)

        assert len(history.entries) == 1
        assert history.entries[0].purchase_id is None
        assert history.entries[0].order_number is None
