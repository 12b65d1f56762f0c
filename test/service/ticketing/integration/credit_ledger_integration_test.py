"""
Integration tests for the credit ledger on a real database

Properties:
- stored balance always equals the sum of the user's ledger rows
- a rejected amount leaves no row behind
- history is newest first, labelled, and linked to the purchase a payment paid for
"""

from decimal import Decimal

import pytest

from ticket_ledger.platform.config.di import Container
from ticket_ledger.platform.database.orm_db_setting import Database
from ticket_ledger.platform.exception.exceptions import (
    ForbiddenError,
    InvalidAmountError,
    NotFoundError,
)
from ticket_ledger.service.ticketing.domain.enum import CreditTransactionType
from test.service.ticketing.integration.given import (
    given_purchase,
    ledger_rows,
    ledger_sum,
    stored_balance,
)


class TestBalanceMatchesLedger:
    @pytest.mark.asyncio
    async def test_balance_tracks_every_entry(
        self, container: Container, database: Database, alice: int
    ) -> None:
        record = container.record_credit_transaction_use_case()
        for amount, tx_type in [
            ('100.00', CreditTransactionType.BONUS),
            ('-30.50', CreditTransactionType.PURCHASE),
            ('12.25', CreditTransactionType.EXCHANGE_REFUND),
        ]:
            await record.execute(user_id=alice, amount=amount, type=tx_type)

        balance = await container.get_credit_balance_use_case().execute(user_id=alice)

        assert balance == Decimal('81.75')
        assert await stored_balance(database, user_id=alice) == await ledger_sum(
            database, user_id=alice
        )
        assert len(await ledger_rows(database, user_id=alice)) == 3

    @pytest.mark.asyncio
    async def test_balance_may_go_negative(self, container: Container, alice: int) -> None:
        await container.record_credit_transaction_use_case().execute(
            user_id=alice, amount='-5', type=CreditTransactionType.PURCHASE
        )

        assert await container.get_credit_balance_use_case().execute(user_id=alice) == Decimal(
            '-5.00'
        )

    @pytest.mark.asyncio
    async def test_zero_amount_inserts_nothing(
        self, container: Container, database: Database, alice: int
    ) -> None:
        with pytest.raises(InvalidAmountError):
            await container.record_credit_transaction_use_case().execute(
                user_id=alice, amount='0.00', type=CreditTransactionType.BONUS
            )

        assert await ledger_rows(database, user_id=alice) == []
        assert await stored_balance(database, user_id=alice) == Decimal('0.00')

    @pytest.mark.asyncio
    @pytest.mark.parametrize('amount', ['1e30', '-10000000000'])
    async def test_out_of_range_amount_inserts_nothing(
        self, container: Container, database: Database, alice: int, amount: str
    ) -> None:
        with pytest.raises(InvalidAmountError):
            await container.record_credit_transaction_use_case().execute(
                user_id=alice, amount=amount, type=CreditTransactionType.BONUS
            )

        assert await ledger_rows(database, user_id=alice) == []
        assert await stored_balance(database, user_id=alice) == Decimal('0.00')

    @pytest.mark.asyncio
    async def test_unknown_user(self, container: Container) -> None:
        with pytest.raises(NotFoundError):
            await container.record_credit_transaction_use_case().execute(
                user_id=999, amount='5', type=CreditTransactionType.BONUS
            )
        with pytest.raises(NotFoundError):
            await container.get_credit_balance_use_case().execute(user_id=999)


class TestAdminAdjustment:
    @pytest.mark.asyncio
    async def test_admin_adjusts_and_gets_new_balance(
        self, container: Container, database: Database, alice: int, admin: int
    ) -> None:
        use_case = container.adjust_user_credits_use_case()

        assert await use_case.execute(
            user_id=alice, amount='40', requester_role='admin', requester_id=admin
        ) == Decimal('40.00')
        assert await use_case.execute(
            user_id=alice, amount='-15', requester_role='admin', requester_id=admin
        ) == Decimal('25.00')

        rows = await ledger_rows(database, user_id=alice)
        assert [row.type for row in rows] == ['admin_adjustment', 'admin_adjustment']
        assert rows[0].description == f'Manual adjustment by admin {admin}'

    @pytest.mark.asyncio
    async def test_non_admin_cannot_adjust(
        self, container: Container, database: Database, alice: int
    ) -> None:
        with pytest.raises(ForbiddenError):
            await container.adjust_user_credits_use_case().execute(
                user_id=alice, amount='40', requester_role='user'
            )

        assert await ledger_rows(database, user_id=alice) == []


class TestCreditHistory:
    @pytest.mark.asyncio
    async def test_purchase_then_refund(
        self, container: Container, database: Database, alice: int, event_id: int
    ) -> None:
        """
        Given: a -25 purchase paid by payment 31, then a +50 refund
        When: reading the history
        Then: balance is 25, refund listed first as an addition, the purchase
              second as a spend linked to its order
        """
        seeded = await given_purchase(
            database, user_id=alice, event_id=event_id, payment_reference='31'
        )
        record = container.record_credit_transaction_use_case()
        await record.execute(
            user_id=alice,
            amount='-25',
            type=CreditTransactionType.PURCHASE,
            reference_type='payment',
            reference_id=31,
        )
        await record.execute(user_id=alice, amount='50', type=CreditTransactionType.REFUND)

        history = await container.get_credit_history_use_case().execute(user_id=alice)

        assert await container.get_credit_balance_use_case().execute(user_id=alice) == Decimal(
            '25.00'
        )
        refund, purchase = history.entries
        assert (refund.type, refund.is_addition, refund.type_label) == ('refund', True, 'Refund')
        assert (purchase.type, purchase.is_addition) == ('purchase', False)
        assert purchase.action_text == 'Credits used for purchase'
        assert purchase.purchase_id == seeded.purchase_id
        assert purchase.order_number == seeded.order_number
        assert refund.purchase_id is None
        assert history.pagination.total == 2

    @pytest.mark.asyncio
    async def test_unresolvable_payment_keeps_entry(
        self, container: Container, alice: int
    ) -> None:
        await container.record_credit_transaction_use_case().execute(
            user_id=alice,
            amount='-10',
            type=CreditTransactionType.PURCHASE,
            reference_type='payment',
            reference_id=404,
        )

        history = await container.get_credit_history_use_case().execute(user_id=alice)

        assert len(history.entries) == 1
        assert history.entries[0].order_number is None

    @pytest.mark.asyncio
    async def test_pagination(self, container: Container, alice: int) -> None:
        record = container.record_credit_transaction_use_case()
        for i in range(1, 6):
            await record.execute(user_id=alice, amount=i, type=CreditTransactionType.BONUS)

        first = await container.get_credit_history_use_case().execute(
            user_id=alice, page=1, limit=2
        )
        last = await container.get_credit_history_use_case().execute(
            user_id=alice, page=3, limit=2
        )

        assert [entry.amount for entry in first.entries] == [Decimal('5.00'), Decimal('4.00')]
        assert first.pagination.total_pages == 3
        assert first.pagination.has_more
        assert [entry.amount for entry in last.entries] == [Decimal('1.00')]
        assert not last.pagination.has_more

    @pytest.mark.asyncio
    async def test_page_far_past_the_end_is_empty(self, container: Container, alice: int) -> None:
        await container.record_credit_transaction_use_case().execute(
            user_id=alice, amount=5, type=CreditTransactionType.BONUS
        )

        history = await container.get_credit_history_use_case().execute(
            user_id=alice, page=10**20, limit=10
        )

        assert history.entries == ()
        assert history.pagination.page == 10**20
        assert history.pagination.total == 1
        assert not history.pagination.has_more
