"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from ticket_ledger.platform.database.orm_db_setting import Database
from ticket_ledger.platform.database.transaction_runner import TransactionRunner
from ticket_ledger.service.ticketing.app.command.adjust_user_credits_use_case import (
    AdjustUserCreditsUseCase,
)
from ticket_ledger.service.ticketing.app.command.approve_refund_use_case import (
    ApproveRefundUseCase,
)
from ticket_ledger.service.ticketing.app.command.mark_ticket_checked_in_use_case import (
    MarkTicketCheckedInUseCase,
)
from ticket_ledger.service.ticketing.app.command.record_credit_transaction_use_case import (
    RecordCreditTransactionUseCase,
)
from ticket_ledger.service.ticketing.app.command.request_refund_use_case import (
    RequestRefundUseCase,
)
from ticket_ledger.service.ticketing.app.query.find_purchased_ticket_use_case import (
    FindPurchasedTicketUseCase,
)
from ticket_ledger.service.ticketing.app.query.get_credit_balance_use_case import (
    GetCreditBalanceUseCase,
)
from ticket_ledger.service.ticketing.app.query.get_credit_history_use_case import (
    GetCreditHistoryUseCase,
)
from ticket_ledger.service.ticketing.app.query.get_event_check_in_stats_use_case import (
    GetEventCheckInStatsUseCase,
)
from ticket_ledger.service.ticketing.app.query.get_purchase_use_case import GetPurchaseUseCase
from ticket_ledger.service.ticketing.app.query.get_recent_check_ins_use_case import (
    GetRecentCheckInsUseCase,
)
from ticket_ledger.service.ticketing.app.query.list_pending_refunds_use_case import (
    ListPendingRefundsUseCase,
)
from ticket_ledger.service.ticketing.app.query.list_purchase_history_use_case import (
    ListPurchaseHistoryUseCase,
)
from ticket_ledger.service.ticketing.driven_adapter.notification.logging_notification_dispatcher import (
    LoggingNotificationDispatcher,
)
from ticket_ledger.service.ticketing.driven_adapter.repo.credit_transaction_repo_impl import (
    CreditTransactionRepoImpl,
)
from ticket_ledger.service.ticketing.driven_adapter.repo.event_query_repo_impl import (
    EventQueryRepoImpl,
)
from ticket_ledger.service.ticketing.driven_adapter.repo.purchase_repo_impl import (
    PurchaseRepoImpl,
)
from ticket_ledger.service.ticketing.driven_adapter.repo.refund_repo_impl import RefundRepoImpl
from ticket_ledger.service.ticketing.driven_adapter.repo.ticket_repo_impl import TicketRepoImpl


class Container(containers.DeclarativeContainer):
    # Database (one engine, one pool per process)
    database_url = providers.Object(None)
    database = providers.Singleton(Database, database_url=database_url)

    # The only component that checks sessions out of the pool
    transaction_runner = providers.Singleton(
        TransactionRunner, session_factory=database.provided.session
    )

    # Repositories (stateless - every call runs inside a caller-supplied scope)
    credit_transaction_repo = providers.Singleton(CreditTransactionRepoImpl)
    ticket_repo = providers.Singleton(TicketRepoImpl)
    refund_repo = providers.Singleton(RefundRepoImpl)
    purchase_repo = providers.Singleton(PurchaseRepoImpl)
    event_query_repo = providers.Singleton(EventQueryRepoImpl)

    # Outbound notifications
    notification_dispatcher = providers.Singleton(LoggingNotificationDispatcher)

    # Credit ledger
    record_credit_transaction_use_case = providers.Factory(
        RecordCreditTransactionUseCase,
        transaction_runner=transaction_runner,
        credit_transaction_repo=credit_transaction_repo,
    )
    adjust_user_credits_use_case = providers.Factory(
        AdjustUserCreditsUseCase,
        transaction_runner=transaction_runner,
        credit_transaction_repo=credit_transaction_repo,
        record_credit_transaction=record_credit_transaction_use_case,
    )
    get_credit_balance_use_case = providers.Factory(
        GetCreditBalanceUseCase,
        transaction_runner=transaction_runner,
        credit_transaction_repo=credit_transaction_repo,
    )
    get_credit_history_use_case = providers.Factory(
        GetCreditHistoryUseCase,
        transaction_runner=transaction_runner,
        credit_transaction_repo=credit_transaction_repo,
        purchase_repo=purchase_repo,
    )

    # Ticket store / check-in
    find_purchased_ticket_use_case = providers.Factory(
        FindPurchasedTicketUseCase, transaction_runner=transaction_runner, ticket_repo=ticket_repo
    )
    mark_ticket_checked_in_use_case = providers.Factory(
        MarkTicketCheckedInUseCase, transaction_runner=transaction_runner, ticket_repo=ticket_repo
    )
    get_event_check_in_stats_use_case = providers.Factory(
        GetEventCheckInStatsUseCase,
        transaction_runner=transaction_runner,
        ticket_repo=ticket_repo,
        event_query_repo=event_query_repo,
    )
    get_recent_check_ins_use_case = providers.Factory(
        GetRecentCheckInsUseCase, transaction_runner=transaction_runner, ticket_repo=ticket_repo
    )

    # Refund workflow
    request_refund_use_case = providers.Factory(
        RequestRefundUseCase,
        transaction_runner=transaction_runner,
        ticket_repo=ticket_repo,
        purchase_repo=purchase_repo,
        event_query_repo=event_query_repo,
        refund_repo=refund_repo,
    )
    approve_refund_use_case = providers.Factory(
        ApproveRefundUseCase,
        transaction_runner=transaction_runner,
        ticket_repo=ticket_repo,
        refund_repo=refund_repo,
        purchase_repo=purchase_repo,
        record_credit_transaction=record_credit_transaction_use_case,
        notification_dispatcher=notification_dispatcher,
    )
    list_pending_refunds_use_case = providers.Factory(
        ListPendingRefundsUseCase, transaction_runner=transaction_runner, refund_repo=refund_repo
    )

    # Purchase aggregate
    get_purchase_use_case = providers.Factory(
        GetPurchaseUseCase,
        transaction_runner=transaction_runner,
        purchase_repo=purchase_repo,
        ticket_repo=ticket_repo,
        event_query_repo=event_query_repo,
    )
    list_purchase_history_use_case = providers.Factory(
        ListPurchaseHistoryUseCase,
        transaction_runner=transaction_runner,
        purchase_repo=purchase_repo,
    )


container = Container()


def setup() -> None:
    container.database()


async def cleanup() -> None:
    await container.database().dispose()
    container.reset_singletons()
