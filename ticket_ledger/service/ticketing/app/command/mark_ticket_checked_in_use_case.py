from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket


class MarkTicketCheckedInUseCase:
    """
    Admit a ticket at the door.

    Checking in twice is harmless: the second call returns the ticket with
    its original checked_in_at.
    """

    def __init__(self, *, transaction_runner: TransactionRunner, ticket_repo: ITicketRepo) -> None:
        self.transaction_runner = transaction_runner
        self.ticket_repo = ticket_repo

    @Logger.io
    async def execute(self, *, ticket_id: int) -> Ticket:
        async def _check_in(scope: Scope) -> Ticket:
            return await self.ticket_repo.mark_checked_in(scope=scope, ticket_id=ticket_id)

        return await self.transaction_runner.run(_check_in)
