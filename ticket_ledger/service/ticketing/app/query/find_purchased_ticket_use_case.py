from typing import Optional

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket


class FindPurchasedTicketUseCase:
    """Door-scan lookup: only tickets still in purchased status are admissible."""

    def __init__(self, *, transaction_runner: TransactionRunner, ticket_repo: ITicketRepo) -> None:
        self.transaction_runner = transaction_runner
        self.ticket_repo = ticket_repo

    @Logger.io
    async def execute(self, *, ticket_id: int) -> Optional[Ticket]:
        async def _read(scope: Scope) -> Optional[Ticket]:
            return await self.ticket_repo.find_purchased(scope=scope, ticket_id=ticket_id)

        return await self.transaction_runner.run(_read)
