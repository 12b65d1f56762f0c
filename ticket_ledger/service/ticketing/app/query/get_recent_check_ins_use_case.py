from typing import List

from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket


DEFAULT_RECENT_CHECK_INS_LIMIT = 10


class GetRecentCheckInsUseCase:
    def __init__(self, *, transaction_runner: TransactionRunner, ticket_repo: ITicketRepo) -> None:
        self.transaction_runner = transaction_runner
        self.ticket_repo = ticket_repo

    @Logger.io
    async def execute(
        self, *, event_id: int, limit: int = DEFAULT_RECENT_CHECK_INS_LIMIT
    ) -> List[Ticket]:
        if limit <= 0:
            limit = DEFAULT_RECENT_CHECK_INS_LIMIT

        async def _read(scope: Scope) -> List[Ticket]:
            return await self.ticket_repo.list_recent_check_ins(
                scope=scope, event_id=event_id, limit=limit
            )

        return await self.transaction_runner.run(_read)
