from ticket_ledger.platform.database.transaction_runner import Scope, TransactionRunner
from ticket_ledger.platform.exception.exceptions import NotFoundError
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.dto.check_in_stats import EventCheckInStats
from ticket_ledger.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from ticket_ledger.service.ticketing.app.interface.i_ticket_repo import ITicketRepo


class GetEventCheckInStatsUseCase:
    def __init__(
        self,
        *,
        transaction_runner: TransactionRunner,
        ticket_repo: ITicketRepo,
        event_query_repo: IEventQueryRepo,
    ) -> None:
        self.transaction_runner = transaction_runner
        self.ticket_repo = ticket_repo
        self.event_query_repo = event_query_repo

    @Logger.io
    async def execute(self, *, event_id: int) -> EventCheckInStats:
        async def _read(scope: Scope) -> EventCheckInStats:
            event = await self.event_query_repo.get_by_id(scope=scope, event_id=event_id)
            if event is None:
                raise NotFoundError(f'Event {event_id} not found')
            counts = await self.ticket_repo.get_event_counts(scope=scope, event_id=event_id)
            return EventCheckInStats.from_counts(
                event_id=event_id, event_name=event.name, counts=counts
            )

        return await self.transaction_runner.run(_read)
