from typing import Optional

from sqlalchemy import select

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.platform.logging.loguru_io import Logger
from ticket_ledger.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from ticket_ledger.service.ticketing.domain.entity.event_entity import Event
from ticket_ledger.service.ticketing.driven_adapter.model.event_model import EventModel


class EventQueryRepoImpl(IEventQueryRepo):
    @staticmethod
    def _to_entity(db_event: EventModel) -> Event:
        return Event(
            id=db_event.id,
            name=db_event.name,
            venue=db_event.venue,
            starts_at=db_event.starts_at,
            cancellation_policy=db_event.cancellation_policy,
            created_at=db_event.created_at,
        )

    @Logger.io
    async def get_by_id(self, *, scope: Scope, event_id: int) -> Optional[Event]:
        result = await scope.session.execute(select(EventModel).where(EventModel.id == event_id))
        db_event = result.scalar_one_or_none()
        return EventQueryRepoImpl._to_entity(db_event) if db_event else None
