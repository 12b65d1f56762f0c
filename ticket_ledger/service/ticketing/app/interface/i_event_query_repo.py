from abc import ABC, abstractmethod
from typing import Optional

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.service.ticketing.domain.entity.event_entity import Event


class IEventQueryRepo(ABC):
    """Repository interface for event read operations"""

    @abstractmethod
    async def get_by_id(self, *, scope: Scope, event_id: int) -> Optional[Event]:
        pass
