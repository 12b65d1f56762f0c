from abc import ABC, abstractmethod
from typing import List, Optional

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.service.ticketing.app.dto.check_in_stats import EventTicketCounts
from ticket_ledger.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus


class ITicketRepo(ABC):
    """Repository interface for ticket reads and status transitions"""

    @abstractmethod
    async def get_by_id(
        self, *, scope: Scope, ticket_id: int, for_update: bool = False
    ) -> Optional[Ticket]:
        pass

    @abstractmethod
    async def find_purchased(self, *, scope: Scope, ticket_id: int) -> Optional[Ticket]:
        """Ticket by id, visible only while its status is purchased"""
        pass

    @abstractmethod
    async def mark_checked_in(self, *, scope: Scope, ticket_id: int) -> Ticket:
        """
        purchased -> checked_in, stamping checked_in_at.
        An already checked-in ticket is returned unchanged.

        Raises:
            NotFoundError: ticket does not exist
            InvalidStatusError: ticket is cancelled or refunded
        """
        pass

    @abstractmethod
    async def transition_status(
        self,
        *,
        scope: Scope,
        ticket_id: int,
        from_status: TicketStatus,
        to_status: TicketStatus,
    ) -> bool:
        """Conditional status change; False when the ticket was not in from_status"""
        pass

    @abstractmethod
    async def list_statuses_for_purchase(
        self, *, scope: Scope, purchase_id: int
    ) -> List[TicketStatus]:
        pass

    @abstractmethod
    async def list_for_purchase(self, *, scope: Scope, purchase_id: int) -> List[Ticket]:
        pass

    @abstractmethod
    async def get_event_counts(self, *, scope: Scope, event_id: int) -> EventTicketCounts:
        pass

    @abstractmethod
    async def list_recent_check_ins(
        self, *, scope: Scope, event_id: int, limit: int
    ) -> List[Ticket]:
        """Checked-in tickets of the event, newest check-in first"""
        pass
