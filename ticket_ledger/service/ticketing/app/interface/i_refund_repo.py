from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.service.ticketing.domain.entity.refund_entity import Refund
from ticket_ledger.service.ticketing.domain.enum.refund_status import (
    RefundSettlement,
    RefundStatus,
)
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest


class IRefundRepo(ABC):
    """Repository interface for refund requests and decisions"""

    @abstractmethod
    async def create(self, *, scope: Scope, refund: Refund) -> Refund:
        pass

    @abstractmethod
    async def get_by_id(self, *, scope: Scope, refund_id: int) -> Optional[Refund]:
        pass

    @abstractmethod
    async def get_open_for_ticket(self, *, scope: Scope, ticket_id: int) -> Optional[Refund]:
        """The ticket's refund still in requested status, if any"""
        pass

    @abstractmethod
    async def list_open(
        self, *, scope: Scope, page_request: PageRequest
    ) -> Tuple[List[Refund], int]:
        """Refunds awaiting a decision, newest request first, with the total count"""
        pass

    @abstractmethod
    async def decide(
        self,
        *,
        scope: Scope,
        refund_id: int,
        status: RefundStatus,
        decided_at: datetime,
    ) -> bool:
        """Conditional requested -> status; False when the refund was already decided"""
        pass

    @abstractmethod
    async def mark_settlement(
        self, *, scope: Scope, refund_id: int, settlement: RefundSettlement
    ) -> None:
        pass
