from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.service.ticketing.app.dto.credit_history import OrderReference
from ticket_ledger.service.ticketing.app.dto.purchase_detail import PurchaseSummary
from ticket_ledger.service.ticketing.domain.entity.purchase_entity import Purchase, PurchaseItem
from ticket_ledger.service.ticketing.domain.enum.purchase_status import PurchaseStatus
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest


class IPurchaseRepo(ABC):
    """Repository interface for purchases and their items"""

    @abstractmethod
    async def get_by_id(self, *, scope: Scope, purchase_id: int) -> Optional[Purchase]:
        pass

    @abstractmethod
    async def list_items(self, *, scope: Scope, purchase_id: int) -> List[PurchaseItem]:
        pass

    @abstractmethod
    async def list_summaries_for_user(
        self, *, scope: Scope, user_id: int, page_request: PageRequest
    ) -> Tuple[List[PurchaseSummary], int]:
        """One page of the user's purchases (newest first) and the total purchase count"""
        pass

    @abstractmethod
    async def find_order_by_payment_reference(
        self, *, scope: Scope, payment_reference: str
    ) -> Optional[OrderReference]:
        """Purchase paid by the given payment, if any"""
        pass

    @abstractmethod
    async def update_status(
        self, *, scope: Scope, purchase_id: int, status: PurchaseStatus
    ) -> None:
        pass
