from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple

from ticket_ledger.platform.database.transaction_runner import Scope
from ticket_ledger.service.ticketing.domain.entity.credit_transaction_entity import (
    CreditTransaction,
)
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest


class ICreditTransactionRepo(ABC):
    """Repository interface for the user credit ledger"""

    @abstractmethod
    async def get_balance(self, *, scope: Scope, user_id: int) -> Optional[Decimal]:
        """Running balance of the user, None when the user does not exist"""
        pass

    @abstractmethod
    async def append(self, *, scope: Scope, transaction: CreditTransaction) -> CreditTransaction:
        """
        Insert the ledger row and move the user's balance by its amount.

        Raises:
            NotFoundError: user does not exist
        """
        pass

    @abstractmethod
    async def list_for_user(
        self, *, scope: Scope, user_id: int, page_request: PageRequest
    ) -> Tuple[List[CreditTransaction], int]:
        """One page of the user's entries (newest first) and the total entry count"""
        pass
