"""Ticketing Domain Enums"""

from ticket_ledger.service.ticketing.domain.enum.credit_transaction_type import (
    CreditTransactionType,
)
from ticket_ledger.service.ticketing.domain.enum.purchase_status import PurchaseStatus
from ticket_ledger.service.ticketing.domain.enum.refund_status import RefundSettlement, RefundStatus
from ticket_ledger.service.ticketing.domain.enum.ticket_status import TicketStatus
from ticket_ledger.service.ticketing.domain.enum.user_role import UserRole

__all__ = [
    'CreditTransactionType',
    'PurchaseStatus',
    'RefundSettlement',
    'RefundStatus',
    'TicketStatus',
    'UserRole',
]
