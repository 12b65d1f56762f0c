"""Ticketing application DTOs"""

from ticket_ledger.service.ticketing.app.dto.check_in_stats import (
    EventCheckInStats,
    EventTicketCounts,
)
from ticket_ledger.service.ticketing.app.dto.credit_history import (
    CreditHistoryEntry,
    CreditHistoryPage,
    OrderReference,
)
from ticket_ledger.service.ticketing.app.dto.purchase_detail import (
    CREDIT_PURCHASE_EVENT_NAME,
    PurchaseDetail,
    PurchaseHistoryPage,
    PurchaseSummary,
)
from ticket_ledger.service.ticketing.app.dto.refund_result import ApproveRefundResult

__all__ = [
    'ApproveRefundResult',
    'CREDIT_PURCHASE_EVENT_NAME',
    'CreditHistoryEntry',
    'CreditHistoryPage',
    'EventCheckInStats',
    'EventTicketCounts',
    'OrderReference',
    'PurchaseDetail',
    'PurchaseHistoryPage',
    'PurchaseSummary',
]
