from enum import StrEnum


class RefundStatus(StrEnum):
    REQUESTED = 'requested'
    COMPLETED = 'completed'
    REJECTED = 'rejected'


class RefundSettlement(StrEnum):
    """Where the refunded money went once a refund is completed"""

    CREDIT = 'credit'  # Posted to the user's credit ledger
    EXTERNAL = 'external'  # Returned through the original payment provider
