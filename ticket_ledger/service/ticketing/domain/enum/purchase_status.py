from enum import StrEnum


class PurchaseStatus(StrEnum):
    COMPLETED = 'completed'
    PARTIALLY_REFUNDED = 'partially_refunded'
    REFUNDED = 'refunded'
