from enum import StrEnum


class CreditTransactionType(StrEnum):
    """
    Well-known ledger entry types.

    The ledger column itself is free-form text; these are the values the
    ticketing flows write and the history labels recognise.
    """

    PURCHASE = 'purchase'
    REFUND = 'refund'
    EXCHANGE_REFUND = 'exchange_refund'
    EXCHANGE_PAYMENT = 'exchange_payment'
    ADMIN_ADJUSTMENT = 'admin_adjustment'
    BONUS = 'bonus'
