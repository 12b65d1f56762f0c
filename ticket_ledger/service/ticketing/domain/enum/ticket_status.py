from enum import StrEnum


class TicketStatus(StrEnum):
    PURCHASED = 'purchased'
    CANCELLED = 'cancelled'  # Pending cancellation while a refund request is open
    REFUNDED = 'refunded'
    CHECKED_IN = 'checked_in'
