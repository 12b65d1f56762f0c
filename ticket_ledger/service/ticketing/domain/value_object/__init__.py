"""Ticketing Domain Value Objects"""

from ticket_ledger.service.ticketing.domain.value_object.credit_label import (
    CreditLabel,
    label_for,
)
from ticket_ledger.service.ticketing.domain.value_object.pagination import PageRequest, Pagination

__all__ = ['CreditLabel', 'PageRequest', 'Pagination', 'label_for']
