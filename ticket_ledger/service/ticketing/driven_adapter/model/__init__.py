"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from ticket_ledger.service.ticketing.driven_adapter.model.credit_transaction_model import (
    CreditTransactionModel,
)
from ticket_ledger.service.ticketing.driven_adapter.model.event_model import EventModel
from ticket_ledger.service.ticketing.driven_adapter.model.purchase_model import (
    PurchaseItemModel,
    PurchaseModel,
)
from ticket_ledger.service.ticketing.driven_adapter.model.refund_model import RefundModel
from ticket_ledger.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from ticket_ledger.service.ticketing.driven_adapter.model.user_model import UserModel

__all__ = [
    'CreditTransactionModel',
    'EventModel',
    'PurchaseItemModel',
    'PurchaseModel',
    'RefundModel',
    'TicketModel',
    'UserModel',
]
