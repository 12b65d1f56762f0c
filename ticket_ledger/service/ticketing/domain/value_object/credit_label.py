"""
Display labels for credit ledger entries.

Unknown types fall through to a generic label so new ledger types never
break the history view.
"""

from decimal import Decimal

import attrs


@attrs.define(frozen=True)
class CreditLabel:
    type_label: str
    added_text: str
    used_text: str

    def action_text(self, amount: Decimal) -> str:
        return self.added_text if amount > 0 else self.used_text


DEFAULT_CREDIT_LABEL = CreditLabel(
    type_label='Credit adjustment',
    added_text='Credits added',
    used_text='Credits used',
)

CREDIT_LABELS: dict[str, CreditLabel] = {
    'purchase': CreditLabel('Purchase', 'Credits used for purchase', 'Credits used for purchase'),
    'refund': CreditLabel(
        'Refund', 'Credits received from refund', 'Credits received from refund'
    ),
    'exchange_refund': CreditLabel(
        'Exchange Refund',
        'Credits received from ticket exchange',
        'Credits received from ticket exchange',
    ),
    'exchange_payment': CreditLabel(
        'Ticket Upgrade', 'Credits used for ticket upgrade', 'Credits used for ticket upgrade'
    ),
    'admin_adjustment': CreditLabel(
        'Admin Adjustment',
        'Credits added by administrator',
        'Credits deducted by administrator',
    ),
    'bonus': CreditLabel('Bonus', 'Bonus credits received', 'Bonus credits received'),
}


def label_for(transaction_type: str) -> CreditLabel:
    return CREDIT_LABELS.get(transaction_type, DEFAULT_CREDIT_LABEL)
