from decimal import Decimal

import pytest

from ticket_ledger.service.ticketing.domain.value_object.credit_label import label_for


@pytest.mark.parametrize(
    'type,amount,type_label,action_text',
    [
        ('purchase', '-25', 'Purchase', 'Credits used for purchase'),
        ('refund', '50', 'Refund', 'Credits received from refund'),
        ('exchange_refund', '10', 'Exchange Refund', 'Credits received from ticket exchange'),
        ('exchange_payment', '-10', 'Ticket Upgrade', 'Credits used for ticket upgrade'),
        ('admin_adjustment', '5', 'Admin Adjustment', 'Credits added by administrator'),
        ('admin_adjustment', '-5', 'Admin Adjustment', 'Credits deducted by administrator'),
        ('bonus', '3', 'Bonus', 'Bonus credits received'),
    ],
)
def test_known_types(type, amount, type_label, action_text) -> None:
    label = label_for(type)

    assert label.type_label == type_label
    assert label.action_text(Decimal(amount)) == action_text


def test_unknown_type_falls_back_by_sign() -> None:
    label = label_for('loyalty_cashback')

    assert label.type_label == 'Credit adjustment'
    assert label.action_text(Decimal('1')) == 'Credits added'
    assert label.action_text(Decimal('-1')) == 'Credits used'
