from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ticket_ledger.platform.database.orm_db_setting import Base


class RefundModel(Base):
    __tablename__ = 'refund'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('ticket.id'), nullable=False, index=True
    )
    purchase_id: Mapped[int] = mapped_column(Integer, ForeignKey('purchase.id'), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='requested', nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    previous_ticket_status: Mapped[str] = mapped_column(String(20), nullable=False)
    settlement: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    decided_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
