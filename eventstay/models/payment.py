"""Payment model (owned by the payments subsystem)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from eventstay.database import Base

if TYPE_CHECKING:
    from eventstay.models.ticket import Ticket


class Payment(Base):
    """Evidence that a ticket was paid for."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tickets.id"), nullable=False, index=True
    )
    value: Mapped[int] = mapped_column(Integer, nullable=False)  # in cents
    card_issuer: Mapped[str] = mapped_column(String(50), nullable=False)
    card_last_digits: Mapped[str] = mapped_column(String(4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    ticket: Mapped["Ticket"] = relationship("Ticket", back_populates="payments")
