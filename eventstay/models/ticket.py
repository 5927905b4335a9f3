"""Ticket models (owned by the ticketing subsystem)."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from eventstay.database import Base

if TYPE_CHECKING:
    from eventstay.models.enrollment import Enrollment
    from eventstay.models.payment import Payment


class TicketStatus(str, enum.Enum):
    RESERVED = "RESERVED"
    PAID = "PAID"


class TicketType(Base):
    """Kind of ticket and what it entitles its holder to."""

    __tablename__ = "ticket_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)  # in cents
    is_remote: Mapped[bool] = mapped_column(Boolean, nullable=False)
    includes_hotel: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    tickets: Mapped[list["Ticket"]] = relationship("Ticket", back_populates="ticket_type")


class Ticket(Base):
    """Ticket held by an enrollment."""

    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ticket_types.id"), nullable=False
    )
    enrollment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("enrollments.id"), unique=True, nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TicketStatus.RESERVED.value
    )  # RESERVED, PAID
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    ticket_type: Mapped["TicketType"] = relationship("TicketType", back_populates="tickets")
    enrollment: Mapped["Enrollment"] = relationship("Enrollment", back_populates="ticket")
    payments: Mapped[list["Payment"]] = relationship("Payment", back_populates="ticket")
