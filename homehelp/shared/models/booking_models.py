# homehelp/shared/models/booking_models.py

from __future__ import annotations
import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Text, Integer, Float, Enum, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from homehelp.core.database import Base, new_uid, utc_now

if TYPE_CHECKING:
    from .user_models import User
    from .service_models import Service


class BookingStatus(str, PyEnum):
    requested = "requested"
    accepted = "accepted"
    completed = "completed"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


class PaymentStatus(str, PyEnum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"


class Booking(Base):
    __tablename__ = "bookings"

    uid: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_uid, index=True)
    customer_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.uid"), index=True)
    # the provider's *user* uid, not the profile uid
    provider_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.uid"), index=True)
    service_id: Mapped[str] = mapped_column(String(26), ForeignKey("services.uid"), index=True)
    status: Mapped[str] = mapped_column(
        Enum(*[s.value for s in BookingStatus], name="booking_status_enum"),
        nullable=False,
        default=BookingStatus.requested.value,
        server_default=BookingStatus.requested.value,
    )
    scheduled_date: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    duration_hours: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utc_now, server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, server_default=func.now()
    )

    customer: Mapped["User"] = relationship("User", foreign_keys=[customer_id])
    provider: Mapped["User"] = relationship("User", foreign_keys=[provider_id])
    service: Mapped["Service"] = relationship("Service")

    payment: Mapped[Optional["Payment"]] = relationship(
        "Payment", back_populates="booking", uselist=False, cascade="all, delete-orphan"
    )
    review: Mapped[Optional["Review"]] = relationship(
        "Review", back_populates="booking", uselist=False, cascade="all, delete-orphan"
    )


class Payment(Base):
    """Mock payment, one per booking."""
    __tablename__ = "payments"

    uid: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_uid, index=True)
    booking_id: Mapped[str] = mapped_column(String(26), ForeignKey("bookings.uid"), unique=True, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        Enum(*[s.value for s in PaymentStatus], name="payment_status_enum"),
        nullable=False,
        default=PaymentStatus.pending.value,
        server_default=PaymentStatus.pending.value,
    )
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    transaction_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utc_now, server_default=func.now())

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payment")


class Review(Base):
    __tablename__ = "reviews"

    uid: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_uid, index=True)
    booking_id: Mapped[str] = mapped_column(String(26), ForeignKey("bookings.uid"), unique=True, index=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, comment="1..5")
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utc_now, server_default=func.now())

    booking: Mapped["Booking"] = relationship("Booking", back_populates="review")
