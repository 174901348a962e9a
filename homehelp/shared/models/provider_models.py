# homehelp/shared/models/provider_models.py

from __future__ import annotations
import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Enum, Float, Integer, Boolean, ForeignKey, DateTime, JSON, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from homehelp.core.database import Base, new_uid, utc_now
from .service_models import ServiceCategory, provider_service_link_table

if TYPE_CHECKING:
    from .user_models import User
    from .service_models import Service


class ProviderProfile(Base):
    """
    Business profile of a provider user: rate, category, portfolio and
    the services they offer.
    """
    __tablename__ = "provider_profiles"

    uid: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_uid, index=True)
    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.uid"), unique=True, index=True)
    hourly_rate: Mapped[float] = mapped_column(Float, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="0")
    category: Mapped[str] = mapped_column(
        Enum(ServiceCategory, name="provider_category_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    work_images: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True, comment="portfolio image URLs")
    years_of_experience: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utc_now, server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, server_default=func.now()
    )

    user: Mapped["User"] = relationship("User", back_populates="provider_profile")
    services: Mapped[list["Service"]] = relationship(
        "Service", secondary=provider_service_link_table, back_populates="providers"
    )
    credentials: Mapped[list["Credential"]] = relationship(
        "Credential",
        back_populates="provider",
        cascade="all, delete-orphan",
        order_by="Credential.submitted_at",
    )


class Credential(Base):
    """A licence or certificate uploaded by a provider, verified by an admin."""
    __tablename__ = "credentials"

    uid: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_uid, index=True)
    provider_id: Mapped[str] = mapped_column(String(26), ForeignKey("provider_profiles.uid"), index=True)
    document_name: Mapped[str] = mapped_column(String(200), nullable=False)
    document_url: Mapped[str] = mapped_column(String(500), nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="0")
    submitted_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utc_now, server_default=func.now())
    verified_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    provider: Mapped["ProviderProfile"] = relationship("ProviderProfile", back_populates="credentials")
