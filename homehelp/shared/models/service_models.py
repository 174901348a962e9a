# homehelp/shared/models/service_models.py

from __future__ import annotations
import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import Column, String, Text, Enum, ForeignKey, DateTime, Table, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from homehelp.core.database import Base, new_uid, utc_now

if TYPE_CHECKING:
    from .provider_models import ProviderProfile


class ServiceCategory(str, PyEnum):
    plumbing = "plumbing"
    electrical = "electrical"
    landscaping = "landscaping"


# many-to-many: which services a provider offers
provider_service_link_table = Table(
    "provider_service_link",
    Base.metadata,
    Column("provider_id", String(26), ForeignKey("provider_profiles.uid"), primary_key=True),
    Column("service_id", String(26), ForeignKey("services.uid"), primary_key=True),
)


class Service(Base):
    __tablename__ = "services"

    uid: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_uid, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        Enum(ServiceCategory, name="service_category_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utc_now, server_default=func.now())

    providers: Mapped[list["ProviderProfile"]] = relationship(
        "ProviderProfile", secondary=provider_service_link_table, back_populates="services"
    )
