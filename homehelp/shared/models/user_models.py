# homehelp/shared/models/user_models.py
from __future__ import annotations
import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    String,
    Text,
    Enum,
    Boolean,
    DateTime,
    func,
    )
from sqlalchemy.orm import relationship, Mapped, mapped_column

from homehelp.core.database import Base, new_uid, utc_now

if TYPE_CHECKING:
    from .provider_models import ProviderProfile


class UserRole(str, PyEnum):
    customer = "customer"
    provider = "provider"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_uid, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    role: Mapped[str] = mapped_column(
        Enum("customer", "provider", "admin", name="user_role_enum"),
        nullable=False,
        default=UserRole.customer.value,
        server_default=UserRole.customer.value,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    profile_image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, server_default="1")

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utc_now, server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, server_default=func.now()
    )

    # one-to-one: only users with role "provider" carry a profile
    provider_profile: Mapped[Optional["ProviderProfile"]] = relationship(
        "ProviderProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
