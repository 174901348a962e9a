# homehelp/modules/admin/schemas.py

from pydantic import BaseModel
from typing import List

from homehelp.shared.models.user_models import UserRole
from homehelp.modules.providers.schemas import CredentialPublic


class DashboardStats(BaseModel):
    total_users: int = 0
    total_customers: int = 0
    total_providers: int = 0
    total_bookings: int = 0
    requested_bookings: int = 0
    completed_bookings: int = 0
    total_revenue: float = 0.0
    pending_verifications: int = 0


class DashboardResponse(BaseModel):
    stats: DashboardStats
    pending_credentials: List[CredentialPublic] = []


class RoleUpdate(BaseModel):
    role: UserRole


class ActiveUpdate(BaseModel):
    is_active: bool


class VerifyUpdate(BaseModel):
    is_verified: bool
