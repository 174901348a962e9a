# homehelp/modules/services/schemas.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from homehelp.shared.models.service_models import ServiceCategory

class ServiceBase(BaseModel):
    """
    Fields shared by every service payload
    """
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    category: ServiceCategory

class ServiceCreate(ServiceBase):
    pass

class ServiceUpdate(BaseModel):
    """
    Partial update: every field optional
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[ServiceCategory] = None

class ServicePublic(ServiceBase):
    uid: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
