# homehelp/modules/credentials/schemas.py

from pydantic import BaseModel, Field


class CredentialCreate(BaseModel):
    """
    A licence or certificate the provider submits for review
    """
    document_name: str = Field(..., min_length=1, max_length=200)
    document_url: str = Field(..., min_length=1, max_length=500)


class CredentialVerify(BaseModel):
    is_verified: bool
