# homehelp/modules/payments/schemas.py

from pydantic import BaseModel, Field
from typing import Literal


class PaymentCreate(BaseModel):
    """
    Body of 'POST /api/payments'. Payments are mocked, nothing is charged.
    """
    booking_id: str
    payment_method: Literal["card", "cash", "bank_transfer", "wallet"] = Field(
        "card", description="How the customer says they paid"
    )
