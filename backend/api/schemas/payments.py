"""
Payment intent schemas.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class PaymentIntentRequest(BaseModel):
    """Price in major currency units (e.g. dollars)."""

    price: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        validation_alias=AliasChoices("price", "amount"),
    )


class PaymentIntentResponse(BaseModel):
    client_secret: str
