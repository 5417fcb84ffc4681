"""
A/B experiment schemas.
"""

from pydantic import BaseModel, Field

from personalization.models.experiment import Variant


class VariantResponse(BaseModel):
    user_id: str
    variant: Variant


class ConversionRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    converted: bool = Field(..., description="Whether the user converted")
