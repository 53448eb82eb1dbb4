"""Pydantic schemas for Discount payloads."""
from pydantic import AliasChoices, Field

from paykit.models.enums import DiscountType
from paykit.schemas.base import CamelPayload


class DiscountPayload(CamelPayload):
    """Serialized discount line."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "$id"), description="Discount ID")
    value: float = Field(..., ge=0, description="Fixed amount or percentage points, depending on type")
    amount: float | None = Field(default=None, description="Cached currency amount of the discount")
    description: str = Field(default="", description="Free-text description")
    type: DiscountType = Field(default=DiscountType.FIXED, description="Discount type (fixed, percentage)")
