"""Pydantic schemas for Credit payloads."""
from pydantic import AliasChoices, Field

from paykit.models.enums import CreditStatus
from paykit.schemas.base import CamelPayload


class CreditPayload(CamelPayload):
    """Serialized credit balance."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "$id"), description="Credit ID")
    credits: float = Field(default=0.0, ge=0, description="Remaining balance")
    credits_used: float = Field(default=0.0, ge=0, description="Cumulative amount consumed")
    status: CreditStatus = Field(default=CreditStatus.ACTIVE, description="Credit status")
