"""Pydantic schemas for Invoice payloads."""
from typing import Any

from pydantic import Field

from paykit.models.enums import InvoiceStatus
from paykit.schemas.base import CamelPayload


class InvoicePayload(CamelPayload):
    """
    Canonical serialized invoice.

    Nested discounts and credits stay raw mappings here; the invoice
    normalizes them through Discount.from_value and Credit.from_value so
    id generation and error reporting happen in one place.
    """

    id: str = Field(..., min_length=1, description="Invoice ID")
    amount: float = Field(..., description="Original base amount (negative for credit notes)")
    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT, description="Invoice status")
    currency: str | None = Field(default=None, min_length=3, max_length=3, description="ISO 4217 currency code")
    discounts: list[dict[str, Any]] = Field(default_factory=list, description="Serialized discounts")
    credits: list[dict[str, Any]] = Field(default_factory=list, description="Serialized credits")
    address: dict[str, Any] = Field(default_factory=dict, description="Billing address snapshot")
    gross_amount: float = Field(default=0.0, description="Running/final payable amount")
    tax_amount: float = Field(default=0.0, description="Externally supplied tax")
    vat_amount: float = Field(default=0.0, description="Externally supplied VAT")
    credits_used: float = Field(default=0.0, description="Credits consumed by the last credit pass")
    credits_ids: list[str] = Field(default_factory=list, description="IDs of credits visited by the last credit pass")
    discount_total: float = Field(default=0.0, description="Discount applied by the last discount pass")
    last_error: str | None = Field(default=None, description="Last payment error message")
    attempts: int = Field(default=0, ge=0, description="Recorded payment attempts")
