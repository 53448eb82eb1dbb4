"""Pydantic schemas for the serialized invoice format."""

from paykit.schemas.base import CamelPayload, validate_payload
from paykit.schemas.credit import CreditPayload
from paykit.schemas.discount import DiscountPayload
from paykit.schemas.invoice import InvoicePayload

__all__ = [
    "CamelPayload",
    "validate_payload",
    "CreditPayload",
    "DiscountPayload",
    "InvoicePayload",
]
