"""Enumerations shared by models and schemas."""
import enum


class DiscountType(enum.Enum):
    """How a discount value is interpreted."""

    FIXED = "fixed"  # Absolute amount in major currency units
    PERCENTAGE = "percentage"  # Percentage points of the base amount


class CreditStatus(enum.Enum):
    """Credit balance lifecycle status."""

    ACTIVE = "active"
    APPLIED = "applied"
    EXPIRED = "expired"


class InvoiceStatus(enum.Enum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    DUE = "due"
    PROCESSING = "processing"
    REQUIRES_AUTH = "requires_auth"
    FAILED = "failed"
    SUCCEEDED = "succeeded"
    DISPUTED = "disputed"
    CANCELLED = "cancelled"
    ABANDONED = "abandoned"
    REFUNDED = "refunded"
