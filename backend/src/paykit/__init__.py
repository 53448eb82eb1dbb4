"""Payment invoice pricing: discounts, credits, tax and status lifecycle."""
from paykit.exceptions import InvalidInput, InvalidStateTransition, PayError
from paykit.models import Credit, CreditStatus, Discount, DiscountType, Invoice, InvoiceStatus

__all__ = [
    "PayError",
    "InvalidInput",
    "InvalidStateTransition",
    "Credit",
    "CreditStatus",
    "Discount",
    "DiscountType",
    "Invoice",
    "InvoiceStatus",
]
