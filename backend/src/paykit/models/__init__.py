"""Invoice pricing value objects."""

from paykit.models.enums import CreditStatus, DiscountType, InvoiceStatus
from paykit.models.discount import Discount
from paykit.models.credit import Credit
from paykit.models.invoice import TERMINAL_STATUSES, TRANSITIONS, Invoice

__all__ = [
    "CreditStatus",
    "DiscountType",
    "InvoiceStatus",
    "Discount",
    "Credit",
    "Invoice",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
]
