"""Service layer for invoice operations."""

from paykit.services.invoice_service import InvoiceService

__all__ = ["InvoiceService"]
