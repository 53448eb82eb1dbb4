"""Invoice service: assembling, pricing and recording payment events."""
from collections.abc import Mapping
from typing import Any

import structlog

from paykit.exceptions import InvalidInput, InvalidStateTransition
from paykit.models.enums import InvoiceStatus
from paykit.models.invoice import Invoice
from paykit.utils.ids import IdGenerator

logger = structlog.get_logger(__name__)


class InvoiceService:
    """
    Seam between gateway adapters and the invoice value object.

    Adapters build invoices here from request data, finalize them before
    charging, and report payment outcomes back through the record_* methods.
    """

    def __init__(self, id_generator: IdGenerator | None = None):
        """Initialize invoice service with an optional ID generator for nested entities."""
        self.id_generator = id_generator

    def build_invoice(self, payload: Mapping[str, Any]) -> Invoice:
        """
        Assemble an invoice from request data.

        Args:
            payload: Canonical camelCase invoice mapping

        Returns:
            Validated invoice, not yet finalized

        Raises:
            InvalidInput: If the payload is malformed; callers should reject the
                request before any gateway call
        """
        try:
            invoice = Invoice.from_dict(payload, id_generator=self.id_generator)
        except InvalidInput as e:
            logger.warning(
                "invoice_rejected",
                invoice_id=payload.get("id") if isinstance(payload, Mapping) else None,
                error=e.message,
                details=e.metadata.get("details"),
            )
            raise

        logger.info(
            "invoice_built",
            invoice_id=invoice.id,
            amount=invoice.amount,
            currency=invoice.currency,
            discounts_count=invoice.discount_count,
            credits_count=invoice.credit_count,
        )
        return invoice

    def finalize(self, invoice: Invoice, minimum_amount: float | None = None) -> Invoice:
        """
        Price the invoice and set its status from the result.

        Args:
            invoice: Invoice to finalize
            minimum_amount: Smallest chargeable amount (defaults to settings)

        Returns:
            The same invoice, finalized
        """
        previous_status = invoice.status
        invoice.finalize(minimum_amount=minimum_amount)

        logger.info(
            "invoice_finalized",
            invoice_id=invoice.id,
            amount=invoice.amount,
            discount_total=invoice.discount_total,
            tax_amount=invoice.tax_amount,
            vat_amount=invoice.vat_amount,
            credits_used=invoice.credits_used,
            credits_ids=invoice.credits_ids,
            gross_amount=invoice.gross_amount,
            previous_status=previous_status.value,
            status=invoice.status.value,
        )
        return invoice

    def transition(self, invoice: Invoice, target: InvoiceStatus | str, strict: bool = False) -> bool:
        """
        Apply a status change only if the transition table allows it.

        Args:
            invoice: Invoice to update
            target: Desired status
            strict: Raise instead of returning False when the change is rejected

        Returns:
            True if the status changed

        Raises:
            InvalidStateTransition: If strict and the transition is not allowed
        """
        current = invoice.status

        if invoice.try_transition(target):
            logger.info(
                "invoice_status_changed",
                invoice_id=invoice.id,
                from_status=current.value,
                to_status=invoice.status.value,
            )
            return True

        target_value = target.value if isinstance(target, InvoiceStatus) else str(target)
        logger.warning(
            "invalid_state_transition",
            invoice_id=invoice.id,
            from_status=current.value,
            to_status=target_value,
        )

        if strict:
            raise InvalidStateTransition(
                f"Cannot move invoice {invoice.id} from {current.value} to {target_value}",
                metadata={"invoice_id": invoice.id, "from": current.value, "to": target_value},
            )
        return False

    def record_attempt(self, invoice: Invoice) -> bool:
        """
        Record a payment attempt and move the invoice to PROCESSING.

        The attempt counter only moves when the transition is allowed.
        """
        changed = self.transition(invoice, InvoiceStatus.PROCESSING)
        if changed:
            attempts = invoice.increment_attempts()
            logger.info("payment_attempt_recorded", invoice_id=invoice.id, attempts=attempts)
        return changed

    def record_failure(self, invoice: Invoice, error: str) -> bool:
        """Record a failed payment with the gateway's error message."""
        changed = self.transition(invoice, InvoiceStatus.FAILED)
        if changed:
            invoice.last_error = error
            logger.warning("payment_failed", invoice_id=invoice.id, attempts=invoice.attempts, error=error)
        return changed

    def record_requires_auth(self, invoice: Invoice) -> bool:
        """Record that the gateway needs customer authentication (e.g. 3DS)."""
        return self.transition(invoice, InvoiceStatus.REQUIRES_AUTH)

    def record_success(self, invoice: Invoice) -> bool:
        """Record a successful payment."""
        changed = self.transition(invoice, InvoiceStatus.SUCCEEDED)
        if changed:
            invoice.last_error = None
        return changed

    def record_dispute(self, invoice: Invoice) -> bool:
        """Record a chargeback dispute on a paid invoice."""
        return self.transition(invoice, InvoiceStatus.DISPUTED)

    def record_refund(self, invoice: Invoice) -> bool:
        """Record a refund of a paid invoice."""
        return self.transition(invoice, InvoiceStatus.REFUNDED)

    def abandon(self, invoice: Invoice, reason: str | None = None) -> Invoice:
        """
        Force the invoice to ABANDONED regardless of its current status.

        Args:
            invoice: Invoice to abandon
            reason: Optional reason, stored as last_error

        Returns:
            The same invoice
        """
        previous_status = invoice.status
        invoice.mark_as_abandoned()
        if reason is not None:
            invoice.last_error = reason

        logger.info(
            "invoice_abandoned",
            invoice_id=invoice.id,
            previous_status=previous_status.value,
            reason=reason,
        )
        return invoice
