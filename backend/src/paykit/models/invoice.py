"""Invoice value object: discount, tax and credit pricing plus status lifecycle."""
from collections.abc import Iterable, Mapping
from typing import Any

from paykit.config import settings
from paykit.exceptions import InvalidInput
from paykit.models.credit import Credit
from paykit.models.discount import Discount
from paykit.models.enums import DiscountType, InvoiceStatus
from paykit.schemas.base import validate_payload
from paykit.schemas.invoice import InvoicePayload
from paykit.utils.ids import IdGenerator
from paykit.utils.money import coerce_amount, round_amount

# Allowed status changes. Statuses missing as keys are terminal.
TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.DUE, InvoiceStatus.SUCCEEDED, InvoiceStatus.CANCELLED}),
    InvoiceStatus.DUE: frozenset(
        {InvoiceStatus.PROCESSING, InvoiceStatus.SUCCEEDED, InvoiceStatus.CANCELLED, InvoiceStatus.FAILED}
    ),
    InvoiceStatus.PROCESSING: frozenset({InvoiceStatus.SUCCEEDED, InvoiceStatus.FAILED, InvoiceStatus.REQUIRES_AUTH}),
    InvoiceStatus.FAILED: frozenset(
        {InvoiceStatus.DUE, InvoiceStatus.PROCESSING, InvoiceStatus.ABANDONED, InvoiceStatus.CANCELLED}
    ),
    InvoiceStatus.REQUIRES_AUTH: frozenset({InvoiceStatus.SUCCEEDED, InvoiceStatus.FAILED}),
    InvoiceStatus.SUCCEEDED: frozenset({InvoiceStatus.DISPUTED, InvoiceStatus.REFUNDED}),
}

TERMINAL_STATUSES = frozenset(
    {InvoiceStatus.DISPUTED, InvoiceStatus.CANCELLED, InvoiceStatus.ABANDONED, InvoiceStatus.REFUNDED}
)


class Invoice:
    """
    Invoice pricing and lifecycle.

    finalize() derives gross_amount and status from the base amount:
    discounts (fixed before percentage), then tax and VAT, then credits.
    Amount fields are rounded to 2 decimals whenever they are written.

    Status mutators (mark_as_*, the status setter) write unconditionally so
    callers can force edge states such as ABANDONED. Use can_transition_to
    or try_transition when the transition table should be respected.

    Instances are mutable and must have a single writer at a time.
    """

    def __init__(
        self,
        id: str,
        amount: float,
        status: InvoiceStatus | str = InvoiceStatus.DRAFT,
        currency: str | None = None,
        discounts: Iterable[Discount | Mapping[str, Any]] | None = None,
        credits: Iterable[Credit | Mapping[str, Any]] | None = None,
        address: Mapping[str, Any] | None = None,
        gross_amount: float = 0.0,
        tax_amount: float = 0.0,
        vat_amount: float = 0.0,
        credits_used: float = 0.0,
        credits_ids: Iterable[str] | None = None,
        discount_total: float = 0.0,
        last_error: str | None = None,
        attempts: int = 0,
        id_generator: IdGenerator | None = None,
    ):
        self._id = id
        self._amount = coerce_amount(amount, "Invoice amount")
        self.status = status
        self.currency = currency or settings.default_currency
        self.address = dict(address or {})
        self.id_generator = id_generator
        self.discounts = discounts if discounts is not None else []
        self.credits = credits if credits is not None else []
        self.gross_amount = gross_amount
        self.tax_amount = tax_amount
        self.vat_amount = vat_amount
        self.credits_used = credits_used
        self.credits_ids = list(credits_ids or [])
        self.discount_total = discount_total
        self.last_error = last_error
        self.attempts = attempts

    # Identity and base amount are fixed at construction

    @property
    def id(self) -> str:
        return self._id

    @property
    def amount(self) -> float:
        """Original base amount; negative for a credit note."""
        return self._amount

    # Rounded amount fields

    @property
    def gross_amount(self) -> float:
        return self._gross_amount

    @gross_amount.setter
    def gross_amount(self, value: float) -> None:
        self._gross_amount = round_amount(value)

    @property
    def tax_amount(self) -> float:
        return self._tax_amount

    @tax_amount.setter
    def tax_amount(self, value: float) -> None:
        self._tax_amount = round_amount(value)

    @property
    def vat_amount(self) -> float:
        return self._vat_amount

    @vat_amount.setter
    def vat_amount(self, value: float) -> None:
        self._vat_amount = round_amount(value)

    @property
    def credits_used(self) -> float:
        return self._credits_used

    @credits_used.setter
    def credits_used(self, value: float) -> None:
        self._credits_used = round_amount(value)

    @property
    def discount_total(self) -> float:
        return self._discount_total

    @discount_total.setter
    def discount_total(self, value: float) -> None:
        self._discount_total = round_amount(value)

    # Discounts

    @property
    def discounts(self) -> list[Discount]:
        return self._discounts

    @discounts.setter
    def discounts(self, items: Iterable[Discount | Mapping[str, Any]]) -> None:
        self._discounts = [
            Discount.from_value(item, id_generator=self.id_generator) for item in self._as_list(items, "Discounts")
        ]

    def add_discount(self, discount: Discount | Mapping[str, Any]) -> Discount:
        normalized = Discount.from_value(discount, id_generator=self.id_generator)
        self._discounts.append(normalized)
        return normalized

    def find_discount_by_id(self, discount_id: str) -> Discount | None:
        return next((d for d in self._discounts if d.id == discount_id), None)

    def remove_discount_by_id(self, discount_id: str) -> None:
        self._discounts = [d for d in self._discounts if d.id != discount_id]

    def clear_discounts(self) -> None:
        self._discounts = []

    def has_discounts(self) -> bool:
        return bool(self._discounts)

    @property
    def discount_count(self) -> int:
        return len(self._discounts)

    # Credits

    @property
    def credits(self) -> list[Credit]:
        return self._credits

    @credits.setter
    def credits(self, items: Iterable[Credit | Mapping[str, Any]]) -> None:
        self._credits = [
            Credit.from_value(item, id_generator=self.id_generator) for item in self._as_list(items, "Credits")
        ]

    def add_credit(self, credit: Credit | Mapping[str, Any]) -> Credit:
        normalized = Credit.from_value(credit, id_generator=self.id_generator)
        self._credits.append(normalized)
        return normalized

    def find_credit_by_id(self, credit_id: str) -> Credit | None:
        return next((c for c in self._credits if c.id == credit_id), None)

    def remove_credit_by_id(self, credit_id: str) -> None:
        self._credits = [c for c in self._credits if c.id != credit_id]

    def clear_credits(self) -> None:
        self._credits = []

    def has_credits(self) -> bool:
        return bool(self._credits)

    @property
    def credit_count(self) -> int:
        return len(self._credits)

    def total_available_credits(self) -> float:
        return round_amount(sum(credit.credits for credit in self._credits))

    def add_credit_internal_id(self, credit_id: str) -> None:
        self.credits_ids.append(credit_id)

    @staticmethod
    def _as_list(items: Any, label: str) -> list[Any]:
        # Mappings and strings are iterable but never a valid collection here
        if isinstance(items, (Mapping, str, bytes)) or not isinstance(items, Iterable):
            raise InvalidInput(f"{label} must be a list, got {type(items).__name__}")
        return list(items)

    # Amount predicates

    def is_negative_amount(self) -> bool:
        return self._amount < 0

    def is_zero_amount(self) -> bool:
        return self._gross_amount == 0

    def is_below_minimum_amount(self, minimum_amount: float | None = None) -> bool:
        if minimum_amount is None:
            minimum_amount = settings.minimum_invoice_amount
        return self._gross_amount < minimum_amount

    # Pricing

    def apply_discounts(self) -> None:
        """
        Reduce gross_amount by every discount, fixed ones first.

        Percentage discounts are computed on the amount left after the fixed
        ones. Stops once the running amount reaches zero; discount_total is
        re-derived on every call.
        """
        # sorted() is stable, so insertion order holds within each type
        ordered = sorted(self._discounts, key=lambda d: 0 if d.type == DiscountType.FIXED else 1)

        amount = self._gross_amount
        total_discount = 0.0

        for discount in ordered:
            if amount <= 0:
                break

            # A percentage above 100 must not push the amount below zero
            reduction = min(discount.calculate_discount(amount), amount)
            if reduction <= 0:
                continue

            amount -= reduction
            total_discount += reduction

        self.gross_amount = amount
        self.discount_total = total_discount

    def apply_credits(self) -> None:
        """
        Consume credits in list order against gross_amount.

        Every visited credit is recorded in credits_ids, even when it
        contributed nothing. credits_used is re-derived on every call.
        """
        amount = self._gross_amount
        total_credits_used = 0.0
        credits_ids: list[str] = []

        for credit in self._credits:
            if amount == 0:
                break

            consumed = credit.use_credits(amount)
            amount = round_amount(amount - consumed)
            total_credits_used += consumed
            credits_ids.append(credit.id)

        self.gross_amount = amount
        self.credits_used = total_credits_used
        self.credits_ids = credits_ids

    def finalize(self, minimum_amount: float | None = None) -> None:
        """
        Price the invoice from its base amount and set its status.

        Order: reset gross_amount to amount, discounts, tax and VAT, credits.
        A zero result succeeds, a result below minimum_amount is cancelled,
        anything else is due.

        Args:
            minimum_amount: Smallest chargeable amount (defaults to settings)
        """
        self.gross_amount = self._amount
        self.apply_discounts()

        # tax_amount and vat_amount are already rounded by their setters
        self.gross_amount = self._gross_amount + self._tax_amount + self._vat_amount

        self.apply_credits()

        if self.is_zero_amount():
            self.mark_as_succeeded()
        elif self.is_below_minimum_amount(minimum_amount):
            self.mark_as_cancelled()
        else:
            self.mark_as_due()

    # Status

    @property
    def status(self) -> InvoiceStatus:
        return self._status

    @status.setter
    def status(self, status: InvoiceStatus | str) -> None:
        try:
            self._status = InvoiceStatus(status)
        except ValueError as e:
            raise InvalidInput(f"Unknown invoice status: {status!r}") from e

    def can_transition_to(self, target: InvoiceStatus | str) -> bool:
        try:
            target = InvoiceStatus(target)
        except ValueError:
            return False
        return target in TRANSITIONS.get(self._status, frozenset())

    def try_transition(self, target: InvoiceStatus | str) -> bool:
        """Move to target only if the transition table allows it."""
        if not self.can_transition_to(target):
            return False
        self._status = InvoiceStatus(target)
        return True

    def is_terminal(self) -> bool:
        return self._status in TERMINAL_STATUSES

    def mark_as_due(self) -> None:
        self._status = InvoiceStatus.DUE

    def mark_as_processing(self) -> None:
        self._status = InvoiceStatus.PROCESSING

    def mark_as_requires_auth(self) -> None:
        self._status = InvoiceStatus.REQUIRES_AUTH

    def mark_as_failed(self, error: str | None = None) -> None:
        self._status = InvoiceStatus.FAILED
        if error is not None:
            self.last_error = error

    def mark_as_succeeded(self) -> None:
        self._status = InvoiceStatus.SUCCEEDED

    mark_as_paid = mark_as_succeeded

    def mark_as_disputed(self) -> None:
        self._status = InvoiceStatus.DISPUTED

    def mark_as_cancelled(self) -> None:
        self._status = InvoiceStatus.CANCELLED

    def mark_as_abandoned(self) -> None:
        self._status = InvoiceStatus.ABANDONED

    def mark_as_refunded(self) -> None:
        self._status = InvoiceStatus.REFUNDED

    def increment_attempts(self) -> int:
        self.attempts += 1
        return self.attempts

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the canonical camelCase mapping."""
        return InvoicePayload(
            id=self._id,
            amount=self._amount,
            status=self._status,
            currency=self.currency,
            discounts=[discount.to_dict() for discount in self._discounts],
            credits=[credit.to_dict() for credit in self._credits],
            address=self.address,
            gross_amount=self._gross_amount,
            tax_amount=self._tax_amount,
            vat_amount=self._vat_amount,
            credits_used=self._credits_used,
            credits_ids=self.credits_ids,
            discount_total=self._discount_total,
            last_error=self.last_error,
            attempts=self.attempts,
        ).model_dump(by_alias=True, mode="json")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], id_generator: IdGenerator | None = None) -> "Invoice":
        """
        Build an invoice from its canonical mapping.

        Raises:
            InvalidInput: If any field or nested discount/credit is malformed
        """
        payload = validate_payload(InvoicePayload, data, "invoice")

        return cls(
            id=payload.id,
            amount=payload.amount,
            status=payload.status,
            currency=payload.currency,
            discounts=payload.discounts,
            credits=payload.credits,
            address=payload.address,
            gross_amount=payload.gross_amount,
            tax_amount=payload.tax_amount,
            vat_amount=payload.vat_amount,
            credits_used=payload.credits_used,
            credits_ids=payload.credits_ids,
            discount_total=payload.discount_total,
            last_error=payload.last_error,
            attempts=payload.attempts,
            id_generator=id_generator,
        )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Invoice(id={self._id}, status={self._status.value}, amount={self._amount}, "
            f"gross_amount={self._gross_amount}, currency={self.currency})>"
        )
