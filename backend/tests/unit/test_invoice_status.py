"""Unit tests for the invoice status lifecycle."""
import pytest

from paykit.exceptions import InvalidInput
from paykit.models import TERMINAL_STATUSES, TRANSITIONS, Invoice, InvoiceStatus

ALLOWED = [(source, target) for source, targets in TRANSITIONS.items() for target in targets]
FORBIDDEN = [
    (source, target)
    for source in InvoiceStatus
    for target in InvoiceStatus
    if target not in TRANSITIONS.get(source, frozenset())
]


def test_transition_table_edges() -> None:
    """Test the exact outbound edges of each non-terminal status."""
    assert TRANSITIONS[InvoiceStatus.DRAFT] == {InvoiceStatus.DUE, InvoiceStatus.SUCCEEDED, InvoiceStatus.CANCELLED}
    assert TRANSITIONS[InvoiceStatus.DUE] == {
        InvoiceStatus.PROCESSING,
        InvoiceStatus.SUCCEEDED,
        InvoiceStatus.CANCELLED,
        InvoiceStatus.FAILED,
    }
    assert TRANSITIONS[InvoiceStatus.PROCESSING] == {
        InvoiceStatus.SUCCEEDED,
        InvoiceStatus.FAILED,
        InvoiceStatus.REQUIRES_AUTH,
    }
    assert TRANSITIONS[InvoiceStatus.FAILED] == {
        InvoiceStatus.DUE,
        InvoiceStatus.PROCESSING,
        InvoiceStatus.ABANDONED,
        InvoiceStatus.CANCELLED,
    }
    assert TRANSITIONS[InvoiceStatus.REQUIRES_AUTH] == {InvoiceStatus.SUCCEEDED, InvoiceStatus.FAILED}
    assert TRANSITIONS[InvoiceStatus.SUCCEEDED] == {InvoiceStatus.DISPUTED, InvoiceStatus.REFUNDED}


@pytest.mark.parametrize("source,target", ALLOWED)
def test_can_transition_to_allowed(source: InvoiceStatus, target: InvoiceStatus) -> None:
    """Test that every edge in the table is allowed."""
    assert Invoice("inv-1", 10, status=source).can_transition_to(target)


@pytest.mark.parametrize("source,target", FORBIDDEN)
def test_try_transition_forbidden_keeps_status(source: InvoiceStatus, target: InvoiceStatus) -> None:
    """Test that a checked transition outside the table leaves the status alone."""
    invoice = Invoice("inv-1", 10, status=source)

    assert not invoice.try_transition(target)
    assert invoice.status == source


@pytest.mark.parametrize("status", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
def test_terminal_statuses_have_no_exits(status: InvoiceStatus) -> None:
    """Test that terminal statuses reject every target."""
    invoice = Invoice("inv-1", 10, status=status)

    assert invoice.is_terminal()
    assert not any(invoice.can_transition_to(target) for target in InvoiceStatus)


def test_try_transition_accepts_string_target() -> None:
    """Test that targets may be given by wire value."""
    invoice = Invoice("inv-1", 10)

    assert invoice.try_transition("due")
    assert invoice.status == InvoiceStatus.DUE


def test_can_transition_to_unknown_target() -> None:
    """Test that an unknown target is simply not allowed."""
    assert not Invoice("inv-1", 10).can_transition_to("unpaid")


def test_mutators_bypass_transition_table() -> None:
    """Test that mark_as_* methods write the status unconditionally."""
    invoice = Invoice("inv-1", 10, status=InvoiceStatus.REFUNDED)

    invoice.mark_as_due()
    assert invoice.status == InvoiceStatus.DUE

    invoice.mark_as_abandoned()
    assert invoice.status == InvoiceStatus.ABANDONED

    invoice.mark_as_processing()
    assert invoice.status == InvoiceStatus.PROCESSING

    invoice.mark_as_requires_auth()
    assert invoice.status == InvoiceStatus.REQUIRES_AUTH

    invoice.mark_as_paid()
    assert invoice.status == InvoiceStatus.SUCCEEDED

    invoice.mark_as_disputed()
    assert invoice.status == InvoiceStatus.DISPUTED

    invoice.mark_as_refunded()
    assert invoice.status == InvoiceStatus.REFUNDED

    invoice.mark_as_cancelled()
    assert invoice.status == InvoiceStatus.CANCELLED

    invoice.status = "draft"
    assert invoice.status == InvoiceStatus.DRAFT


def test_mark_as_failed_records_error() -> None:
    """Test that a failure can carry the gateway error."""
    invoice = Invoice("inv-1", 10, status=InvoiceStatus.PROCESSING)

    invoice.mark_as_failed("card_declined")

    assert invoice.status == InvoiceStatus.FAILED
    assert invoice.last_error == "card_declined"


def test_status_setter_rejects_unknown_value() -> None:
    """Test that an unknown status raises InvalidInput."""
    invoice = Invoice("inv-1", 10)

    with pytest.raises(InvalidInput):
        invoice.status = "unpaid"


def test_increment_attempts() -> None:
    """Test the payment attempt counter."""
    invoice = Invoice("inv-1", 10)

    assert invoice.increment_attempts() == 1
    assert invoice.increment_attempts() == 2
    assert invoice.attempts == 2
