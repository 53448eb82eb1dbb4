"""Unit tests for credit consumption."""
import pytest

from paykit.exceptions import InvalidInput
from paykit.models import Credit, CreditStatus
from tests.utils.factories import CreditFactory


def test_credit_constructor(credit: Credit) -> None:
    """Test that a new credit is active with nothing used."""
    assert credit.id == "credit-123"
    assert credit.credits == 50.0
    assert credit.credits_used == 0.0
    assert credit.status == CreditStatus.ACTIVE
    assert credit.has_available_credits()
    assert not credit.is_fully_used()


def test_use_credits_partial_then_full() -> None:
    """Test consuming a credit in two steps until it is exhausted."""
    credit = Credit("c1", 100.0)

    assert credit.use_credits(40) == 40.0
    assert credit.credits == 60.0
    assert credit.credits_used == 40.0
    assert credit.status == CreditStatus.ACTIVE

    assert credit.use_credits(100) == 60.0
    assert credit.credits == 0.0
    assert credit.credits_used == 100.0
    assert credit.status == CreditStatus.APPLIED
    assert credit.is_fully_used()
    assert not credit.has_available_credits()


def test_use_credits_exact_balance_marks_applied(credit: Credit) -> None:
    """Test that consuming exactly the balance marks the credit applied."""
    assert credit.use_credits(50) == 50.0
    assert credit.status == CreditStatus.APPLIED


@pytest.mark.parametrize("amount", [0, -10])
def test_use_credits_non_positive_amount(credit: Credit, amount: float) -> None:
    """Test that non-positive requests consume nothing and change nothing."""
    assert credit.use_credits(amount) == 0.0
    assert credit.credits == 50.0
    assert credit.credits_used == 0.0
    assert credit.status == CreditStatus.ACTIVE


def test_use_credits_on_exhausted_credit_consumes_nothing() -> None:
    """Test that an exhausted credit is marked applied and contributes zero."""
    credit = Credit("c1", 0.0)

    assert credit.use_credits(25) == 0.0
    assert credit.credits == 0.0
    assert credit.credits_used == 0.0
    assert credit.status == CreditStatus.APPLIED


def test_credit_conservation_over_many_requests() -> None:
    """Test that repeated requests never consume more than the initial balance."""
    credit = Credit("c1", 75.0)

    for amount in [10, 20, 30, 40, 50]:
        credit.use_credits(amount)

    assert credit.credits_used == 75.0
    assert credit.credits == 0.0


def test_setters_do_not_change_status(credit: Credit) -> None:
    """Test that plain assignment never auto-transitions the status."""
    credit.credits = 0.0

    assert credit.status == CreditStatus.ACTIVE
    assert credit.is_fully_used()


def test_credit_status_helpers(credit: Credit) -> None:
    """Test explicit status changes."""
    credit.mark_as_expired()
    assert credit.status == CreditStatus.EXPIRED

    credit.mark_as_applied()
    assert credit.status == CreditStatus.APPLIED

    credit.status = "active"
    assert credit.status == CreditStatus.ACTIVE


def test_credit_unknown_status_rejected(credit: Credit) -> None:
    """Test that an unknown status raises InvalidInput."""
    with pytest.raises(InvalidInput):
        credit.status = "frozen"


def test_credit_to_dict(credit: Credit) -> None:
    """Test the canonical camelCase mapping of a credit."""
    credit.use_credits(20)

    assert credit.to_dict() == {
        "id": "credit-123",
        "credits": 30.0,
        "creditsUsed": 20.0,
        "status": "active",
    }


def test_credit_from_dict() -> None:
    """Test building a credit from factory data."""
    data = CreditFactory.create({"credits": 35.0, "creditsUsed": 5.0, "status": "expired"})

    credit = Credit.from_dict(data)

    assert credit.id == data["id"]
    assert credit.credits == 35.0
    assert credit.credits_used == 5.0
    assert credit.status == CreditStatus.EXPIRED


def test_credit_from_dict_minimal(id_generator) -> None:
    """Test defaults when only a balance is given."""
    credit = Credit.from_dict({"credits": 10}, id_generator=id_generator)

    assert credit.id == "credit_1"
    assert credit.credits_used == 0.0
    assert credit.status == CreditStatus.ACTIVE


def test_credit_from_dict_negative_balance() -> None:
    """Test that a negative serialized balance is rejected."""
    with pytest.raises(InvalidInput):
        Credit.from_dict({"id": "c1", "credits": -5})


def test_credit_from_value_rejects_other_types() -> None:
    """Test that from_value rejects values that are neither Credit nor mapping."""
    with pytest.raises(InvalidInput):
        Credit.from_value(42)


def test_use_credits_leaves_no_float_remainder() -> None:
    """Test that consuming a balance in awkward steps ends at exactly zero."""
    credit = Credit("credit-1", 0.3)

    assert credit.use_credits(0.1) == 0.1
    assert credit.use_credits(0.1) == 0.1
    assert credit.use_credits(0.1) == 0.1

    assert credit.credits == 0.0
    assert credit.credits_used == 0.3
    assert credit.status == CreditStatus.APPLIED
    assert not credit.has_available_credits()


@pytest.mark.parametrize("balance", [float("inf"), float("nan"), "abc", True])
def test_credit_rejects_non_numeric_balance(balance) -> None:
    """Test that the credit balance must be a finite number."""
    with pytest.raises(InvalidInput):
        Credit("credit-1", balance)
