"""Pytest configuration and shared fixtures."""
from typing import Generator

import pytest
import structlog

from paykit.models import Credit, Discount, DiscountType, Invoice, InvoiceStatus
from paykit.services import InvoiceService
from paykit.utils.ids import IdGenerator, sequential_id_generator


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults so log capture works regardless of test order."""
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="function")
def id_generator() -> IdGenerator:
    """
    Deterministic ID generator.

    Returns:
        Callable producing prefix_1, prefix_2, ...
    """
    return sequential_id_generator()


@pytest.fixture(scope="function")
def fixed_discount() -> Discount:
    """$25.00 fixed discount."""
    return Discount("discount-fixed", 25.0, description="Fixed Discount", type=DiscountType.FIXED)


@pytest.fixture(scope="function")
def percentage_discount() -> Discount:
    """10% discount."""
    return Discount("discount-percentage", 10.0, description="Percentage Discount", type=DiscountType.PERCENTAGE)


@pytest.fixture(scope="function")
def credit() -> Credit:
    """$50.00 credit balance."""
    return Credit("credit-123", 50.0)


@pytest.fixture(scope="function")
def invoice() -> Invoice:
    """
    Draft $100.00 USD invoice without discounts or credits.

    Returns:
        Invoice: Fresh invoice
    """
    return Invoice("invoice-123", 100.0, InvoiceStatus.DRAFT, "USD")


@pytest.fixture(scope="function")
def invoice_service(id_generator: IdGenerator) -> InvoiceService:
    """Invoice service with deterministic nested IDs."""
    return InvoiceService(id_generator=id_generator)
