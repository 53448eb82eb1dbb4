"""Discount line applied to an invoice before tax."""
from collections.abc import Mapping
from typing import Any

from paykit.config import settings
from paykit.exceptions import InvalidInput
from paykit.models.enums import DiscountType
from paykit.schemas.base import validate_payload
from paykit.schemas.discount import DiscountPayload
from paykit.utils.ids import IdGenerator, uuid_id_generator
from paykit.utils.money import coerce_amount


class Discount:
    """
    A single discount line, either a fixed amount or a percentage.

    Fixed discounts are capped at the amount they are applied to; percentage
    discounts are computed on the amount remaining when they are applied.
    """

    def __init__(
        self,
        id: str,
        value: float,
        amount: float | None = None,
        description: str = "",
        type: DiscountType | str = DiscountType.FIXED,
    ):
        self._id = id
        self.type = type
        self.value = value
        self.amount = amount if amount is not None else self._default_amount()
        self.description = description

    @property
    def id(self) -> str:
        return self._id

    @property
    def value(self) -> float:
        """Fixed amount or percentage points, depending on type."""
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        if value is None:
            raise InvalidInput("Discount value cannot be null")
        value = coerce_amount(value, "Discount value")
        if value < 0:
            raise InvalidInput("Discount value cannot be negative", metadata={"value": value})
        self._value = value

    @property
    def type(self) -> DiscountType:
        return self._type

    @type.setter
    def type(self, type: DiscountType | str) -> None:
        try:
            self._type = DiscountType(type)
        except ValueError as e:
            raise InvalidInput(f"Unknown discount type: {type!r}") from e

    def is_fixed(self) -> bool:
        return self._type == DiscountType.FIXED

    def is_percentage(self) -> bool:
        return self._type == DiscountType.PERCENTAGE

    def calculate_discount(self, base_amount: float) -> float:
        """
        Calculate the reduction this discount contributes.

        Args:
            base_amount: Amount the discount is applied to

        Returns:
            Reduction in major currency units, never negative and, for
            fixed discounts, never above the base amount

        Examples:
            >>> Discount("d1", 10, type=DiscountType.PERCENTAGE).calculate_discount(200)
            20.0
            >>> Discount("d2", 25).calculate_discount(20)
            20.0
        """
        if self._type == DiscountType.FIXED:
            return float(min(self._value, max(base_amount, 0)))

        return float(max(base_amount * (self._value / 100), 0))

    def _default_amount(self) -> float:
        return self._value if self.is_fixed() else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the canonical mapping."""
        return DiscountPayload(
            id=self._id,
            value=self._value,
            amount=self.amount,
            description=self.description,
            type=self._type,
        ).model_dump(by_alias=True, mode="json")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], id_generator: IdGenerator | None = None) -> "Discount":
        """
        Build a discount from a serialized mapping.

        Args:
            data: Mapping with value and optional id/$id, amount, description, type
            id_generator: Produces an id when the mapping has none

        Returns:
            New Discount

        Raises:
            InvalidInput: If value is missing, null or negative, or type is unknown
        """
        if isinstance(data, Mapping) and data.get("value") is None:
            raise InvalidInput("Discount value cannot be null")

        payload = validate_payload(DiscountPayload, data, "discount")
        discount_id = payload.id or (id_generator or uuid_id_generator)(settings.discount_id_prefix)

        return cls(
            id=discount_id,
            value=payload.value,
            amount=payload.amount,
            description=payload.description,
            type=payload.type,
        )

    @classmethod
    def from_value(cls, item: "Discount | Mapping[str, Any]", id_generator: IdGenerator | None = None) -> "Discount":
        """Normalize a Discount or a serialized mapping into a Discount."""
        if isinstance(item, Discount):
            return item
        if isinstance(item, Mapping):
            return cls.from_dict(item, id_generator=id_generator)
        raise InvalidInput(f"Discount must be either a Discount or a mapping, got {type(item).__name__}")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Discount(id={self._id}, type={self._type.value}, value={self._value})>"
