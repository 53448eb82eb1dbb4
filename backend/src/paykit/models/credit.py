"""Credit balance consumed against an invoice after tax."""
from collections.abc import Mapping
from typing import Any

from paykit.config import settings
from paykit.exceptions import InvalidInput
from paykit.models.enums import CreditStatus
from paykit.schemas.base import validate_payload
from paykit.schemas.credit import CreditPayload
from paykit.utils.ids import IdGenerator, uuid_id_generator
from paykit.utils.money import coerce_amount, round_amount


class Credit:
    """
    Pool of pre-existing balance (refunds, goodwill, promotions).

    Value only moves from credits to credits_used through use_credits, so
    their sum stays constant. Not safe for concurrent mutation.
    """

    def __init__(
        self,
        id: str,
        credits: float,
        credits_used: float = 0.0,
        status: CreditStatus | str = CreditStatus.ACTIVE,
    ):
        self.id = id
        self.credits = coerce_amount(credits, "Credit balance")
        self.credits_used = coerce_amount(credits_used, "Credits used")
        self.status = status

    @property
    def status(self) -> CreditStatus:
        return self._status

    @status.setter
    def status(self, status: CreditStatus | str) -> None:
        try:
            self._status = CreditStatus(status)
        except ValueError as e:
            raise InvalidInput(f"Unknown credit status: {status!r}") from e

    def mark_as_applied(self) -> None:
        self._status = CreditStatus.APPLIED

    def mark_as_expired(self) -> None:
        self._status = CreditStatus.EXPIRED

    def has_available_credits(self) -> bool:
        return self.credits > 0

    def is_fully_used(self) -> bool:
        return self.credits == 0 or self._status == CreditStatus.APPLIED

    def use_credits(self, amount: float) -> float:
        """
        Consume up to amount from the remaining balance.

        Balances are kept at 2 decimals so an exhausted credit reaches
        exactly 0. An exhausted credit is marked APPLIED and contributes
        nothing.

        Args:
            amount: Amount requested

        Returns:
            Amount actually consumed

        Example:
            >>> credit = Credit("c1", 100)
            >>> credit.use_credits(40)
            40.0
            >>> credit.use_credits(100)
            60.0
            >>> credit.status.value
            'applied'
        """
        if amount <= 0:
            return 0.0

        if self.credits <= 0:
            self._status = CreditStatus.APPLIED
            return 0.0

        used = round_amount(min(amount, self.credits))
        self.credits = round_amount(self.credits - used)
        self.credits_used = round_amount(self.credits_used + used)

        if self.credits == 0:
            self._status = CreditStatus.APPLIED

        return used

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the canonical mapping."""
        return CreditPayload(
            id=self.id,
            credits=self.credits,
            credits_used=self.credits_used,
            status=self._status,
        ).model_dump(by_alias=True, mode="json")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], id_generator: IdGenerator | None = None) -> "Credit":
        """
        Build a credit from a serialized mapping.

        Raises:
            InvalidInput: If balances are negative or status is unknown
        """
        payload = validate_payload(CreditPayload, data, "credit")
        credit_id = payload.id or (id_generator or uuid_id_generator)(settings.credit_id_prefix)

        return cls(
            id=credit_id,
            credits=payload.credits,
            credits_used=payload.credits_used,
            status=payload.status,
        )

    @classmethod
    def from_value(cls, item: "Credit | Mapping[str, Any]", id_generator: IdGenerator | None = None) -> "Credit":
        """Normalize a Credit or a serialized mapping into a Credit."""
        if isinstance(item, Credit):
            return item
        if isinstance(item, Mapping):
            return cls.from_dict(item, id_generator=id_generator)
        raise InvalidInput(f"Credit must be either a Credit or a mapping, got {type(item).__name__}")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Credit(id={self.id}, credits={self.credits}, credits_used={self.credits_used}, status={self._status.value})>"
