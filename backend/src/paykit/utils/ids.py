"""Identifier generation for discounts and credits built without an id."""
from typing import Callable
from uuid import uuid4

# Takes a prefix, returns a new unique identifier
IdGenerator = Callable[[str], str]


def uuid_id_generator(prefix: str) -> str:
    """
    Generate a prefixed random identifier.

    Example:
        >>> uuid_id_generator("discount").startswith("discount_")
        True
    """
    return f"{prefix}_{uuid4().hex}"


def sequential_id_generator(start: int = 1) -> IdGenerator:
    """
    Build a deterministic generator yielding prefix_1, prefix_2, ...

    The counter is shared across prefixes.
    """
    counter = start - 1

    def generate(prefix: str) -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}_{counter}"

    return generate
