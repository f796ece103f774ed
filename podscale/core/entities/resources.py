"""
Resource quantity helpers.

Quantities follow the cluster notation (``"500m"``, ``"1.5"``, ``"200Mi"``,
``"1G"``, ``"1e3"``) and are stored as :class:`~decimal.Decimal` so that two
spellings of the same amount compare equal.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping, Optional, Union

ResourceList = Dict[str, Decimal]
QuantityLike = Union[str, int, float, Decimal]

CPU = "cpu"
MEMORY = "memory"

_BINARY_SUFFIXES: Dict[str, int] = {
    "Ki": 2**10,
    "Mi": 2**20,
    "Gi": 2**30,
    "Ti": 2**40,
    "Pi": 2**50,
    "Ei": 2**60,
}

_DECIMAL_SUFFIXES: Dict[str, Decimal] = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
}

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+))"
    r"(?:(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE])|[eE](?P<exponent>[+-]?\d+))?$"
)


class QuantityError(ValueError):
    """Raised when a quantity string cannot be parsed."""


def parse_quantity(value: QuantityLike) -> Decimal:
    """
    Convert a quantity into a :class:`Decimal`.

    Raises:
        QuantityError: if ``value`` is not a valid quantity.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise QuantityError(f"Invalid quantity: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # repr keeps 0.1 as "0.1" instead of the binary expansion
        return Decimal(repr(value))
    if not isinstance(value, str):
        raise QuantityError(f"Invalid quantity type: {type(value).__name__}")

    match = _QUANTITY_RE.match(value.strip())
    if match is None:
        raise QuantityError(f"Invalid quantity: {value!r}")

    try:
        number = Decimal(match.group("number"))
    except InvalidOperation as exc:
        raise QuantityError(f"Invalid quantity: {value!r}") from exc

    exponent = match.group("exponent")
    if exponent is not None:
        return number.scaleb(int(exponent))

    suffix = match.group("suffix") or ""
    if suffix in _BINARY_SUFFIXES:
        return number * _BINARY_SUFFIXES[suffix]
    return number * _DECIMAL_SUFFIXES[suffix]


def resource_list(
    cpu: Optional[QuantityLike] = None,
    memory: Optional[QuantityLike] = None,
    **others: QuantityLike,
) -> ResourceList:
    """Build a resource list, skipping resources given as ``None``."""
    values: ResourceList = {}
    if cpu is not None:
        values[CPU] = parse_quantity(cpu)
    if memory is not None:
        values[MEMORY] = parse_quantity(memory)
    for name, quantity in others.items():
        if quantity is not None:
            values[name] = parse_quantity(quantity)
    return values


def resource_list_from_dict(values: Optional[Mapping[str, QuantityLike]]) -> ResourceList:
    if not values:
        return {}
    try:
        return {str(name): parse_quantity(quantity) for name, quantity in values.items()}
    except QuantityError as exc:
        raise QuantityError(f"Invalid resource list {dict(values)!r}: {exc}") from exc
