"""Numeric variables with optional inclusive bounds."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Any

from ..result import Result, failure, success
from .base import Variable

_INTEGER = re.compile(r"([+-])?(?:([0-9]+)|0b([01]+)|0x([0-9a-f]+))", re.IGNORECASE)
_NUMBER = re.compile(r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf(?:inity)?)", re.IGNORECASE)


def _range_issue(minimum: float | None, maximum: float | None) -> str:
    """Return the single message describing the configured range."""

    if minimum is not None and maximum is not None:
        return f"must be between {minimum} and {maximum}"
    if minimum is not None:
        return f"must be at least {minimum}"
    return f"must be at most {maximum}"


def _within(value: float, minimum: float | None, maximum: float | None) -> bool:
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


@dataclass(frozen=True)
class NumberVariable(Variable[float]):
    """Floating-point variable.

    Examples
    --------
    >>> NumberVariable().min(5).max(10).parse("7").value
    7.0
    >>> NumberVariable().min(5).max(10).parse("11").error
    ('must be between 5 and 10',)
    >>> NumberVariable().parse("1_000").error
    ('must be a number',)
    """

    minimum: float | None = None
    maximum: float | None = None

    @property
    def type(self) -> str:
        return "number"

    def min(self, value: float) -> NumberVariable:
        return replace(self, minimum=value)

    def max(self, value: float) -> NumberVariable:
        return replace(self, maximum=value)

    def _parse(self, value: str) -> Result[float]:
        if _NUMBER.fullmatch(value) is None:
            return failure("must be a number")
        number = float(value)
        if not _within(number, self.minimum, self.maximum):
            return failure(_range_issue(self.minimum, self.maximum))
        return success(number)

    def _details(self) -> dict[str, Any]:
        return {"min": self.minimum, "max": self.maximum}


@dataclass(frozen=True)
class IntegerVariable(NumberVariable):
    """Integer variable accepting decimal, ``0b`` binary, and ``0x`` hex literals.

    Bounds are rounded inwards when configured: ``min`` with :func:`math.ceil`,
    ``max`` with :func:`math.floor`.

    Examples
    --------
    >>> IntegerVariable().parse("0b1101").value
    13
    >>> IntegerVariable().parse("0x1A").value
    26
    >>> IntegerVariable().parse("12.34").error
    ('must be an integer',)
    >>> IntegerVariable().min(1.5).minimum
    2
    """

    @property
    def type(self) -> str:
        return "integer"

    def min(self, value: float) -> IntegerVariable:
        return replace(self, minimum=math.ceil(value))

    def max(self, value: float) -> IntegerVariable:
        return replace(self, maximum=math.floor(value))

    def _parse(self, value: str) -> Result[int]:
        match = _INTEGER.fullmatch(value)
        if match is None:
            return failure("must be an integer")
        sign, decimal, binary, hexadecimal = match.groups()
        if decimal is not None:
            number = int(decimal, 10)
        elif binary is not None:
            number = int(binary, 2)
        else:
            number = int(hexadecimal, 16)
        if sign == "-":
            number = -number
        if not _within(number, self.minimum, self.maximum):
            return failure(_range_issue(self.minimum, self.maximum))
        return success(number)


__all__ = ["IntegerVariable", "NumberVariable"]
