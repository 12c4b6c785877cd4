"""Boolean variable."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..result import Result, failure, success
from .base import Variable

_BOOLEAN = re.compile(r"(?:(true|t|1)|(false|f|0))", re.IGNORECASE)


@dataclass(frozen=True)
class BooleanVariable(Variable[bool]):
    """Accept ``true``/``t``/``1`` and ``false``/``f``/``0`` in any casing.

    Examples
    --------
    >>> BooleanVariable().parse("T").value
    True
    >>> BooleanVariable().parse("0").value
    False
    >>> BooleanVariable().parse("2").success
    False
    """

    @property
    def type(self) -> str:
        return "boolean"

    def _parse(self, value: str) -> Result[bool]:
        match = _BOOLEAN.fullmatch(value)
        if match is None:
            return failure("must be a boolean (true|t|1)|(false|f|0)")
        return success(match.group(1) is not None)


__all__ = ["BooleanVariable"]
