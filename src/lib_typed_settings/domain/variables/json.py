"""JSON-encoded variables with an optional post-validator."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Callable

from ..result import Result, failure, success
from .base import Variable

JsonValidator = Callable[[Any], Result[Any]]


@dataclass(frozen=True)
class JsonVariable(Variable[Any]):
    """Decode the input as JSON, then refine it with *validator* when set.

    Examples
    --------
    >>> JsonVariable().parse('{"port": 80}').value
    {'port': 80}
    >>> JsonVariable().parse("{").success
    False
    """

    validator: JsonValidator | None = None

    @property
    def type(self) -> str:
        return "json"

    def validate(self, validator: JsonValidator) -> JsonVariable:
        return replace(self, validator=validator)

    def _parse(self, value: str) -> Result[Any]:
        try:
            data = json.loads(value)
        except (json.JSONDecodeError, RecursionError) as exc:
            return failure(str(exc))
        if self.validator is None:
            return success(data)
        return self.validator(data)

    def _details(self) -> dict[str, Any]:
        return {"validated": self.validator is not None}


__all__ = ["JsonValidator", "JsonVariable"]
