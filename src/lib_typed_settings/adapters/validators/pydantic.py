"""Pydantic-backed JSON validators.

Purpose
-------
Turn any type pydantic understands (``BaseModel`` subclasses, dataclasses,
``TypedDict``, ``list[int]`` ...) into a
:data:`lib_typed_settings.domain.variables.json.JsonValidator` so JSON variables
can produce typed models.

System Role
-----------
Used by ``v.model(type)`` and by callers passing the result to
:meth:`JsonVariable.validate`. Pydantic errors become issue strings; nothing is
raised for invalid data.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from ...domain.result import Result, failure, success
from ...domain.variables.json import JsonValidator

_VALUE_ERROR_PREFIX = "Value error, "


def pydantic_validator(type_: Any) -> JsonValidator:
    """Return a validator that checks decoded JSON against *type_*.

    Examples
    --------
    >>> check = pydantic_validator(list[int])
    >>> check([1, "2"]).value
    [1, 2]
    >>> check(["x"]).error
    ('0: Input should be a valid integer, unable to parse string as an integer',)
    """

    adapter: TypeAdapter[Any] = TypeAdapter(type_)

    def validate(value: Any) -> Result[Any]:
        try:
            return success(adapter.validate_python(value))
        except ValidationError as exc:
            return failure(_issue(error) for error in exc.errors())

    validate.__name__ = f"pydantic_{getattr(type_, '__name__', 'type')}"
    return validate


def _issue(error: Any) -> str:
    """Render one pydantic error as ``location: message``."""

    message = str(error.get("msg", ""))
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX) :]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {message}" if location else message


__all__ = ["pydantic_validator"]
