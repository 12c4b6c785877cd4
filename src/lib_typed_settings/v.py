"""Factory namespace for building schemas.

Import it as a module and call the factories::

    from lib_typed_settings import v

    settings = v.settings({
        "port": v.integer().min(1).max(65535).default_to(8080),
        "mode": v.enum("dev", "prod").insensitive(),
        "started": v.datetime().optional(),
    })

Every factory returns a fresh immutable variable, so shared bases are safe to
extend: ``base = v.string()``, then ``base.email()`` and ``base.url()``.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Iterable

from .adapters.validators.pydantic import pydantic_validator
from .core import DataBuilder, Settings
from .application.resolve import Schema
from .domain.date_object import DateObject
from .domain.result import Result, failure, success
from .domain.variables.base import TransformedVariable
from .domain.variables.boolean import BooleanVariable
from .domain.variables.date import DateObjectVariable, FormatLike
from .domain.variables.enum import EnumVariable
from .domain.variables.json import JsonValidator, JsonVariable
from .domain.variables.number import IntegerVariable, NumberVariable
from .domain.variables.string import StringVariable


def number() -> NumberVariable:
    return NumberVariable()


def integer() -> IntegerVariable:
    return IntegerVariable()


def string() -> StringVariable:
    return StringVariable()


def boolean() -> BooleanVariable:
    return BooleanVariable()


def enum(*values: str) -> EnumVariable:
    """Return an enum accepting *values* (case-sensitive until ``insensitive()``)."""

    return EnumVariable(items=tuple(values))


def literal(value: str) -> EnumVariable:
    """Return a variable accepting exactly *value*.

    Examples
    --------
    >>> literal("on").parse("off").error
    ("must be of 'on'",)
    """

    return EnumVariable(items=(value,))


def json(validator: JsonValidator | None = None) -> JsonVariable:
    return JsonVariable(validator=validator)


def model(type_: Any) -> JsonVariable:
    """Return a JSON variable validated into *type_* by pydantic.

    Examples
    --------
    >>> model(dict[str, int]).parse('{"a": "1"}').value
    {'a': 1}
    """

    return JsonVariable(validator=pydantic_validator(type_))


def dateobject(format: FormatLike | Iterable[FormatLike] | None = None) -> DateObjectVariable:
    """Return a date variable; *format* replaces the default ``datetime_tz`` format."""

    if format is None:
        return DateObjectVariable()
    return DateObjectVariable().format(format, clear=True)


def _to_datetime(value: DateObject) -> Result[_dt.datetime]:
    try:
        return success(value.to_datetime())
    except ValueError as exc:
        return failure(str(exc))


def _to_date(value: DateObject) -> Result[_dt.date]:
    try:
        return success(value.to_date())
    except ValueError as exc:
        return failure(str(exc))


def datetime(format: FormatLike | Iterable[FormatLike] | None = None) -> TransformedVariable[_dt.datetime]:
    """Return a variable producing :class:`datetime.datetime` (aware when a zone is given).

    Examples
    --------
    >>> datetime().parse("2024-03-01T08:30:00+01:00").value.isoformat()
    '2024-03-01T08:30:00+01:00'
    """

    return dateobject(format).transform(_to_datetime, type="datetime")


def date(format: FormatLike | Iterable[FormatLike] | None = None) -> TransformedVariable[_dt.date]:
    """Return a variable producing :class:`datetime.date`, defaulting to the ``date`` format."""

    return dateobject("date" if format is None else format).transform(_to_date, type="date")


def settings(schema: Schema) -> Settings:
    return Settings(schema)


def data() -> DataBuilder:
    """Return an empty :class:`DataBuilder`."""

    return DataBuilder()


__all__ = [
    "boolean",
    "data",
    "date",
    "dateobject",
    "datetime",
    "enum",
    "integer",
    "json",
    "literal",
    "model",
    "number",
    "settings",
    "string",
]
