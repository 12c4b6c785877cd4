"""Public package surface for typed settings.

Build a schema with the :mod:`lib_typed_settings.v` factories, then resolve it
against a flat data object assembled by :class:`DataBuilder` (or the process
environment when no data is given)::

    from lib_typed_settings import v

    settings = v.settings({"port": v.integer().default_to(8080)})
    values = settings.parse_values(v.data().dotenv_file(".env").env())
"""

from __future__ import annotations

from . import v
from .core import DataBuilder, Settings, parse_results, parse_values
from .domain.date_object import DateObject, TzOffset
from .domain.errors import (
    DotEnvFormatError,
    DotEnvIssue,
    InvalidFormat,
    NotFound,
    SchemaError,
    SettingsError,
    VariableError,
    VariableIssue,
)
from .domain.result import Failure, Result, Success, failure, success
from .domain.variables.base import MISSING, AggregateVariable, TransformedVariable, Variable
from .domain.variables.boolean import BooleanVariable
from .domain.variables.date import DateObjectVariable
from .domain.variables.enum import EnumVariable
from .domain.variables.json import JsonVariable
from .domain.variables.number import IntegerVariable, NumberVariable
from .domain.variables.string import StringValidator, StringVariable
from .observability import bind_trace_id, get_logger

__all__ = [
    "MISSING",
    "AggregateVariable",
    "BooleanVariable",
    "DataBuilder",
    "DateObject",
    "DateObjectVariable",
    "DotEnvFormatError",
    "DotEnvIssue",
    "EnumVariable",
    "Failure",
    "IntegerVariable",
    "InvalidFormat",
    "JsonVariable",
    "NotFound",
    "NumberVariable",
    "Result",
    "SchemaError",
    "Settings",
    "SettingsError",
    "StringValidator",
    "StringVariable",
    "Success",
    "TransformedVariable",
    "TzOffset",
    "Variable",
    "VariableError",
    "VariableIssue",
    "bind_trace_id",
    "failure",
    "get_logger",
    "parse_results",
    "parse_values",
    "success",
    "v",
]
