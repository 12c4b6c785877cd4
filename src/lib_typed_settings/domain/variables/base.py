"""Immutable variable combinators.

Purpose
-------
Describe *how* to derive a typed value from an optional input string. A
:class:`Variable` is a frozen record; every "mutator" (``optional``,
``default_to``, ``from_``, ``describe`` and the subclass-specific builders)
returns a new record built with :func:`dataclasses.replace`, so a base variable
can be shared across many derived variants without aliasing.

Contents
--------
* :data:`MISSING` – sentinel marking "no default configured".
* :class:`Variable` – base record and absent-input policy.
* :class:`AggregateVariable` – ordered, flattened union built by ``else_``.
* :class:`TransformedVariable` – post-parse mapping built by ``transform``.

System Role
-----------
Typed subclasses in this package override :meth:`Variable._parse`; the
resolver in :mod:`lib_typed_settings.application.resolve` only ever calls
:meth:`Variable.parse`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, TypeVar

from ..result import Result, failure, success

T = TypeVar("T")
S = TypeVar("S")

Transformer = Callable[[Any], Result[Any]]


class _Missing:
    """Sentinel type for "no default"; ``None`` is a legitimate default."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class Variable(Generic[T]):
    """Base variable: absent-input policy plus the composition operators.

    The bare base type accepts no present input at all; concrete behaviour
    lives in the typed subclasses.

    Attributes
    ----------
    is_optional:
        Absent input parses to ``None`` instead of failing.
    default:
        Value returned for absent input, or :data:`MISSING`.
    name:
        Explicit key in the data object; overrides the schema key.
    description:
        Free-form text surfaced by :meth:`to_dict`.

    Examples
    --------
    >>> base = Variable()
    >>> base.parse(None).error
    ('is required',)
    >>> base.optional().parse(None).value is None
    True
    >>> base.is_optional
    False
    """

    is_optional: bool = False
    default: Any = MISSING
    name: str | None = None
    description: str | None = None

    @property
    def type(self) -> str:
        """Short diagnostic tag naming the parsed type."""

        return "never"

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def parse(self, value: str | None = None) -> Result[T]:
        """Parse *value*; ``None`` means the input is absent.

        Present input (including the empty string) always reaches the
        type-specific hook. Absent input yields the default, ``None`` for
        optional variables, or ``"is required"``.
        """

        if value is not None:
            return self._parse(value)
        if self.has_default:
            return success(self.default)
        if self.is_optional:
            return success(None)
        return failure("is required")

    def _parse(self, value: str) -> Result[T]:
        return failure("must never exist")

    def optional(self) -> Variable[T | None]:
        """Return a copy that accepts absent input; clears any default."""

        return replace(self, is_optional=True, default=MISSING)

    def default_to(self, value: T) -> Variable[T]:
        """Return a copy that substitutes *value* for absent input; clears optional."""

        return replace(self, is_optional=False, default=value)

    def from_(self, name: str) -> Variable[T]:
        """Return a copy that reads *name* from the data object."""

        return replace(self, name=name)

    def describe(self, text: str) -> Variable[T]:
        return replace(self, description=text)

    def else_(self, other: Variable[S]) -> AggregateVariable[T | S]:
        """Return a union that tries this variable first, then *other*.

        Examples
        --------
        >>> from lib_typed_settings.domain.variables.boolean import BooleanVariable
        >>> from lib_typed_settings.domain.variables.number import IntegerVariable
        >>> union = BooleanVariable().else_(IntegerVariable())
        >>> union.type
        'boolean/integer'
        >>> union.parse("1").value
        True
        """

        return AggregateVariable.of(self, other)

    def __or__(self, other: Variable[S]) -> AggregateVariable[T | S]:
        return self.else_(other)

    def transform(self, fn: Callable[[T], Result[S]], type: str | None = None) -> TransformedVariable[S]:
        """Map successfully parsed values through *fn*.

        The returned variable keeps this variable's optional flag, default and
        name. Absent input never reaches *fn*, so a default is returned as is.
        """

        return TransformedVariable(
            is_optional=self.is_optional,
            default=self.default,
            name=self.name,
            description=self.description,
            source=self,
            transformer=fn,
            label=type,
        )

    def to_dict(self) -> dict[str, Any]:
        """Describe the variable for diagnostics and the CLI ``schema`` command."""

        payload: dict[str, Any] = {"type": self.type, "optional": self.is_optional}
        if self.has_default:
            payload["default"] = self.default
        if self.name is not None:
            payload["name"] = self.name
        if self.description is not None:
            payload["description"] = self.description
        payload.update(self._details())
        return payload

    def _details(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class AggregateVariable(Variable[T]):
    """Tagged union of member variables; first successful member wins.

    Members are always flat: composing onto an existing aggregate splices its
    members instead of nesting another union layer.
    """

    variables: tuple[Variable[Any], ...] = ()

    @classmethod
    def of(cls, *operands: Variable[Any]) -> AggregateVariable[Any]:
        """Combine *operands* in order, flattening nested aggregates.

        The first operand default wins for absent input; without any default
        the union is optional when any operand is.

        Examples
        --------
        >>> union = AggregateVariable.of(Variable().optional(), Variable().default_to(3))
        >>> union.parse(None).value, union.is_optional
        (3, False)
        """

        members: list[Variable[Any]] = []
        for operand in operands:
            if isinstance(operand, AggregateVariable):
                members.extend(operand.variables)
            else:
                members.append(operand)

        default = next((operand.default for operand in operands if operand.has_default), MISSING)
        is_optional = default is MISSING and any(operand.is_optional for operand in operands)

        name = next((operand.name for operand in operands if operand.name is not None), None)
        return cls(is_optional=is_optional, default=default, name=name, variables=tuple(members))

    @property
    def type(self) -> str:
        return "/".join(member.type for member in self.variables)

    def _parse(self, value: str) -> Result[T]:
        issues: list[str] = []
        for member in self.variables:
            result = member.parse(value)
            if result.success:
                return result
            issues.extend(result.error)
        return failure(issues)

    def _details(self) -> dict[str, Any]:
        return {"variables": [member.to_dict() for member in self.variables]}


def _identity(value: Any) -> Result[Any]:
    return success(value)


@dataclass(frozen=True)
class TransformedVariable(Variable[T]):
    """Variable that maps the value parsed by *source* through *transformer*.

    Absent input never reaches the transformer: the inherited optional,
    default, and required handling answers first. Failures from *source* are
    returned untouched.
    """

    source: Variable[Any] = field(default_factory=Variable)
    transformer: Transformer = _identity
    label: str | None = None

    @property
    def type(self) -> str:
        return self.label or self.source.type

    def _parse(self, value: str) -> Result[T]:
        result = self.source.parse(value)
        if not result.success:
            return result
        return self.transformer(result.value)

    def _details(self) -> dict[str, Any]:
        return {"source": self.source.to_dict()}


__all__ = ["MISSING", "AggregateVariable", "TransformedVariable", "Transformer", "Variable"]
