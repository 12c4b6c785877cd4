"""String variables with a conjunctive validator chain.

Every validator runs against the raw input and every failure message is
collected; the input is accepted only when all validators pass.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Union

from .. import patterns
from ..result import Result, failure, success
from .base import Variable

Check = Callable[[str], Result[str]]
ValidatorLike = Union["StringValidator", str, "re.Pattern[str]", Check]


@dataclass(frozen=True)
class StringValidator:
    """A check over the raw string plus an optional display label.

    Examples
    --------
    >>> StringValidator.pattern(r"^[A-Z]+$")("ABC")
    Success(value='ABC')
    >>> StringValidator.pattern(r"^[A-Z]+$")("abc").error
    ('must match ^[A-Z]+$',)
    """

    check: Check
    label: str | None = None

    def __call__(self, value: str) -> Result[str]:
        return self.check(value)

    @classmethod
    def pattern(
        cls,
        regex: str | re.Pattern[str],
        label: str | None = None,
        message: str | None = None,
    ) -> StringValidator:
        """Build a validator succeeding with the first match of *regex*."""

        compiled = re.compile(regex) if isinstance(regex, str) else regex
        issue = message or f"must match {label or compiled.pattern}"

        def check(value: str) -> Result[str]:
            match = compiled.search(value)
            if match is None:
                return failure(issue)
            return success(match.group(0))

        return cls(check, label or compiled.pattern)

    @classmethod
    def predicate(cls, test: Callable[[str], bool], label: str, message: str) -> StringValidator:
        """Build a validator from a boolean *test*."""

        def check(value: str) -> Result[str]:
            return success(value) if test(value) else failure(message)

        return cls(check, label)


UUID = StringValidator.pattern(patterns.UUID, "uuid", "must be a valid uuid")
EMAIL = StringValidator.pattern(patterns.EMAIL, "email", "must be a valid email address")
URL = StringValidator.pattern(patterns.URL, "url", "must be a valid url")
IPV4 = StringValidator.pattern(patterns.IPV4, "ipv4", "must be a valid ipv4 address")
IPV6 = StringValidator.predicate(patterns.is_ipv6, "ipv6", "must be a valid ipv6 address")


def _coerce(validator: ValidatorLike, label: str | None) -> StringValidator:
    if isinstance(validator, StringValidator):
        return validator if label is None else replace(validator, label=label)
    if isinstance(validator, (str, re.Pattern)):
        return StringValidator.pattern(validator, label)
    if callable(validator):
        return StringValidator(validator, label or getattr(validator, "__name__", None))
    raise TypeError(f"Unsupported string validator: {validator!r}")


@dataclass(frozen=True)
class StringVariable(Variable[str]):
    """String variable; without validators any present string is accepted.

    Examples
    --------
    >>> StringVariable().parse("").value
    ''
    >>> checked = StringVariable().validate(r"^[a-z]+$").validate("x")
    >>> checked.parse("ABC").error
    ('must match ^[a-z]+$', 'must match x')
    """

    validators: tuple[StringValidator, ...] = ()

    @property
    def type(self) -> str:
        return "string"

    def validate(self, validator: ValidatorLike, label: str | None = None) -> StringVariable:
        """Append a regex (string or compiled) or a ``str -> Result`` callable."""

        return replace(self, validators=self.validators + (_coerce(validator, label),))

    def uuid(self) -> StringVariable:
        return self.validate(UUID)

    def email(self) -> StringVariable:
        return self.validate(EMAIL)

    def url(self) -> StringVariable:
        return self.validate(URL)

    def ipv4(self) -> StringVariable:
        return self.validate(IPV4)

    def ipv6(self) -> StringVariable:
        return self.validate(IPV6)

    def _parse(self, value: str) -> Result[str]:
        issues: list[str] = []
        for validator in self.validators:
            result = validator(value)
            if not result.success:
                issues.extend(result.error)
        if issues:
            return failure(issues)
        return success(value)

    def _details(self) -> dict[str, Any]:
        return {"validators": [validator.label for validator in self.validators]}


__all__ = ["EMAIL", "IPV4", "IPV6", "URL", "UUID", "StringValidator", "StringVariable"]
