"""Success/failure value objects used as the validation currency.

Purpose
-------
Every variable parse produces a :data:`Result`: either a :class:`Success`
carrying the typed value or a :class:`Failure` carrying the issue messages.
Expected validation outcomes therefore travel as data and never as
exceptions.

Contents
--------
* :class:`Success` / :class:`Failure` – the two frozen variants.
* :data:`Result` – union alias consumed throughout the package.
* :func:`success` / :func:`failure` – the only public constructors.

System Role
-----------
Sits at the bottom of the domain layer. Variables, the resolver, and JSON
validators (including the pydantic adapter) all speak this type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Literal, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful parse carrying the typed *value*.

    Examples
    --------
    >>> Success(3).success
    True
    """

    value: T

    @property
    def success(self) -> Literal[True]:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed parse carrying the ordered issue messages in *error*.

    Examples
    --------
    >>> Failure(("is required",)).success
    False
    """

    error: tuple[str, ...]

    @property
    def success(self) -> Literal[False]:
        return False


Result = Union[Success[T], Failure]


def success(value: T) -> Success[T]:
    """Wrap *value* in a :class:`Success`.

    Examples
    --------
    >>> success(10)
    Success(value=10)
    """

    return Success(value)


def failure(issues: str | Iterable[str]) -> Failure:
    """Build a :class:`Failure` from a single message or an iterable of messages.

    Examples
    --------
    >>> failure("must be a number")
    Failure(error=('must be a number',))
    >>> failure(["a", "b"]).error
    ('a', 'b')
    """

    if isinstance(issues, str):
        return Failure((issues,))
    return Failure(tuple(issues))


__all__ = ["Failure", "Result", "Success", "failure", "success"]
