"""Enumerated string literals."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from ..result import Result, failure, success
from .base import Variable


@dataclass(frozen=True)
class EnumVariable(Variable[str]):
    """Accept one of a registered set of literals.

    Parsing returns the registered literal, so a case-insensitive enum still
    yields the canonical casing.

    Examples
    --------
    >>> animals = EnumVariable().value("dog").value("cat").insensitive()
    >>> animals.parse("Cat").value
    'cat'
    >>> animals.parse("parrot").error
    ("must be of 'dog'/'cat'",)
    """

    items: tuple[str, ...] = ()
    case_insensitive: bool = False

    @property
    def type(self) -> str:
        return "/".join(f"'{item}'" for item in self.items) or "never"

    def value(self, item: str) -> EnumVariable:
        return replace(self, items=self.items + (item,))

    def values(self, *items: str) -> EnumVariable:
        return replace(self, items=self.items + tuple(items))

    def insensitive(self) -> EnumVariable:
        return replace(self, case_insensitive=True)

    def sensitive(self) -> EnumVariable:
        return replace(self, case_insensitive=False)

    def _parse(self, value: str) -> Result[str]:
        if self.case_insensitive:
            folded = value.casefold()
            for item in self.items:
                if item.casefold() == folded:
                    return success(item)
        elif value in self.items:
            return success(value)
        if not self.items:
            return failure("must never exist")
        return failure(f"must be of {self.type}")

    def _details(self) -> dict[str, Any]:
        return {"items": list(self.items), "insensitive": self.case_insensitive}


__all__ = ["EnumVariable"]
