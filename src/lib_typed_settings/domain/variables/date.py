"""Date and time variables backed by :class:`DateObject`."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Iterable, Union

from ..date_object import FORMATS, PARTS, DateObject
from ..result import Result, failure
from .base import Variable

FormatLike = Union[str, "re.Pattern[str]"]


def resolve_format(fmt: FormatLike) -> re.Pattern[str]:
    """Return the compiled pattern for a date type name or a custom regex.

    Examples
    --------
    >>> resolve_format("date") is FORMATS["date"]
    True
    >>> resolve_format(r"(?P<year>\\d{4})").pattern
    '(?P<year>\\\\d{4})'
    """

    if isinstance(fmt, re.Pattern):
        return fmt
    if fmt in FORMATS:
        return FORMATS[fmt]
    return re.compile(fmt)


@dataclass(frozen=True)
class DateObjectVariable(Variable[DateObject]):
    """Parse text into a :class:`DateObject` using an ordered list of formats.

    The first format whose pattern matches wins; its named groups are range
    checked by :meth:`DateObject.from_parts`. Custom patterns only need to
    name the groups they capture.

    Examples
    --------
    >>> DateObjectVariable().parse("2024-02-29T10:15:00Z").value.to_iso()
    '2024-02-29T10:15:00Z'
    >>> DateObjectVariable().parse("yesterday").error
    ('must be in a valid date format',)
    """

    formats: tuple[re.Pattern[str], ...] = (FORMATS["datetime_tz"],)

    @property
    def type(self) -> str:
        return "dateobject"

    def format(self, fmt: FormatLike | Iterable[FormatLike], clear: bool = False) -> DateObjectVariable:
        """Append one or more formats, or replace them all when *clear* is set."""

        if isinstance(fmt, (str, re.Pattern)):
            added = (resolve_format(fmt),)
        else:
            added = tuple(resolve_format(item) for item in fmt)
        return replace(self, formats=added if clear else self.formats + added)

    def _parse(self, value: str) -> Result[DateObject]:
        for pattern in self.formats:
            match = pattern.search(value)
            if match is None:
                continue
            parts = {key: part for key, part in match.groupdict().items() if key in PARTS}
            return DateObject.from_parts(**parts)
        return failure("must be in a valid date format")

    def _details(self) -> dict[str, Any]:
        return {"formats": [pattern.pattern for pattern in self.formats]}


__all__ = ["DateObjectVariable", "FormatLike", "resolve_format"]
