"""Domain-level exception hierarchy and issue records.

Purpose
-------
Expose the stable error taxonomy shared by variables, the resolver, adapters,
and consuming applications. The hierarchy lives in the domain layer so outer
layers may depend on it without creating import cycles.

Contents
--------
* :class:`VariableIssue` – path + messages describing one failed leaf.
* :class:`SettingsError` – umbrella base class for all library errors.
* :class:`InvalidFormat` – parsing problems while reading data sources.
* :class:`DotEnvFormatError` – ``.env`` text with one or more bad lines.
* :class:`NotFound` – a required data source (file) is missing.
* :class:`SchemaError` – programmer error in a settings schema.
* :class:`VariableError` – raised by ``parse_values`` with every issue found.

System Role
-----------
Validation failures are plain data (:mod:`lib_typed_settings.domain.result`).
Only the edges raise: adapters raise :class:`InvalidFormat`/:class:`NotFound`,
the resolver raises :class:`SchemaError` immediately and
:class:`VariableError` after a full walk. Callers catch :class:`SettingsError`
to handle all library failures uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

PathSegment = Union[str, int]


@dataclass(frozen=True)
class VariableIssue:
    """Describe one failing leaf found while resolving a schema.

    Attributes
    ----------
    key:
        Path from the schema root. Strings are mapping keys, integers are the
        index of a union alternative.
    issues:
        Messages reported by the leaf variable, in order.

    Examples
    --------
    >>> VariableIssue(("db", "port"), ("must be an integer",)).dotted
    'db.port'
    """

    key: tuple[PathSegment, ...]
    issues: tuple[str, ...]

    @property
    def dotted(self) -> str:
        """Return the path joined with dots for human-readable reporting."""

        return ".".join(str(segment) for segment in self.key)

    def as_dict(self) -> dict[str, list]:
        """Return a JSON-friendly representation."""

        return {"key": list(self.key), "issues": list(self.issues)}


class SettingsError(Exception):
    """Base type for all exceptions emitted by ``lib_typed_settings``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidFormat(SettingsError):
    """Raised when an input artifact cannot be parsed into a data object.

    Typical Sources
    ---------------
    Structured file loaders (:mod:`tomllib`, :mod:`json`, :mod:`yaml`) and the
    ``.env`` scanner.
    """


@dataclass(frozen=True)
class DotEnvIssue:
    """Location and message for one malformed ``.env`` line."""

    line: int
    column: int
    value: str
    message: str


class DotEnvFormatError(InvalidFormat):
    """Raised when ``.env`` text contains lines the scanner cannot accept.

    Every bad line is collected before raising so callers can fix the whole
    file in one pass.
    """

    def __init__(self, issues: Sequence[DotEnvIssue], source: str | None = None) -> None:
        self.issues = tuple(issues)
        self.source = source
        lines = ", ".join(str(issue.line) for issue in self.issues)
        where = f" in {source}" if source else ""
        super().__init__(f"Malformed dotenv line(s) {lines}{where}")


class NotFound(SettingsError):
    """Represents a missing data source that the caller marked as required."""


class SchemaError(SettingsError):
    """Signals a malformed schema, for example an unnamed bare variable.

    This is a programmer error: it is raised immediately and never collected
    alongside data-validation issues.
    """


class VariableError(SettingsError):
    """Raised by ``parse_values`` when one or more leaves failed validation.

    Attributes
    ----------
    issues:
        Every :class:`VariableIssue` found during the walk, in schema order.

    Examples
    --------
    >>> error = VariableError([VariableIssue(("port",), ("is required",))])
    >>> str(error)
    'port: is required'
    """

    def __init__(self, issues: Sequence[VariableIssue], message: str | None = None) -> None:
        self.issues = tuple(issues)
        super().__init__(message or _summarise(self.issues))


def _summarise(issues: Sequence[VariableIssue]) -> str:
    """Render *issues* as ``path: message, message`` lines."""

    return "\n".join(f"{issue.dotted}: {', '.join(issue.issues)}" for issue in issues)


__all__ = [
    "DotEnvFormatError",
    "DotEnvIssue",
    "InvalidFormat",
    "NotFound",
    "PathSegment",
    "SchemaError",
    "SettingsError",
    "VariableError",
    "VariableIssue",
]
