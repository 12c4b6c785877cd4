"""`.env` adapter.

Purpose
-------
Implement the :class:`lib_typed_settings.application.ports.DotEnvLoader`
protocol and expose the text scanner used for inline ``.env`` content.

Contents
--------
* :func:`parse_dotenv` – scan ``.env`` text into a flat data object.
* :class:`DefaultDotEnvLoader` – read a file from disk and scan it.

Syntax
------
Blank lines and ``#`` comment lines are ignored. Each assignment is
``[export ]KEY=VALUE`` where ``KEY`` matches ``[A-Za-z_][A-Za-z0-9_]*`` and
``VALUE`` is a run of pieces: ``'single quoted'`` (taken literally),
``"double quoted"`` (``$$`` stands for ``$``; a bare ``$`` is rejected) or
unquoted text without whitespace, quotes or ``;``. A trailing ``;`` and a
trailing ``# comment`` are allowed.

System Role
-----------
Feeds ``.env`` key/value pairs into :class:`lib_typed_settings.core.DataBuilder`
without any nesting or coercion: values stay strings for the variables to parse.
"""

from __future__ import annotations

import re
from pathlib import Path

from ...domain.errors import DotEnvFormatError, DotEnvIssue, NotFound
from ...observability import log_debug, log_error, make_event

_LINE_BREAK = re.compile(r"\r\n?|\n")
_ASSIGNMENT = re.compile(r"\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)=")
_UNQUOTED = re.compile(r"""[^'"\s;]+""")


class _LineError(Exception):
    """Internal signal carrying the 1-based column and reason for a bad line."""

    def __init__(self, column: int, message: str) -> None:
        super().__init__(message)
        self.column = column
        self.message = message


def parse_dotenv(text: str, source: str | None = None) -> dict[str, str]:
    """Return the assignments in *text*; raise :class:`DotEnvFormatError` on bad lines.

    Why
    ----
    Every malformed line is reported at once so a file can be fixed in one pass.

    Parameters
    ----------
    text:
        ``.env`` formatted content.
    source:
        Optional origin (usually a path) included in the error message.

    Examples
    --------
    >>> parse_dotenv('export HOST=db.local\\nPORT="54"\\'32\\' ; # primary')
    {'HOST': 'db.local', 'PORT': '5432'}
    >>> parse_dotenv('PRICE="$$5"')
    {'PRICE': '$5'}
    >>> parse_dotenv('not a line')
    Traceback (most recent call last):
    ...
    lib_typed_settings.domain.errors.DotEnvFormatError: Malformed dotenv line(s) 1
    """

    values: dict[str, str] = {}
    issues: list[DotEnvIssue] = []
    for number, line in enumerate(_LINE_BREAK.split(text), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            key, value = _parse_line(line)
        except _LineError as exc:
            issues.append(DotEnvIssue(number, exc.column, line, exc.message))
            continue
        values[key] = value
    if issues:
        raise DotEnvFormatError(issues, source)
    return values


def _parse_line(line: str) -> tuple[str, str]:
    """Scan one assignment line left to right without backtracking."""

    match = _ASSIGNMENT.match(line)
    if match is None:
        raise _LineError(1, "Expected KEY=VALUE")
    position = match.end()
    pieces: list[str] = []
    while position < len(line):
        char = line[position]
        if char == "'":
            closing = line.find("'", position + 1)
            if closing < 0:
                raise _LineError(position + 1, "Unterminated single-quoted value")
            pieces.append(line[position + 1 : closing])
            position = closing + 1
        elif char == '"':
            piece, position = _double_quoted(line, position)
            pieces.append(piece)
        else:
            unquoted = _UNQUOTED.match(line, position)
            if unquoted is None:
                break
            pieces.append(unquoted.group(0))
            position = unquoted.end()
    _check_trailer(line, position)
    return match.group(1), "".join(pieces)


def _double_quoted(line: str, start: int) -> tuple[str, int]:
    """Return the unescaped content of the double-quoted piece at *start* and the next position."""

    chars: list[str] = []
    position = start + 1
    while position < len(line):
        char = line[position]
        if char == '"':
            return "".join(chars), position + 1
        if char == "$":
            if line.startswith("$$", position):
                chars.append("$")
                position += 2
                continue
            raise _LineError(position + 1, "Bare $ in double-quoted value (use $$)")
        chars.append(char)
        position += 1
    raise _LineError(start + 1, "Unterminated double-quoted value")


def _check_trailer(line: str, position: int) -> None:
    """Accept optional whitespace, one ``;`` and a ``#`` comment after the value."""

    rest = line[position:].lstrip()
    if rest.startswith(";"):
        rest = rest[1:].lstrip()
    if rest and not rest.startswith("#"):
        raise _LineError(len(line) - len(rest) + 1, "Unexpected text after value")


class DefaultDotEnvLoader:
    """Load a ``.env`` file into a flat data object."""

    def load(self, path: str) -> dict[str, str]:
        """Return the assignments stored in the ``.env`` file at *path*.

        Raises
        ------
        NotFound
            When *path* is not a file.
        DotEnvFormatError
            When any line is malformed.

        Side Effects
        ------------
        Emits ``dotenv_loaded`` debug events or ``dotenv_invalid`` errors.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> env_file = Path(tmp.name) / '.env'
        >>> _ = env_file.write_text('TOKEN=secret', encoding='utf-8')
        >>> DefaultDotEnvLoader().load(str(env_file))
        {'TOKEN': 'secret'}
        >>> tmp.cleanup()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Dotenv file not found: {path}")
        try:
            data = parse_dotenv(file_path.read_text(encoding="utf-8"), source=path)
        except DotEnvFormatError as exc:
            log_error("dotenv_invalid", **make_event("dotenv", path, {"lines": [issue.line for issue in exc.issues]}))
            raise
        log_debug("dotenv_loaded", **make_event("dotenv", path, {"keys": sorted(data)}))
        return data


__all__ = ["DefaultDotEnvLoader", "parse_dotenv"]
