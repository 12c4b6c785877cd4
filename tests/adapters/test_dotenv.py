from __future__ import annotations

import logging
import re
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_typed_settings.adapters.dotenv.default import DefaultDotEnvLoader, parse_dotenv
from lib_typed_settings.domain.errors import DotEnvFormatError, DotEnvIssue, InvalidFormat, NotFound


def test_parse_mixed_lines() -> None:
    text = "\n".join(
        [
            "# database",
            "",
            "A=1",
            'B="two words"',
            "C='lit $x'",
            "export D=4 ; # trailing",
            "E=",
        ]
    )
    assert parse_dotenv(text) == {"A": "1", "B": "two words", "C": "lit $x", "D": "4", "E": ""}


def test_adjacent_pieces_are_concatenated() -> None:
    assert parse_dotenv("""K=ab"c d"'e'f""") == {"K": "abc def"}


def test_hash_inside_unquoted_value_is_kept() -> None:
    assert parse_dotenv("KEY=#foo") == {"KEY": "#foo"}


def test_double_dollar_unescapes() -> None:
    assert parse_dotenv('PRICE="$$5 or $$$$"') == {"PRICE": "$5 or $$"}


def test_later_assignment_wins() -> None:
    assert parse_dotenv("A=1\nA=2") == {"A": "2"}


@pytest.mark.parametrize("text", ["A=1\r\nB=2", "A=1\rB=2", "A=1\nB=2\n"])
def test_any_line_break(text: str) -> None:
    assert parse_dotenv(text) == {"A": "1", "B": "2"}


def test_every_bad_line_is_reported() -> None:
    text = 'GOOD=1\nbad line\nX="unterminated\nY="$HOME"\nZ=\'abc\nW=a b'
    with pytest.raises(DotEnvFormatError) as excinfo:
        parse_dotenv(text, source=".env")
    assert excinfo.value.issues == (
        DotEnvIssue(2, 1, "bad line", "Expected KEY=VALUE"),
        DotEnvIssue(3, 3, 'X="unterminated', "Unterminated double-quoted value"),
        DotEnvIssue(4, 4, 'Y="$HOME"', "Bare $ in double-quoted value (use $$)"),
        DotEnvIssue(5, 3, "Z='abc", "Unterminated single-quoted value"),
        DotEnvIssue(6, 5, "W=a b", "Unexpected text after value"),
    )
    assert str(excinfo.value) == "Malformed dotenv line(s) 2, 3, 4, 5, 6 in .env"
    assert isinstance(excinfo.value, InvalidFormat)


@pytest.mark.parametrize("line", ["1KEY=x", "KEY", "KEY x", "export", "KEY=x;y"])
def test_rejected_lines(line: str) -> None:
    with pytest.raises(DotEnvFormatError):
        parse_dotenv(line)


def test_pathological_input_scans_linearly() -> None:
    line = "K=" + '"' + "a" * 50_000
    with pytest.raises(DotEnvFormatError):
        parse_dotenv(line)


KEYS = st.from_regex(r"[A-Z_][A-Z0-9_]{0,8}", fullmatch=True)
VALUES = st.text(alphabet="abcXYZ019 -_.:/$#=", max_size=12)


@given(st.dictionaries(KEYS, VALUES, max_size=6))
def test_double_quoted_values_round_trip(entries: dict[str, str]) -> None:
    text = "\n".join(f'{key}="{value.replace("$", "$$")}"' for key, value in entries.items())
    assert parse_dotenv(text) == entries


def test_loader_reads_file(tmp_path: Path, debug_logs) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("TOKEN='s3cret'\nDEBUG=1 # local\n", encoding="utf-8")

    assert DefaultDotEnvLoader().load(str(env_file)) == {"TOKEN": "s3cret", "DEBUG": "1"}
    record = next(record for record in debug_logs.records if record.getMessage() == "dotenv_loaded")
    assert record.context["keys"] == ["DEBUG", "TOKEN"]
    assert record.context["path"] == str(env_file)


def test_loader_missing_file_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        DefaultDotEnvLoader().load(str(tmp_path / ".env"))
    with pytest.raises(NotFound):
        DefaultDotEnvLoader().load(str(tmp_path))


def test_loader_logs_invalid_lines(tmp_path: Path, debug_logs) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("OK=1\noops\n", encoding="utf-8")

    with pytest.raises(DotEnvFormatError, match=re.escape(str(env_file))):
        DefaultDotEnvLoader().load(str(env_file))
    record = next(record for record in debug_logs.records if record.getMessage() == "dotenv_invalid")
    assert record.levelno == logging.ERROR
    assert record.context["lines"] == [2]
