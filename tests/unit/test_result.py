from __future__ import annotations

import dataclasses

import pytest

from lib_typed_settings.domain.result import Failure, Success, failure, success


def test_success_wraps_value() -> None:
    result = success(42)
    assert result.success is True
    assert result.value == 42


def test_failure_normalises_single_message() -> None:
    assert failure("is required").error == ("is required",)


def test_failure_keeps_iterable_order() -> None:
    assert failure(message for message in ["a", "b", "c"]).error == ("a", "b", "c")


def test_results_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        success(1).value = 2  # type: ignore[misc]


def test_results_support_match() -> None:
    match failure("nope"):
        case Success(value):
            outcome = value
        case Failure(error):
            outcome = error
    assert outcome == ("nope",)
