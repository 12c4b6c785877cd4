from __future__ import annotations

from pydantic import BaseModel, field_validator

from lib_typed_settings import v
from lib_typed_settings.adapters.validators.pydantic import pydantic_validator


class Endpoint(BaseModel):
    host: str
    port: int

    @field_validator("port")
    @classmethod
    def _even(cls, value: int) -> int:
        if value % 2:
            raise ValueError("must be even")
        return value


def test_model_variable_builds_instance() -> None:
    assert v.model(Endpoint).parse('{"host": "db", "port": "80"}').value == Endpoint(host="db", port=80)


def test_missing_field_is_reported_with_location() -> None:
    assert v.model(Endpoint).parse('{"host": "db"}').error == ("port: Field required",)


def test_value_error_prefix_is_stripped() -> None:
    assert v.model(Endpoint).parse('{"host": "db", "port": 81}').error == ("port: must be even",)


def test_json_syntax_errors_short_circuit_validation() -> None:
    result = v.model(Endpoint).parse("{")
    assert result.success is False
    assert not result.error[0].startswith("port")


def test_root_level_issue_has_no_location() -> None:
    assert pydantic_validator(int)("x").error == ("Input should be a valid integer, unable to parse string as an integer",)


def test_validator_attaches_to_json_variable() -> None:
    numbers = v.json().validate(pydantic_validator(list[int]))
    assert numbers.parse('[1, "2"]').value == [1, 2]
    assert pydantic_validator(Endpoint).__name__ == "pydantic_Endpoint"
