"""Base variable semantics: absent-input policy, immutability, unions, transforms."""

from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_typed_settings import v
from lib_typed_settings.domain.result import failure, success
from lib_typed_settings.domain.variables.base import MISSING, AggregateVariable, TransformedVariable, Variable


def test_bare_variable_requires_input() -> None:
    assert Variable().parse(None).error == ("is required",)
    assert Variable().parse().error == ("is required",)


def test_bare_variable_rejects_present_input() -> None:
    assert Variable().parse("anything").error == ("must never exist",)


def test_empty_string_is_present() -> None:
    assert Variable().parse("").error == ("must never exist",)
    assert v.integer().optional().parse("").error == ("must be an integer",)


def test_optional_short_circuits_absent_input() -> None:
    result = v.boolean().optional().parse(None)
    assert result.success
    assert result.value is None


def test_optional_still_validates_present_input() -> None:
    assert v.boolean().optional().parse("maybe").success is False


def test_default_short_circuits_absent_input() -> None:
    assert v.integer().default_to(10).parse(None).value == 10


def test_default_does_not_replace_present_input() -> None:
    assert v.integer().default_to(10).parse("").error == ("must be an integer",)


def test_none_is_a_valid_default() -> None:
    variable = v.string().default_to(None)
    assert variable.has_default
    assert variable.parse(None).value is None


def test_optional_and_default_are_mutually_exclusive() -> None:
    defaulted = v.integer().optional().default_to(3)
    assert defaulted.is_optional is False
    assert defaulted.default == 3

    optional = v.integer().default_to(3).optional()
    assert optional.is_optional is True
    assert optional.default is MISSING
    assert optional.parse(None).value is None


def test_mutators_never_change_the_receiver() -> None:
    base = v.integer()
    derived = [base.optional(), base.default_to(1), base.from_("PORT"), base.describe("port"), base.min(1)]
    assert base.is_optional is False
    assert base.default is MISSING
    assert base.name is None
    assert base.description is None
    assert base.minimum is None
    assert all(variant is not base for variant in derived)


def test_variables_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.integer().is_optional = True  # type: ignore[misc]


def test_else_prefers_first_member() -> None:
    union = v.boolean().else_(v.integer())
    assert union.parse("1").value is True
    assert union.parse("7").value == 7


def test_else_concatenates_issues_in_order() -> None:
    union = v.boolean().else_(v.integer())
    assert union.parse("x").error == ("must be a boolean (true|t|1)|(false|f|0)", "must be an integer")


def test_or_operator_matches_else() -> None:
    assert (v.boolean() | v.integer()).type == v.boolean().else_(v.integer()).type


def test_union_flattens_nested_unions() -> None:
    left = v.boolean() | v.integer()
    right = v.enum("x") | v.string()
    union = left | right
    assert isinstance(union, AggregateVariable)
    assert len(union.variables) == 4
    assert all(not isinstance(member, AggregateVariable) for member in union.variables)
    assert union.type == "boolean/integer/'x'/string"


def test_union_does_not_change_operands() -> None:
    left = v.boolean() | v.integer()
    _ = left | v.string()
    assert len(left.variables) == 2


def test_union_absent_policy_prefers_defaults() -> None:
    assert (v.integer().optional() | v.boolean().default_to(True)).parse(None).value is True
    assert (v.integer() | v.boolean().optional()).parse(None).value is None
    assert (v.integer() | v.boolean()).parse(None).error == ("is required",)


def test_union_inherits_first_name() -> None:
    assert (v.integer() | v.boolean().from_("FLAG")).name == "FLAG"


def test_transform_maps_successes() -> None:
    doubled = v.integer().transform(lambda value: success(value * 2))
    assert isinstance(doubled, TransformedVariable)
    assert doubled.parse("21").value == 42
    assert doubled.type == "integer"


def test_transform_propagates_source_failures_untouched() -> None:
    calls: list[int] = []

    def record(value: int):
        calls.append(value)
        return success(value)

    assert v.integer().transform(record).parse("x").error == ("must be an integer",)
    assert calls == []


def test_transform_may_fail() -> None:
    even = v.integer().transform(lambda value: success(value) if value % 2 == 0 else failure("must be even"), type="even")
    assert even.parse("3").error == ("must be even",)
    assert even.type == "even"


def test_transform_is_bypassed_for_absent_input() -> None:
    def explode(_value):
        raise AssertionError("transform must not run")

    assert v.integer().optional().transform(explode).parse(None).value is None
    assert v.integer().transform(explode).default_to(5).parse(None).value == 5
    assert v.integer().transform(explode).parse(None).error == ("is required",)


def test_default_set_before_transform_survives() -> None:
    def explode(value):
        raise AssertionError("transform must not run")

    defaulted = v.integer().default_to(5).transform(explode)
    assert defaulted.default == 5
    assert defaulted.parse(None).value == 5
    assert v.integer().default_to(5).transform(lambda n: success(n * 2)).parse("4").value == 8


def test_transforms_compose() -> None:
    chained = v.integer().transform(lambda n: success(n + 1)).transform(lambda n: success(str(n)))
    assert chained.parse("1").value == "2"


def test_transform_keeps_name_and_optional_flag() -> None:
    transformed = v.integer().optional().from_("N").transform(lambda n: success(n))
    assert transformed.is_optional is True
    assert transformed.name == "N"


def test_to_dict_describes_variable() -> None:
    described = v.integer().min(1).default_to(8).from_("WORKERS").describe("worker count").to_dict()
    assert described == {
        "type": "integer",
        "optional": False,
        "default": 8,
        "name": "WORKERS",
        "description": "worker count",
        "min": 1,
        "max": None,
    }


def test_to_dict_nests_union_members() -> None:
    described = (v.boolean() | v.integer()).to_dict()
    assert [member["type"] for member in described["variables"]] == ["boolean", "integer"]


@given(st.text(), st.integers())
def test_derivations_leave_base_observably_unchanged(text: str, number: int) -> None:
    base = v.string()
    base.default_to(text)
    base.optional()
    base.else_(v.integer().default_to(number))
    assert base == v.string()
