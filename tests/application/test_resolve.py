"""Schema resolution: groups, unions, explicit names and issue paths."""

from __future__ import annotations

import logging

import pytest

from lib_typed_settings import v
from lib_typed_settings.application.resolve import describe, parse_results, parse_values
from lib_typed_settings.domain.errors import SchemaError, VariableError, VariableIssue
from lib_typed_settings.observability import bind_trace_id

NESTED = {"a": v.boolean(), "b": {"c": v.string(), "d": v.number().optional()}}


def test_nested_values_report_single_missing_leaf() -> None:
    with pytest.raises(VariableError) as excinfo:
        parse_values(NESTED, {"a": "true"})
    assert excinfo.value.issues == (VariableIssue(("b", "c"), ("is required",)),)
    assert str(excinfo.value) == "b.c: is required"


def test_nested_results_mirror_schema() -> None:
    results = parse_results(NESTED, {"a": "true"})
    assert results["a"].success is True
    assert results["b"]["c"].success is False
    assert results["b"]["d"].success is True
    assert results["b"]["d"].value is None


def test_nested_values_resolve_when_complete() -> None:
    assert parse_values(NESTED, {"a": "0", "c": "x", "d": "1.5"}) == {"a": False, "b": {"c": "x", "d": 1.5}}


def test_explicit_name_reads_other_key() -> None:
    assert parse_values(v.boolean().from_("V0"), {"V0": "true"}) is True
    assert parse_results(v.boolean().optional().from_("V2"), {}).value is None
    assert parse_results(v.boolean().from_("V1"), {"V1": None}).error == ("is required",)


def test_explicit_name_inside_group_overrides_key() -> None:
    schema = {"port": v.integer().from_("APP_PORT")}
    assert parse_values(schema, {"port": "1", "APP_PORT": "2"}) == {"port": 2}


def test_every_failing_leaf_is_collected_in_schema_order() -> None:
    schema = {"x": v.integer(), "y": {"z": v.boolean()}, "w": v.string().email()}
    with pytest.raises(VariableError) as excinfo:
        parse_values(schema, {"x": "one", "z": "maybe", "w": "nobody"})
    assert [issue.key for issue in excinfo.value.issues] == [("x",), ("y", "z"), ("w",)]


UNION = {
    "db": [
        {"url": v.string().url()},
        {"host": v.string(), "port": v.integer().default_to(5432)},
    ]
}


def test_union_takes_first_clean_alternative() -> None:
    data = {"url": "postgres://db/app", "host": "db"}
    assert parse_values(UNION, data) == {"db": {"url": "postgres://db/app"}}


def test_union_falls_through_to_later_alternative() -> None:
    assert parse_values(UNION, {"host": "db"}) == {"db": {"host": "db", "port": 5432}}


def test_union_failure_reports_every_alternative_with_index() -> None:
    with pytest.raises(VariableError) as excinfo:
        parse_values(UNION, {})
    assert [issue.key for issue in excinfo.value.issues] == [("db", 0, "url"), ("db", 1, "host")]
    assert excinfo.value.issues[0].dotted == "db.0.url"


def test_union_results_list_each_alternative() -> None:
    results = parse_results(UNION, {"host": "db"})
    assert isinstance(results["db"], list)
    assert results["db"][0]["url"].success is False
    assert results["db"][1]["port"].value == 5432


def test_root_union() -> None:
    schema = [{"token": v.string()}, {"user": v.string(), "password": v.string()}]
    assert parse_values(schema, {"user": "u", "password": "p"}) == {"user": "u", "password": "p"}
    with pytest.raises(VariableError) as excinfo:
        parse_values(schema, {"user": "u"})
    assert [issue.key for issue in excinfo.value.issues] == [(0, "token"), (1, "password")]


def test_unnamed_root_variable_is_schema_error() -> None:
    with pytest.raises(SchemaError, match="Variable needs a name"):
        parse_values(v.boolean(), {})
    with pytest.raises(SchemaError):
        parse_results(v.boolean(), {})


@pytest.mark.parametrize(
    "schema, message",
    [
        ({"a": 5}, "Unsupported schema node"),
        ({"a": []}, "at least one alternative"),
        ({"a": [{"b": v.string()}, "c"]}, "must be mappings"),
    ],
)
def test_malformed_schema_raises_immediately(schema, message: str) -> None:
    with pytest.raises(SchemaError, match=message):
        parse_values(schema, {})
    with pytest.raises(SchemaError, match=message):
        parse_results(schema, {})


def test_schema_error_is_not_collected_with_data_issues() -> None:
    with pytest.raises(SchemaError):
        parse_values({"bad": v.integer(), "worse": 3}, {"bad": "x"})


def test_describe_mirrors_schema() -> None:
    description = describe({"debug": v.boolean().default_to(False), "db": [{"url": v.string()}]})
    assert description["debug"] == {"type": "boolean", "optional": False, "default": False}
    assert description["db"][0]["url"]["type"] == "string"


def test_describe_named_root_variable() -> None:
    assert describe(v.integer().from_("PORT"))["name"] == "PORT"


def test_resolution_logs_outcome_with_trace(debug_logs) -> None:
    bind_trace_id("trace-7")
    parse_values({"a": v.boolean()}, {"a": "t"})
    with pytest.raises(VariableError):
        parse_values({"a": v.boolean()}, {})

    events = [(record.levelno, record.getMessage()) for record in debug_logs.records]
    assert (logging.INFO, "settings_resolved") in events
    assert (logging.INFO, "settings_invalid") in events
    invalid = next(record for record in debug_logs.records if record.getMessage() == "settings_invalid")
    assert invalid.context == {"trace_id": "trace-7", "issues": 1}


def test_results_walk_logs_debug(debug_logs) -> None:
    parse_results({"a": v.boolean(), "b": v.string()}, {})
    record = next(record for record in debug_logs.records if record.getMessage() == "settings_results")
    assert record.context["nodes"] == 2
