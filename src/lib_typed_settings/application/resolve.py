"""Application-layer schema resolution.

Purpose
-------
Walk a settings schema against a flat data object and either mirror the schema
with per-leaf :class:`Result` values or produce a fully typed value tree. The
module performs no I/O so any composition root (library API, CLI) can reuse it.

Contents
    - ``parse_results``: mirrored tree of results; never raises for bad data.
    - ``parse_values``: mirrored tree of values or :class:`VariableError`.
    - ``_results`` / ``_values``: recursive stanzas dispatching on node kind.
    - ``describe``: mirrored tree of variable descriptions.
    - ``_union``: first alternative without issues wins.

System Role
-----------
A schema node is a :class:`Variable` leaf, a mapping of keys to nodes (group),
or a list/tuple of groups (union of alternatives tried in order). Anything else
is a :class:`SchemaError`, raised as soon as it is reached.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union

from ..domain.errors import PathSegment, SchemaError, VariableError, VariableIssue
from ..domain.result import Result
from ..domain.variables.base import Variable
from ..observability import log_debug, log_info

Schema = Union[Variable[Any], Mapping[str, Any], Sequence[Mapping[str, Any]]]
DataObject = Mapping[str, Union[str, None]]


def parse_results(schema: Schema, data: DataObject) -> Any:
    """Return *schema* mirrored with every leaf replaced by its :class:`Result`.

    Why
    ----
    Callers can inspect which fields failed without aborting the whole walk.

    Parameters
    ----------
    schema:
        Named variable, group mapping, or list of alternative groups.
    data:
        Flat mapping of source keys to raw strings; missing keys are absent.

    Returns
    -------
    Any
        A :class:`Result` for a bare variable, a ``dict`` for a group, or a
        ``list`` with one mirrored tree per alternative for a union.

    Examples
    --------
    >>> from lib_typed_settings.domain.variables.boolean import BooleanVariable
    >>> parse_results({"debug": BooleanVariable()}, {"debug": "t"})["debug"].value
    True
    """

    if isinstance(schema, Variable):
        return schema.parse(data.get(_root_name(schema)))
    results = _results(schema, data)
    log_debug("settings_results", nodes=len(results))
    return results


def parse_values(schema: Schema, data: DataObject) -> Any:
    """Return the typed value tree for *schema* or raise :class:`VariableError`.

    What
    ----
    Every leaf is evaluated; failures are collected with their full key path
    (union alternatives contribute their integer index). The walk never stops
    early, and any collected issue fails the whole call.

    Raises
    ------
    VariableError
        Carrying every :class:`VariableIssue`, in schema order.
    SchemaError
        When the schema itself is malformed.

    Examples
    --------
    >>> from lib_typed_settings.domain.variables.number import IntegerVariable
    >>> parse_values({"port": IntegerVariable()}, {"port": "0x50"})
    {'port': 80}
    >>> parse_values({"port": IntegerVariable()}, {})
    Traceback (most recent call last):
    ...
    lib_typed_settings.domain.errors.VariableError: port: is required
    """

    issues: list[VariableIssue] = []
    if isinstance(schema, Variable):
        name = _root_name(schema)
        value = _leaf(schema, data.get(name), (name,), issues)
    else:
        value = _values(schema, data, (), issues)
    if issues:
        log_info("settings_invalid", issues=len(issues))
        raise VariableError(issues)
    log_info("settings_resolved")
    return value


def describe(schema: Schema) -> Any:
    """Return *schema* mirrored with every leaf replaced by :meth:`Variable.to_dict`.

    Examples
    --------
    >>> from lib_typed_settings.domain.variables.boolean import BooleanVariable
    >>> describe({"debug": BooleanVariable().optional()})
    {'debug': {'type': 'boolean', 'optional': True}}
    """

    if isinstance(schema, Variable):
        return schema.to_dict()
    if isinstance(schema, Mapping):
        return {key: describe(child) for key, child in schema.items()}
    return [describe(group) for group in _alternatives(schema)]


def _root_name(variable: Variable[Any]) -> str:
    if variable.name is None:
        raise SchemaError("Variable needs a name")
    return variable.name


def _results(node: Any, data: DataObject) -> Any:
    if isinstance(node, Mapping):
        return {key: _result_entry(key, child, data) for key, child in node.items()}
    return [_results(group, data) for group in _alternatives(node)]


def _result_entry(key: str, node: Any, data: DataObject) -> Any:
    if isinstance(node, Variable):
        result: Result[Any] = node.parse(data.get(node.name or key))
        return result
    return _results(node, data)


def _values(
    node: Any,
    data: DataObject,
    path: tuple[PathSegment, ...],
    issues: list[VariableIssue],
) -> Any:
    if isinstance(node, Mapping):
        values: dict[str, Any] = {}
        for key, child in node.items():
            child_path = (*path, key)
            if isinstance(child, Variable):
                values[key] = _leaf(child, data.get(child.name or key), child_path, issues)
            else:
                values[key] = _values(child, data, child_path, issues)
        return values
    return _union(_alternatives(node), data, path, issues)


def _leaf(
    variable: Variable[Any],
    raw: str | None,
    path: tuple[PathSegment, ...],
    issues: list[VariableIssue],
) -> Any:
    result = variable.parse(raw)
    if result.success:
        return result.value
    issues.append(VariableIssue(path, result.error))
    return None


def _union(
    alternatives: Sequence[Mapping[str, Any]],
    data: DataObject,
    path: tuple[PathSegment, ...],
    issues: list[VariableIssue],
) -> Any:
    """Return the first alternative that resolves cleanly, else record every issue."""

    collected: list[VariableIssue] = []
    for index, group in enumerate(alternatives):
        attempt: list[VariableIssue] = []
        value = _values(group, data, (*path, index), attempt)
        if not attempt:
            return value
        collected.extend(attempt)
    issues.extend(collected)
    return None


def _alternatives(node: Any) -> Sequence[Mapping[str, Any]]:
    """Validate a union node and return its groups."""

    if not isinstance(node, (list, tuple)):
        raise SchemaError(f"Unsupported schema node: {node!r}")
    if not node:
        raise SchemaError("A union needs at least one alternative")
    for group in node:
        if not isinstance(group, Mapping):
            raise SchemaError(f"Union alternatives must be mappings, got {group!r}")
    return node


__all__ = ["DataObject", "Schema", "describe", "parse_results", "parse_values"]
