"""Composition root for ``lib_typed_settings``.

Purpose
-------
Connect the data source adapters (environment, ``.env``, JSON/TOML/YAML) with
the schema resolver and expose the consumer-facing API.

Contents
--------
* :class:`DataBuilder` – immutable builder assembling a flat data object.
* :class:`Settings` – a schema bundled with ``parse_results``/``parse_values``.
* :func:`parse_results` / :func:`parse_values` – resolver entry points that
  accept a mapping, a builder, or nothing (the process environment).

System Role
-----------
The only module that knows about concrete adapters. Later data sources
override earlier keys, mirroring the precedence rules of layered
configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union

from .adapters.dotenv.default import DefaultDotEnvLoader, parse_dotenv
from .adapters.env.default import DefaultEnvLoader
from .adapters.file_loaders.structured import JSONFileLoader, loader_for, parse_json_text, to_data_object
from .application import resolve
from .application.ports import DotEnvLoader, EnvLoader, FileLoader
from .application.resolve import DataObject, Schema
from .domain.errors import NotFound
from .observability import log_debug, make_event


@dataclass(frozen=True)
class DataBuilder:
    """Immutable builder for flat data objects.

    Why
    ----
    Settings usually come from several places at once (a committed ``.env``,
    an optional local override file, the real environment). Each method returns
    a new builder whose data lets the newest source win on conflicting keys.

    Attributes
    ----------
    values:
        Read-only view of the collected ``key -> raw string`` entries.
    sources:
        Names of the sources applied so far, oldest first.

    Examples
    --------
    >>> builder = DataBuilder().data({"PORT": "80"}).dotenv("PORT=8080\\nHOST=db")
    >>> builder.to_data()
    {'PORT': '8080', 'HOST': 'db'}
    >>> builder.object({"RETRIES": 3}).to_data()["RETRIES"]
    '3'
    >>> builder.sources
    ('data', 'dotenv')
    """

    values: Mapping[str, str | None] = field(default_factory=dict)
    sources: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def data(self, mapping: Mapping[str, str | None], source: str = "data") -> DataBuilder:
        """Return a builder with *mapping* merged on top (values used as-is)."""

        return DataBuilder({**self.values, **mapping}, (*self.sources, source))

    def object(self, mapping: Mapping[str, Any]) -> DataBuilder:
        """Merge *mapping*, JSON-encoding every non-string value."""

        return self.data(to_data_object(mapping), "object")

    def env(self, prefix: str | None = None, *, environ: Mapping[str, str] | None = None) -> DataBuilder:
        """Merge the process environment (or *environ*), optionally filtered by *prefix*."""

        loader: EnvLoader = DefaultEnvLoader(environ=environ)
        return self.data(loader.load(prefix), "env")

    def json(self, text: str) -> DataBuilder:
        """Merge the top-level entries of a JSON object given as text."""

        return self.data(parse_json_text(text), "json")

    def dotenv(self, text: str) -> DataBuilder:
        """Merge ``.env`` formatted *text*; malformed lines raise ``DotEnvFormatError``."""

        return self.data(parse_dotenv(text), "dotenv")

    def json_file(self, path: str, *, when: bool = True, optional: bool = True) -> DataBuilder:
        return self._file(JSONFileLoader(), path, "json_file", when=when, optional=optional)

    def dotenv_file(self, path: str, *, when: bool = True, optional: bool = True) -> DataBuilder:
        return self._file(DefaultDotEnvLoader(), path, "dotenv_file", when=when, optional=optional)

    def file(self, path: str, *, when: bool = True, optional: bool = True) -> DataBuilder:
        """Merge a JSON, TOML or YAML file chosen by suffix."""

        return self._file(loader_for(path), path, "file", when=when, optional=optional)

    def _file(
        self,
        loader: Union[FileLoader, DotEnvLoader],
        path: str,
        source: str,
        *,
        when: bool,
        optional: bool,
    ) -> DataBuilder:
        """Load *path* through *loader* unless skipped.

        A ``when=False`` call is a no-op. A missing file is skipped when
        *optional*, otherwise :class:`NotFound` propagates.
        """

        if not when:
            return self
        try:
            loaded = loader.load(path)
        except NotFound:
            if not optional:
                raise
            log_debug("data_source_skipped", **make_event(source, path, {"reason": "missing"}))
            return self
        return self.data(loaded, source)

    def to_data(self) -> dict[str, str | None]:
        """Return a mutable copy of the collected data object."""

        return dict(self.values)


DataInput = Union[Mapping[str, Union[str, None]], DataBuilder, None]


def _data_object(data: DataInput) -> DataObject:
    if data is None:
        return DataBuilder().env().to_data()
    if isinstance(data, DataBuilder):
        return data.values
    return data


def parse_results(schema: Schema, data: DataInput = None) -> Any:
    """Resolve *schema* into a mirrored tree of results.

    Examples
    --------
    >>> from lib_typed_settings import v
    >>> parse_results({"debug": v.boolean()}, {"debug": "yes"})["debug"].error
    ('must be a boolean (true|t|1)|(false|f|0)',)
    """

    return resolve.parse_results(schema, _data_object(data))


def parse_values(schema: Schema, data: DataInput = None) -> Any:
    """Resolve *schema* into typed values or raise :class:`VariableError`.

    Examples
    --------
    >>> from lib_typed_settings import v
    >>> parse_values({"db": {"port": v.integer().default_to(5432)}}, DataBuilder())
    {'db': {'port': 5432}}
    """

    return resolve.parse_values(schema, _data_object(data))


@dataclass(frozen=True)
class Settings:
    """A reusable settings schema.

    Why
    ----
    Lets an application declare its configuration once at import time and
    resolve it later against whatever data is available.

    Examples
    --------
    >>> from lib_typed_settings import v
    >>> settings = Settings({"workers": v.integer().min(1), "debug": v.boolean().default_to(False)})
    >>> settings.parse_values({"workers": "4"})
    {'workers': 4, 'debug': False}
    >>> settings.parse_results({"workers": "0"})["workers"].error
    ('must be at least 1',)
    """

    schema: Schema

    def parse_results(self, data: DataInput = None) -> Any:
        return parse_results(self.schema, data)

    def parse_values(self, data: DataInput = None) -> Any:
        return parse_values(self.schema, data)

    def describe(self) -> Any:
        """Return the description tree of the schema (see :func:`resolve.describe`)."""

        return resolve.describe(self.schema)


__all__ = ["DataBuilder", "DataInput", "Settings", "parse_results", "parse_values"]
