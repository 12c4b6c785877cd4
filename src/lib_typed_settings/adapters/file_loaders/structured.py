"""Structured file loaders.

Purpose
-------
Convert JSON, TOML and YAML artifacts into flat data objects. Adapters are
small wrappers around ``json``/``tomllib``/``yaml.safe_load`` so error
handling and observability live in one place.

Contents
--------
* :func:`to_data_object` – top-level mapping to ``str`` values.
* :func:`parse_json_text` – JSON text to data object (used for inline JSON).
* :class:`BaseFileLoader` – read, decode, validate, flatten.
* :class:`JSONFileLoader`, :class:`TOMLFileLoader`, :class:`YAMLFileLoader`.
* :func:`loader_for` – choose a loader from the file suffix.

System Role
-----------
Invoked by :class:`lib_typed_settings.core.DataBuilder`. Only top-level keys
become data object entries; nested structures are re-encoded as JSON text so
a :class:`~lib_typed_settings.domain.variables.json.JsonVariable` can read them.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error, make_event


def to_data_object(data: Mapping[str, Any]) -> dict[str, str | None]:
    """Return *data* with every value as text; ``None`` stays absent.

    Examples
    --------
    >>> to_data_object({"name": "api", "port": 80, "tags": ["a"], "skip": None})
    {'name': 'api', 'port': '80', 'tags': '["a"]', 'skip': None}
    """

    return {str(key): _as_text(value) for key, value in data.items()}


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def parse_json_text(text: str | bytes, source: str | None = None) -> dict[str, str | None]:
    """Decode a JSON object into a data object, raising :class:`InvalidFormat`.

    Examples
    --------
    >>> parse_json_text('{"debug": true}')
    {'debug': 'true'}
    >>> parse_json_text('[1]')
    Traceback (most recent call last):
    ...
    lib_typed_settings.domain.errors.InvalidFormat: JSON input did not produce a mapping
    """

    where = source or "JSON input"
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidFormat(f"Invalid JSON in {where}: {exc}") from exc
    return to_data_object(BaseFileLoader._ensure_mapping(data, path=where))


class BaseFileLoader:
    """Template for the structured loaders: read, decode, validate, flatten."""

    format = "file"

    def load(self, path: str) -> dict[str, str | None]:
        """Return the top-level entries of the file at *path* as a data object.

        Raises
        ------
        NotFound
            When *path* is not a file.
        InvalidFormat
            When decoding fails or the document is not a mapping.

        Side Effects
        ------------
        Emits ``config_file_loaded`` debug events or ``config_file_invalid`` errors.
        """

        payload = self._read(path)
        try:
            data = self._decode(payload)
        except InvalidFormat as exc:
            log_error("config_file_invalid", **make_event("file", path, {"format": self.format, "error": str(exc)}))
            raise InvalidFormat(f"Invalid {self.format.upper()} in {path}: {exc}") from exc
        result = to_data_object(self._ensure_mapping(data, path=path))
        log_debug("config_file_loaded", **make_event("file", path, {"format": self.format, "keys": sorted(result)}))
        return result

    def _decode(self, payload: bytes) -> Any:
        raise NotImplementedError

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"key = 'value'")
        >>> tmp.close()
        >>> BaseFileLoader()._read(tmp.name)[:3]
        b'key'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("config_file_read", **make_event("file", path, {"size": len(payload)}))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, Any]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        lib_typed_settings.domain.errors.InvalidFormat: demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"{path} did not produce a mapping")
        return data


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents.

    Examples
    --------
    >>> from tempfile import NamedTemporaryFile
    >>> tmp = NamedTemporaryFile('w', suffix='.json', delete=False, encoding='utf-8')
    >>> _ = tmp.write('{"enabled": true}')
    >>> tmp.close()
    >>> JSONFileLoader().load(tmp.name)
    {'enabled': 'true'}
    >>> Path(tmp.name).unlink()
    """

    format = "json"

    def _decode(self, payload: bytes) -> Any:
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise InvalidFormat(str(exc)) from exc


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser."""

    format = "toml"

    def _decode(self, payload: bytes) -> Any:
        try:
            return tomllib.loads(payload.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise InvalidFormat(str(exc)) from exc


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents with ``yaml.safe_load``; an empty document is an empty mapping."""

    format = "yaml"

    def _decode(self, payload: bytes) -> Any:
        try:
            data = yaml.safe_load(payload)
        except yaml.YAMLError as exc:
            raise InvalidFormat(str(exc)) from exc
        return {} if data is None else data


_LOADERS: dict[str, type[BaseFileLoader]] = {
    ".json": JSONFileLoader,
    ".toml": TOMLFileLoader,
    ".yaml": YAMLFileLoader,
    ".yml": YAMLFileLoader,
}


def loader_for(path: str) -> BaseFileLoader:
    """Return the loader matching the suffix of *path*.

    Examples
    --------
    >>> type(loader_for("settings.yml")).__name__
    'YAMLFileLoader'
    >>> loader_for("settings.ini")
    Traceback (most recent call last):
    ...
    lib_typed_settings.domain.errors.InvalidFormat: Unsupported settings file type: settings.ini
    """

    loader = _LOADERS.get(Path(path).suffix.lower())
    if loader is None:
        raise InvalidFormat(f"Unsupported settings file type: {path}")
    return loader()


__all__ = [
    "BaseFileLoader",
    "JSONFileLoader",
    "TOMLFileLoader",
    "YAMLFileLoader",
    "loader_for",
    "parse_json_text",
    "to_data_object",
]
