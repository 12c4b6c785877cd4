"""Application-layer ports describing data source responsibilities.

Purpose
-------
Define the structural contracts adapters satisfy so the composition root can
assemble data objects without depending on concrete implementations.

Contents
--------
* :class:`EnvLoader` – snapshots environment variables.
* :class:`DotEnvLoader` – reads ``.env`` files.
* :class:`FileLoader` – parses structured files (JSON/TOML/YAML).

System Role
-----------
Every loader produces a flat ``Mapping[str, str]``: the data object consumed
by :mod:`lib_typed_settings.application.resolve`.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class EnvLoader(Protocol):
    """Translate environment variables into a flat data object."""

    def load(self, prefix: str | None = None) -> Mapping[str, str]:
        """Return variables, keeping only (and stripping) *prefix* when given."""


@runtime_checkable
class DotEnvLoader(Protocol):
    """Read a ``.env`` file into a flat data object."""

    def load(self, path: str) -> Mapping[str, str]:
        """Parse *path*; raise ``NotFound`` or ``DotEnvFormatError`` on failure."""


@runtime_checkable
class FileLoader(Protocol):
    """Parse a structured file into a flat data object.

    Why
    ----
    Segregate parsing concerns (TOML/JSON/YAML) from data object assembly.
    """

    def load(self, path: str) -> Mapping[str, str]:
        """Read *path* and return its top-level keys or raise ``InvalidFormat``."""

