"""Environment variable adapter.

Purpose
-------
Snapshot process environment variables into a flat data object. Values stay
strings: typing is the job of the variables that consume them.

Key behaviours
--------------
* Optional prefix filter; the loader appends ``_`` when missing and strips
  the prefix from the returned keys.
* Reads from an injected mapping for tests, :data:`os.environ` otherwise.
* Emits structured logging via :mod:`lib_typed_settings.observability`.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...observability import log_debug, make_event


class DefaultEnvLoader:
    """Load environment variables, optionally restricted to one namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability."""

        self._environ = environ if environ is not None else os.environ

    def load(self, prefix: str | None = None) -> dict[str, str]:
        """Return a copy of the environment, filtered by *prefix* when given.

        Parameters
        ----------
        prefix:
            Namespace such as ``APP``; keys ``APP_*`` are kept with the
            ``APP_`` part removed.

        Side Effects
        ------------
        Emits ``env_loaded`` debug events listing the returned keys.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'APP_PORT': '80', 'HOME': '/root'})
        >>> loader.load('APP')
        {'PORT': '80'}
        >>> sorted(loader.load())
        ['APP_PORT', 'HOME']
        """

        if not prefix:
            collected = dict(self._environ)
        else:
            namespace = prefix if prefix.endswith("_") else f"{prefix}_"
            collected = {
                key[len(namespace) :]: value
                for key, value in self._environ.items()
                if key.startswith(namespace) and len(key) > len(namespace)
            }
        log_debug("env_loaded", **make_event("env", None, {"prefix": prefix, "keys": sorted(collected)}))
        return collected


__all__ = ["DefaultEnvLoader"]
