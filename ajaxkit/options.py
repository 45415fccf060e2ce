"""
Option Store

Library options are addressed by dotted keys, e.g. ``js.app.minify``.
Nested mappings read from config files are flattened into dotted keys when
merged; sequences are kept as leaf values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ajaxkit.exceptions import MissingOptionError
from ajaxkit.version import __version__

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS: dict[str, Any] = {
    "core.version": __version__,
    "core.language": "en",
    "core.encoding": "utf-8",
    "core.request.mode": "asynchronous",
    "core.request.method": "POST",
    "core.debug.on": False,
    "core.debug.verbose": False,
    "js.lib.queue_size": 0,
    "js.lib.show_status": False,
    "js.lib.show_cursor": True,
    "js.app.export": False,
    "js.app.minify": True,
    "js.app.options": "",
}


class Options:
    """Mapping from dotted option keys to values."""

    def __init__(self, options: Mapping[str, Any] | None = None, with_defaults: bool = True) -> None:
        self._values: dict[str, Any] = dict(DEFAULT_OPTIONS) if with_defaults else {}
        if options:
            self.set_options(options)

    def has(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def require(self, key: str) -> Any:
        """Return a required option, failing if it is unset or empty."""
        value = self._values.get(key)
        if value is None or value == "":
            raise MissingOptionError(key)
        return value

    def set_options(self, options: Mapping[str, Any], prefix: str = "") -> None:
        """
        Merge a (possibly nested) mapping of options.

        Args:
            options: Option values; nested mappings become dotted keys.
            prefix:  Key prefix prepended to every merged key.
        """
        for key, value in options.items():
            full_key = f"{prefix}{key}"
            if isinstance(value, Mapping):
                self.set_options(value, prefix=f"{full_key}.")
            else:
                self._values[full_key] = value
        logger.debug("Merged %d option(s) under prefix '%s'", len(options), prefix)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)
