"""
Plugin Registry

PluginRegistry: classifies registered plugins by the capabilities they
declare and keeps all of them in a priority-ordered registry.

Named lookup and priority ordering are two indices over the same plugins:
request handlers and response contributors are keyed by name (last write
wins), while every plugin is slotted in the priority registry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from ajaxkit.events import EventDispatcher
from ajaxkit.exceptions import InvalidPluginKind, InvalidRegistrationError, UnknownHandlerType
from ajaxkit.plugins.base import (
    CALLABLE_CLASS,
    CALLABLE_DIR,
    DEFAULT_PRIORITY,
    USER_FUNCTION,
    AlertProvider,
    Capability,
    ConfirmProvider,
    Plugin,
    RequestHandler,
    ResponseContributor,
)
from ajaxkit.plugins.dialogs import DefaultAlert, DefaultConfirm
from ajaxkit.priority import PriorityRegistry

logger = logging.getLogger(__name__)

_REGISTRABLE = frozenset(
    {
        Capability.REQUEST_HANDLER,
        Capability.RESPONSE_CONTRIBUTOR,
        Capability.ALERT_PROVIDER,
        Capability.CONFIRM_PROVIDER,
    }
)


class PluginRegistry:
    """
    Registry for request handlers, response contributors and dialogs.

    Priorities:
        0 thru 999:     plugins that are part of or extend the core
        1000 thru 8999: user plugins, which typically don't care about order
        9000 thru 9999: plugins that need to be last or near the end
    """

    def __init__(self, events: EventDispatcher | None = None) -> None:
        self.events = events or EventDispatcher()
        self._plugins: PriorityRegistry[Plugin] = PriorityRegistry()
        self._request_handlers: dict[str, RequestHandler] = {}
        self._response_contributors: dict[str, ResponseContributor] = {}
        self._alert: AlertProvider | None = None
        self._confirm: ConfirmProvider | None = None
        self.default_alert = DefaultAlert()
        self.default_confirm = DefaultConfirm()

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, plugin: Plugin, priority: int = DEFAULT_PRIORITY) -> int:
        """
        Register a plugin according to its declared capabilities.

        Args:
            plugin:   The plugin instance.
            priority: Desired priority; shifted forward if already taken.

        Returns:
            The effective priority of the plugin.

        Raises:
            InvalidPluginKind: The plugin declares no registrable capability.
        """
        capabilities = plugin.capabilities
        if not capabilities & _REGISTRABLE:
            raise InvalidPluginKind(type(plugin).__name__)

        if Capability.REQUEST_HANDLER in capabilities:
            self._request_handlers[plugin.name] = plugin
        if Capability.RESPONSE_CONTRIBUTOR in capabilities:
            self._response_contributors[plugin.name] = plugin
        if Capability.ALERT_PROVIDER in capabilities:
            self._alert = plugin
        if Capability.CONFIRM_PROVIDER in capabilities:
            self._confirm = plugin
        if Capability.EVENT_LISTENER in capabilities:
            self.events.add_listener(plugin)

        effective = self._plugins.insert(plugin, priority)
        logger.info(
            "Plugin registered: %s (%s) at priority %d",
            plugin.name,
            ", ".join(sorted(c.value for c in capabilities)),
            effective,
        )
        return effective

    def register_callable(self, handler_type: str, target: str, options: Mapping[str, Any] | None = None) -> Any:
        """
        Register a function, class or directory with the request handler named ``handler_type``.

        Raises:
            UnknownHandlerType: No request handler has that name.
        """
        handler = self._request_handlers.get(handler_type)
        if handler is None:
            raise UnknownHandlerType(handler_type)
        logger.debug("Registering %s '%s'", handler_type, target)
        return handler.register(handler_type, target, dict(options or {}))

    def register_from_config(self, config: Mapping[str, Any]) -> int:
        """
        Register the functions, classes and directories listed in an app config.

        Every entry is validated, and every request handler it needs looked
        up, before any is registered, so a malformed entry or a missing
        handler leaves the registry unchanged.

        Returns:
            The number of registered entries.

        Raises:
            InvalidRegistrationError: An entry is malformed.
            UnknownHandlerType: No request handler serves an entry's type.
        """
        entries = _parse_functions(config.get("functions", []))
        entries.extend(_parse_classes(config.get("classes", [])))
        for handler_type, _, _ in entries:
            if handler_type not in self._request_handlers:
                raise UnknownHandlerType(handler_type)
        for handler_type, target, options in entries:
            self.register_callable(handler_type, target, options)
        return len(entries)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get_request_handler(self, name: str) -> RequestHandler | None:
        return self._request_handlers.get(name)

    def get_response_contributor(self, name: str) -> ResponseContributor | None:
        return self._response_contributors.get(name)

    def request_handlers(self) -> Iterator[RequestHandler]:
        """Yield the current request handlers in priority order."""
        for plugin in self.plugins():
            if self._request_handlers.get(plugin.name) is plugin:
                yield plugin

    def plugins(self) -> Iterator[Plugin]:
        return iter(self._plugins)

    def priorities(self) -> list[int]:
        return self._plugins.priorities()

    # ── Dialogs ───────────────────────────────────────────────────────────────

    @property
    def alert(self) -> AlertProvider:
        return self._alert or self.default_alert

    @property
    def confirm(self) -> ConfirmProvider:
        return self._confirm or self.default_confirm


def _parse_functions(functions: Any) -> list[tuple[str, str, dict[str, Any]]]:
    if isinstance(functions, Mapping):
        items = list(functions.items())
    elif isinstance(functions, Sequence) and not isinstance(functions, str):
        items = [(name, {}) for name in functions]
    else:
        raise InvalidRegistrationError("The 'functions' entry must be a list or a mapping", functions)

    entries = []
    for name, options in items:
        if not isinstance(name, str) or not isinstance(options, Mapping):
            raise InvalidRegistrationError("Invalid function entry", {name: options})
        entries.append((USER_FUNCTION, name, dict(options)))
    return entries


def _parse_classes(classes: Any) -> list[tuple[str, str, dict[str, Any]]]:
    if isinstance(classes, Mapping):
        entries = []
        for name, options in classes.items():
            if not isinstance(name, str) or not isinstance(options, Mapping):
                raise InvalidRegistrationError("Invalid class entry", {name: options})
            entries.append((CALLABLE_CLASS, name, dict(options)))
        return entries
    if not isinstance(classes, Sequence) or isinstance(classes, str):
        raise InvalidRegistrationError("The 'classes' entry must be a list or a mapping", classes)

    entries = []
    for item in classes:
        if isinstance(item, str):
            entries.append((CALLABLE_CLASS, item, {}))
        elif isinstance(item, Mapping):
            entries.append(_parse_directory(item))
        else:
            raise InvalidRegistrationError("Invalid class entry", item)
    return entries


def _parse_directory(item: Mapping[str, Any]) -> tuple[str, str, dict[str, Any]]:
    directory = item.get("directory")
    if not isinstance(directory, str) or not directory:
        raise InvalidRegistrationError("A directory entry requires a 'directory' path", item)
    options = item.get("options", {})
    if not isinstance(options, Mapping):
        raise InvalidRegistrationError("Directory options must be a mapping", item)
    options = dict(options)
    for key in ("namespace", "separator"):
        if key in item:
            options[key] = item[key]
    return CALLABLE_DIR, directory, options
