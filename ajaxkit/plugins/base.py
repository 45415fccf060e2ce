"""
Plugin Base Classes

Capability interfaces a plugin can implement:
    RequestHandler       : recognizes and processes incoming AJAX requests
    ResponseContributor  : emits CSS/JS for the rendered page
    AlertProvider        : renders client-side alert messages
    ConfirmProvider      : renders client-side confirmation questions
    EventListener        : subscribes to library events

A concrete plugin derives from one or more interfaces. Each interface
declares its ``capability``; the set of declared capabilities is collected on
the class as ``capabilities`` and is what the registry switches on.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ajaxkit.codegen.contracts import CodeContributor
from ajaxkit.exceptions import InvalidRegistrationError

DEFAULT_PRIORITY = 1000

# Request handler names
USER_FUNCTION = "function"
CALLABLE_CLASS = "class"
CALLABLE_DIR = "dir"
FILE_UPLOAD = "upload"


class Capability(enum.Enum):
    REQUEST_HANDLER = "request_handler"
    RESPONSE_CONTRIBUTOR = "response_contributor"
    ALERT_PROVIDER = "alert_provider"
    CONFIRM_PROVIDER = "confirm_provider"
    EVENT_LISTENER = "event_listener"


class Plugin(CodeContributor, ABC):
    """
    Base class for all plugins.

    Attributes:
        name:         Registry key within the plugin's category.
        capabilities: Capabilities declared by the interfaces the class derives from.
    """

    name: ClassVar[str] = ""
    capability: ClassVar[Capability | None] = None
    capabilities: ClassVar[frozenset[Capability]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared = {vars(klass).get("capability") for klass in cls.__mro__}
        declared.discard(None)
        cls.capabilities = frozenset(declared)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


class RequestHandler(Plugin):
    capability = Capability.REQUEST_HANDLER

    @abstractmethod
    def matches(self, request: Any) -> bool:
        """Return True if this handler recognizes the request."""

    @abstractmethod
    def process(self, request: Any) -> Any:
        """Process the request and return the response payload."""

    def register(self, handler_type: str, target: str, options: dict[str, Any]) -> Any:
        """
        Register a callable entity with this handler.

        Handlers that serve callables (functions, classes, directories)
        override this. The default rejects every registration.
        """
        raise InvalidRegistrationError(f"Request handler '{self.name}' does not accept registrations", target)


class ResponseContributor(Plugin):
    capability = Capability.RESPONSE_CONTRIBUTOR


class AlertProvider(Plugin):
    capability = Capability.ALERT_PROVIDER

    @abstractmethod
    def alert(self, message: str, title: str | None = None, level: str = "info") -> str:
        """Return the javascript code showing a message."""

    def success(self, message: str, title: str | None = None) -> str:
        return self.alert(message, title, "success")

    def info(self, message: str, title: str | None = None) -> str:
        return self.alert(message, title, "info")

    def warning(self, message: str, title: str | None = None) -> str:
        return self.alert(message, title, "warning")

    def error(self, message: str, title: str | None = None) -> str:
        return self.alert(message, title, "error")


class ConfirmProvider(Plugin):
    capability = Capability.CONFIRM_PROVIDER

    @abstractmethod
    def confirm(self, question: str, yes_script: str, no_script: str = "") -> str:
        """Return the javascript code asking ``question`` and running the matching script."""


class EventListener(Plugin):
    capability = Capability.EVENT_LISTENER

    @abstractmethod
    def get_events(self) -> list[str]:
        """Return the names of the events this listener subscribes to."""

    def handle_event(self, event_name: str, payload: dict[str, Any]) -> Any:
        """Receive an event. Default implementation is a no-op."""
        return None
