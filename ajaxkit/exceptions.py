"""
Custom Exception Classes for ajaxkit

This module defines the exceptions raised by the plugin registry, the
request dispatcher, the code generator and the export cache. Each carries
an HTTP status code so the web layer can render a consistent error body.
"""

from typing import Any

from fastapi import status


class AjaxError(Exception):
    """Base exception class for all ajaxkit exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(AjaxError):
    """Raised when the library configuration is invalid"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details or {})


class MissingOptionError(ConfigurationError):
    """Raised when a required option is not set"""

    def __init__(self, key: str):
        super().__init__(message=f"Required option '{key}' is not set", details={"option": key})


class ConfigFileError(ConfigurationError):
    """Raised when a config file cannot be read or has unexpected content"""

    def __init__(self, path: str, reason: str):
        super().__init__(message=f"Unable to read config file '{path}': {reason}", details={"path": path})


# ============================================================================
# Registration Exceptions
# ============================================================================


class RegistrationError(AjaxError):
    """Base class for plugin and callable registration errors"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details or {})


class InvalidPluginKind(RegistrationError):
    """Raised when a plugin declares none of the registrable capabilities"""

    def __init__(self, plugin_class: str):
        super().__init__(
            message=f"Plugin '{plugin_class}' is neither a request handler, a response contributor nor a dialog",
            details={"plugin_class": plugin_class},
        )


class UnknownHandlerType(RegistrationError):
    """Raised when registering a callable for a request handler that does not exist"""

    def __init__(self, handler_type: str):
        super().__init__(
            message=f"No request handler named '{handler_type}' is registered",
            details={"handler_type": handler_type},
        )


class InvalidRegistrationError(RegistrationError):
    """Raised when a callable registration entry is malformed"""

    def __init__(self, message: str, entry: Any | None = None):
        details = {"entry": repr(entry)} if entry is not None else {}
        super().__init__(message=message, details=details)


# ============================================================================
# Request & Export Exceptions
# ============================================================================


class NoMatchingHandler(AjaxError):
    """Raised when dispatching a request that no request handler recognizes"""

    def __init__(self, message: str = "No request handler can process this request", uri: str | None = None):
        details = {"uri": uri} if uri else {}
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class ScriptExportError(AjaxError):
    """Raised when the generated script cannot be written to the export directory"""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Unable to export script to '{path}': {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"path": path},
        )
