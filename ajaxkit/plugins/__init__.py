"""
ajaxkit plugin system

Public API for the plugin system:
    Capability      : capabilities a plugin can declare
    Plugin          : base class for all plugins
    RequestHandler, ResponseContributor, AlertProvider, ConfirmProvider,
    EventListener   : capability interfaces
    PluginRegistry  : capability-aware, priority-ordered plugin registry
"""

from .base import (
    CALLABLE_CLASS,
    CALLABLE_DIR,
    DEFAULT_PRIORITY,
    FILE_UPLOAD,
    USER_FUNCTION,
    AlertProvider,
    Capability,
    ConfirmProvider,
    EventListener,
    Plugin,
    RequestHandler,
    ResponseContributor,
)
from .dialogs import DefaultAlert, DefaultConfirm
from .registry import PluginRegistry

__all__ = [
    "CALLABLE_CLASS",
    "CALLABLE_DIR",
    "DEFAULT_PRIORITY",
    "FILE_UPLOAD",
    "USER_FUNCTION",
    "AlertProvider",
    "Capability",
    "ConfirmProvider",
    "DefaultAlert",
    "DefaultConfirm",
    "EventListener",
    "Plugin",
    "PluginRegistry",
    "RequestHandler",
    "ResponseContributor",
]
