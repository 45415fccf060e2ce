"""
Ajax Context

AjaxContext owns one option store, plugin registry, request dispatcher, code
generator and export cache for the running server, and is passed explicitly
to the code that handles requests (see ajaxkit.routes).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from starlette.requests import Request

from ajaxkit.codegen.contracts import CodeContributor
from ajaxkit.codegen.export import ScriptExportCache
from ajaxkit.codegen.generator import CodeGenerator
from ajaxkit.codegen.minifier import CommandMinifier, Minifier, NullMinifier
from ajaxkit.config import Settings
from ajaxkit.config import settings as default_settings
from ajaxkit.dispatcher import RequestDispatcher
from ajaxkit.events import EVENT_POST_SETUP, EVENT_PRE_SETUP, EventDispatcher
from ajaxkit.http import URIDetector
from ajaxkit.options import Options
from ajaxkit.plugins.base import DEFAULT_PRIORITY, Plugin
from ajaxkit.plugins.package import PACKAGE_PRIORITY, LazyPackage, Package
from ajaxkit.plugins.registry import PluginRegistry
from ajaxkit.readers import read_config_file
from ajaxkit.rendering import TemplateRenderer
from ajaxkit.version import __version__

logger = logging.getLogger(__name__)


class AjaxContext:
    def __init__(
        self,
        options: Options | None = None,
        minifier: Minifier | None = None,
        renderer: TemplateRenderer | None = None,
        version: str = __version__,
    ):
        self.options = options or Options()
        self.events = EventDispatcher()
        self.plugins = PluginRegistry(self.events)
        self.dispatcher = RequestDispatcher(self.plugins, self.events)
        self.renderer = renderer or TemplateRenderer(cache_dir=self.options.get("core.template.cache_dir"))
        self.export_cache = ScriptExportCache(self.options, minifier or NullMinifier())
        self.generator = CodeGenerator(
            self.options,
            self.renderer,
            self.export_cache,
            confirm_provider=lambda: self.plugins.confirm,
            version=version,
        )
        self._packages: dict[type[Package], LazyPackage] = {}

    # ── Registration ──────────────────────────────────────────────────────────

    def register_plugin(self, plugin: Plugin, priority: int = DEFAULT_PRIORITY) -> int:
        """
        Register a plugin with the registry and its code with the generator.

        The registry and the generator keep separate priority slots. Both
        start from ``priority``, but generators registered on their own can
        shift the plugin's code to a different slot than the one returned.

        Returns:
            The effective priority of the plugin in the registry.
        """
        effective = self.plugins.register(plugin, priority)
        code_priority = self.generator.add_generator(plugin, priority)
        if code_priority != effective:
            logger.debug("%r slotted at %d in the registry, %d in the generator", plugin, effective, code_priority)
        return effective

    def register_generator(self, generator: CodeContributor, priority: int = DEFAULT_PRIORITY) -> int:
        return self.generator.add_generator(generator, priority)

    def register_package(self, package_class: type[Package], factory: Callable[[], Package] | None = None) -> None:
        """Register a package; its instance is built from ``factory`` on first use."""
        if package_class in self._packages:
            logger.warning("Package %s is already registered", package_class.__name__)
            return
        package = LazyPackage(package_class, factory)
        self._packages[package_class] = package
        self.register_plugin(package, PACKAGE_PRIORITY + len(self._packages) - 1)

    def get_package(self, package_class: type[Package]) -> Package | None:
        package = self._packages.get(package_class)
        return package.get_instance() if package is not None else None

    def register(self, handler_type: str, target: str, options: Mapping[str, Any] | None = None) -> Any:
        """Register a function, class or directory with the named request handler."""
        return self.plugins.register_callable(handler_type, target, options)

    def register_from_config(self, config: Mapping[str, Any]) -> int:
        return self.plugins.register_from_config(config)

    def setup(self, config: Mapping[str, Any], lib_section: str = "lib", app_section: str = "app") -> int:
        """
        Apply a library config: options from ``lib_section``, callables from ``app_section``.

        Either section may be missing. The request handlers serving the
        callables must be registered beforehand.

        Returns:
            The number of registered callables.
        """
        self.events.fire(EVENT_PRE_SETUP, {"config": config})
        self.options.set_options(config.get(lib_section) or {})
        if self.options.get("core.template.cache_dir"):
            self.renderer.set_cache_dir(self.options.get("core.template.cache_dir"))
        registered = self.register_from_config(config.get(app_section) or {})
        self.events.fire(
            EVENT_POST_SETUP,
            {"config": config, "registered": registered, "options": self.options.as_dict()},
        )
        return registered

    def setup_from_file(self, config_file: str | Path, lib_section: str = "lib", app_section: str = "app") -> int:
        registered = self.setup(read_config_file(config_file), lib_section, app_section)
        logger.info("Setup from %s complete, %d callable(s) registered", config_file, registered)
        return registered

    # ── Requests ──────────────────────────────────────────────────────────────

    def can_dispatch(self, request: Any) -> bool:
        return self.dispatcher.can_dispatch(request)

    def dispatch(self, request: Any) -> Any:
        return self.dispatcher.dispatch(request)

    # ── Page code ─────────────────────────────────────────────────────────────

    def get_js(self) -> str:
        return self.generator.get_js()

    def get_css(self) -> str:
        return self.generator.get_css()

    def get_script(self, include_js: bool = False, include_css: bool = False, request: Request | None = None) -> str:
        uri_detector = URIDetector(request) if request is not None else None
        return self.generator.get_script(include_js, include_css, uri_detector)


def build_context(settings: Settings = default_settings, plugins: Iterable[Plugin] = ()) -> AjaxContext:
    """
    Create the context described by the process settings.

    Args:
        settings: Process settings.
        plugins:  Plugins registered, at the default priority, before the
                  config file is applied.
    """
    minifier: Minifier = NullMinifier()
    if settings.minifier_command:
        minifier = CommandMinifier(settings.minifier_command, timeout=settings.minifier_timeout)

    options = Options()
    if settings.debug:
        options.set("core.debug.on", True)

    context = AjaxContext(options, minifier=minifier)
    for plugin in plugins:
        context.register_plugin(plugin)
    if settings.config_file:
        context.setup_from_file(settings.config_file, settings.lib_section, settings.app_section)
    logger.info("Context ready, plugins at priorities %s", context.plugins.priorities())
    return context
