"""
Packages

A package bundles the CSS and javascript of a client-side component library.
Packages are registered by class and built lazily: the instance is created
the first time its code is needed, then shared.
"""

from __future__ import annotations

from collections.abc import Callable

from ajaxkit.codegen.contracts import CodeContributor
from ajaxkit.plugins.base import ResponseContributor

# Packages come after user plugins, in registration order
PACKAGE_PRIORITY = 9000


class Package(CodeContributor):
    """Base class for packages. Override the CodeContributor accessors."""


class LazyPackage(ResponseContributor):
    """Response contributor standing for a package until its instance is needed."""

    def __init__(self, package_class: type[Package], factory: Callable[[], Package] | None = None):
        self.package_class = package_class
        self._factory = factory or package_class
        self._instance: Package | None = None

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.package_class.__name__

    def get_instance(self) -> Package:
        if self._instance is None:
            self._instance = self._factory()
        return self._instance

    def get_hash(self) -> str:
        return self.get_instance().get_hash()

    def get_css(self) -> str:
        return self.get_instance().get_css()

    def get_js(self) -> str:
        return self.get_instance().get_js()

    def get_script(self) -> str:
        return self.get_instance().get_script()

    def get_ready_script(self) -> str:
        return self.get_instance().get_ready_script()

    def ready_inlined(self) -> bool:
        return self.get_instance().ready_inlined()

    def ready_enabled(self) -> bool:
        return self.get_instance().ready_enabled()
