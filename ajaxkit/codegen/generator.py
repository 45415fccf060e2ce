"""
Code Generator

Collects CSS and javascript fragments from every registered contributor and
assembles the code sent to the browser on the initial page load.

The generator is a two-state machine. It starts PENDING; the first call to
generate() visits each contributor once, in priority order, and moves it to
GENERATED with the accumulated fragments as a frozen GeneratedCode payload.
Later calls return the same payload without asking contributors again.
"""

from __future__ import annotations

import enum
import hashlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ajaxkit.codegen.contracts import CodeContributor
from ajaxkit.codegen.export import ScriptExportCache
from ajaxkit.exceptions import ScriptExportError
from ajaxkit.http import URIDetector
from ajaxkit.options import Options
from ajaxkit.plugins.base import DEFAULT_PRIORITY, ConfirmProvider
from ajaxkit.priority import PriorityRegistry
from ajaxkit.rendering import TemplateRenderer
from ajaxkit.version import __version__

logger = logging.getLogger(__name__)

RESPONSE_TYPE = "JSON"
DEFAULT_JS_LIB_URI = "https://cdn.jsdelivr.net/gh/ajaxkit/ajaxkit-js@3.0/dist"

# Client-side calls used by the confirm question
CONFIRM_YES_SCRIPT = "ajaxkit.ajax.response.process(command.response)"
CONFIRM_NO_SCRIPT = "ajaxkit.confirm.skip(command);ajaxkit.ajax.response.process(command.response)"


class GeneratorState(enum.Enum):
    PENDING = "pending"
    GENERATED = "generated"


@dataclass(frozen=True)
class GeneratedCode:
    """
    Code accumulated from all contributors.

    Attributes:
        css:           HTML tags including CSS code and files.
        js:            HTML tags including javascript files.
        script:        Persistent javascript, including the wrapped ready script.
        ready_script:  Raw ready script going into the persistent script.
        inline_script: Wrapped ready script embedded directly in the page.
    """

    css: str = ""
    js: str = ""
    script: str = ""
    ready_script: str = ""
    inline_script: str = ""


def _append(code: str, fragment: str) -> str:
    if not fragment or not fragment.strip():
        return code
    return code + fragment.rstrip(" \n") + "\n"


class CodeGenerator:
    def __init__(
        self,
        options: Options,
        renderer: TemplateRenderer,
        export_cache: ScriptExportCache,
        confirm_provider: Callable[[], ConfirmProvider],
        version: str = __version__,
        uri_detector: URIDetector | None = None,
    ):
        self.options = options
        self.renderer = renderer
        self.export_cache = export_cache
        self.version = version
        self.uri_detector = uri_detector or URIDetector()
        self._confirm_provider = confirm_provider
        self._generators: PriorityRegistry[CodeContributor] = PriorityRegistry()
        self._state = GeneratorState.PENDING
        self._code: GeneratedCode | None = None

    @property
    def state(self) -> GeneratorState:
        return self._state

    def add_generator(self, generator: CodeContributor, priority: int = DEFAULT_PRIORITY) -> int:
        """Add a code contributor and return its effective priority."""
        if self._state is GeneratorState.GENERATED:
            logger.warning("%r added after code generation, its code will not be included", generator)
        return self._generators.insert(generator, priority)

    def get_hash(self) -> str:
        """Hash of the library version and every contributor's hash, in priority order."""
        value = self.version + "".join(generator.get_hash() for generator in self._generators)
        return hashlib.md5(value.encode("utf-8")).hexdigest()  # nosec S324

    def _render(self, template: str, **variables: Any) -> str:
        variables["js_options"] = self.options.get("js.app.options", "")
        return self.renderer.render(f"plugins/{template}", variables)

    def generate(self) -> GeneratedCode:
        """Collect the code of all contributors. Runs once; later calls return the same code."""
        if self._code is not None:
            return self._code

        css = js = script = ready_script = inline_script = ""
        for generator in self._generators:
            css = _append(css, generator.get_css())
            js = _append(js, generator.get_js())
            script = _append(script, generator.get_script())
            if not generator.ready_inlined():
                ready_script = _append(ready_script, generator.get_ready_script())
            elif generator.ready_enabled():
                inline_script = _append(inline_script, generator.get_ready_script())

        if inline_script:
            inline_script = self._render("ready.js", script=inline_script)
        if ready_script:
            # These two parts are always rendered together
            script += "\n" + self._render("ready.js", script=ready_script)

        self._code = GeneratedCode(
            css=css,
            js=js,
            script=script,
            ready_script=ready_script,
            inline_script=inline_script,
        )
        self._state = GeneratorState.GENERATED
        logger.debug("Code generated from %d contributor(s)", len(self._generators))
        return self._code

    def _lib_uri(self) -> str:
        return self.options.get("js.lib.uri", DEFAULT_JS_LIB_URI).rstrip("/") + "/"

    def get_js(self) -> str:
        """HTML tags including the library files and the contributors' javascript."""
        lib_uri = self._lib_uri()
        extension = self.export_cache.extension()
        urls = [f"{lib_uri}ajaxkit.core{extension}"]
        if self.options.get("core.debug.on"):
            urls.append(f"{lib_uri}ajaxkit.debug{extension}")
            urls.append(f"{lib_uri}lang/ajaxkit.{self.options.get('core.language')}{extension}")

        code = self.generate()
        return self._render("includes.js", urls=urls) + code.js

    def get_css(self) -> str:
        return self.generate().css

    def _option_vars(self) -> dict[str, Any]:
        return {
            "response_type": RESPONSE_TYPE,
            "version": self.options.get("core.version"),
            "language": self.options.get("core.language"),
            "has_language": self.options.has("core.language"),
            "request_uri": self.options.get("core.request.uri"),
            "default_mode": self.options.get("core.request.mode"),
            "default_method": self.options.get("core.request.method"),
            "csrf_meta_name": self.options.get("core.request.csrf_meta"),
            "debug": self.options.get("core.debug.on"),
            "verbose_debug": self.options.get("core.debug.verbose"),
            "debug_output_id": self.options.get("core.debug.output_id"),
            "response_queue_size": self.options.get("js.lib.queue_size"),
            "status_messages": "true" if self.options.get("js.lib.show_status") else "false",
            "wait_cursor": "true" if self.options.get("js.lib.show_cursor") else "false",
        }

    def build_script(self) -> str:
        """The client configuration followed by the persistent script."""
        code = self.generate()
        variables = self._option_vars()
        question_script = self._confirm_provider().confirm("msg", CONFIRM_YES_SCRIPT, CONFIRM_NO_SCRIPT)
        variables["question_script"] = self._render("confirm.js", question_script=question_script)
        return self._render("config.js", **variables) + "\n" + code.script

    def get_script(self, include_js: bool = False, include_css: bool = False, uri_detector: URIDetector | None = None) -> str:
        """
        Get the javascript code to be sent to the browser on the initial page load.

        Args:
            include_js:   Also include the javascript files.
            include_css:  Also include the CSS code and files.
            uri_detector: Detects the request URI when ``core.request.uri`` is unset.
        """
        if not self.options.get("core.request.uri"):
            self.options.set("core.request.uri", (uri_detector or self.uri_detector).detect())

        code = self.generate()

        script = ""
        if include_css:
            script += self.get_css() + "\n"
        if include_js:
            script += self.get_js() + "\n"

        if self.export_cache.can_export():
            try:
                url = self.export_cache.resolve_output_url(self.get_hash, self.build_script)
            except ScriptExportError as exc:
                logger.warning("Script export failed, inlining the script: %s", exc.message)
            else:
                inline_script = ""
                if code.inline_script:
                    inline_script = self._render("wrapper.js", script=code.inline_script)
                # The returned code loads the generated javascript file
                return script + self._render("include.js", url=url) + inline_script

        # The scripts are wrapped with javascript tags
        return script + self._render("wrapper.js", script=self.build_script() + "\n" + code.inline_script)
