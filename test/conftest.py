"""
Pytest configuration and fixtures for ajaxkit tests
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from ajaxkit.codegen.export import ScriptExportCache  # noqa: E402
from ajaxkit.codegen.generator import CodeGenerator  # noqa: E402
from ajaxkit.context import AjaxContext  # noqa: E402
from ajaxkit.options import Options  # noqa: E402
from ajaxkit.plugins.dialogs import DefaultConfirm  # noqa: E402
from ajaxkit.rendering import TemplateRenderer  # noqa: E402

REQUEST_URI = "http://example.com/ajax"


@pytest.fixture
def options():
    """Default options with the request URI set, so no detection is needed."""
    opts = Options()
    opts.set("core.request.uri", REQUEST_URI)
    return opts


@pytest.fixture
def renderer():
    return TemplateRenderer()


@pytest.fixture
def export_dir(tmp_path):
    """Writable export directory."""
    directory = tmp_path / "js"
    directory.mkdir()
    return directory


@pytest.fixture
def export_options(options, export_dir):
    """Options with export enabled and minification off."""
    options.set("js.app.export", True)
    options.set("js.app.minify", False)
    options.set("js.app.uri", "http://example.com/js")
    options.set("js.app.dir", str(export_dir))
    return options


@pytest.fixture
def generator(options, renderer):
    """Code generator with export disabled and the built-in confirm dialog."""
    confirm = DefaultConfirm()
    return CodeGenerator(options, renderer, ScriptExportCache(options), confirm_provider=lambda: confirm)


@pytest.fixture
def context(options):
    return AjaxContext(options)
