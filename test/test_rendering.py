"""
Template rendering and logging setup tests
"""

import json
import logging

from ajaxkit.log import StructuredFormatter, configure_logging
from ajaxkit.rendering import TemplateRenderer


class TestTemplateRenderer:
    def test_ready_template(self):
        rendered = TemplateRenderer().render("plugins/ready.js", {"script": "go();"})
        assert rendered == "ajaxkit.dom.ready(function() {\ngo();\n});"

    def test_javascript_is_not_escaped(self):
        rendered = TemplateRenderer().render("plugins/wrapper.js", {"script": "if (a < b && c) {}"})
        assert "if (a < b && c) {}" in rendered

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "hello.js").write_text("hello {{ name }}", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("hello.js", {"name": "world"}) == "hello world"

    def test_bytecode_cache(self, tmp_path):
        cache_dir = tmp_path / "cache"
        renderer = TemplateRenderer(cache_dir=str(cache_dir))
        renderer.render("plugins/include.js", {"url": "a.js"})
        assert cache_dir.is_dir()
        assert any(cache_dir.iterdir())


class TestLogging:
    def test_structured_formatter(self):
        record = logging.LogRecord("ajaxkit.test", logging.WARNING, __file__, 1, "failed %s", ("x",), None)
        record.path = "/ajax"
        data = json.loads(StructuredFormatter().format(record))
        assert data["level"] == "WARNING"
        assert data["logger"] == "ajaxkit.test"
        assert data["message"] == "failed x"
        assert data["path"] == "/ajax"
        assert "status_code" not in data

    def test_configure_json_logging(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(json_output=True, level=logging.DEBUG)
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
            assert root.level == logging.DEBUG
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)
