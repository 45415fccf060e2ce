"""
Script Export Cache

Persists the generated javascript to a flat directory of files named after
a content hash, so the page can include it by URL instead of inlining it.

Layout of ``js.app.dir``:
    {hash}.js        generated script
    {hash}.min.js    minified script, when minification is enabled
    {file}.js        optional fixed name (``js.app.file``), {file}.min.js when minified

Files are never deleted: a change in any contributor yields a new hash and
thus a new file, while previously issued URLs stay valid. Every file is
written to a temporary sibling and renamed into place, so a concurrent
reader never sees a partial file.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from ajaxkit.codegen.minifier import Minifier, NullMinifier
from ajaxkit.exceptions import ScriptExportError
from ajaxkit.options import Options

logger = logging.getLogger(__name__)


def _temp_sibling(path: Path) -> Path:
    fd, name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    os.close(fd)
    return Path(name)


def _atomic_write(path: Path, content: str) -> None:
    temp = _temp_sibling(path)
    try:
        temp.write_text(content, encoding="utf-8")
        os.replace(temp, path)
    except OSError:
        temp.unlink(missing_ok=True)
        raise


def _atomic_copy(source: Path, dest: Path) -> None:
    temp = _temp_sibling(dest)
    try:
        shutil.copyfile(source, temp)
        os.replace(temp, dest)
    except OSError:
        temp.unlink(missing_ok=True)
        raise


class ScriptExportCache:
    def __init__(self, options: Options, minifier: Minifier | None = None):
        self.options = options
        self.minifier = minifier or NullMinifier()

    def export_enabled(self) -> bool:
        # js.app.extern is the former name of js.app.export
        return bool(self.options.get("js.app.export") or self.options.get("js.app.extern"))

    def extension(self) -> str:
        return ".min.js" if self.options.get("js.app.minify") else ".js"

    def can_export(self) -> bool:
        """
        Check if the generated javascript can be exported to a file.

        Export must be enabled, ``js.app.uri`` and ``js.app.dir`` must be set,
        and the directory must exist and be writable.
        """
        if not self.export_enabled() or not self.options.get("js.app.uri") or not self.options.get("js.app.dir"):
            return False
        app_dir = Path(self.options.get("js.app.dir"))
        return app_dir.is_dir() and os.access(app_dir, os.W_OK)

    def resolve_output_url(self, get_hash: Callable[[], str], get_content: Callable[[], str]) -> str:
        """
        Write the script files if needed and return the URL to include.

        Args:
            get_hash:    Returns the content hash used to name the files.
            get_content: Returns the script to write.

        Raises:
            ScriptExportError: The script file could not be written.
        """
        app_uri = self.options.require("js.app.uri").rstrip("/") + "/"
        app_dir = Path(self.options.require("js.app.dir"))
        final_file = self.options.get("js.app.file")
        extension = self.extension()

        # The operator invalidates an existing final file manually
        if final_file and (app_dir / f"{final_file}{extension}").is_file():
            return app_uri + f"{final_file}{extension}"

        file_hash = get_hash()
        out_file = f"{file_hash}.js"
        min_file = f"{file_hash}.min.js"

        out_path = app_dir / out_file
        if not out_path.is_file():
            try:
                _atomic_write(out_path, get_content())
            except OSError as exc:
                raise ScriptExportError(str(out_path), exc.strerror or str(exc)) from exc
            logger.info("Script exported to %s", out_path)

        if self.options.get("js.app.minify"):
            if (app_dir / min_file).is_file():
                out_file = min_file
            elif self._minify(out_path, app_dir / min_file):
                out_file = min_file

        if final_file:
            try:
                _atomic_copy(app_dir / out_file, app_dir / f"{final_file}{extension}")
            except OSError as exc:
                logger.warning("Unable to copy %s to %s%s: %s", out_file, final_file, extension, exc)
            else:
                out_file = f"{final_file}{extension}"

        return app_uri + out_file

    def _minify(self, source: Path, dest: Path) -> bool:
        temp = None
        try:
            temp = _temp_sibling(dest)
            # The temp file exists from the start, so an empty one means nothing was written
            if self.minifier.minify(source, temp) and temp.stat().st_size > 0:
                os.replace(temp, dest)
                logger.info("Script minified to %s", dest)
                return True
        except OSError as exc:
            logger.warning("Unable to minify %s: %s", source, exc)
        finally:
            if temp is not None:
                temp.unlink(missing_ok=True)
        logger.warning("Minification of %s failed, keeping the unminified script", source)
        return False
