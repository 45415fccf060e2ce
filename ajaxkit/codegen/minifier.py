"""
Minifiers

A minifier reads a javascript file and writes its minified version to
another path, returning True on success. CommandMinifier delegates to an
external tool; NullMinifier is used when none is configured.
"""

from __future__ import annotations

import logging
import shlex
import subprocess  # nosec B404 - subprocess needed for the external minifier
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class Minifier(Protocol):
    def minify(self, source: str | Path, dest: str | Path) -> bool: ...


class NullMinifier:
    """Minifier that never succeeds, keeping the unminified file."""

    def minify(self, source: str | Path, dest: str | Path) -> bool:
        return False


class CommandMinifier:
    """
    Run an external minifier command.

    The command template receives ``{source}`` and ``{dest}`` placeholders,
    e.g. ``terser {source} --compress --mangle -o {dest}``.
    """

    def __init__(self, command: str, timeout: int = 60):
        self.command = command
        self.timeout = timeout

    def minify(self, source: str | Path, dest: str | Path) -> bool:
        args = [part.format(source=str(source), dest=str(dest)) for part in shlex.split(self.command)]
        try:
            result = subprocess.run(  # nosec B603
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Minifier failed to run: {e}")
            return False

        if result.returncode != 0:
            logger.warning(f"Minifier exited with code {result.returncode}: {result.stderr.strip()}")
            return False
        dest_path = Path(dest)
        if not dest_path.is_file() or dest_path.stat().st_size == 0:
            logger.warning(f"Minifier wrote no output to {dest}")
            return False
        return True
