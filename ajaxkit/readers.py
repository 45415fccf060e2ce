"""
Config File Readers

Read library configuration from JSON or YAML files into a plain mapping.
The reader is chosen from the file extension.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ajaxkit.exceptions import ConfigFileError

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigFileError(str(path), f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigFileError(str(path), f"invalid YAML ({exc})") from exc


_READERS = {
    ".json": _read_json,
    ".yml": _read_yaml,
    ".yaml": _read_yaml,
}


def read_config_file(config_file: str | Path) -> dict[str, Any]:
    """
    Read options from a config file.

    Args:
        config_file: Path to a ``.json``, ``.yml`` or ``.yaml`` file.

    Returns:
        The top-level mapping held by the file.

    Raises:
        ConfigFileError: The file is missing, unreadable, of an unsupported
            type, or does not hold a mapping.
    """
    path = Path(config_file)
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ConfigFileError(str(path), f"unsupported file type '{path.suffix}'")
    if not path.is_file():
        raise ConfigFileError(str(path), "file does not exist")
    try:
        content = reader(path)
    except OSError as exc:
        raise ConfigFileError(str(path), exc.strerror or str(exc)) from exc
    if not isinstance(content, dict):
        raise ConfigFileError(str(path), "the file content is not a mapping")
    logger.info("Config file loaded: %s", path)
    return content
