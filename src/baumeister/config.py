"""Persistence of generator answers for replaying a previous run."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .context import TemplateContext
from .errors import ConfigurationError

__all__ = ["CONFIG_FILENAME", "load_config", "load_stored_answers", "save_config"]

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = ".baumeister-rc.json"


def load_config(path: str | Path) -> Dict[str, Any]:
    """Read a persisted configuration record from ``path``.

    Raises
    ------
    ConfigurationError
        When the file does not exist, is not valid JSON or does not contain a
        JSON object.
    """

    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"configuration file {config_path} does not exist")

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"configuration file {config_path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"configuration file {config_path} must contain a JSON object")

    LOGGER.debug("loaded %d keys from %s", len(data), config_path)
    return data


def load_stored_answers(path: str | Path) -> Dict[str, Any]:
    """Return the answers of a previous run, or an empty mapping if there was none."""

    if not Path(path).exists():
        return {}
    return load_config(path)


def save_config(context: TemplateContext, path: str | Path) -> Path:
    """Persist ``context`` so the project can be regenerated without prompting."""

    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        json.dumps(context.to_config(), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    LOGGER.info("saved configuration to %s", config_path)
    return config_path
