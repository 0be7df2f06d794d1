from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from storesearch.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

LOCAL_FILENAMES = ("settings.toml", "settings.json")


def _resolve_file_path(
    user_path: str | Path | None,
    local_filenames: tuple[str, ...] = LOCAL_FILENAMES,
    fallback_path: Path | None = None,
) -> Path | None:
    """
    Resolve the settings file to load.

    Lookup order:
        1. User-specified path (if provided and exists)
        2. A file in the current working directory named in `local_filenames`
        3. The per-user settings file

    Returns:
        The first existing path, otherwise None.
    """
    if user_path:
        path = Path(user_path).expanduser().resolve()
        if path.is_file():
            return path
        logger.warning("Specified config file not found: %s", path)

    for name in local_filenames:
        local_path = (Path.cwd() / name).resolve()
        if local_path.is_file():
            logger.debug("Using local config file: %s", local_path)
            return local_path

    fallback_path = fallback_path or SETTING_PATH
    if fallback_path.is_file():
        return fallback_path.resolve()

    return None


def _load_by_extension(path: Path) -> dict[str, Any]:
    """
    Parse a `.toml` or `.json` settings file.

    Raises:
        ValueError: If the extension is unsupported, parsing fails, or the
            root element is not a table/object.
    """
    ext = path.suffix.lower()

    try:
        if ext == ".toml":
            with path.open("rb") as f:
                data = tomllib.load(f)
        elif ext == ".json":
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ValueError(f"Unsupported config file extension: {ext}")
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid {ext[1:].upper()} in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")

    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the settings mapping.

    Resolution order:
        - Explicit `config_path` (if provided)
        - `settings.toml` or `settings.json` in the working directory
        - `SETTING_PATH` in the user config directory

    Raises:
        FileNotFoundError: If no configuration file is found.
        ValueError: If the file cannot be parsed.
    """
    path = _resolve_file_path(config_path)
    if not path:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _load_by_extension(path)


def copy_default_config(target: Path = SETTING_PATH, overwrite: bool = False) -> bool:
    """
    Copy the bundled sample settings to `target`.

    Returns:
        True if the file was written, False if it already existed.
    """
    if target.exists() and not overwrite:
        logger.info("Config file already exists: %s", target)
        return False

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())
    logger.info("Default configuration written to: %s", target)
    return True
