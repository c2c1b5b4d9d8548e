"""
Locating, reading and writing chapterkit configuration files.

TOML is the hand-edited format; JSON is what :func:`save_config` writes to
the per-user location.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, BinaryIO

from chapterkit.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHAPTERKIT_CONFIG"
LOCAL_FILENAMES = ("settings.toml", "settings.json")

_PARSERS: dict[str, tuple[Callable[[BinaryIO], Any], type[Exception]]] = {
    ".toml": (tomllib.load, tomllib.TOMLDecodeError),
    ".json": (json.load, ValueError),
}


def _explicit_candidates(config_path: str | Path | None) -> Iterator[Path]:
    for raw in (config_path, os.environ.get(CONFIG_ENV_VAR)):
        if raw:
            yield Path(raw).expanduser().resolve()


def find_config_file(config_path: str | Path | None = None) -> Path | None:
    """
    Return the configuration file that :func:`load_config` would read.

    An explicit path wins, then ``$CHAPTERKIT_CONFIG``. A missing explicit
    file is logged and skipped. After that the working directory is searched
    for ``settings.toml`` / ``settings.json`` and finally the per-user
    ``SETTING_PATH``.
    """
    for path in _explicit_candidates(config_path):
        if path.is_file():
            return path
        logger.warning("Config file %s does not exist, skipping", path)

    cwd = Path.cwd()
    local = next((cwd / n for n in LOCAL_FILENAMES if (cwd / n).is_file()), None)
    if local is not None:
        logger.debug("Found %s in working directory", local.name)
        return local.resolve()

    return SETTING_PATH.resolve() if SETTING_PATH.is_file() else None


def read_config_file(path: Path) -> dict[str, Any]:
    """
    Parse one configuration file, chosen by extension.

    Raises:
        ValueError: On an unknown extension, unreadable or malformed content,
            or a top level that is not a table.
    """
    suffix = path.suffix.lower()
    try:
        parse, decode_error = _PARSERS[suffix]
    except KeyError:
        raise ValueError(f"{path}: unsupported config format {suffix!r}") from None

    try:
        with path.open("rb") as fh:
            data = parse(fh)
    except (OSError, decode_error) as e:
        kind = suffix[1:].upper()
        raise ValueError(f"{path}: cannot read {kind} config: {e}") from e

    if not isinstance(data, dict):
        kind = type(data).__name__
        raise ValueError(f"{path}: top level must be a table, not {kind}")
    return data


def load_config(
    config_path: str | Path | None = None,
    *,
    required: bool = True,
) -> dict[str, Any]:
    """
    Load the active configuration.

    Args:
        config_path: Explicit file to use before the usual lookup.
        required: When False, finding no file yields ``{}`` so that a setup
            relying only on environment variables still works.

    Raises:
        FileNotFoundError: If nothing is found and ``required`` is True.
        ValueError: If the file found cannot be parsed.
    """
    path = find_config_file(config_path)
    if path is None:
        if required:
            raise FileNotFoundError("No chapterkit configuration file found")
        logger.debug("No configuration file, falling back to defaults")
        return {}

    logger.debug("Reading configuration from %s", path)
    return read_config_file(path)


def copy_default_config(target: Path, *, overwrite: bool = False) -> bool:
    """
    Write the bundled sample configuration to ``target``.

    Returns False, leaving the file alone, when ``target`` exists and
    ``overwrite`` is not set.
    """
    if target.exists() and not overwrite:
        logger.info("Keeping existing %s", target)
        return False
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())
    logger.info("Wrote sample configuration to %s", target)
    return True


def save_config(
    config: dict[str, Any],
    output_path: str | Path | None = None,
) -> Path:
    """Store ``config`` as pretty-printed JSON and return the written path.

    ``output_path`` defaults to the per-user ``SETTING_PATH``.
    """
    output = Path(output_path or SETTING_PATH).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(config, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Saved configuration to %s", output)
    return output


def save_config_file(
    source_path: str | Path,
    output_path: str | Path | None = None,
) -> Path:
    """
    Import a TOML or JSON file as the per-user configuration.

    Raises:
        FileNotFoundError: If ``source_path`` does not exist.
        ValueError: If it cannot be parsed.
    """
    source = Path(source_path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"No such config file: {source}")
    return save_config(read_config_file(source), output_path)
