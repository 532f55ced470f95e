"""
Loading of conversion options from JSON files.

An option file is a JSON object whose keys are the field names of :class:`~aff2spc.classes.options.ConverterOptions`.
Missing keys keep their defaults; unknown keys are rejected.
"""
import json
import logging
import os

from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from .classes.options import ConverterOptions

__all__ = [
    "OPTIONS_ENV_VAR",
    "load_options",
    "resolve_options_path",
]

OPTIONS_ENV_VAR = "AFF2SPC_OPTIONS"

logger = logging.getLogger(__name__)


def _read_json_file_utf8(path: Path) -> dict[str, Any]:
    try:
        raw_text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise
    except OSError as exception:
        raise OSError(f"Failed to read options file: {path}. Error: {exception}") from exception

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise ValueError(f"Options file is not valid JSON: {path}. Error: {exception}") from exception

    if not isinstance(parsed, dict):
        raise ValueError(f"Options file root must be a JSON object: {path}")

    return parsed


def resolve_options_path(path: Optional[Path] = None) -> Optional[Path]:
    """
    Pick the options file to use.

    :param path: An explicitly requested file, which always wins.
    :returns: ``path``, else the file named by ``AFF2SPC_OPTIONS``, else ``None``.
    """
    if path is not None:
        return path
    env_value = os.environ.get(OPTIONS_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value)
    return None


def load_options(path: Optional[Path] = None) -> ConverterOptions:
    """
    Load conversion options.

    :param path: The JSON file to read. When omitted, the file named by the ``AFF2SPC_OPTIONS`` environment variable is
                 used, and the defaults are returned if that is not set either.
    :raises FileNotFoundError: if the options file does not exist.
    :raises ValueError: if the file is not a JSON object or fails validation.
    :returns: A :class:`~aff2spc.classes.options.ConverterOptions`.
    """
    resolved_path = resolve_options_path(path)
    if resolved_path is None:
        return ConverterOptions()

    json_dict = _read_json_file_utf8(resolved_path)
    try:
        options = ConverterOptions.model_validate(json_dict)
    except ValidationError as exception:
        raise ValueError(f"Options validation failed for {resolved_path}:\n{exception}") from exception

    logger.info(f"loaded options from {resolved_path}")
    return options
