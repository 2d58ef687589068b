"""
Settings loading and merging for storeupdate.

Settings control how the catalog is queried and what a default prompt says.
They come from two layers:

1. **Built-in defaults** (DEFAULT_SETTINGS in this module)
   - iTunes lookup endpoint, transport-default timeout, library User-Agent
   - Prompt texts "App needs update" / "A new update is available now."

2. **Settings file** (optional YAML, e.g. storeupdate.yaml)
   - Overrides any subset of the defaults

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans, null)

Settings File Format
--------------------
    lookup:
      endpoint: "https://itunes.apple.com/lookup?bundleId={identifier}"
      timeout: 10          # seconds; null keeps the transport default
      user_agent: "myapp/1.0"
    prompt:
      title: "Update available"
      message: "Please update to keep using the app."

Error Handling
--------------
- ConfigError: missing file, YAML parse errors, empty or non-mapping
  documents, values of the wrong type
- All errors are chained with "from err" for better debugging

Examples
--------
    >>> from pathlib import Path
    >>> from storeupdate.config import load_settings
    >>> settings = load_settings(Path("storeupdate.yaml"))
    >>> settings.timeout
    10.0

Defaults only:

    >>> load_settings().endpoint
    'https://itunes.apple.com/lookup?bundleId={identifier}'
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from storeupdate.exceptions import ConfigError
from storeupdate.logging import Logger, get_global_logger

DEFAULT_LOOKUP_ENDPOINT = "https://itunes.apple.com/lookup?bundleId={identifier}"
DEFAULT_USER_AGENT = "storeupdate/0.1"
DEFAULT_PROMPT_TITLE = "App needs update"
DEFAULT_PROMPT_MESSAGE = "A new update is available now."

DEFAULT_SETTINGS: dict[str, Any] = {
    "lookup": {
        "endpoint": DEFAULT_LOOKUP_ENDPOINT,
        "timeout": None,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "prompt": {
        "title": DEFAULT_PROMPT_TITLE,
        "message": DEFAULT_PROMPT_MESSAGE,
    },
}

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class CheckerSettings:
    """Effective settings for an UpdateChecker.

    Attributes:
        endpoint: Lookup URL template with an {identifier} field.
        timeout: Request timeout in seconds, or None for the transport default.
        user_agent: User-Agent header sent to the catalog.
        prompt_title: Title handed to the result handler's prompt.
        prompt_message: Message handed to the result handler's prompt.
    """

    endpoint: str = DEFAULT_LOOKUP_ENDPOINT
    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    prompt_title: str = DEFAULT_PROMPT_TITLE
    prompt_message: str = DEFAULT_PROMPT_MESSAGE


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML settings file and return the top-level mapping.

    Raises:
      ConfigError - when the file is missing, unparsable, empty or not a mapping
    """
    if not p.exists():
        raise ConfigError(f"settings file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"settings file is empty: {p}")
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Validation
# -------------------------------


def _section(merged: dict[str, Any], name: str) -> dict[str, Any]:
    section = merged.get(name)
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _require_str(section: dict[str, Any], key: str, path: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{path}.{key} must be a non-empty string")
    return value


def _settings_from_dict(merged: dict[str, Any]) -> CheckerSettings:
    lookup = _section(merged, "lookup")
    prompt = _section(merged, "prompt")

    endpoint = _require_str(lookup, "endpoint", "lookup")
    if "{identifier}" not in endpoint:
        raise ConfigError("lookup.endpoint must contain an {identifier} field")

    timeout = lookup.get("timeout")
    # bool is an int subclass; reject it explicitly
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError("lookup.timeout must be a number of seconds or null")
        if timeout <= 0:
            raise ConfigError("lookup.timeout must be positive")
        timeout = float(timeout)

    return CheckerSettings(
        endpoint=endpoint,
        timeout=timeout,
        user_agent=_require_str(lookup, "user_agent", "lookup"),
        prompt_title=_require_str(prompt, "title", "prompt"),
        prompt_message=_require_str(prompt, "message", "prompt"),
    )


# -------------------------------
# Public API
# -------------------------------


def load_settings(
    path: Path | None = None,
    *,
    logger: Logger | None = None,
) -> CheckerSettings:
    """
    Load the effective settings, optionally overlaying a YAML file.

    Steps
      1) Start from DEFAULT_SETTINGS.
      2) If 'path' is given, read it and deep-merge it on top.
      3) Validate the merged mapping and build CheckerSettings.

    Returns
      A frozen CheckerSettings instance.

    Raises
      ConfigError on a missing or invalid settings file.
    """
    logger = logger or get_global_logger()

    merged = _deep_merge_dicts({}, DEFAULT_SETTINGS)
    if path is not None:
        path = Path(path).resolve()
        logger.verbose("CONFIG", f"Loading settings: {path}")
        overlay = _load_yaml_file(path)
        merged = _deep_merge_dicts(merged, overlay)
        logger.debug("CONFIG", f"Settings keys: {', '.join(overlay.keys())}")
    else:
        logger.debug("CONFIG", "No settings file; using defaults")

    settings = _settings_from_dict(merged)
    logger.verbose("CONFIG", f"Lookup endpoint: {settings.endpoint}")
    return settings
