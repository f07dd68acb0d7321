"""Persistent JSON config helpers.

Stores named profiles (host, credentials, TLS options, default headers and
content type) plus the UI theme and verbose preference. A missing or
malformed file falls back to defaults, and each accessor ignores values of
the wrong type.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "httpedit"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_PROFILE = "default"
PROFILES_KEY = "profiles"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot write config {CONFIG_PATH}: {exc}") from exc


def parse_header(text: str) -> tuple[str, str]:
    """Split ``'Key: Value'`` into its name and value."""
    name, sep, value = text.partition(":")
    name = name.strip()
    if not sep or not name:
        raise ConfigError(f"invalid header {text!r}, expected 'Key: Value'")
    return name, value.strip()


def _load_str(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_host(data: dict[str, object] | None = None) -> str | None:
    """Return the configured default host, or ``None`` when unset/invalid."""
    return _load_str(load_config() if data is None else data, "host")


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if data is None else data, "theme")


def load_verbose(data: dict[str, object] | None = None) -> bool:
    """Only explicit booleans count; anything else means ``False``."""
    value = (load_config() if data is None else data).get("verbose")
    return value if isinstance(value, bool) else False


def load_insecure(data: dict[str, object] | None = None) -> bool:
    value = (load_config() if data is None else data).get("insecure")
    return value if isinstance(value, bool) else False


def load_headers(data: dict[str, object] | None = None) -> dict[str, str]:
    """Return default request headers, skipping non-string names or values."""
    value = (load_config() if data is None else data).get("headers")
    if not isinstance(value, dict):
        return {}
    return {
        str(name): header_value
        for name, header_value in value.items()
        if isinstance(name, str) and name.strip() and isinstance(header_value, str)
    }


def load_user(data: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if data is None else data, "user")


def load_password(data: dict[str, object] | None = None) -> str | None:
    """Return the basic-auth password verbatim; surrounding spaces are kept."""
    value = (load_config() if data is None else data).get("password")
    return value if isinstance(value, str) and value else None


def load_api_key(data: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if data is None else data, "api_key")


def load_ca_cert(data: dict[str, object] | None = None) -> str | None:
    """Return the CA bundle path used to verify TLS peers."""
    return _load_str(load_config() if data is None else data, "ca_cert")


def load_content_type(data: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if data is None else data, "content_type")


def load_profile(name: str = DEFAULT_PROFILE, data: dict[str, object] | None = None) -> dict[str, object]:
    """Return the settings of profile ``name``.

    Top-level keys form the default profile. A named entry under ``profiles``
    overlays them, so a profile only lists what differs. Asking for a named
    profile that does not exist raises :class:`ConfigError`.
    """
    data = load_config() if data is None else data
    settings = {key: value for key, value in data.items() if key != PROFILES_KEY}
    profiles = data.get(PROFILES_KEY)
    section = profiles.get(name) if isinstance(profiles, dict) else None
    if section is None:
        if name != DEFAULT_PROFILE:
            raise ConfigError(f"Profile not found: {name}")
        return settings
    if not isinstance(section, dict):
        raise ConfigError(f"Profile {name} is not a JSON object")
    settings.update(section)
    return settings


def save_preferences(
    *,
    profile: str = DEFAULT_PROFILE,
    host: str | None = None,
    theme: str | None = None,
    insecure: bool | None = None,
    headers: dict[str, str] | None = None,
    user: str | None = None,
    password: str | None = None,
    api_key: str | None = None,
    ca_cert: str | None = None,
    content_type: str | None = None,
) -> None:
    """Merge the given preferences into the stored config; ``None`` leaves a key alone.

    The default profile lives at the top level; any other profile is written
    under ``profiles.<name>``.
    """
    config = load_config()
    if profile == DEFAULT_PROFILE:
        target = config
    else:
        profiles = config.get(PROFILES_KEY)
        if not isinstance(profiles, dict):
            profiles = {}
            config[PROFILES_KEY] = profiles
        target = profiles.get(profile)
        if not isinstance(target, dict):
            target = {}
            profiles[profile] = target

    for key, value in (
        ("host", host),
        ("theme", theme),
        ("user", user),
        ("api_key", api_key),
        ("ca_cert", ca_cert),
        ("content_type", content_type),
    ):
        if value is not None and value.strip():
            target[key] = value.strip()
    if password:
        target["password"] = password
    if insecure is not None:
        target["insecure"] = bool(insecure)
    if headers:
        stored = load_headers(target)
        stored.update(headers)
        target["headers"] = stored
    save_config(config)
