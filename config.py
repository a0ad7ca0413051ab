import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml
from dotenv import dotenv_values

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = (
    "base_url",
    "login",
    "password",
    "device_id",
    "port_profile_up",
    "port_profile_down",
)

DEFAULT_SITE = "default"
DEFAULT_TIMEOUT = 10


class ConfigError(RuntimeError):
    """Raised when the settings file is missing, unreadable or incomplete."""


@dataclass(frozen=True)
class Settings:
    base_url: str
    login: str
    password: str
    device_id: str
    port_profile_up: str
    port_profile_down: str
    site: str = DEFAULT_SITE
    verify_ssl: bool = True
    timeout: int = DEFAULT_TIMEOUT
    mfa_secret: Optional[str] = None

    def __repr__(self):
        return (f"Settings(base_url={self.base_url!r}, login={self.login!r}, device_id={self.device_id!r}, "
                f"site={self.site!r})")


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw == "":
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    raise ConfigError(f"Invalid boolean value for {name}={raw!r} (expected true/false).")


def _normalize_mapping(raw, kind: str) -> Dict[str, Optional[str]]:
    """Normalize a parsed JSON/YAML document to a flat mapping of strings."""
    if not isinstance(raw, dict):
        raise ConfigError(f"{kind} config root must be a mapping/object")
    # Scalars (e.g. booleans, numbers) are normalized to strings
    values = {}
    for key, value in raw.items():
        if isinstance(value, (dict, list)):
            raise ConfigError(f"Setting {key} must be a plain value, not {type(value).__name__}")
        if isinstance(value, bool):
            value = str(value).lower()
        values[str(key)] = None if value is None else str(value)
    return values


def _read_settings_file(path: Path) -> Dict[str, Optional[str]]:
    """Read a flat mapping of settings from a JSON object, a YAML mapping or a ``key = value`` file."""
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Failed to read JSON config: {path}") from exc
        return _normalize_mapping(raw, "JSON")

    if suffix in (".yaml", ".yml"):
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to read YAML config: {path}") from exc
        return _normalize_mapping(raw, "YAML")

    try:
        return dict(dotenv_values(path, interpolate=False, encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc


def load_settings(path) -> Settings:
    """
    Load the controller settings from ``path``.

    Every key of ``REQUIRED_SETTINGS`` must be present and non-blank. ``site``,
    ``verify_ssl``, ``timeout`` and ``mfa_secret`` are optional.

    :raises ConfigError: If the file cannot be read or a required setting is missing.
    """
    path = Path(path)
    values = _read_settings_file(path)

    required = {}
    for key in REQUIRED_SETTINGS:
        value = values.get(key)
        if value is None or not value.strip():
            raise ConfigError(f"can't find {key} setting in {path}")
        required[key] = value

    site = (values.get("site") or "").strip() or DEFAULT_SITE
    verify_ssl = _parse_bool("verify_ssl", values.get("verify_ssl"), default=True)

    raw_timeout = (values.get("timeout") or "").strip()
    try:
        timeout = int(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError as exc:
        raise ConfigError("timeout must be an integer (seconds)") from exc
    if timeout <= 0:
        raise ConfigError("timeout must be a positive number of seconds")

    mfa_secret = (values.get("mfa_secret") or "").strip() or None

    settings = Settings(site=site, verify_ssl=verify_ssl, timeout=timeout, mfa_secret=mfa_secret, **required)
    logger.debug(f"Loaded {settings!r} from {path}")
    return settings
