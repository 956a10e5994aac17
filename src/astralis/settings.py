from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import yaml

from .console.entry import LogEntry
from .console.hub import CONSOLE_CATEGORIES, LogConsole
from .debug.categories import CategoryRegistry, Color
from .debug.facility import HOST_LOGGER_NAME, LogFacility, LoggingSink
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ASTRALIS_CONFIG"
MIN_MESSAGE_LENGTH = 4
DEFAULT_MAX_MESSAGE_LENGTH = 500


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values ("1", "yes", "off", ...) into a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off", ""}:
            return False
        return True
    return bool(value)


def parse_color(value: Union[str, List[float], tuple, Color]) -> Color:
    """Accept ``"#RRGGBB"``, ``[r, g, b]`` (0.0 - 1.0) or a Color."""
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    if isinstance(value, (list, tuple)) and len(value) == 3:
        r, g, b = (float(c) for c in value)
        return Color(r, g, b)
    raise ValueError(f"Unsupported color value: {value!r}")


@dataclass
class AstralisSettings:
    """Runtime settings for the logging facility and console.

    Loaded, lowest precedence first, from the packaged ``defaults.yaml``, an
    optional user YAML file (``ASTRALIS_CONFIG``) and ``ASTRALIS_*``
    environment variables. See :func:`load_settings`.
    """

    capture_stack: bool = True
    sink_logger: str = HOST_LOGGER_NAME
    error_pause: bool = False
    max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH
    console_categories: List[str] = field(default_factory=lambda: list(CONSOLE_CATEGORIES))
    extra_categories: Dict[str, Color] = field(default_factory=dict)

    def validate(self, strict: bool = False) -> None:
        """Normalize values in place.

        Values that cannot be coerced are logged and replaced with the field
        default, or raise :class:`ConfigError` when ``strict`` is set.
        """
        self.capture_stack = _as_bool(self.capture_stack)
        self.error_pause = _as_bool(self.error_pause)
        self.sink_logger = str(self.sink_logger or HOST_LOGGER_NAME)
        try:
            length = int(self.max_message_length)
        except (TypeError, ValueError) as exc:
            if strict:
                raise ConfigError(f"Invalid max_message_length {self.max_message_length!r}: {exc}") from exc
            logger.warning(
                "Invalid max_message_length %r; using %d", self.max_message_length, DEFAULT_MAX_MESSAGE_LENGTH
            )
            length = DEFAULT_MAX_MESSAGE_LENGTH
        if length < MIN_MESSAGE_LENGTH:
            logger.warning("max_message_length=%s too small; using %d", length, MIN_MESSAGE_LENGTH)
            length = MIN_MESSAGE_LENGTH
        self.max_message_length = length
        categories = self.console_categories
        if isinstance(categories, str):
            categories = [categories]
        elif not isinstance(categories, (list, tuple)):
            if strict:
                raise ConfigError(f"console_categories must be a list, got {type(categories).__name__}")
            logger.warning(
                "console_categories must be a list, got %s; using the built-in list", type(categories).__name__
            )
            categories = CONSOLE_CATEGORIES
        self.console_categories = [str(c) for c in categories]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = False) -> "AstralisSettings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in data.items() if k in allowed}
        raw_extra = filtered.pop("extra_categories", None) or {}
        extra: Dict[str, Color] = {}
        if isinstance(raw_extra, Mapping):
            for name, value in raw_extra.items():
                try:
                    extra[str(name)] = parse_color(value)
                except (TypeError, ValueError) as exc:
                    logger.warning("Ignoring category '%s' with invalid color %r: %s", name, value, exc)
        else:
            logger.warning("extra_categories must be a mapping, got %s", type(raw_extra).__name__)
        if filtered.get("console_categories") is None:
            filtered.pop("console_categories", None)
        obj = cls(extra_categories=extra, **filtered)
        obj.validate(strict=strict)
        return obj

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping: Dict[str, tuple] = {
            "ASTRALIS_CAPTURE_STACK": ("capture_stack", _as_bool),
            "ASTRALIS_SINK_LOGGER": ("sink_logger", str),
            "ASTRALIS_ERROR_PAUSE": ("error_pause", _as_bool),
            "ASTRALIS_MAX_MESSAGE_LENGTH": ("max_message_length", int),
        }
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env_key in env and env[env_key] != "":
                try:
                    out[field_name] = caster(env[env_key])
                except (TypeError, ValueError) as exc:
                    logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
        return out


def read_default_config() -> Dict[str, Any]:
    """Load the packaged ``astralis/config/defaults.yaml``."""
    text = resource_files("astralis.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
    logger.debug("Loaded embedded default config resource")
    return yaml.safe_load(text) or {}


def read_config_file(path: Path, strict: bool = False) -> Dict[str, Any]:
    """Read a YAML settings file.

    A missing or unreadable file yields ``{}`` unless ``strict`` is set, in
    which case :class:`ConfigError` is raised.
    """
    if not path.exists():
        if strict:
            raise ConfigError(f"Config file not found: {path}")
        logger.warning("Config file not found at %s; using defaults", path)
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        if strict:
            raise ConfigError(f"Failed to read config {path}: {exc}") from exc
        logger.error("Failed to read config %s: %s", path, exc)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        if strict:
            raise ConfigError(f"Config {path} must contain a mapping at the top level")
        logger.error("Config %s must contain a mapping; ignoring it", path)
        return {}
    logger.debug("Loaded config from path: %s", path)
    return data


def load_settings(
    path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    strict: bool = False,
) -> AstralisSettings:
    """Build settings from defaults, an optional YAML file and the environment."""
    env = os.environ if env is None else env
    merged: Dict[str, Any] = dict(read_default_config())
    if path is None and env.get(CONFIG_ENV_VAR):
        path = Path(env[CONFIG_ENV_VAR]).expanduser()
    if path is not None:
        user = read_config_file(Path(path), strict=strict)
        extra = dict(merged.get("extra_categories") or {})
        user_extra = user.pop("extra_categories", None)
        if isinstance(user_extra, dict):
            extra.update(user_extra)
        elif user_extra is not None:
            logger.warning("extra_categories in %s must be a mapping; ignoring it", path)
        merged.update(user)
        merged["extra_categories"] = extra
    merged.update(AstralisSettings.from_env(env))
    settings = AstralisSettings.from_dict(merged, strict=strict)
    logger.info(
        "Settings loaded: capture_stack=%s error_pause=%s extra_categories=%d",
        settings.capture_stack,
        settings.error_pause,
        len(settings.extra_categories),
    )
    return settings


def build_facility(settings: Optional[AstralisSettings] = None) -> LogFacility:
    """Create a facility with the built-in categories plus configured extras."""
    settings = settings or AstralisSettings()
    registry = CategoryRegistry()
    registry.register_many(settings.extra_categories.items())
    return LogFacility(
        registry=registry,
        sink=LoggingSink(settings.sink_logger),
        capture_stack=settings.capture_stack,
    )


def build_console(
    facility: LogFacility,
    settings: Optional[AstralisSettings] = None,
    on_error_pause: Optional[Callable[[LogEntry], Any]] = None,
) -> LogConsole:
    settings = settings or AstralisSettings()
    return LogConsole(
        facility,
        categories=settings.console_categories,
        error_pause=settings.error_pause,
        on_error_pause=on_error_pause,
    )
