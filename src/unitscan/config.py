"""Centralized configuration for unitscan.

:func:`get_settings` returns which unit interpreters the extractor uses and
where structured logs go. Values come from environment variables, from a
TOML/YAML document pointed to by ``UNITSCAN_CONFIG_FILE`` (or passed
explicitly), and fall back to built-in defaults, in that order.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - safety for Python <3.11
    tomllib = None  # type: ignore[assignment]

import yaml

__all__ = ["ExtractorSettings", "get_settings", "reset_settings"]

DEFAULT_PRIMARY = "pint"
DEFAULT_SECONDARY = "ucum"
DISABLED = "none"

_CONFIG_CACHE: Optional["ExtractorSettings"] = None
_CONFIG_SOURCE: Optional[Path] = None


@dataclass(frozen=True)
class ExtractorSettings:
    """Resolved runtime settings."""

    primary_interpreter: str = DEFAULT_PRIMARY
    secondary_interpreter: Optional[str] = DEFAULT_SECONDARY
    log_path: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        return level

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Expose the settings as plain strings (useful for logging)."""

        return {
            "primary_interpreter": self.primary_interpreter,
            "secondary_interpreter": self.secondary_interpreter,
            "log_path": str(self.log_path) if self.log_path is not None else None,
            "log_level": self.log_level,
        }


def _load_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file '{path}' does not exist")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        if tomllib is None:  # pragma: no cover - Python <3.11 fallback
            raise RuntimeError("TOML configuration requires Python 3.11 or tomllib")
        with path.open("rb") as handle:
            return tomllib.load(handle)
    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
            return loaded or {}
    raise ValueError(f"Unsupported config file format: '{suffix}'")


def _coalesce_mapping(source: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    return source


def _normalize_interpreter(value: Any) -> Optional[str]:
    if value is None:
        return None
    name = str(value).strip().lower()
    if name in {"", DISABLED}:
        return None
    return name


def _build_settings(config_file: Optional[Path]) -> ExtractorSettings:
    config_data: Mapping[str, Any] = {}
    config_dir: Optional[Path] = None
    if config_file is not None:
        config_file = config_file.expanduser().resolve()
        config_data = _load_config_file(config_file)
        config_dir = config_file.parent

    extraction_section = _coalesce_mapping(config_data.get("extraction"))
    logging_section = _coalesce_mapping(config_data.get("logging"))

    env = os.environ

    primary = _normalize_interpreter(
        env.get("UNITSCAN_PRIMARY") or extraction_section.get("primary") or DEFAULT_PRIMARY
    )
    if primary is None:
        raise ValueError("The primary unit interpreter cannot be disabled")

    if "UNITSCAN_SECONDARY" in env:
        secondary = _normalize_interpreter(env["UNITSCAN_SECONDARY"])
    elif "secondary" in extraction_section:
        secondary = _normalize_interpreter(extraction_section.get("secondary"))
    else:
        secondary = DEFAULT_SECONDARY

    raw_log_path = env.get("UNITSCAN_LOG_PATH") or logging_section.get("path")
    log_path: Optional[Path] = None
    if raw_log_path:
        log_path = Path(raw_log_path).expanduser()
        if not log_path.is_absolute() and config_dir is not None and not env.get("UNITSCAN_LOG_PATH"):
            log_path = config_dir / log_path

    log_level = str(env.get("UNITSCAN_LOG_LEVEL") or logging_section.get("level") or "INFO").upper()

    return ExtractorSettings(
        primary_interpreter=primary,
        secondary_interpreter=secondary,
        log_path=log_path,
        log_level=log_level,
    )


def get_settings(*, refresh: bool = False, config_file: str | Path | None = None) -> ExtractorSettings:
    """Return the cached :class:`ExtractorSettings`.

    Parameters
    ----------
    refresh:
        When ``True`` the cached settings are discarded and recomputed.
    config_file:
        Optional explicit path to the configuration document. When provided
        the returned instance is not cached globally, allowing callers (e.g.
        tests) to override settings temporarily.
    """

    global _CONFIG_CACHE, _CONFIG_SOURCE

    if config_file is not None:
        return _build_settings(Path(config_file))

    env_path = os.getenv("UNITSCAN_CONFIG_FILE")
    source_path = Path(env_path).expanduser() if env_path else None

    if refresh or _CONFIG_CACHE is None or _CONFIG_SOURCE != source_path:
        _CONFIG_CACHE = _build_settings(source_path)
        _CONFIG_SOURCE = source_path

    return _CONFIG_CACHE


def reset_settings() -> None:
    """Clear the cached configuration (mainly useful for tests)."""

    global _CONFIG_CACHE, _CONFIG_SOURCE
    _CONFIG_CACHE = None
    _CONFIG_SOURCE = None
