"""Configuration management for fieldplan.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from fieldplan.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fieldplan.core.exceptions import ConfigurationError


@dataclass
class Config:
    """Application configuration.

    Attributes:
        log_path: Directory for log files
        export_path: Directory for outreach CSV exports
        max_stops: Default number of stops in a day plan
        default_city: City used when none can be inferred
        jitter_degrees: Coordinate jitter applied on import (+/- degrees)
        debug: Enable debug logging on the console
    """

    log_path: Path = field(default_factory=lambda: Path.home() / ".fieldplan" / "logs")
    export_path: Path = field(default_factory=lambda: Path.home() / ".fieldplan" / "exports")
    max_stops: int = 12
    default_city: str = "Tyler"
    jitter_degrees: float = 0.025
    debug: bool = False


def load_env_file(path: Path) -> dict[str, str]:
    """Parse .env file.

    Handles:
        - KEY=VALUE format
        - Comments (lines starting with #)
        - Blank lines
        - Quoted values

    Args:
        path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not path.exists():
        return env_vars

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()

                if value and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    env_vars[key] = value

    return env_vars


def _get_raw(key: str, env_vars: dict[str, str]) -> Optional[str]:
    return os.environ.get(key) or env_vars.get(key) or None


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    """Get path from environment, expanding ~ and resolving."""
    value = _get_raw(key, env_vars)
    if value:
        return Path(value).expanduser().resolve()
    return default


def _get_str(key: str, default: str, env_vars: dict[str, str]) -> str:
    """Get string from environment."""
    return _get_raw(key, env_vars) or default


def _get_int(key: str, default: int, env_vars: dict[str, str]) -> int:
    """Get integer from environment.

    Raises:
        ConfigurationError: If the value is not an integer
    """
    value = _get_raw(key, env_vars)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


def _get_float(key: str, default: float, env_vars: dict[str, str]) -> float:
    """Get float from environment.

    Raises:
        ConfigurationError: If the value is not a number
    """
    value = _get_raw(key, env_vars)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    """Get boolean from environment."""
    value = _get_raw(key, env_vars)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


DEFAULT_LOG_PATH = Path.home() / ".fieldplan" / "logs"
DEFAULT_EXPORT_PATH = Path.home() / ".fieldplan" / "exports"


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If a numeric setting cannot be parsed
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(Path(env_file))

    return Config(
        log_path=_get_path("FIELDPLAN_LOG_PATH", DEFAULT_LOG_PATH, env_vars),
        export_path=_get_path("FIELDPLAN_EXPORT_PATH", DEFAULT_EXPORT_PATH, env_vars),
        max_stops=_get_int("FIELDPLAN_MAX_STOPS", 12, env_vars),
        default_city=_get_str("FIELDPLAN_DEFAULT_CITY", "Tyler", env_vars),
        jitter_degrees=_get_float("FIELDPLAN_JITTER_DEGREES", 0.025, env_vars),
        debug=_get_bool("FIELDPLAN_DEBUG", False, env_vars),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Log and export directories exist or can be created, and are writable
        - max_stops is at least 1
        - default_city is in the geocoding table
        - jitter is not negative

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid)
    """
    from fieldplan.integrations.geocode import CITY_COORDINATES

    issues: list[str] = []

    for label, directory in (("Log", config.log_path), ("Export", config.export_path)):
        try:
            directory.mkdir(parents=True, exist_ok=True)
            if not os.access(directory, os.W_OK):
                issues.append(f"{label} directory not writable: {directory}")
        except OSError as e:
            issues.append(f"Cannot create {label.lower()} directory {directory}: {e}")

    if config.max_stops < 1:
        issues.append(f"CRITICAL: FIELDPLAN_MAX_STOPS must be at least 1, got {config.max_stops}")

    if config.default_city not in CITY_COORDINATES:
        issues.append(
            f"Default city {config.default_city!r} has no coordinates; "
            f"known cities: {', '.join(CITY_COORDINATES)}"
        )

    if config.jitter_degrees < 0:
        issues.append(f"FIELDPLAN_JITTER_DEGREES must not be negative, got {config.jitter_degrees}")

    return issues


_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.

    Returns:
        Application configuration
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
