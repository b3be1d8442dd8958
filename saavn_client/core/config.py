"""
Configuration management for saavn-client.

The client itself is configured with a frozen ClientConfig value passed to
its constructor; nothing in the client or the normalizer reads files or
environment variables.

Applications that prefer a file (the bundled CLI does) can use load_config(),
which reads an optional saavn.yaml and then applies environment overrides,
loading a .env file first when one is present.

Example saavn.yaml:
    client:
      base_url: "https://www.jiosaavn.com/api.php"
      timeout: 10
      rate_limit: 5          # Optional: max requests per period
      rate_period: 1.0       # Seconds

    logging:
      level: "INFO"
      file: null             # Optional: path to a rotating log file
      error_file: null       # Optional: path to a JSON-lines error log

Environment Overrides:
    SAAVN_BASE_URL, SAAVN_TIMEOUT, SAAVN_LOG_LEVEL
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from dotenv import load_dotenv

from saavn_client.core.exceptions import ConfigError

if TYPE_CHECKING:
    from saavn_client.api.transport import Transport


# Default configuration file name (looked up in the current working directory)
CONFIG_FILENAME = "saavn.yaml"

DEFAULT_BASE_URL = "https://www.jiosaavn.com/api.php"
DEFAULT_TIMEOUT = 10.0
DEFAULT_CONTEXT = "web6dot0"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ClientConfig:
    """
    Options accepted by SaavnClient at construction.

    Attributes:
        base_url: Upstream api.php endpoint.
        timeout: Default per-request timeout in seconds. None disables it.
                 Every client operation can override it for one call.
        transport: Optional async callable replacing the default aiohttp
                   transport (see saavn_client.api.transport.Transport).
        user_agents: Optional User-Agent pool; one is picked per request.
        context: Default "ctx" query parameter sent upstream.
        rate_limit: Optional max number of requests per rate_period,
                    enforced by the default transport only.
        rate_period: Length of the rate-limit window in seconds.
    """
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = DEFAULT_TIMEOUT
    transport: "Transport | None" = field(default=None, compare=False)
    user_agents: tuple[str, ...] = ()
    context: str = DEFAULT_CONTEXT
    rate_limit: int | None = None
    rate_period: float = 1.0


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging options used by applications calling setup_logging().

    Attributes:
        level: Console log level name.
        file: Optional rotating log file path.
        error_file: Optional JSON-lines error log path.
    """
    level: str = "INFO"
    file: Path | None = None
    error_file: Path | None = None


@dataclass(frozen=True)
class Config:
    """Complete application configuration."""
    client: ClientConfig
    logging: LoggingConfig


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from saavn.yaml and the environment.

    Args:
        config_path: Optional explicit path to the config file. When given,
                     the file must exist. When None, CWD/saavn.yaml is used
                     if present, and defaults otherwise.

    Returns:
        Config: A frozen dataclass with client and logging sections.

    Raises:
        ConfigError: If an explicit file is missing, the YAML is invalid,
                     or any value has the wrong type or range.

    Behavior:
        1. Load .env from the current directory (python-dotenv), without
           overriding variables already set
        2. Read and parse the YAML file, if any
        3. Apply SAAVN_* environment overrides
        4. Validate and build frozen config objects
    """
    load_dotenv()

    raw_config: dict[str, Any] = {}
    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        raw_config = _read_yaml(config_path)
    elif explicit:
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    client_section = dict(raw_config.get("client") or {})
    logging_section = dict(raw_config.get("logging") or {})

    if os.environ.get("SAAVN_BASE_URL"):
        client_section["base_url"] = os.environ["SAAVN_BASE_URL"]
    if os.environ.get("SAAVN_TIMEOUT"):
        client_section["timeout"] = os.environ["SAAVN_TIMEOUT"]
    if os.environ.get("SAAVN_LOG_LEVEL"):
        logging_section["level"] = os.environ["SAAVN_LOG_LEVEL"]

    return Config(
        client=_parse_client_config(client_section),
        logging=_parse_logging_config(logging_section),
    )


def _read_yaml(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f.read())
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )
    return raw_config


def _parse_positive_number(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"'{name}' must be a number, got {value!r}",
            details={"field": name, "value": value}
        ) from e
    if number <= 0:
        raise ConfigError(
            f"'{name}' must be positive, got {value!r}",
            details={"field": name, "value": value}
        )
    return number


def _parse_client_config(section: dict[str, Any]) -> ClientConfig:
    """
    Build ClientConfig from the 'client' section.

    A timeout of null/0 in YAML disables the default timeout.
    """
    base_url = section.get("base_url", DEFAULT_BASE_URL)
    if not isinstance(base_url, str) or not base_url.startswith(("http://", "https://")):
        raise ConfigError(
            f"'base_url' must be an http(s) URL, got {base_url!r}",
            details={"field": "base_url", "value": base_url}
        )

    timeout: float | None = DEFAULT_TIMEOUT
    if "timeout" in section:
        raw_timeout = section["timeout"]
        timeout = None if raw_timeout in (None, 0, "0") else _parse_positive_number(raw_timeout, "timeout")

    user_agents = section.get("user_agents") or ()
    if not isinstance(user_agents, (list, tuple)) or not all(isinstance(ua, str) for ua in user_agents):
        raise ConfigError(
            "'user_agents' must be a list of strings",
            details={"field": "user_agents"}
        )

    rate_limit = section.get("rate_limit")
    if rate_limit is not None:
        rate_limit = int(_parse_positive_number(rate_limit, "rate_limit"))

    return ClientConfig(
        base_url=base_url,
        timeout=timeout,
        user_agents=tuple(user_agents),
        context=str(section.get("context", DEFAULT_CONTEXT)),
        rate_limit=rate_limit,
        rate_period=_parse_positive_number(section.get("rate_period", 1.0), "rate_period"),
    )


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    level = str(section.get("level", "INFO")).upper()
    if level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level: {level}",
            details={"field": "level", "valid": list(VALID_LOG_LEVELS)}
        )

    log_file = section.get("file")
    error_file = section.get("error_file")
    return LoggingConfig(
        level=level,
        file=Path(log_file).expanduser() if log_file else None,
        error_file=Path(error_file).expanduser() if error_file else None,
    )
