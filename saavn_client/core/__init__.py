"""
Core module for saavn-client.

    - exceptions: Error taxonomy, wrapping and flattening
    - config: ClientConfig and the optional file/env loader
    - logger: Logging setup and formatters
    - retry: Optional retry helpers

Usage:
    from saavn_client.core import (
        ClientConfig, load_config,
        setup_logging, get_logger,
        SaavnError, ErrorKind, wrap_error
    )
"""

from saavn_client.core.config import (
    ClientConfig,
    Config,
    LoggingConfig,
    load_config,
)
from saavn_client.core.exceptions import (
    LEGACY_ERROR_CODES,
    ApiError,
    ConfigError,
    DeprecatedMethodError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    SaavnError,
    ValidationError,
    classify_error,
    format_error_record,
    kind_from_code,
    normalize_error_message,
    wrap_error,
)
from saavn_client.core.logger import (
    get_logger,
    log_operation_failure,
    setup_logging,
    shutdown_logging,
)
from saavn_client.core.retry import retry_async, retry_result

__all__ = [
    # Config
    "ClientConfig",
    "Config",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "ErrorKind",
    "LEGACY_ERROR_CODES",
    "SaavnError",
    "NetworkError",
    "ApiError",
    "ValidationError",
    "NotFoundError",
    "DeprecatedMethodError",
    "ConfigError",
    "classify_error",
    "format_error_record",
    "kind_from_code",
    "normalize_error_message",
    "wrap_error",
    # Logger
    "setup_logging",
    "get_logger",
    "log_operation_failure",
    "shutdown_logging",
    # Retry
    "retry_async",
    "retry_result",
]
