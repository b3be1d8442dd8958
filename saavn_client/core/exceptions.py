"""
Exception classes and error taxonomy for saavn-client.

Every failure inside the client is expressed as a SaavnError tagged with one
of six ErrorKind values. The public client never lets these escape: its
single boundary converts any raised value into an ApiFailure result through
wrap_error().

Exception Hierarchy:
    SaavnError (base)
        NetworkError - Transport could not reach the upstream service
        ApiError - Upstream answered with a non-success envelope or bad payload
        ValidationError - Caller-supplied input or raw payload is malformed
        NotFoundError - A normalized entity failed the minimal-validity check
        DeprecatedMethodError - Operation intentionally disabled
    ConfigError - Configuration file or environment issues (CLI only)
"""

import asyncio
import json
from enum import Enum
from typing import Any, Mapping

import aiohttp


class ErrorKind(str, Enum):
    """Closed set of error kinds. The value doubles as the public error code."""

    NETWORK = "NETWORK"
    API = "API"
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    DEPRECATED_METHOD = "DEPRECATED_METHOD"
    UNKNOWN = "UNKNOWN"


# Codes emitted by the older client, mapped onto the canonical kinds.
LEGACY_ERROR_CODES: dict[str, ErrorKind] = {
    "NETWORK_ERROR": ErrorKind.NETWORK,
    "TIMEOUT_ERROR": ErrorKind.NETWORK,
    "API_ERROR": ErrorKind.API,
    "INVALID_RESPONSE": ErrorKind.API,
    "INVALID_URL": ErrorKind.VALIDATION,
    "VALIDATION_ERROR": ErrorKind.VALIDATION,
    "NOT_FOUND": ErrorKind.NOT_FOUND,
    "SONG_NOT_FOUND": ErrorKind.NOT_FOUND,
    "ALBUM_NOT_FOUND": ErrorKind.NOT_FOUND,
    "ARTIST_NOT_FOUND": ErrorKind.NOT_FOUND,
    "PLAYLIST_NOT_FOUND": ErrorKind.NOT_FOUND,
    "SEARCH_ERROR": ErrorKind.API,
    "SEARCH_SONGS_ERROR": ErrorKind.API,
    "SEARCH_ALBUMS_ERROR": ErrorKind.API,
    "SEARCH_ARTISTS_ERROR": ErrorKind.API,
    "SEARCH_PLAYLISTS_ERROR": ErrorKind.API,
    "GET_SONGS_ERROR": ErrorKind.API,
    "GET_SONG_LINK_ERROR": ErrorKind.API,
    "GET_SUGGESTIONS_ERROR": ErrorKind.API,
    "GET_ALBUM_ERROR": ErrorKind.API,
    "GET_ALBUM_LINK_ERROR": ErrorKind.API,
    "GET_ARTIST_ERROR": ErrorKind.API,
    "GET_ARTIST_LINK_ERROR": ErrorKind.API,
    "GET_ARTIST_SONGS_ERROR": ErrorKind.API,
    "GET_ARTIST_ALBUMS_ERROR": ErrorKind.API,
    "GET_PLAYLIST_ERROR": ErrorKind.API,
    "GET_PLAYLIST_LINK_ERROR": ErrorKind.API,
    "UNKNOWN_ERROR": ErrorKind.UNKNOWN,
}


def kind_from_code(code: str | None) -> ErrorKind:
    """
    Resolve a canonical or legacy error code to an ErrorKind.

    Args:
        code: Either a canonical code ("NOT_FOUND") or a legacy one
              ("SONG_NOT_FOUND"). Case-insensitive.

    Returns:
        The matching ErrorKind, or ErrorKind.UNKNOWN for unrecognized codes.

    Example:
        kind_from_code("GET_ALBUM_LINK_ERROR")  # ErrorKind.API
        kind_from_code("network")               # ErrorKind.NETWORK
    """
    if not code:
        return ErrorKind.UNKNOWN
    normalized = str(code).strip().upper()
    try:
        return ErrorKind(normalized)
    except ValueError:
        return LEGACY_ERROR_CODES.get(normalized, ErrorKind.UNKNOWN)


class SaavnError(Exception):
    """
    Base exception for all saavn-client errors.

    Attributes:
        message: Human-readable error description.
        kind: The ErrorKind this error belongs to.
        cause: The underlying exception or value, if this error wraps one.
        status_code: HTTP status code when the upstream supplied one.
        context: Free-form debugging context (endpoint name, entity id, ...).

    Example:
        try:
            ...
        except SaavnError as e:
            logger.error(f"Operation failed: {e.message} [{e.code}]")
    """

    default_kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        kind: ErrorKind | None = None,
        cause: Any = None,
        status_code: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            kind: Error kind. Defaults to the class' default_kind.
            cause: Original exception or value being wrapped.
            status_code: Optional HTTP status code.
            context: Optional dictionary with extra debugging context.
                     Common keys include:
                     - 'operation': Public client method that failed
                     - 'endpoint': Upstream __call name
                     - 'id' / 'url': Entity identifier involved
        """
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.cause = cause
        self.status_code = status_code
        self.context = dict(context or {})

    @property
    def code(self) -> str:
        """Stable machine-readable code (the kind's value)."""
        return self.kind.value

    @property
    def details(self) -> dict[str, Any]:
        """Alias of context, kept for symmetry with ConfigError."""
        return self.context

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serializable view of this error (see format_error_record)."""
        return format_error_record(self)


class NetworkError(SaavnError):
    """
    Raised when the transport fails before a response body is available.

    Common causes:
        - DNS or connection failure
        - Request timed out (per-call or client default timeout)
        - TLS errors
    """

    default_kind = ErrorKind.NETWORK


class ApiError(SaavnError):
    """
    Raised when the upstream service answers, but not usefully.

    Common causes:
        - HTTP status >= 400
        - Envelope with an "error" key or status "failure"/"error"
        - Null body, or a body that is not a JSON object
    """

    default_kind = ErrorKind.API


class ValidationError(SaavnError):
    """
    Raised for malformed input.

    Covers both caller-supplied input (an unparseable share URL, an empty
    query) and raw payload values that are not objects at all.
    """

    default_kind = ErrorKind.VALIDATION


class NotFoundError(SaavnError):
    """Raised when a normalized entity lacks its identifying fields."""

    default_kind = ErrorKind.NOT_FOUND


class DeprecatedMethodError(SaavnError):
    """Raised by operations that are intentionally disabled."""

    default_kind = ErrorKind.DEPRECATED_METHOD


_KIND_CLASSES: dict[ErrorKind, type[SaavnError]] = {
    ErrorKind.NETWORK: NetworkError,
    ErrorKind.API: ApiError,
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.DEPRECATED_METHOD: DeprecatedMethodError,
    ErrorKind.UNKNOWN: SaavnError,
}


class ConfigError(Exception):
    """
    Raised when configuration cannot be loaded.

    Only the CLI loads configuration files, so this error never crosses the
    client boundary.

    Example:
        raise ConfigError(
            "Invalid timeout in saavn.yaml",
            details={'file_path': '/path/to/saavn.yaml', 'value': 'abc'}
        )
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


def normalize_error_message(value: Any) -> str:
    """
    Extract a human-readable message from any raised or returned value.

    Resolution order:
        1. str -> itself
        2. exception -> str(exception), or its class name when empty
        3. mapping or object with a "message" -> that message
        4. JSON-serializable value -> its JSON text
        5. anything else -> str(value)

    Empty results fall back to "Unknown error".
    """
    if isinstance(value, str):
        message = value
    elif isinstance(value, BaseException):
        message = str(value) or type(value).__name__
    elif isinstance(value, Mapping) and value.get("message"):
        message = str(value["message"])
    elif getattr(value, "message", None):
        message = str(value.message)
    else:
        try:
            message = json.dumps(value)
        except (TypeError, ValueError):
            message = str(value)
        if value is None:
            message = ""
    return message or "Unknown error"


def classify_error(error: Any) -> ErrorKind:
    """
    Infer the ErrorKind of an arbitrary raised value.

    SaavnError instances keep their own kind. Transport-level exceptions
    (aiohttp client errors, timeouts, OSError) are NETWORK. JSON and
    text decoding failures mean the upstream sent garbage, so they are
    API. Everything else is UNKNOWN.
    """
    if isinstance(error, SaavnError):
        return error.kind
    if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError)):
        return ErrorKind.API
    if isinstance(error, aiohttp.ContentTypeError):
        return ErrorKind.API
    if isinstance(error, (aiohttp.ClientError, asyncio.TimeoutError, OSError)):
        return ErrorKind.NETWORK
    return ErrorKind.UNKNOWN


def wrap_error(
    error: Any,
    kind: ErrorKind | None = None,
    context: Mapping[str, Any] | None = None,
) -> SaavnError:
    """
    Convert any value into a structured SaavnError.

    Args:
        error: A SaavnError, any other exception, or an arbitrary value.
        kind: Kind to tag the result with. When None, a structured error
              keeps its kind and anything else is classified.
        context: Extra context merged over the error's existing context.

    Returns:
        A SaavnError. Structured input is re-tagged into a new instance that
        keeps the original cause and status code; the input is not mutated.

    Example:
        err = wrap_error("boom", ErrorKind.API)
        err.message  # "boom"
        err.code     # "API"
    """
    if isinstance(error, SaavnError):
        resolved = kind or error.kind
        merged = {**error.context, **(context or {})}
        return _KIND_CLASSES[resolved](
            error.message,
            kind=resolved,
            cause=error.cause,
            status_code=error.status_code,
            context=merged,
        )

    resolved = kind or classify_error(error)
    return _KIND_CLASSES[resolved](
        normalize_error_message(error),
        kind=resolved,
        cause=error,
        context=context,
    )


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return repr(value)


def format_error_record(error: Any) -> dict[str, Any]:
    """
    Flatten any error (structured or not) into a JSON-serializable record.

    Used by the logging layer to ship failures to observability sinks.

    Returns:
        Dictionary with name, message, code, status_code, context and cause.
    """
    structured = error if isinstance(error, SaavnError) else wrap_error(error)
    cause = structured.cause
    return {
        "name": type(structured).__name__,
        "message": structured.message,
        "code": structured.code,
        "status_code": structured.status_code,
        "context": {key: _json_safe(value) for key, value in structured.context.items()},
        "cause": None if cause is None else {
            "type": type(cause).__name__,
            "message": normalize_error_message(cause),
        },
    }
