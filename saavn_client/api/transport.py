"""
HTTP transport boundary.

The client talks to the upstream through a Transport: any async callable
taking (url, query params, headers, timeout) and returning a
TransportResponse. AiohttpTransport is the default; tests and applications
can pass their own through ClientConfig.transport.

A transport is responsible for the wire only. Deciding whether a body is a
success envelope happens in check_envelope(), which the client applies to
every response regardless of the transport in use.
"""

import asyncio
import json
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Sequence

import aiohttp
from asyncio_throttle import Throttler

from saavn_client.api.endpoints import BASE_PARAMS, Endpoint
from saavn_client.core.exceptions import ApiError, NetworkError
from saavn_client.core.logger import get_logger
from saavn_client.utils.coerce import is_mapping, remove_none

logger = get_logger(__name__)


DEFAULT_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
)


@dataclass(frozen=True)
class TransportResponse:
    """
    Raw outcome of one HTTP request.

    Attributes:
        data: Decoded JSON body, or None for an empty body.
        status: HTTP status code.
        ok: True when the request succeeded and the body is a success
            envelope (after check_envelope).
    """
    data: Any
    status: int
    ok: bool


Transport = Callable[
    [str, Mapping[str, str], Mapping[str, str], "float | None"],
    Awaitable[TransportResponse],
]


def pick_user_agent(custom: Sequence[str] = ()) -> str:
    """Pick a User-Agent at random from custom, or the built-in pool."""
    agents = tuple(custom) or DEFAULT_USER_AGENTS
    return random.choice(agents)


def build_query(endpoint: Endpoint, params: Mapping[str, Any], context: str) -> dict[str, str]:
    """
    Assemble the api.php query string parameters for one call.

    Order of precedence (last wins): base parameters, endpoint defaults,
    caller parameters. None values are dropped.
    """
    query = {"__call": endpoint.name, **BASE_PARAMS, "ctx": endpoint.context or context}
    query.update(remove_none(endpoint.defaults))
    query.update(remove_none(params))
    return query


def build_headers(user_agents: Sequence[str] = ()) -> dict[str, str]:
    """Request headers with a rotated User-Agent."""
    return {
        "Content-Type": "application/json",
        "User-Agent": pick_user_agent(user_agents),
    }


def check_envelope(response: TransportResponse) -> TransportResponse:
    """
    Mark null bodies and upstream error envelopes as not ok.

    The upstream answers HTTP 200 with {"error": {...}} or
    {"status": "failure"} when a call is rejected.
    """
    data = response.data
    if data is None:
        return TransportResponse(data=None, status=response.status, ok=False)
    if is_mapping(data) and (data.get("error") or data.get("status") in ("failure", "error")):
        return TransportResponse(data=data, status=response.status, ok=False)
    return response


def envelope_error(response: TransportResponse, endpoint: str) -> ApiError:
    """Build the ApiError describing a not-ok response."""
    data = response.data
    message = None
    if is_mapping(data):
        error = data.get("error")
        if is_mapping(error):
            message = error.get("msg") or error.get("message")
        elif isinstance(error, str) and error:
            message = error
        if not message and isinstance(data.get("message"), str):
            message = data["message"]

    if not message:
        if data is None:
            message = "API returned null or undefined data"
        else:
            message = f"API request failed with status {response.status}"

    return ApiError(
        str(message),
        status_code=response.status,
        context={"endpoint": endpoint},
    )


class AiohttpTransport:
    """
    Default transport built on aiohttp.

    The session is created lazily on first use and closed by close(),
    unless it was supplied by the caller, in which case the caller owns it.

    Args:
        session: Optional existing aiohttp.ClientSession to reuse.
        rate_limit: Optional max number of requests per rate_period.
        rate_period: Rate-limit window in seconds.

    Example:
        transport = AiohttpTransport(rate_limit=5)
        client = SaavnClient(ClientConfig(transport=transport))
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        rate_limit: int | None = None,
        rate_period: float = 1.0,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._throttler = Throttler(rate_limit=rate_limit, period=rate_period) if rate_limit else None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def __call__(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout: float | None,
    ) -> TransportResponse:
        if self._throttler is not None:
            async with self._throttler:
                return await self._get(url, params, headers, timeout)
        return await self._get(url, params, headers, timeout)

    async def _get(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout: float | None,
    ) -> TransportResponse:
        session = await self._get_session()
        context = {"url": url, "call": params.get("__call")}

        try:
            async with session.get(
                url,
                params=dict(params),
                headers=dict(headers),
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                status = response.status
                body = await response.read()
        except asyncio.TimeoutError as e:
            raise NetworkError(
                f"Request timed out after {timeout}s",
                cause=e,
                context={**context, "timeout": timeout},
            ) from e
        except aiohttp.ClientError as e:
            raise NetworkError(
                f"Network request failed: {e}",
                cause=e,
                context=context,
            ) from e

        logger.debug(f"GET {params.get('__call')} -> {status}")

        try:
            # JSON is UTF-8 whatever the Content-Type says (often text/html)
            text = body.decode("utf-8")
            data = json.loads(text) if text.strip() else None
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ApiError(
                "Upstream returned a body that is not valid UTF-8 JSON",
                cause=e,
                status_code=status,
                context=context,
            ) from e

        return TransportResponse(data=data, status=status, ok=200 <= status < 300)

    async def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
