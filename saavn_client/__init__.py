"""
saavn-client: Typed async client for the JioSaavn catalog API.

The upstream API is undocumented and loosely typed. This package turns its
responses into frozen, predictable models and funnels every failure into a
small error taxonomy, so callers branch on a result instead of catching
exceptions.

Architecture:
    utils/      Pure helpers: share-link tokens, image variants, media URL
                decryption, field coercion
    catalog/    Models, entity normalization, pagination, validity checks
    api/        Endpoint catalogue, aiohttp transport, SaavnClient
    core/       Exceptions, configuration, logging, retry helpers
    cli.py      Command-line interface

Usage:
    Command Line:
        saavn search songs "believer"
        saavn link "https://www.jiosaavn.com/song/believer/KgEpWkBmQFk"
        saavn suggest K1P9Eu3B --limit 5

    Python API:
        from saavn_client import SaavnClient

        async with SaavnClient() as client:
            result = await client.get_song_by_link(url)
            if result.success:
                song = result.data
                print(song.title, [link.bitrate for link in song.download_links])
            else:
                print(result.code, result.message)

Dependencies:
    - aiohttp: HTTP transport
    - asyncio-throttle: Optional request rate limiting
    - pycryptodome: DES decryption of media URLs
    - click: CLI framework
    - colorama: Console colors
    - pyyaml / python-dotenv: Configuration file and environment loading
"""

__version__ = "0.1.0"
__author__ = "saavn-client"
__license__ = "MIT"

import logging

from saavn_client.api import AiohttpTransport, SaavnClient, TransportResponse
from saavn_client.catalog import (
    Album,
    ApiFailure,
    ApiResult,
    ApiSuccess,
    Artist,
    Paginated,
    Playlist,
    Song,
)
from saavn_client.core import (
    ClientConfig,
    ErrorKind,
    SaavnError,
    get_logger,
    load_config,
    setup_logging,
    wrap_error,
)
from saavn_client.utils import extract_token

# Silent unless the host application (or setup_logging) configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Client
    "SaavnClient",
    "ClientConfig",
    "AiohttpTransport",
    "TransportResponse",
    # Models
    "Song",
    "Album",
    "Artist",
    "Playlist",
    "Paginated",
    "ApiResult",
    "ApiSuccess",
    "ApiFailure",
    # Errors
    "ErrorKind",
    "SaavnError",
    "wrap_error",
    # Utilities
    "extract_token",
    "load_config",
    "setup_logging",
    "get_logger",
]
