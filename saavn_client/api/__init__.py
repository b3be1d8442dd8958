"""
Upstream access: endpoint catalogue, HTTP transport and the client.

Usage:
    from saavn_client.api import SaavnClient, AiohttpTransport
"""

from saavn_client.api.client import SaavnClient
from saavn_client.api.transport import (
    AiohttpTransport,
    Transport,
    TransportResponse,
)

__all__ = [
    "SaavnClient",
    "AiohttpTransport",
    "Transport",
    "TransportResponse",
]
