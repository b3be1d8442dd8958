"""
Pure helpers with no I/O.

    - tokens: share-link parsing
    - images: image resolution variants
    - media: encrypted media URL decryption
    - coerce: field coercion for loosely-typed payloads

Usage:
    from saavn_client.utils import extract_token, create_image_sources
"""

from saavn_client.utils.images import create_image_sources
from saavn_client.utils.media import create_download_links, decrypt_media_url
from saavn_client.utils.tokens import (
    ExtractedToken,
    extract_token,
    parse_share_url,
    require_token,
)

__all__ = [
    "create_image_sources",
    "create_download_links",
    "decrypt_media_url",
    "ExtractedToken",
    "extract_token",
    "parse_share_url",
    "require_token",
]
