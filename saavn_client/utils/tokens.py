"""
Share-link token extraction.

JioSaavn share links carry the entity type in the first path segment and an
opaque token in the last one:

    https://www.jiosaavn.com/song/believer/KgEpWkBmQFk
    https://www.jiosaavn.com/featured/bollywood-top-50/8MT-vrbtSjc_
    https://www.jiosaavn.com/s/playlist/2279e2aa.../top-hits/Ktjr8CeiCLU_

Everything here is pure: no I/O and no exceptions except in require_token.
"""

from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlsplit

from saavn_client.core.exceptions import ValidationError

EntityType = Literal["song", "album", "artist", "playlist", "show"]

# Path segment -> entity type
ROOT_SEGMENTS: dict[str, EntityType] = {
    "song": "song",
    "album": "album",
    "artist": "artist",
    "playlist": "playlist",
    "featured": "playlist",
    "show": "show",
}

# Leading segments that only mark a short link and carry no type
SHORT_LINK_MARKERS = frozenset({"s"})


@dataclass(frozen=True)
class ExtractedToken:
    """Entity type and opaque token parsed from a share URL."""
    type: EntityType
    token: str


def _path_segments(url: str) -> list[str]:
    parts = urlsplit(url.strip())
    path = parts.path
    segments = [segment for segment in path.split("/") if segment]

    # "www.jiosaavn.com/song/..." without a scheme parses as a bare path
    if not parts.scheme and not parts.netloc and not path.startswith("/"):
        if segments and "." in segments[0]:
            segments = segments[1:]

    return segments


def parse_share_url(url: str) -> ExtractedToken | None:
    """
    Parse a share URL (absolute, or a bare path) into type and token.

    Args:
        url: Share link, e.g. "https://www.jiosaavn.com/album/x/Y9".

    Returns:
        ExtractedToken, or None when the path has fewer than two segments
        after any short-link marker, or its root segment is unknown.

    Example:
        parse_share_url("/featured/top-50/8MT-vrbtSjc_")
        # ExtractedToken(type="playlist", token="8MT-vrbtSjc_")
    """
    if not isinstance(url, str) or not url.strip():
        return None

    segments = _path_segments(url)
    if segments and segments[0] in SHORT_LINK_MARKERS:
        segments = segments[1:]
    if len(segments) < 2:
        return None

    entity_type = ROOT_SEGMENTS.get(segments[0].lower())
    if entity_type is None:
        return None

    return ExtractedToken(type=entity_type, token=segments[-1])


def extract_token(url: str, expected_type: EntityType | None = None) -> str | None:
    """
    Return the token of a share URL, optionally checking its entity type.

    Example:
        extract_token("https://host/song/title/AbC123", "song")  # "AbC123"
        extract_token("https://host/album/x/Y9", "song")         # None
    """
    extracted = parse_share_url(url)
    if extracted is None:
        return None
    if expected_type is not None and extracted.type != expected_type:
        return None
    return extracted.token


def require_token(url: str, expected_type: EntityType) -> str:
    """
    Like extract_token, but raise ValidationError instead of returning None.

    Raises:
        ValidationError: With the URL, expected type and (when the URL
                         parsed at all) the type actually found.
    """
    extracted = parse_share_url(url)
    if extracted is None:
        raise ValidationError(
            f"Invalid {expected_type} link: {url!r}",
            context={"url": url, "expected_type": expected_type},
        )
    if extracted.type != expected_type:
        raise ValidationError(
            f"Expected a {expected_type} link but got a {extracted.type} link",
            context={"url": url, "expected_type": expected_type, "found_type": extracted.type},
        )
    return extracted.token
