"""
Per-operation unwrapping of raw response bodies.

The same entity arrives in different envelopes depending on which upstream
call produced it. Each calling operation names the variant it expects and
gets back the raw entity dicts the parsers consume:

    SONG_DETAILS  song.getDetails          {"songs": [...]} or {"<id>": {...}, ...}
    WEB_PAGE      webapi.get               {"songs": [...]} for songs,
                                           the entity itself otherwise
    STATION       webradio.getSong         {"stationid": "...", "0": {"song": {...}}, ...}

Search and listing envelopes have their own small helpers below.
Malformed envelopes yield empty lists; only a body that is not an object
at all is an ApiError.
"""

from enum import Enum
from typing import Any

from saavn_client.core.exceptions import ApiError
from saavn_client.utils.coerce import is_mapping

STATION_ID_KEY = "stationid"


class PayloadVariant(str, Enum):
    """Raw response shapes, named after the upstream call family."""

    SONG_DETAILS = "song_details"
    WEB_PAGE = "web_page"
    STATION = "station"


def require_object(data: Any, endpoint: str) -> dict[str, Any]:
    """
    Return data if it is a JSON object, else raise ApiError.

    Args:
        data: Decoded response body.
        endpoint: Upstream call name, recorded in the error context.
    """
    if not is_mapping(data):
        raise ApiError(
            f"Unexpected response from {endpoint}: expected an object",
            context={"endpoint": endpoint, "received_type": type(data).__name__},
        )
    return data


def song_payloads(data: dict[str, Any], variant: PayloadVariant) -> list[dict[str, Any]]:
    """
    Extract raw song dicts from a response body.

    Args:
        data: Decoded response body (already checked to be an object).
        variant: Which call produced it.

    Returns:
        Raw song dicts in upstream order. Non-dict entries are dropped.
    """
    if variant is PayloadVariant.STATION:
        songs = []
        for key, entry in data.items():
            if key == STATION_ID_KEY or not is_mapping(entry):
                continue
            song = entry.get("song")
            songs.append(song if is_mapping(song) else entry)
        return [song for song in songs if is_mapping(song)]

    listed = data.get("songs")
    if isinstance(listed, list):
        return [song for song in listed if is_mapping(song)]

    if variant is PayloadVariant.SONG_DETAILS:
        # Older api_version responses key each song by its id
        return [entry for entry in data.values() if is_mapping(entry) and "id" in entry]

    return []


def station_id(data: Any) -> str | None:
    """Station identifier from a webradio.createEntityStation response."""
    if not is_mapping(data):
        return None
    value = data.get(STATION_ID_KEY)
    return value if isinstance(value, str) and value else None


def search_results(data: dict[str, Any]) -> tuple[list[Any], Any]:
    """
    Results and reported total of a search.get*Results response.

    Returns:
        (results, total). total is passed through raw; the pagination
        builder decides whether it is usable.
    """
    results = data.get("results")
    return (results if isinstance(results, list) else []), data.get("total")


def autocomplete_section(data: dict[str, Any], section: str) -> list[Any]:
    """Entries of one autocomplete.get section ({"songs": {"data": [...]}})."""
    block = data.get(section)
    if is_mapping(block) and isinstance(block.get("data"), list):
        return block["data"]
    return []


def artist_listing(data: dict[str, Any], section: str, items_key: str) -> tuple[list[Any], Any]:
    """
    Items and total of an artist listing.

    artist.getArtistMoreSong answers {"topSongs": {"songs": [...], "total": N}}
    and artist.getArtistMoreAlbum {"topAlbums": {"albums": [...], "total": N}}.
    """
    block = data.get(section)
    if not is_mapping(block):
        return [], None
    items = block.get(items_key)
    return (items if isinstance(items, list) else []), block.get("total")
