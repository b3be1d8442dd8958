"""
Upstream endpoint catalogue.

Every upstream operation is one api.php call selected by the "__call"
query parameter. This module names them, lists their fixed parameters and
records each listing's page-indexing convention, which differs between
operations and is passed through as-is.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

ANDROID_CONTEXT = "android"

# Query parameters sent with every call
BASE_PARAMS: Mapping[str, str] = MappingProxyType({
    "_format": "json",
    "_marker": "0",
    "api_version": "4",
})


@dataclass(frozen=True)
class Endpoint:
    """
    One upstream call.

    Attributes:
        name: Value of the "__call" query parameter.
        defaults: Fixed parameters merged under the caller's parameters.
        context: "ctx" override; None means the client's configured context.
        first_page: Page the upstream treats as the first one, used as the
                    operation's default page but not enforced as a floor.
                    None for calls that are not paginated.
    """
    name: str
    defaults: Mapping[str, str] = field(default_factory=dict)
    context: str | None = None
    first_page: int | None = None


# Search
SEARCH_ALL = Endpoint("autocomplete.get")
SEARCH_SONGS = Endpoint("search.getResults", first_page=1)
SEARCH_ALBUMS = Endpoint("search.getAlbumResults", first_page=1)
SEARCH_ARTISTS = Endpoint("search.getArtistResults", first_page=1)
SEARCH_PLAYLISTS = Endpoint("search.getPlaylistResults", first_page=1)

# Details by id
SONG_DETAILS = Endpoint("song.getDetails")
ALBUM_DETAILS = Endpoint("content.getAlbumDetails")
ARTIST_DETAILS = Endpoint("artist.getArtistPageDetails")
PLAYLIST_DETAILS = Endpoint("playlist.getDetails", first_page=0)

# Details by share-link token
WEB_API = Endpoint("webapi.get")

# Artist listings
ARTIST_SONGS = Endpoint("artist.getArtistMoreSong", first_page=0)
ARTIST_ALBUMS = Endpoint("artist.getArtistMoreAlbum", first_page=0)

# Recommendation station lifecycle
CREATE_STATION = Endpoint(
    "webradio.createEntityStation",
    defaults={"entity_type": "queue"},
    context=ANDROID_CONTEXT,
)
STATION_SONGS = Endpoint("webradio.getSong", context=ANDROID_CONTEXT)

# Discovery
TRENDING = Endpoint("content.getTrending")

DEFAULT_SORT_BY = "popularity"
DEFAULT_SORT_ORDER = "desc"
SORT_FIELDS = ("popularity", "latest", "alphabetical")
SORT_ORDERS = ("asc", "desc")
