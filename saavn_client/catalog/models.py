"""
Data models for catalog entities.

This module defines the immutable dataclasses the client returns. They are
built fresh from every upstream response by saavn_client.catalog.parsers
and never mutated, cached or persisted.

Design Decisions:
    - All dataclasses are frozen and collections are tuples
    - Fields the upstream may omit are Optional and default to None
    - to_dict() drops None fields, so missing data is absent rather than null
    - Full entities (Song, Album, Artist, Playlist) and lightweight previews
      used in search results and nested listings are separate types

Usage:
    from saavn_client.catalog.models import Song, Paginated

    result = await client.search_songs("believer")
    if result.success:
        for song in result.data.results:
            print(song.title, song.artist_names)
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")


def _serialize(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items() if item is not None}
    return value


class _Model:
    """Shared serialization for catalog dataclasses."""

    entity_type: ClassVar[str | None] = None

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-ready dict.

        None fields are omitted. Entity models also carry a "type" key
        ("song", "albumPreview", ...).
        """
        result: dict[str, Any] = {}
        if self.entity_type:
            result["type"] = self.entity_type
        for model_field in fields(self):  # type: ignore[arg-type]
            value = getattr(self, model_field.name)
            if value is None:
                continue
            result[model_field.name] = _serialize(value)
        return result


# ============================================================================
# Leaf Values
# ============================================================================

@dataclass(frozen=True)
class ImageSource(_Model):
    """One resolution variant of an image. resolution is e.g. "500x500"."""
    resolution: str
    url: str


@dataclass(frozen=True)
class DownloadLink(_Model):
    """One bitrate variant of a media stream. bitrate is e.g. "320kbps"."""
    bitrate: str
    url: str


# ============================================================================
# Previews
# ============================================================================

@dataclass(frozen=True)
class ArtistPreview(_Model):
    """
    Lightweight artist reference.

    Used inside ArtistsGroup, search results and similar-artist listings.
    """
    entity_type: ClassVar[str] = "artistPreview"

    id: str
    name: str
    url: str | None = None
    images: tuple[ImageSource, ...] = ()


@dataclass(frozen=True)
class ArtistsGroup(_Model):
    """
    Artists credited on a song or album.

    Attributes:
        primary: Main artists. Always present, possibly empty.
        featured: Featured artists, or None when there are none.
        all: Every credited artist (including composers, lyricists, ...),
             or None when the upstream sent no list.
    """
    primary: tuple[ArtistPreview, ...] = ()
    featured: tuple[ArtistPreview, ...] | None = None
    all: tuple[ArtistPreview, ...] | None = None


@dataclass(frozen=True)
class SongPreview(_Model):
    """Song projection without download links, for search and listings."""
    entity_type: ClassVar[str] = "songPreview"

    id: str
    title: str
    url: str
    artist_names: tuple[str, ...] = ()
    album_name: str | None = None
    language: str | None = None
    duration_seconds: int | float | None = None
    play_count: int | float | None = None
    images: tuple[ImageSource, ...] = ()


@dataclass(frozen=True)
class AlbumPreview(_Model):
    """Album projection for search and listings."""
    entity_type: ClassVar[str] = "albumPreview"

    id: str
    title: str
    url: str
    artist_names: tuple[str, ...] = ()
    language: str | None = None
    release_year: int | None = None
    images: tuple[ImageSource, ...] = ()


@dataclass(frozen=True)
class PlaylistPreview(_Model):
    """Playlist projection for search and listings."""
    entity_type: ClassVar[str] = "playlistPreview"

    id: str
    title: str
    url: str
    language: str | None = None
    images: tuple[ImageSource, ...] = ()


# ============================================================================
# Full Entities
# ============================================================================

@dataclass(frozen=True)
class AlbumRef(_Model):
    """Album a song belongs to. Every field may be missing upstream."""
    id: str | None = None
    title: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Song(_Model):
    """
    Fully normalized song.

    Attributes:
        id: Upstream song id. Example: "K1P9Eu3B"
        title: Song title.
        url: Permalink on the web player.
        language: Language name as sent upstream ("english", "hindi").
        release_year: Year of release.
        release_date: ISO date string ("2017-02-01") when available.
        duration_seconds: Duration in seconds.
        play_count: Upstream play counter.
        label: Record label.
        copyright: Copyright notice.
        is_explicit: Explicit-content flag.
        has_lyrics: Whether the upstream has lyrics for this song.
        lyrics_id: Upstream lyrics identifier, if any.
        album: Album reference.
        artists: Credited artists.
        images: Three resolution variants, or () without artwork.
        download_links: Five bitrate variants, or () when the media URL is
                        missing or cannot be decrypted.
    """
    entity_type: ClassVar[str] = "song"

    id: str
    title: str
    url: str
    language: str = ""
    release_year: int | None = None
    release_date: str | None = None
    duration_seconds: int | float | None = None
    play_count: int | float | None = None
    label: str | None = None
    copyright: str | None = None
    is_explicit: bool = False
    has_lyrics: bool = False
    lyrics_id: str | None = None
    album: AlbumRef = field(default_factory=AlbumRef)
    artists: ArtistsGroup = field(default_factory=ArtistsGroup)
    images: tuple[ImageSource, ...] = ()
    download_links: tuple[DownloadLink, ...] = ()

    @property
    def primary_artist_names(self) -> tuple[str, ...]:
        """Names of the primary artists, in credit order."""
        return tuple(artist.name for artist in self.artists.primary if artist.name)


@dataclass(frozen=True)
class Album(_Model):
    """
    Fully normalized album.

    songs holds previews of the tracks when the payload embeds them, and is
    None otherwise.
    """
    entity_type: ClassVar[str] = "album"

    id: str
    title: str
    url: str
    language: str = ""
    description: str | None = None
    release_year: int | None = None
    song_count: int | None = None
    copyright: str | None = None
    is_explicit: bool = False
    artists: ArtistsGroup = field(default_factory=ArtistsGroup)
    images: tuple[ImageSource, ...] = ()
    songs: tuple[SongPreview, ...] | None = None


@dataclass(frozen=True)
class Playlist(_Model):
    """
    Fully normalized playlist.

    image is the raw artwork URL as sent upstream; images holds the derived
    resolution variants.
    """
    entity_type: ClassVar[str] = "playlist"

    id: str
    title: str
    url: str
    image: str | None = None
    description: str | None = None
    song_count: int | None = None
    follower_count: int | None = None
    is_explicit: bool = False
    songs: tuple[SongPreview, ...] | None = None
    artists: tuple[ArtistPreview, ...] = ()
    images: tuple[ImageSource, ...] = ()


@dataclass(frozen=True)
class BioSection(_Model):
    """One section of an artist biography."""
    text: str
    sequence: int
    title: str | None = None


@dataclass(frozen=True)
class ArtistRoutes(_Model):
    """Web-player URLs for the artist's sub-pages."""
    overview: str | None = None
    songs: str | None = None
    albums: str | None = None
    bio: str | None = None
    comments: str | None = None


@dataclass(frozen=True)
class Artist(_Model):
    """
    Fully normalized artist.

    The preview collections (top_songs, top_albums, singles,
    similar_artists) are expanded one level deep only: their entries are
    previews, never full entities.

    Attributes:
        bio: Biography sections ordered by sequence.
        twitter_handle: Handle without URL, as sent upstream.
        date_of_birth: ISO date string when available.
    """
    entity_type: ClassVar[str] = "artist"

    id: str
    name: str
    url: str
    primary_language: str | None = None
    primary_content_type: str | None = None
    available_languages: tuple[str, ...] = ()
    follower_count: int | None = None
    fan_count: int | None = None
    is_verified: bool = False
    has_radio: bool = False
    bio: tuple[BioSection, ...] = ()
    date_of_birth: str | None = None
    facebook_url: str | None = None
    twitter_handle: str | None = None
    wikipedia_url: str | None = None
    routes: ArtistRoutes | None = None
    images: tuple[ImageSource, ...] = ()
    top_songs: tuple[SongPreview, ...] = ()
    top_albums: tuple[AlbumPreview, ...] = ()
    singles: tuple[AlbumPreview, ...] = ()
    similar_artists: tuple[ArtistPreview, ...] = ()


# ============================================================================
# Aggregates
# ============================================================================

@dataclass(frozen=True)
class SearchAllResult(_Model):
    """Top matches of each entity type for a free-text query."""
    songs: tuple[SongPreview, ...] = ()
    albums: tuple[AlbumPreview, ...] = ()
    artists: tuple[ArtistPreview, ...] = ()
    playlists: tuple[PlaylistPreview, ...] = ()


@dataclass(frozen=True)
class TrendingContent(_Model):
    """Trending items grouped by type. A group is None when nothing trends."""
    songs: tuple[SongPreview, ...] | None = None
    albums: tuple[AlbumPreview, ...] | None = None
    playlists: tuple[PlaylistPreview, ...] | None = None


@dataclass(frozen=True)
class Paginated(_Model, Generic[T]):
    """
    One page of results.

    Attributes:
        total: Total number of results upstream, or len(results) when the
               upstream did not report a usable total.
        page: The page that was requested, echoed unchanged.
        limit: The page size that was requested.
        results: The normalized items on this page.
    """
    total: int
    page: int
    limit: int
    results: tuple[T, ...] = ()


# ============================================================================
# Results
# ============================================================================

@dataclass(frozen=True)
class ApiSuccess(_Model, Generic[T]):
    """Successful operation result."""
    data: T
    success: ClassVar[bool] = True

    def to_dict(self) -> dict[str, Any]:
        return {"success": True, "data": _serialize(self.data)}


@dataclass(frozen=True)
class ApiFailure(_Model):
    """
    Failed operation result.

    Attributes:
        message: Human-readable description.
        code: One of NETWORK, API, VALIDATION, NOT_FOUND,
              DEPRECATED_METHOD, UNKNOWN.
        context: Debugging context (operation, endpoint, ids).
    """
    message: str
    code: str
    context: dict[str, Any] = field(default_factory=dict)
    success: ClassVar[bool] = False

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, "code": self.code}


ApiResult = Union[ApiSuccess[T], ApiFailure]
