"""
Entity normalization: raw upstream payloads to catalog models.

Every parser takes one raw JSON object (a dict decoded from the upstream
response) and returns a frozen model. Parsers are total over dicts:
missing, misspelled or wrongly-typed fields degrade to None/empty values,
never to exceptions. The only thing that raises is input that is not a
dict at all (ValidationError).

Fields the upstream spells differently across endpoints are resolved with
extract_field() over an explicit candidate list, first usable value wins.

Raw Shapes:
    A song as sent by song.getDetails / webapi.get:
        {
            "id": "K1P9Eu3B",
            "title": "Believer",
            "perma_url": "https://www.jiosaavn.com/song/believer/KgEpWkBmQFk",
            "image": "http://c.saavncdn.com/.../Evolve-150x150.jpg",
            "language": "english",
            "year": "2017",
            "play_count": "12345",
            "explicit_content": "0",
            "more_info": {
                "album_id": "...", "album": "Evolve", "album_url": "...",
                "duration": "204", "label": "...", "copyright_text": "...",
                "has_lyrics": "true", "lyrics_id": "...",
                "encrypted_media_url": "ID2ieOjCrwfgWvL5sXl4B1ImC5QfbsDy...",
                "artistMap": {
                    "primary_artists": [{"id": "...", "name": "Imagine Dragons", ...}],
                    "featured_artists": [],
                    "artists": [...]
                }
            }
        }
"""

from typing import Any

from saavn_client.catalog.models import (
    Album,
    AlbumPreview,
    AlbumRef,
    Artist,
    ArtistPreview,
    ArtistRoutes,
    ArtistsGroup,
    BioSection,
    Playlist,
    PlaylistPreview,
    Song,
    SongPreview,
    TrendingContent,
)
from saavn_client.core.exceptions import ValidationError
from saavn_client.utils.coerce import (
    extract_field,
    is_mapping,
    non_empty,
    normalize_list,
    optional_string,
    parse_boolean,
    safe_json_loads,
    safe_list_map,
    safe_string,
    to_number,
)
from saavn_client.utils.images import create_image_sources
from saavn_client.utils.media import create_download_links


def _require_mapping(raw: Any, entity: str) -> None:
    if not is_mapping(raw):
        raise ValidationError(
            f"Invalid {entity} data: not an object",
            context={"entity": entity, "received_type": type(raw).__name__},
        )


def _more_info(raw: Any) -> dict[str, Any]:
    more_info = raw.get("more_info")
    return more_info if is_mapping(more_info) else {}


def _to_int(value: Any) -> int | None:
    number = to_number(value)
    return None if number is None else int(number)


# ============================================================================
# Artists
# ============================================================================

def parse_artist_preview(raw: Any) -> ArtistPreview:
    """
    Normalize an artist reference.

    Artist references appear in artistMap lists ("name"), in search results
    and similar-artist lists ("title"), so name and url are probed.
    """
    _require_mapping(raw, "artist preview")
    return ArtistPreview(
        id=safe_string(extract_field(raw, "id", "artistId")),
        name=safe_string(extract_field(raw, "title", "name")),
        url=optional_string(extract_field(raw, "perma_url", "url")),
        images=create_image_sources(raw.get("image")),
    )


def parse_artists_group(artist_map: Any) -> ArtistsGroup:
    """
    Build an ArtistsGroup from an artistMap.

    primary is always a tuple; featured and all are None when empty. A
    missing or malformed artistMap yields an empty group.
    """
    if not is_mapping(artist_map):
        return ArtistsGroup()

    return ArtistsGroup(
        primary=safe_list_map(artist_map.get("primary_artists"), parse_artist_preview),
        featured=non_empty(safe_list_map(artist_map.get("featured_artists"), parse_artist_preview)),
        all=non_empty(safe_list_map(artist_map.get("artists"), parse_artist_preview)),
    )


def extract_artist_names(more_info: Any) -> tuple[str, ...]:
    """
    Flat primary-artist names for previews.

    Uses artistMap.primary_artists when present, otherwise splits the
    comma-separated "primary_artists" or "singers" string.
    """
    if not is_mapping(more_info):
        return ()

    artist_map = more_info.get("artistMap")
    refs = safe_list_map(
        artist_map.get("primary_artists") if is_mapping(artist_map) else None,
        parse_artist_preview,
    )
    if refs:
        return tuple(ref.name for ref in refs if ref.name)

    joined = safe_string(extract_field(more_info, "primary_artists", "singers"))
    return tuple(name.strip() for name in joined.split(",") if name.strip())


def parse_bio(raw_bio: Any) -> tuple[BioSection, ...]:
    """
    Normalize an artist biography into sections ordered by sequence.

    The upstream sends a JSON-encoded string holding a list of
    {"text", "title", "sequence"} objects, sometimes already decoded, and
    occasionally plain prose. Plain prose becomes a single section.
    Sections without text are dropped.
    """
    entries = raw_bio
    if isinstance(raw_bio, str):
        if not raw_bio.strip():
            return ()
        entries = safe_json_loads(raw_bio)
        if not isinstance(entries, list):
            return (BioSection(text=raw_bio.strip(), sequence=0),)

    if not isinstance(entries, list):
        return ()

    sections = []
    for index, entry in enumerate(entries):
        if not is_mapping(entry):
            continue
        text = safe_string(entry.get("text")).strip()
        if not text:
            continue
        sequence = _to_int(entry.get("sequence"))
        sections.append(
            BioSection(
                text=text,
                title=optional_string(entry.get("title")),
                sequence=index if sequence is None else sequence,
            )
        )

    return tuple(sorted(sections, key=lambda section: section.sequence))


# ============================================================================
# Previews
# ============================================================================

def parse_song_preview(raw: Any) -> SongPreview:
    """Normalize a song for listings. No download links are derived."""
    _require_mapping(raw, "song preview")
    more_info = _more_info(raw)

    return SongPreview(
        id=safe_string(raw.get("id")),
        title=safe_string(extract_field(raw, "title", "song")),
        url=safe_string(extract_field(raw, "perma_url", "url")),
        artist_names=extract_artist_names(more_info),
        album_name=optional_string(extract_field(more_info, "album")),
        language=optional_string(extract_field(more_info, "language") or raw.get("language")),
        duration_seconds=to_number(extract_field(more_info, "duration")),
        play_count=to_number(extract_field(raw, "play_count", "playCount")),
        images=create_image_sources(raw.get("image")),
    )


def parse_album_preview(raw: Any) -> AlbumPreview:
    """Normalize an album for listings."""
    _require_mapping(raw, "album preview")
    more_info = _more_info(raw)

    return AlbumPreview(
        id=safe_string(raw.get("id")),
        title=safe_string(raw.get("title")),
        url=safe_string(extract_field(raw, "perma_url", "url")),
        artist_names=extract_artist_names(more_info),
        language=optional_string(extract_field(more_info, "language") or raw.get("language")),
        release_year=_to_int(extract_field(more_info, "year") or raw.get("year")),
        images=create_image_sources(raw.get("image")),
    )


def parse_playlist_preview(raw: Any) -> PlaylistPreview:
    """Normalize a playlist for listings."""
    _require_mapping(raw, "playlist preview")

    return PlaylistPreview(
        id=safe_string(raw.get("id")),
        title=safe_string(raw.get("title")),
        url=safe_string(extract_field(raw, "perma_url", "url")),
        language=optional_string(extract_field(_more_info(raw), "language") or raw.get("language")),
        images=create_image_sources(raw.get("image")),
    )


# ============================================================================
# Full Entities
# ============================================================================

def parse_song(raw: Any) -> Song:
    """
    Normalize a complete song, including download links.

    Args:
        raw: Song object from song.getDetails, webapi.get or the
             recommendation station.

    Returns:
        Song. Check it with is_valid_entity() before handing it out.

    Raises:
        ValidationError: If raw is not a dict.
    """
    _require_mapping(raw, "song")
    more_info = _more_info(raw)

    return Song(
        id=safe_string(raw.get("id")),
        title=safe_string(extract_field(raw, "title", "song")),
        url=safe_string(extract_field(raw, "perma_url", "url")),
        language=safe_string(extract_field(raw, "language") or more_info.get("language")),
        release_year=_to_int(raw.get("year")),
        release_date=optional_string(more_info.get("release_date")),
        duration_seconds=to_number(extract_field(more_info, "duration") or raw.get("duration")),
        play_count=to_number(extract_field(raw, "play_count", "playCount")),
        label=optional_string(extract_field(more_info, "label") or raw.get("label")),
        copyright=optional_string(more_info.get("copyright_text")),
        is_explicit=parse_boolean(raw.get("explicit_content")),
        has_lyrics=parse_boolean(extract_field(more_info, "has_lyrics") or raw.get("has_lyrics")),
        lyrics_id=optional_string(more_info.get("lyrics_id")),
        album=AlbumRef(
            id=optional_string(more_info.get("album_id")),
            title=optional_string(more_info.get("album")),
            url=optional_string(more_info.get("album_url")),
        ),
        artists=parse_artists_group(more_info.get("artistMap")),
        images=create_image_sources(raw.get("image")),
        download_links=create_download_links(more_info.get("encrypted_media_url")),
    )


def parse_album(raw: Any) -> Album:
    """
    Normalize a complete album.

    Embedded tracks ("list") are normalized as SongPreview, so no media URL
    is decrypted for them.

    Raises:
        ValidationError: If raw is not a dict.
    """
    _require_mapping(raw, "album")
    more_info = _more_info(raw)

    return Album(
        id=safe_string(extract_field(raw, "id", "albumid")),
        title=safe_string(extract_field(raw, "title", "name")),
        url=safe_string(extract_field(raw, "perma_url", "url")),
        language=safe_string(extract_field(raw, "language") or more_info.get("language")),
        description=optional_string(extract_field(raw, "header_desc", "description")),
        release_year=_to_int(extract_field(raw, "year") or more_info.get("year")),
        song_count=_to_int(extract_field(more_info, "song_count") or raw.get("list_count")),
        copyright=optional_string(more_info.get("copyright_text")),
        is_explicit=parse_boolean(raw.get("explicit_content")),
        artists=parse_artists_group(more_info.get("artistMap")),
        images=create_image_sources(raw.get("image")),
        songs=non_empty(safe_list_map(raw.get("list"), parse_song_preview)),
    )


def parse_playlist(raw: Any) -> Playlist:
    """
    Normalize a complete playlist.

    Raises:
        ValidationError: If raw is not a dict.
    """
    _require_mapping(raw, "playlist")
    more_info = _more_info(raw)

    return Playlist(
        id=safe_string(extract_field(raw, "id", "listid")),
        title=safe_string(extract_field(raw, "title", "listname")),
        url=safe_string(extract_field(raw, "perma_url", "url")),
        image=optional_string(raw.get("image")),
        description=optional_string(extract_field(raw, "description", "header_desc")),
        song_count=_to_int(extract_field(raw, "list_count") or more_info.get("song_count")),
        follower_count=_to_int(extract_field(more_info, "follower_count") or raw.get("follower_count")),
        is_explicit=parse_boolean(raw.get("explicit_content")),
        songs=non_empty(safe_list_map(raw.get("list"), parse_song_preview)),
        artists=safe_list_map(more_info.get("artists"), parse_artist_preview),
        images=create_image_sources(raw.get("image")),
    )


def _parse_routes(urls: Any) -> ArtistRoutes | None:
    if not is_mapping(urls):
        return None
    return ArtistRoutes(
        overview=optional_string(urls.get("overview")),
        songs=optional_string(urls.get("songs")),
        albums=optional_string(urls.get("albums")),
        bio=optional_string(urls.get("bio")),
        comments=optional_string(urls.get("comments")),
    )


def parse_artist(raw: Any) -> Artist:
    """
    Normalize a complete artist page.

    Nested collections may arrive as plain lists or wrapped in a dict
    ({"songs": [...], "total": 42}); both are accepted. Their entries are
    previews and are not expanded any further.

    Raises:
        ValidationError: If raw is not a dict.
    """
    _require_mapping(raw, "artist")
    urls = raw.get("urls")
    languages = raw.get("availableLanguages")

    return Artist(
        id=safe_string(extract_field(raw, "artistId", "id")),
        name=safe_string(extract_field(raw, "name", "title")),
        url=safe_string(
            extract_field(raw, "perma_url", "url") or (urls.get("overview") if is_mapping(urls) else None)
        ),
        primary_language=optional_string(raw.get("dominantLanguage")),
        primary_content_type=optional_string(raw.get("dominantType")),
        available_languages=tuple(
            language for language in (languages if isinstance(languages, list) else [])
            if isinstance(language, str) and language
        ),
        follower_count=_to_int(raw.get("follower_count")),
        fan_count=_to_int(raw.get("fan_count")),
        is_verified=parse_boolean(raw.get("isVerified")),
        has_radio=parse_boolean(raw.get("isRadioPresent")),
        bio=parse_bio(raw.get("bio")),
        date_of_birth=optional_string(raw.get("dob")),
        facebook_url=optional_string(raw.get("fb")),
        twitter_handle=optional_string(raw.get("twitter")),
        wikipedia_url=optional_string(raw.get("wiki")),
        routes=_parse_routes(urls),
        images=create_image_sources(raw.get("image")),
        top_songs=safe_list_map(normalize_list(raw.get("topSongs"), "songs"), parse_song_preview),
        top_albums=safe_list_map(normalize_list(raw.get("topAlbums"), "albums"), parse_album_preview),
        singles=safe_list_map(normalize_list(raw.get("singles"), "singles"), parse_album_preview),
        similar_artists=safe_list_map(
            normalize_list(raw.get("similarArtists"), "artists"), parse_artist_preview
        ),
    )


# ============================================================================
# Aggregates
# ============================================================================

def parse_trending_content(items: Any) -> TrendingContent:
    """
    Group a content.getTrending list by item type.

    Items of types other than song, album and playlist are ignored, as are
    non-dict entries. A non-list payload yields an empty TrendingContent.
    """
    if not isinstance(items, list):
        return TrendingContent()

    songs: list[SongPreview] = []
    albums: list[AlbumPreview] = []
    playlists: list[PlaylistPreview] = []

    for item in items:
        if not is_mapping(item):
            continue
        item_type = item.get("type")
        if item_type == "song":
            songs.append(parse_song_preview(item))
        elif item_type == "album":
            albums.append(parse_album_preview(item))
        elif item_type == "playlist":
            playlists.append(parse_playlist_preview(item))

    return TrendingContent(
        songs=non_empty(songs),
        albums=non_empty(albums),
        playlists=non_empty(playlists),
    )
