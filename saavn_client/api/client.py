"""
JioSaavn catalog client.

SaavnClient is the public entry point. Each operation issues one (or, for
suggestions, two sequential) upstream calls, checks the envelope, normalizes
the payload and returns an ApiResult. Operations never raise: every failure
is converted at a single boundary (_execute) into an ApiFailure whose code
is one of NETWORK, API, VALIDATION, NOT_FOUND, DEPRECATED_METHOD, UNKNOWN.

The client holds no mutable state beyond its transport, so one instance can
serve any number of concurrent operations.

Usage:
    async with SaavnClient() as client:
        result = await client.search_songs("believer", limit=5)
        if result.success:
            for song in result.data.results:
                print(song.title)
        else:
            print(f"{result.code}: {result.message}")
"""

import json
from collections import abc
from typing import Any, Awaitable, Iterable, Mapping
from urllib.parse import quote

from saavn_client.api import endpoints
from saavn_client.api.endpoints import Endpoint
from saavn_client.api.transport import (
    AiohttpTransport,
    Transport,
    build_headers,
    build_query,
    check_envelope,
    envelope_error,
)
from saavn_client.catalog.models import (
    Album,
    AlbumPreview,
    ApiFailure,
    ApiResult,
    ApiSuccess,
    Artist,
    ArtistPreview,
    Paginated,
    Playlist,
    PlaylistPreview,
    SearchAllResult,
    Song,
    SongPreview,
    TrendingContent,
)
from saavn_client.catalog.pagination import build_paginated
from saavn_client.catalog.parsers import (
    parse_album,
    parse_album_preview,
    parse_artist,
    parse_artist_preview,
    parse_playlist,
    parse_playlist_preview,
    parse_song,
    parse_song_preview,
    parse_trending_content,
)
from saavn_client.catalog.payloads import (
    PayloadVariant,
    artist_listing,
    autocomplete_section,
    require_object,
    search_results,
    song_payloads,
    station_id,
)
from saavn_client.catalog.validators import ensure_valid, is_valid_entity
from saavn_client.core.config import ClientConfig
from saavn_client.core.exceptions import (
    DeprecatedMethodError,
    NotFoundError,
    ValidationError,
    wrap_error,
)
from saavn_client.core.logger import get_logger, log_operation_failure
from saavn_client.utils.coerce import safe_list_map
from saavn_client.utils.tokens import require_token

logger = get_logger(__name__)


class SaavnClient:
    """
    Async client for the JioSaavn catalog API.

    Construct it explicitly and keep the instance; there is no module-level
    default client. Use it as an async context manager (or call close())
    so the default transport's HTTP session is released.

    Args:
        config: Client options. Defaults to ClientConfig().

    Attributes:
        config: The frozen configuration in use.
    """

    def __init__(self, config: ClientConfig | None = None) -> None:
        self.config = config or ClientConfig()
        if self.config.transport is not None:
            self._transport: Transport = self.config.transport
            self._owns_transport = False
        else:
            self._transport = AiohttpTransport(
                rate_limit=self.config.rate_limit,
                rate_period=self.config.rate_period,
            )
            self._owns_transport = True

    async def __aenter__(self) -> "SaavnClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the default transport's session. Custom transports are left alone."""
        if self._owns_transport and isinstance(self._transport, AiohttpTransport):
            await self._transport.close()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _request(
        self,
        endpoint: Endpoint,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """
        Perform one upstream call and return its decoded body.

        Args:
            endpoint: Upstream call to make.
            params: Call-specific query parameters.
            timeout: Per-call timeout in seconds; None uses the client default.

        Raises:
            NetworkError: If the transport failed.
            ApiError: If the response is not a success envelope.
        """
        query = build_query(endpoint, params or {}, self.config.context)
        headers = build_headers(self.config.user_agents)
        effective_timeout = self.config.timeout if timeout is None else timeout

        logger.debug(f"Calling {endpoint.name} with {params or {}}")
        response = check_envelope(
            await self._transport(self.config.base_url, query, headers, effective_timeout)
        )
        if not response.ok:
            raise envelope_error(response, endpoint.name)
        return response.data

    async def _request_object(
        self,
        endpoint: Endpoint,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        return require_object(await self._request(endpoint, params, timeout), endpoint.name)

    async def _execute(self, operation: str, action: Awaitable[Any]) -> ApiResult:
        """
        Await action and convert its outcome into an ApiResult.

        This is the only place exceptions are caught. Cancellation is not an
        Exception and propagates unchanged.
        """
        try:
            data = await action
        except Exception as e:
            error = wrap_error(e, context={"operation": operation})
            log_operation_failure(logger, operation, error)
            return ApiFailure(message=error.message, code=error.code, context=error.context)
        return ApiSuccess(data)

    @staticmethod
    def _require_text(value: Any, field_name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(
                f"'{field_name}' must be a non-empty string",
                context={"field": field_name, "value": value},
            )
        return value.strip()

    @staticmethod
    def _require_page(page: Any) -> None:
        # Pages are passed through as-is; only negative values are rejected
        if not isinstance(page, int) or isinstance(page, bool) or page < 0:
            raise ValidationError(
                "'page' must be a non-negative integer",
                context={"field": "page", "value": page},
            )

    @staticmethod
    def _require_limit(limit: Any, field_name: str = "limit") -> None:
        if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
            raise ValidationError(
                f"'{field_name}' must be a positive integer",
                context={"field": field_name, "value": limit},
            )

    # =========================================================================
    # Search Operations
    # =========================================================================

    async def search_all(self, query: str, timeout: float | None = None) -> ApiResult[SearchAllResult]:
        """
        Search every entity type at once (top matches only).

        Returns:
            ApiResult wrapping SearchAllResult with song, album, artist and
            playlist previews.
        """
        return await self._execute("search_all", self._search_all(query, timeout))

    async def _search_all(self, query: str, timeout: float | None) -> SearchAllResult:
        query = self._require_text(query, "query")
        data = await self._request_object(endpoints.SEARCH_ALL, {"query": query}, timeout)
        return SearchAllResult(
            songs=safe_list_map(autocomplete_section(data, "songs"), parse_song_preview),
            albums=safe_list_map(autocomplete_section(data, "albums"), parse_album_preview),
            artists=safe_list_map(autocomplete_section(data, "artists"), parse_artist_preview),
            playlists=safe_list_map(autocomplete_section(data, "playlists"), parse_playlist_preview),
        )

    async def _search(
        self,
        endpoint: Endpoint,
        parser: Any,
        query: str,
        page: int,
        limit: int,
        timeout: float | None,
    ) -> Paginated:
        query = self._require_text(query, "query")
        self._require_page(page)
        self._require_limit(limit)
        data = await self._request_object(endpoint, {"q": query, "p": page, "n": limit}, timeout)
        results, total = search_results(data)
        return build_paginated(safe_list_map(results, parser), total, page, limit)

    async def search_songs(
        self, query: str, page: int = 1, limit: int = 10, timeout: float | None = None
    ) -> ApiResult[Paginated[SongPreview]]:
        """
        Search songs.

        Args:
            query: Free-text query.
            page: Page number, sent upstream unchanged (the upstream starts at 1;
                  0 is accepted and echoed back as-is).
            limit: Results per page.
            timeout: Optional per-call timeout in seconds.
        """
        return await self._execute(
            "search_songs",
            self._search(endpoints.SEARCH_SONGS, parse_song_preview, query, page, limit, timeout),
        )

    async def search_albums(
        self, query: str, page: int = 1, limit: int = 10, timeout: float | None = None
    ) -> ApiResult[Paginated[AlbumPreview]]:
        """Search albums. page is passed through unchanged (default 1)."""
        return await self._execute(
            "search_albums",
            self._search(endpoints.SEARCH_ALBUMS, parse_album_preview, query, page, limit, timeout),
        )

    async def search_artists(
        self, query: str, page: int = 1, limit: int = 10, timeout: float | None = None
    ) -> ApiResult[Paginated[ArtistPreview]]:
        """Search artists. page is passed through unchanged (default 1)."""
        return await self._execute(
            "search_artists",
            self._search(endpoints.SEARCH_ARTISTS, parse_artist_preview, query, page, limit, timeout),
        )

    async def search_playlists(
        self, query: str, page: int = 1, limit: int = 10, timeout: float | None = None
    ) -> ApiResult[Paginated[PlaylistPreview]]:
        """Search playlists. page is passed through unchanged (default 1)."""
        return await self._execute(
            "search_playlists",
            self._search(endpoints.SEARCH_PLAYLISTS, parse_playlist_preview, query, page, limit, timeout),
        )

    # =========================================================================
    # Song Operations
    # =========================================================================

    async def get_songs_by_id(
        self, song_ids: str | Iterable[str], timeout: float | None = None
    ) -> ApiResult[tuple[Song, ...]]:
        """
        Fetch full songs (with download links) by id.

        Args:
            song_ids: One id, or several. Invalid songs in the response are
                      dropped; the result is NOT_FOUND only if none remain.
        """
        return await self._execute("get_songs_by_id", self._get_songs_by_id(song_ids, timeout))

    async def _get_songs_by_id(self, song_ids: str | Iterable[str], timeout: float | None) -> tuple[Song, ...]:
        if isinstance(song_ids, str):
            ids = [song_ids]
        elif isinstance(song_ids, abc.Iterable) and not isinstance(song_ids, abc.Mapping):
            ids = list(song_ids)
        else:
            raise ValidationError(
                "'song_ids' must be a song id or an iterable of song ids",
                context={"field": "song_ids", "value": repr(song_ids)},
            )
        ids = [self._require_text(song_id, "song_ids") for song_id in ids]
        if not ids:
            raise ValidationError("At least one song id is required", context={"field": "song_ids"})

        data = await self._request_object(endpoints.SONG_DETAILS, {"pids": ",".join(ids)}, timeout)
        songs = tuple(
            song for song in map(parse_song, song_payloads(data, PayloadVariant.SONG_DETAILS))
            if is_valid_entity(song)
        )
        if not songs:
            raise NotFoundError("Song not found", context={"entity_type": "song", "ids": ids})
        return songs

    async def get_song_by_link(self, url: str, timeout: float | None = None) -> ApiResult[Song]:
        """Fetch a full song from its share link."""
        return await self._execute("get_song_by_link", self._get_song_by_link(url, timeout))

    async def _get_song_by_link(self, url: str, timeout: float | None) -> Song:
        token = require_token(url, "song")
        data = await self._request_object(endpoints.WEB_API, {"token": token, "type": "song"}, timeout)
        payloads = song_payloads(data, PayloadVariant.WEB_PAGE)
        if not payloads:
            raise NotFoundError("Song not found", context={"entity_type": "song", "url": url})
        return ensure_valid(parse_song(payloads[0]), "song", url=url)

    async def get_song_suggestions(
        self, song_id: str, limit: int = 10, timeout: float | None = None
    ) -> ApiResult[tuple[Song, ...]]:
        """
        Recommended songs for a seed song.

        Creates a recommendation station for the song, then fetches its
        songs. The second call waits for the first; an upstream that does
        not hand out a station yields an empty success.

        Args:
            song_id: Seed song id.
            limit: Maximum number of suggestions.
            timeout: Per-call timeout applied to each of the two requests.
        """
        return await self._execute(
            "get_song_suggestions", self._get_song_suggestions(song_id, limit, timeout)
        )

    async def _get_song_suggestions(self, song_id: str, limit: int, timeout: float | None) -> tuple[Song, ...]:
        song_id = self._require_text(song_id, "song_id")
        self._require_limit(limit)

        station = await self._request(
            endpoints.CREATE_STATION,
            {"entity_id": json.dumps([quote(song_id)])},
            timeout,
        )
        station_key = station_id(station)
        if station_key is None:
            logger.debug(f"No station created for song {song_id}")
            return ()

        data = await self._request_object(
            endpoints.STATION_SONGS, {"stationid": station_key, "k": limit}, timeout
        )
        songs = (parse_song(raw) for raw in song_payloads(data, PayloadVariant.STATION))
        return tuple(song for song in songs if is_valid_entity(song))[:limit]

    async def get_song_lyrics(self, song_id: str, timeout: float | None = None) -> ApiResult[str]:
        """
        Lyrics lookups are disabled upstream.

        Always returns a DEPRECATED_METHOD failure. Song.has_lyrics and
        Song.lyrics_id still report what the catalog knows.
        """
        return await self._execute("get_song_lyrics", self._get_song_lyrics(song_id))

    async def _get_song_lyrics(self, song_id: str) -> str:
        raise DeprecatedMethodError(
            "Lyrics are no longer served by the upstream API",
            context={"song_id": song_id},
        )

    # =========================================================================
    # Album Operations
    # =========================================================================

    async def get_album_by_id(self, album_id: str, timeout: float | None = None) -> ApiResult[Album]:
        """Fetch a full album, with track previews, by id."""
        return await self._execute("get_album_by_id", self._get_album_by_id(album_id, timeout))

    async def _get_album_by_id(self, album_id: str, timeout: float | None) -> Album:
        album_id = self._require_text(album_id, "album_id")
        data = await self._request_object(endpoints.ALBUM_DETAILS, {"albumid": album_id}, timeout)
        return ensure_valid(parse_album(data), "album", id=album_id)

    async def get_album_by_link(self, url: str, timeout: float | None = None) -> ApiResult[Album]:
        """Fetch a full album from its share link."""
        return await self._execute("get_album_by_link", self._get_album_by_link(url, timeout))

    async def _get_album_by_link(self, url: str, timeout: float | None) -> Album:
        token = require_token(url, "album")
        data = await self._request_object(endpoints.WEB_API, {"token": token, "type": "album"}, timeout)
        return ensure_valid(parse_album(data), "album", url=url)

    # =========================================================================
    # Artist Operations
    # =========================================================================

    @staticmethod
    def _sort_params(sort_by: str, sort_order: str) -> dict[str, str]:
        if sort_by not in endpoints.SORT_FIELDS:
            raise ValidationError(
                f"'sort_by' must be one of {', '.join(endpoints.SORT_FIELDS)}",
                context={"field": "sort_by", "value": sort_by},
            )
        if sort_order not in endpoints.SORT_ORDERS:
            raise ValidationError(
                f"'sort_order' must be one of {', '.join(endpoints.SORT_ORDERS)}",
                context={"field": "sort_order", "value": sort_order},
            )
        return {"sort_order": sort_order, "category": sort_by}

    def _artist_params(
        self, song_count: int, album_count: int, sort_by: str, sort_order: str
    ) -> dict[str, Any]:
        self._require_limit(song_count, "song_count")
        self._require_limit(album_count, "album_count")
        return {
            "n_song": song_count,
            "n_album": album_count,
            "page": 0,
            **self._sort_params(sort_by, sort_order),
        }

    async def get_artist_by_id(
        self,
        artist_id: str,
        song_count: int = 10,
        album_count: int = 10,
        sort_by: str = endpoints.DEFAULT_SORT_BY,
        sort_order: str = endpoints.DEFAULT_SORT_ORDER,
        timeout: float | None = None,
    ) -> ApiResult[Artist]:
        """
        Fetch an artist page by id.

        Args:
            artist_id: Upstream artist id.
            song_count: Number of top songs to embed.
            album_count: Number of top albums to embed.
            sort_by: "popularity", "latest" or "alphabetical".
            sort_order: "asc" or "desc".
            timeout: Optional per-call timeout in seconds.
        """
        return await self._execute(
            "get_artist_by_id",
            self._get_artist_by_id(artist_id, song_count, album_count, sort_by, sort_order, timeout),
        )

    async def _get_artist_by_id(
        self,
        artist_id: str,
        song_count: int,
        album_count: int,
        sort_by: str,
        sort_order: str,
        timeout: float | None,
    ) -> Artist:
        artist_id = self._require_text(artist_id, "artist_id")
        params = {"artistId": artist_id, **self._artist_params(song_count, album_count, sort_by, sort_order)}
        data = await self._request_object(endpoints.ARTIST_DETAILS, params, timeout)
        return ensure_valid(parse_artist(data), "artist", id=artist_id)

    async def get_artist_by_link(
        self,
        url: str,
        song_count: int = 10,
        album_count: int = 10,
        sort_by: str = endpoints.DEFAULT_SORT_BY,
        sort_order: str = endpoints.DEFAULT_SORT_ORDER,
        timeout: float | None = None,
    ) -> ApiResult[Artist]:
        """Fetch an artist page from its share link. Options as in get_artist_by_id."""
        return await self._execute(
            "get_artist_by_link",
            self._get_artist_by_link(url, song_count, album_count, sort_by, sort_order, timeout),
        )

    async def _get_artist_by_link(
        self,
        url: str,
        song_count: int,
        album_count: int,
        sort_by: str,
        sort_order: str,
        timeout: float | None,
    ) -> Artist:
        token = require_token(url, "artist")
        params = {
            "token": token,
            "type": "artist",
            **self._artist_params(song_count, album_count, sort_by, sort_order),
        }
        data = await self._request_object(endpoints.WEB_API, params, timeout)
        return ensure_valid(parse_artist(data), "artist", url=url)

    async def _artist_listing(
        self,
        endpoint: Endpoint,
        artist_id: str,
        page: int,
        sort_by: str,
        sort_order: str,
        timeout: float | None,
    ) -> dict[str, Any]:
        artist_id = self._require_text(artist_id, "artist_id")
        self._require_page(page)
        return await self._request_object(
            endpoint,
            {"artistId": artist_id, "page": page, **self._sort_params(sort_by, sort_order)},
            timeout,
        )

    async def get_artist_songs(
        self,
        artist_id: str,
        page: int = 0,
        sort_by: str = endpoints.DEFAULT_SORT_BY,
        sort_order: str = endpoints.DEFAULT_SORT_ORDER,
        timeout: float | None = None,
    ) -> ApiResult[Paginated[SongPreview]]:
        """
        One page of an artist's songs.

        Args:
            artist_id: Upstream artist id.
            page: 0-based page number.
            sort_by: "popularity", "latest" or "alphabetical".
            sort_order: "asc" or "desc".

        Returns:
            Paginated song previews. The upstream picks the page size, so
            limit reports the number of results on this page.
        """
        return await self._execute(
            "get_artist_songs",
            self._get_artist_songs(artist_id, page, sort_by, sort_order, timeout),
        )

    async def _get_artist_songs(
        self, artist_id: str, page: int, sort_by: str, sort_order: str, timeout: float | None
    ) -> Paginated[SongPreview]:
        data = await self._artist_listing(endpoints.ARTIST_SONGS, artist_id, page, sort_by, sort_order, timeout)
        items, total = artist_listing(data, "topSongs", "songs")
        songs = safe_list_map(items, parse_song_preview)
        return build_paginated(songs, total, page, len(songs))

    async def get_artist_albums(
        self,
        artist_id: str,
        page: int = 0,
        sort_by: str = endpoints.DEFAULT_SORT_BY,
        sort_order: str = endpoints.DEFAULT_SORT_ORDER,
        timeout: float | None = None,
    ) -> ApiResult[Paginated[AlbumPreview]]:
        """One page of an artist's albums. Same conventions as get_artist_songs."""
        return await self._execute(
            "get_artist_albums",
            self._get_artist_albums(artist_id, page, sort_by, sort_order, timeout),
        )

    async def _get_artist_albums(
        self, artist_id: str, page: int, sort_by: str, sort_order: str, timeout: float | None
    ) -> Paginated[AlbumPreview]:
        data = await self._artist_listing(endpoints.ARTIST_ALBUMS, artist_id, page, sort_by, sort_order, timeout)
        items, total = artist_listing(data, "topAlbums", "albums")
        albums = safe_list_map(items, parse_album_preview)
        return build_paginated(albums, total, page, len(albums))

    # =========================================================================
    # Playlist Operations
    # =========================================================================

    async def get_playlist_by_id(
        self, playlist_id: str, page: int = 0, limit: int = 10, timeout: float | None = None
    ) -> ApiResult[Playlist]:
        """
        Fetch a playlist with one page of its track previews.

        Args:
            playlist_id: Upstream playlist id ("listid").
            page: 0-based page of the track listing.
            limit: Tracks per page.
        """
        return await self._execute(
            "get_playlist_by_id", self._get_playlist_by_id(playlist_id, page, limit, timeout)
        )

    async def _get_playlist_by_id(
        self, playlist_id: str, page: int, limit: int, timeout: float | None
    ) -> Playlist:
        playlist_id = self._require_text(playlist_id, "playlist_id")
        self._require_page(page)
        self._require_limit(limit)
        data = await self._request_object(
            endpoints.PLAYLIST_DETAILS, {"listid": playlist_id, "page": page, "n": limit}, timeout
        )
        return ensure_valid(parse_playlist(data), "playlist", id=playlist_id)

    async def get_playlist_by_link(
        self, url: str, page: int = 0, limit: int = 10, timeout: float | None = None
    ) -> ApiResult[Playlist]:
        """Fetch a playlist from its share link ("/playlist/..." or "/featured/...")."""
        return await self._execute(
            "get_playlist_by_link", self._get_playlist_by_link(url, page, limit, timeout)
        )

    async def _get_playlist_by_link(self, url: str, page: int, limit: int, timeout: float | None) -> Playlist:
        token = require_token(url, "playlist")
        self._require_page(page)
        self._require_limit(limit)
        data = await self._request_object(
            endpoints.WEB_API,
            {"token": token, "type": "playlist", "page": page, "n": limit},
            timeout,
        )
        return ensure_valid(parse_playlist(data), "playlist", url=url)

    # =========================================================================
    # Discovery Operations
    # =========================================================================

    async def get_trending(
        self,
        entity_type: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
    ) -> ApiResult[TrendingContent]:
        """
        Currently trending songs, albums and playlists.

        Args:
            entity_type: Optional filter: "song", "album" or "playlist".
            language: Optional language filter (e.g. "hindi").
        """
        return await self._execute("get_trending", self._get_trending(entity_type, language, timeout))

    async def _get_trending(
        self, entity_type: str | None, language: str | None, timeout: float | None
    ) -> TrendingContent:
        if entity_type is not None and entity_type not in ("song", "album", "playlist"):
            raise ValidationError(
                "'entity_type' must be song, album or playlist",
                context={"field": "entity_type", "value": entity_type},
            )
        data = await self._request(
            endpoints.TRENDING,
            {"entity_type": entity_type, "entity_language": language},
            timeout,
        )
        return parse_trending_content(data)
