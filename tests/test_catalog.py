# tests/test_catalog.py
"""Test entity normalization, models, pagination and validity checks"""

import copy

import pytest

from saavn_client.catalog.models import (
    ApiFailure,
    ApiSuccess,
    ArtistPreview,
    Song,
    SongPreview,
)
from saavn_client.catalog.pagination import build_paginated
from saavn_client.catalog.parsers import (
    extract_artist_names,
    parse_album,
    parse_artist,
    parse_artists_group,
    parse_bio,
    parse_playlist,
    parse_song,
    parse_song_preview,
    parse_trending_content,
)
from saavn_client.catalog.payloads import (
    PayloadVariant,
    artist_listing,
    require_object,
    song_payloads,
    station_id,
)
from saavn_client.catalog.validators import ensure_valid, is_valid_entity
from saavn_client.core.exceptions import ApiError, NotFoundError, ValidationError


class TestSongParsing:
    """Test song normalization"""

    def test_full_song(self, raw_song):
        song = parse_song(raw_song)

        assert song.id == "K1P9Eu3B"
        assert song.title == "Believer"
        assert song.language == "english"
        assert song.release_year == 2017
        assert song.release_date == "2017-06-23"
        assert song.duration_seconds == 204
        assert song.play_count == 431276431
        assert song.is_explicit is False
        assert song.has_lyrics is True
        assert song.album.title == "Evolve"
        assert song.primary_artist_names == ("Imagine Dragons",)
        assert len(song.images) == 3
        assert len(song.download_links) == 5

    def test_parsing_is_pure(self, raw_song):
        snapshot = copy.deepcopy(raw_song)

        first = parse_song(raw_song)
        second = parse_song(raw_song)

        assert first == second
        assert raw_song == snapshot

    def test_missing_fields_degrade(self):
        song = parse_song({"id": "x1"})

        assert song.title == ""
        assert song.release_year is None
        assert song.images == ()
        assert song.download_links == ()
        assert song.artists.primary == ()

    def test_non_dict_raises_validation(self):
        with pytest.raises(ValidationError):
            parse_song(["not", "a", "song"])

    def test_preview_has_no_download_links(self, raw_song):
        preview = parse_song_preview(raw_song)

        assert isinstance(preview, SongPreview)
        assert not hasattr(preview, "download_links")
        assert preview.artist_names == ("Imagine Dragons",)
        assert preview.album_name == "Evolve"

    def test_artist_names_from_joined_string(self):
        assert extract_artist_names({"primary_artists": "A, B ,, C"}) == ("A", "B", "C")
        assert extract_artist_names({"singers": "Solo"}) == ("Solo",)
        assert extract_artist_names(None) == ()


class TestArtistsGroup:
    """Test artistMap normalization"""

    def test_group_shapes(self, raw_song):
        group = parse_artists_group(raw_song["more_info"]["artistMap"])

        assert len(group.primary) == 1
        assert group.featured is None
        assert [artist.name for artist in group.all] == ["Imagine Dragons", "Justin Tranter"]

    def test_missing_map(self):
        group = parse_artists_group(None)
        assert group.primary == ()
        assert group.featured is None
        assert group.all is None


class TestBio:
    """Test biography normalization"""

    def test_json_string_sorted_by_sequence(self, raw_artist):
        bio = parse_bio(raw_artist["bio"])

        assert [section.title for section in bio] == ["Intro", "Origins"]
        assert bio[0].sequence == 1

    def test_plain_prose(self):
        bio = parse_bio("Just a paragraph.")
        assert len(bio) == 1
        assert bio[0].text == "Just a paragraph."

    def test_empty_and_garbage(self):
        assert parse_bio("") == ()
        assert parse_bio(None) == ()
        assert parse_bio([{"title": "no text"}, "x"]) == ()


class TestEntityParsing:
    """Test album, artist, playlist and trending normalization"""

    def test_album(self, raw_album):
        album = parse_album(raw_album)

        assert album.id == "10496527"
        assert album.description == "Third studio album"
        assert album.song_count == 2
        # Non-dict entries are skipped, the rest become previews
        assert [song.id for song in album.songs] == ["K1P9Eu3B", "x2"]
        assert all(isinstance(song, SongPreview) for song in album.songs)

    def test_artist(self, raw_artist):
        artist = parse_artist(raw_artist)

        assert artist.id == "568707"
        assert artist.name == "Imagine Dragons"
        assert artist.url.endswith("xGMZ8ma4DpE_")
        assert artist.available_languages == ("english",)
        assert artist.follower_count == 1200000
        assert artist.is_verified is True
        assert artist.has_radio is True
        assert artist.date_of_birth is None
        assert artist.routes.songs.endswith("/songs")
        assert [song.title for song in artist.top_songs] == ["Believer"]
        assert [album.title for album in artist.top_albums] == ["Evolve"]
        assert artist.singles == ()
        assert artist.similar_artists == (ArtistPreview(id="459320", name="OneRepublic"),)

    def test_playlist(self, raw_playlist):
        playlist = parse_playlist(raw_playlist)

        assert playlist.image == "http://c.saavncdn.com/editorial/TopHits_150x150.jpg"
        assert playlist.images[2].url == "https://c.saavncdn.com/editorial/TopHits_500x500.jpg"
        assert playlist.song_count == 50
        assert playlist.follower_count == 250000
        assert len(playlist.songs) == 1
        assert playlist.artists[0].name == "Imagine Dragons"

    def test_trending_groups_by_type(self, raw_song):
        items = [
            raw_song,
            {"id": "a1", "title": "Evolve", "type": "album"},
            {"id": "r1", "title": "Radio", "type": "radio_station"},
            "junk",
        ]
        trending = parse_trending_content(items)

        assert [song.id for song in trending.songs] == ["K1P9Eu3B"]
        assert [album.id for album in trending.albums] == ["a1"]
        assert trending.playlists is None

    def test_trending_non_list(self):
        trending = parse_trending_content({"error": "x"})
        assert trending.songs is None


class TestPayloads:
    """Test response envelope unwrapping"""

    def test_song_details_list_and_id_keyed(self, raw_song):
        assert song_payloads({"songs": [raw_song, 3]}, PayloadVariant.SONG_DETAILS) == [raw_song]
        assert song_payloads({raw_song["id"]: raw_song}, PayloadVariant.SONG_DETAILS) == [raw_song]

    def test_station_entries(self, raw_song):
        data = {"stationid": "st-1", "0": {"song": raw_song}, "1": "bad"}
        assert song_payloads(data, PayloadVariant.STATION) == [raw_song]

    def test_station_id(self):
        assert station_id({"stationid": "st-1"}) == "st-1"
        assert station_id({"stationid": ""}) is None
        assert station_id(None) is None

    def test_artist_listing(self):
        items, total = artist_listing({"topSongs": {"songs": [{"id": "1"}], "total": "40"}}, "topSongs", "songs")
        assert items == [{"id": "1"}]
        assert total == "40"
        assert artist_listing({}, "topSongs", "songs") == ([], None)

    def test_require_object(self):
        with pytest.raises(ApiError):
            require_object([1, 2], "song.getDetails")


class TestPagination:
    """Test Paginated construction"""

    def test_total_falls_back_to_result_count(self):
        page = build_paginated(["a", "b", "c"], None, 1, 10)

        assert page.total == 3
        assert page.page == 1
        assert page.limit == 10
        assert page.results == ("a", "b", "c")

    def test_numeric_string_total(self):
        assert build_paginated(["a"], "250", 2, 1).total == 250

    def test_garbage_total(self):
        assert build_paginated([], "many", 0, 10).total == 0

    def test_page_is_echoed_unchanged(self):
        assert build_paginated([], 5, 0, 10).page == 0


class TestValidity:
    """Test minimal-validity checks"""

    def test_song_requires_id_and_title(self):
        assert is_valid_entity(Song(id="1", title="T", url=""))
        assert not is_valid_entity(Song(id="", title="T", url=""))
        assert not is_valid_entity(Song(id="1", title="", url=""))
        assert not is_valid_entity(None)

    def test_artist_requires_name(self):
        assert is_valid_entity(ArtistPreview(id="1", name="A"))
        assert not is_valid_entity(ArtistPreview(id="1", name=""))

    def test_ensure_valid_raises_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            ensure_valid(Song(id="", title="", url=""), "song", id="x")

        assert exc_info.value.message == "Song not found"
        assert exc_info.value.context == {"entity_type": "song", "id": "x"}


class TestSerialization:
    """Test to_dict output"""

    def test_none_fields_omitted(self):
        data = ArtistPreview(id="1", name="A").to_dict()
        assert data == {"type": "artistPreview", "id": "1", "name": "A", "images": []}

    def test_results(self):
        assert ApiSuccess(ArtistPreview(id="1", name="A")).to_dict()["success"] is True
        failure = ApiFailure(message="nope", code="NOT_FOUND")
        assert failure.to_dict() == {"success": False, "message": "nope", "code": "NOT_FOUND"}
        assert failure.success is False
