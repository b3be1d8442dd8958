# tests/test_utils.py
"""Test share-link tokens, image variants, media decryption and coercion"""

import pytest

from saavn_client.core.exceptions import ErrorKind, ValidationError
from saavn_client.utils.coerce import (
    extract_field,
    normalize_list,
    parse_boolean,
    remove_none,
    safe_list_map,
    safe_string,
    to_number,
)
from saavn_client.utils.images import create_image_sources
from saavn_client.utils.media import create_download_links, decrypt_media_url
from saavn_client.utils.tokens import extract_token, parse_share_url, require_token


class TestShareLinks:
    """Test token extraction from share URLs"""

    def test_song_link(self):
        url = "https://www.jiosaavn.com/song/believer/KgEpWkBmQFk"
        assert extract_token(url, "song") == "KgEpWkBmQFk"

    def test_featured_is_playlist(self):
        extracted = parse_share_url("https://www.jiosaavn.com/featured/top-hits/8MT-vrbtSjc_")
        assert extracted.type == "playlist"
        assert extracted.token == "8MT-vrbtSjc_"

    def test_short_link_marker_is_skipped(self):
        extracted = parse_share_url("https://www.jiosaavn.com/s/playlist/2279e2aa/top-hits/Ktjr8CeiCLU_")
        assert extracted.type == "playlist"
        assert extracted.token == "Ktjr8CeiCLU_"

    def test_bare_path_and_host_without_scheme(self):
        assert extract_token("/album/evolve/WjLSHKOMZ1Q_") == "WjLSHKOMZ1Q_"
        assert extract_token("www.jiosaavn.com/artist/imagine-dragons/xGMZ8ma4DpE_") == "xGMZ8ma4DpE_"

    def test_type_mismatch_returns_none(self):
        assert extract_token("https://www.jiosaavn.com/album/x/Y9", "song") is None

    def test_unparseable_links(self):
        assert parse_share_url("") is None
        assert parse_share_url("https://www.jiosaavn.com/") is None
        assert parse_share_url("https://www.jiosaavn.com/song") is None
        assert parse_share_url("https://www.jiosaavn.com/radio/x/Y9") is None

    def test_require_token_reports_found_type(self):
        with pytest.raises(ValidationError) as exc_info:
            require_token("https://www.jiosaavn.com/album/x/Y9", "song")

        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.context["found_type"] == "album"


class TestImageSources:
    """Test image resolution expansion"""

    def test_three_https_variants(self):
        images = create_image_sources("http://c.saavncdn.com/248/Evolve-150x150.jpg")

        assert [image.resolution for image in images] == ["50x50", "150x150", "500x500"]
        assert images[0].url == "https://c.saavncdn.com/248/Evolve-50x50.jpg"
        assert images[2].url == "https://c.saavncdn.com/248/Evolve-500x500.jpg"

    def test_500_marker_is_not_read_as_50(self):
        images = create_image_sources("https://c.saavncdn.com/a-500x500.jpg")
        assert images[1].url == "https://c.saavncdn.com/a-150x150.jpg"

    def test_url_without_marker(self):
        images = create_image_sources("http://c.saavncdn.com/a.jpg")
        assert len(images) == 3
        assert all(image.url == "https://c.saavncdn.com/a.jpg" for image in images)

    def test_empty_input(self):
        assert create_image_sources("") == ()
        assert create_image_sources(None) == ()
        assert create_image_sources(["x"]) == ()


class TestMediaUrls:
    """Test encrypted media URL handling"""

    def test_decrypt(self, encrypted_media_url, media_template):
        assert decrypt_media_url(encrypted_media_url) == media_template

    def test_five_bitrates(self, encrypted_media_url):
        links = create_download_links(encrypted_media_url)

        assert [link.bitrate for link in links] == ["12kbps", "48kbps", "96kbps", "160kbps", "320kbps"]
        assert links[0].url == "https://aac.saavncdn.com/815/abc123_12.mp4"
        assert links[4].url == "https://aac.saavncdn.com/815/abc123_320.mp4"

    def test_only_first_marker_replaced(self, encrypt):
        links = create_download_links(encrypt("https://aac.saavncdn.com/a_96/b_96.mp4"))
        assert links[4].url == "https://aac.saavncdn.com/a_320/b_96.mp4"

    def test_corrupt_input_yields_no_links(self, encrypted_media_url):
        assert create_download_links(encrypted_media_url[:-6]) == ()
        assert create_download_links("%%% not base64 %%%") == ()
        assert create_download_links("") == ()
        assert create_download_links(None) == ()


class TestCoercion:
    """Test loose-field coercion helpers"""

    def test_to_number(self):
        assert to_number("2019") == 2019
        assert isinstance(to_number("2019"), int)
        assert to_number("3.5") == 3.5
        assert to_number("") is None
        assert to_number("abc") is None
        assert to_number("nan") is None
        assert to_number(True) is None

    def test_parse_boolean(self):
        assert parse_boolean("1") is True
        assert parse_boolean("TRUE") is True
        assert parse_boolean("0") is False
        assert parse_boolean(None) is False
        assert parse_boolean(1) is True

    def test_safe_string(self):
        assert safe_string(12) == "12"
        assert safe_string(None) == ""
        assert safe_string(["a"]) == ""

    def test_extract_field_skips_empty(self):
        assert extract_field({"title": "", "name": "Arijit"}, "title", "name") == "Arijit"
        assert extract_field({"title": None}, "title") is None
        assert extract_field("not a dict", "title") is None

    def test_safe_list_map_skips_non_mappings(self):
        assert safe_list_map([{"a": 1}, "x", None, {"a": 2}], lambda item: item["a"]) == (1, 2)
        assert safe_list_map(None, lambda item: item) == ()

    def test_normalize_list(self):
        assert normalize_list([1], "songs") == [1]
        assert normalize_list({"songs": [1], "total": 3}, "songs") == [1]
        assert normalize_list("x", "songs") == []

    def test_remove_none(self):
        assert remove_none({"p": 1, "q": "x", "n": None}) == {"p": "1", "q": "x"}
