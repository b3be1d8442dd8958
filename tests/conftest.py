"""Test configuration and fixtures"""

import base64
import tempfile
from pathlib import Path

import pytest
from Crypto.Cipher import DES
from Crypto.Util.Padding import pad

from saavn_client.api.transport import TransportResponse
from saavn_client.core.config import ClientConfig
from saavn_client.utils.media import MEDIA_URL_KEY

MEDIA_TEMPLATE = "https://aac.saavncdn.com/815/abc123_96.mp4"


def encrypt_media_url(url: str) -> str:
    """Produce an encrypted_media_url the way the upstream does."""
    cipher = DES.new(MEDIA_URL_KEY, DES.MODE_ECB)
    return base64.b64encode(cipher.encrypt(pad(url.encode("utf-8"), DES.block_size))).decode("ascii")


class FakeTransport:
    """
    Transport double answering by upstream call name.

    Values in responses may be a body, a TransportResponse, or an exception
    to raise. Every call is recorded as (params, timeout).
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    async def __call__(self, url, params, headers, timeout):
        self.calls.append((dict(params), timeout))
        answer = self.responses.get(params["__call"])
        if isinstance(answer, BaseException):
            raise answer
        if isinstance(answer, TransportResponse):
            return answer
        return TransportResponse(data=answer, status=200, ok=True)

    def params_for(self, call_name):
        return [params for params, _ in self.calls if params["__call"] == call_name]


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def fake_transport():
    """Empty fake transport; tests fill in responses"""
    return FakeTransport()


@pytest.fixture
def client_config(fake_transport):
    """ClientConfig routed through the fake transport"""
    return ClientConfig(transport=fake_transport)


@pytest.fixture
def encrypt():
    """The upstream media URL encryption, for building fixtures"""
    return encrypt_media_url


@pytest.fixture
def media_template():
    return MEDIA_TEMPLATE


@pytest.fixture
def encrypted_media_url():
    """Encrypted media URL decrypting to MEDIA_TEMPLATE"""
    return encrypt_media_url(MEDIA_TEMPLATE)


@pytest.fixture
def raw_song(encrypted_media_url):
    """Raw song as sent by song.getDetails"""
    return {
        "id": "K1P9Eu3B",
        "title": "Believer",
        "type": "song",
        "perma_url": "https://www.jiosaavn.com/song/believer/KgEpWkBmQFk",
        "image": "http://c.saavncdn.com/248/Evolve-English-2017-150x150.jpg",
        "language": "english",
        "year": "2017",
        "play_count": "431276431",
        "explicit_content": "0",
        "more_info": {
            "album_id": "10496527",
            "album": "Evolve",
            "album_url": "https://www.jiosaavn.com/album/evolve/WjLSHKOMZ1Q_",
            "duration": "204",
            "label": "KIDinaKORNER/Interscope Records",
            "copyright_text": "(P) 2017 KIDinaKORNER/Interscope Records",
            "has_lyrics": "true",
            "lyrics_id": "K1P9Eu3B",
            "release_date": "2017-06-23",
            "encrypted_media_url": encrypted_media_url,
            "artistMap": {
                "primary_artists": [
                    {
                        "id": "568707",
                        "name": "Imagine Dragons",
                        "perma_url": "https://www.jiosaavn.com/artist/imagine-dragons-songs/xGMZ8ma4DpE_",
                        "image": "http://c.saavncdn.com/artists/Imagine_Dragons_150x150.jpg",
                    }
                ],
                "featured_artists": [],
                "artists": [
                    {"id": "568707", "name": "Imagine Dragons"},
                    {"id": "1016", "name": "Justin Tranter"},
                ],
            },
        },
    }


@pytest.fixture
def raw_album(raw_song):
    """Raw album as sent by content.getAlbumDetails"""
    return {
        "id": "10496527",
        "title": "Evolve",
        "perma_url": "https://www.jiosaavn.com/album/evolve/WjLSHKOMZ1Q_",
        "image": "http://c.saavncdn.com/248/Evolve-English-2017-150x150.jpg",
        "language": "english",
        "year": "2017",
        "header_desc": "Third studio album",
        "list_count": "2",
        "explicit_content": "0",
        "list": [raw_song, "not-a-song", {"id": "x2", "title": "Thunder", "perma_url": ""}],
        "more_info": {
            "song_count": "2",
            "copyright_text": "(P) 2017",
            "artistMap": raw_song["more_info"]["artistMap"],
        },
    }


@pytest.fixture
def raw_artist(raw_song, raw_album):
    """Raw artist page as sent by artist.getArtistPageDetails"""
    return {
        "artistId": "568707",
        "name": "Imagine Dragons",
        "image": "http://c.saavncdn.com/artists/Imagine_Dragons_150x150.jpg",
        "follower_count": "1200000",
        "fan_count": "999",
        "isVerified": True,
        "dominantLanguage": "english",
        "dominantType": "music",
        "availableLanguages": ["english", "", 7],
        "isRadioPresent": "true",
        "bio": '[{"text": "Formed in Las Vegas.", "title": "Origins", "sequence": 2},'
               ' {"text": "American pop rock band.", "title": "Intro", "sequence": 1}]',
        "dob": "",
        "fb": "https://www.facebook.com/ImagineDragons",
        "twitter": "Imaginedragons",
        "wiki": "https://en.wikipedia.org/wiki/Imagine_Dragons",
        "urls": {
            "overview": "https://www.jiosaavn.com/artist/imagine-dragons-songs/xGMZ8ma4DpE_",
            "songs": "https://www.jiosaavn.com/artist/imagine-dragons-songs/xGMZ8ma4DpE_/songs",
        },
        "topSongs": [raw_song],
        "topAlbums": {"albums": [raw_album], "total": 12},
        "singles": [],
        "similarArtists": [{"id": "459320", "name": "OneRepublic"}],
    }


@pytest.fixture
def raw_playlist(raw_song):
    """Raw playlist as sent by playlist.getDetails"""
    return {
        "id": "1134543272",
        "title": "Top Hits",
        "perma_url": "https://www.jiosaavn.com/featured/top-hits/8MT-vrbtSjc_",
        "image": "http://c.saavncdn.com/editorial/TopHits_150x150.jpg",
        "header_desc": "The biggest songs right now",
        "list_count": "50",
        "list": [raw_song],
        "more_info": {
            "follower_count": "250000",
            "artists": [{"id": "568707", "name": "Imagine Dragons"}],
        },
    }
