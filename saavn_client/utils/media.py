"""
Media URL decryption.

Song payloads carry "encrypted_media_url": a base64 DES-ECB ciphertext
under a key shipped in the public web player. Decrypting it yields a
template URL for the 96 kbps stream ("..._96.mp4"); the other bitrates
live at the same URL with the marker swapped.

This is obfuscation rather than confidentiality, so the cipher and key are
kept exactly as the upstream uses them.
"""

import base64
import binascii

from Crypto.Cipher import DES
from Crypto.Util.Padding import unpad

from saavn_client.catalog.models import DownloadLink

MEDIA_URL_KEY = b"38346591"

DEFAULT_BITRATE_MARKER = "_96"

# (marker substituted into the template, public bitrate label)
BITRATES = (
    ("_12", "12kbps"),
    ("_48", "48kbps"),
    ("_96", "96kbps"),
    ("_160", "160kbps"),
    ("_320", "320kbps"),
)


def decrypt_media_url(encrypted_media_url: object) -> str | None:
    """
    Decrypt an encrypted_media_url into its template URL.

    Returns:
        The decrypted URL, or None for empty input, malformed base64,
        ciphertext of the wrong length, bad padding or non-UTF-8 output.
    """
    if not isinstance(encrypted_media_url, str) or not encrypted_media_url.strip():
        return None

    try:
        ciphertext = base64.b64decode(encrypted_media_url.strip())
        cipher = DES.new(MEDIA_URL_KEY, DES.MODE_ECB)
        plaintext = unpad(cipher.decrypt(ciphertext), DES.block_size)
        decrypted = plaintext.decode("utf-8")
    except (binascii.Error, ValueError, UnicodeDecodeError):
        return None

    return decrypted or None


def create_download_links(encrypted_media_url: object) -> tuple[DownloadLink, ...]:
    """
    Derive the five bitrate download links from an encrypted media URL.

    Never raises: any decryption failure yields (), which is also the
    normal result for previews that carry no encrypted URL.

    Example:
        links = create_download_links(song["more_info"]["encrypted_media_url"])
        [link.bitrate for link in links]
        # ["12kbps", "48kbps", "96kbps", "160kbps", "320kbps"]
    """
    template = decrypt_media_url(encrypted_media_url)
    if template is None:
        return ()

    return tuple(
        DownloadLink(bitrate=label, url=template.replace(DEFAULT_BITRATE_MARKER, marker, 1))
        for marker, label in BITRATES
    )
