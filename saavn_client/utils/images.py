"""
Image resolution variants.

Upstream image URLs embed their resolution in the path
(".../abc-150x150.jpg"). The CDN serves every canonical size under the same
path with only that marker changed.
"""

import re

from saavn_client.catalog.models import ImageSource

IMAGE_RESOLUTIONS = ("50x50", "150x150", "500x500")

# Longest markers first so "500x500" is never matched as "50x50"
_RESOLUTION_MARKER = re.compile(r"500x500|150x150|50x50")
_INSECURE_SCHEME = re.compile(r"^http://")


def create_image_sources(image_url: object) -> tuple[ImageSource, ...]:
    """
    Expand one image URL into the three canonical resolutions.

    Args:
        image_url: Base image URL from the API.

    Returns:
        Three ImageSource values (50x50, 150x150, 500x500), all https, or
        () for empty or non-string input. A URL without any marker still
        yields three entries with the URL unchanged apart from the scheme.

    Example:
        create_image_sources("http://x/abc/150x150.jpg")[2].url
        # "https://x/abc/500x500.jpg"
    """
    if not isinstance(image_url, str) or not image_url:
        return ()

    return tuple(
        ImageSource(
            resolution=resolution,
            url=_INSECURE_SCHEME.sub(
                "https://", _RESOLUTION_MARKER.sub(resolution, image_url, count=1)
            ),
        )
        for resolution in IMAGE_RESOLUTIONS
    )
