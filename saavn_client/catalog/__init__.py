"""
Catalog domain: models, normalization, pagination and validity checks.

Only the models are re-exported here; import parsers and payload helpers
from their modules:

    from saavn_client.catalog.parsers import parse_song
    from saavn_client.catalog.pagination import build_paginated
"""

from saavn_client.catalog.models import (
    Album,
    AlbumPreview,
    AlbumRef,
    ApiFailure,
    ApiResult,
    ApiSuccess,
    Artist,
    ArtistPreview,
    ArtistRoutes,
    ArtistsGroup,
    BioSection,
    DownloadLink,
    ImageSource,
    Paginated,
    Playlist,
    PlaylistPreview,
    SearchAllResult,
    Song,
    SongPreview,
    TrendingContent,
)

__all__ = [
    # Leaf values
    "ImageSource",
    "DownloadLink",
    # Entities
    "Song",
    "Album",
    "AlbumRef",
    "Artist",
    "ArtistRoutes",
    "BioSection",
    "Playlist",
    # Previews
    "SongPreview",
    "AlbumPreview",
    "ArtistPreview",
    "ArtistsGroup",
    "PlaylistPreview",
    # Aggregates
    "SearchAllResult",
    "TrendingContent",
    "Paginated",
    # Results
    "ApiResult",
    "ApiSuccess",
    "ApiFailure",
]
