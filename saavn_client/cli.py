"""
Command-line interface for saavn-client.

Every command runs one client operation and prints its result as JSON on
stdout. The exit code is 0 on success and 1 when the operation returned a
failure, so the CLI composes with jq and shell scripts.

Commands:
    saavn search {all,songs,albums,artists,playlists} <query>
    saavn song <id> [<id> ...]        Full songs with download links
    saavn album <id>
    saavn artist <id>
    saavn artist-songs <id>           Paginated artist songs
    saavn artist-albums <id>          Paginated artist albums
    saavn playlist <id>
    saavn link <share-url>            Resolve any song/album/artist/playlist link
    saavn suggest <song-id>           Recommendations for a song
    saavn trending

Configuration:
    Options are read from saavn.yaml in the current directory (optional),
    then from SAAVN_* environment variables or a .env file, then from the
    command-line flags below.
"""

import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Awaitable, Callable

import click

from saavn_client import __version__
from saavn_client.api.client import SaavnClient
from saavn_client.catalog.models import ApiResult
from saavn_client.core.config import Config, load_config
from saavn_client.core.exceptions import ConfigError
from saavn_client.core.logger import get_logger, setup_logging, shutdown_logging
from saavn_client.utils.tokens import parse_share_url

logger = get_logger(__name__)


def _emit(result: ApiResult, indent: int | None) -> None:
    click.echo(json.dumps(result.to_dict(), indent=indent, ensure_ascii=False))
    if not result.success:
        sys.exit(1)


def _run(ctx: click.Context, operation: Callable[[SaavnClient], Awaitable[ApiResult]]) -> None:
    """Run one client operation on a fresh client and print its result."""
    config: Config = ctx.obj["config"]
    logger.debug(f"Running '{ctx.info_name}' against {config.client.base_url}")

    async def runner() -> ApiResult:
        async with SaavnClient(config.client) as client:
            return await operation(client)

    _emit(asyncio.run(runner()), ctx.obj["indent"])


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<saavn.yaml>",
    help="Configuration file (default: ./saavn.yaml if present)"
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Request timeout in seconds"
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Console log level"
)
@click.option(
    "--compact",
    is_flag=True,
    help="Print JSON on a single line"
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colored log output"
)
@click.version_option(__version__, prog_name="saavn-client")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    timeout: float | None,
    log_level: str | None,
    compact: bool,
    no_color: bool,
) -> None:
    """
    Query the JioSaavn catalog from the command line.

    \b
    EXAMPLES:
        saavn search songs "believer" --limit 5
        saavn link "https://www.jiosaavn.com/album/evolve/..."
        saavn suggest K1P9Eu3B --limit 5 --compact
    """
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(f"Configuration error: {e.message}") from e

    client_config = config.client
    if timeout is not None:
        client_config = replace(client_config, timeout=timeout)
    if ctx.obj.get("transport") is not None:
        client_config = replace(client_config, transport=ctx.obj["transport"])
    ctx.obj["config"] = replace(config, client=client_config)
    ctx.obj["indent"] = None if compact else 2

    setup_logging(
        level=log_level or config.logging.level,
        log_file=config.logging.file,
        error_log_file=config.logging.error_file,
        colored=not no_color,
    )
    ctx.call_on_close(shutdown_logging)


@cli.command()
@click.argument("kind", type=click.Choice(["all", "songs", "albums", "artists", "playlists"]))
@click.argument("query")
@click.option("--page", type=int, default=1, show_default=True, help="Page number, passed through unchanged")
@click.option("--limit", type=int, default=10, show_default=True, help="Results per page")
@click.pass_context
def search(ctx: click.Context, kind: str, query: str, page: int, limit: int) -> None:
    """Search the catalog."""
    def operation(client: SaavnClient) -> Awaitable[ApiResult]:
        if kind == "all":
            return client.search_all(query)
        method = getattr(client, f"search_{kind}")
        return method(query, page=page, limit=limit)

    _run(ctx, operation)


@cli.command()
@click.argument("song_ids", nargs=-1, required=True)
@click.pass_context
def song(ctx: click.Context, song_ids: tuple[str, ...]) -> None:
    """Fetch full songs by id."""
    _run(ctx, lambda client: client.get_songs_by_id(song_ids))


@cli.command()
@click.argument("album_id")
@click.pass_context
def album(ctx: click.Context, album_id: str) -> None:
    """Fetch an album by id."""
    _run(ctx, lambda client: client.get_album_by_id(album_id))


@cli.command()
@click.argument("artist_id")
@click.option("--songs", "song_count", type=int, default=10, show_default=True, help="Top songs to include")
@click.option("--albums", "album_count", type=int, default=10, show_default=True, help="Top albums to include")
@click.pass_context
def artist(ctx: click.Context, artist_id: str, song_count: int, album_count: int) -> None:
    """Fetch an artist page by id."""
    _run(
        ctx,
        lambda client: client.get_artist_by_id(artist_id, song_count=song_count, album_count=album_count),
    )


_SORT_BY = click.Choice(["popularity", "latest", "alphabetical"])
_SORT_ORDER = click.Choice(["asc", "desc"])


@cli.command("artist-songs")
@click.argument("artist_id")
@click.option("--page", type=int, default=0, show_default=True, help="Page number (0-based)")
@click.option("--sort-by", type=_SORT_BY, default="popularity", show_default=True)
@click.option("--sort-order", type=_SORT_ORDER, default="desc", show_default=True)
@click.pass_context
def artist_songs(ctx: click.Context, artist_id: str, page: int, sort_by: str, sort_order: str) -> None:
    """List an artist's songs."""
    _run(
        ctx,
        lambda client: client.get_artist_songs(artist_id, page=page, sort_by=sort_by, sort_order=sort_order),
    )


@cli.command("artist-albums")
@click.argument("artist_id")
@click.option("--page", type=int, default=0, show_default=True, help="Page number (0-based)")
@click.option("--sort-by", type=_SORT_BY, default="popularity", show_default=True)
@click.option("--sort-order", type=_SORT_ORDER, default="desc", show_default=True)
@click.pass_context
def artist_albums(ctx: click.Context, artist_id: str, page: int, sort_by: str, sort_order: str) -> None:
    """List an artist's albums."""
    _run(
        ctx,
        lambda client: client.get_artist_albums(artist_id, page=page, sort_by=sort_by, sort_order=sort_order),
    )


@cli.command()
@click.argument("playlist_id")
@click.option("--page", type=int, default=0, show_default=True, help="Track page (0-based)")
@click.option("--limit", type=int, default=10, show_default=True, help="Tracks per page")
@click.pass_context
def playlist(ctx: click.Context, playlist_id: str, page: int, limit: int) -> None:
    """Fetch a playlist by id."""
    _run(ctx, lambda client: client.get_playlist_by_id(playlist_id, page=page, limit=limit))


@cli.command()
@click.argument("url")
@click.pass_context
def link(ctx: click.Context, url: str) -> None:
    """Resolve a share link of any supported entity type."""
    extracted = parse_share_url(url)
    if extracted is None or extracted.type == "show":
        raise click.BadParameter(f"Not a song, album, artist or playlist link: {url}", param_hint="URL")

    handlers: dict[str, Callable[[SaavnClient], Awaitable[ApiResult]]] = {
        "song": lambda client: client.get_song_by_link(url),
        "album": lambda client: client.get_album_by_link(url),
        "artist": lambda client: client.get_artist_by_link(url),
        "playlist": lambda client: client.get_playlist_by_link(url),
    }
    _run(ctx, handlers[extracted.type])


@cli.command()
@click.argument("song_id")
@click.option("--limit", type=int, default=10, show_default=True, help="Maximum suggestions")
@click.pass_context
def suggest(ctx: click.Context, song_id: str, limit: int) -> None:
    """Recommend songs similar to a song."""
    _run(ctx, lambda client: client.get_song_suggestions(song_id, limit=limit))


@cli.command()
@click.option("--type", "entity_type", type=click.Choice(["song", "album", "playlist"]), default=None)
@click.option("--language", default=None, help="Language filter, e.g. hindi")
@click.pass_context
def trending(ctx: click.Context, entity_type: str | None, language: str | None) -> None:
    """Show trending songs, albums and playlists."""
    _run(ctx, lambda client: client.get_trending(entity_type=entity_type, language=language))


def main() -> None:
    """Entry point for the `saavn` console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
