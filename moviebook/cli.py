"""Moviebook CLI - Main command-line interface."""

import asyncio
import logging
from datetime import date
from typing import Awaitable, Callable, Optional, TypeVar

import click
import httpx
import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from moviebook import __version__
from moviebook.cache import PersistentCache
from moviebook.config import get_cache_dir, get_config, save_config
from moviebook.deeplink import Deeplink
from moviebook.discover import (
    DiscoverPopularArtists, DiscoverRelated, ReferenceMovie, SearchDataProvider, SearchScope
)
from moviebook.errors import (
    DecodingError, DeeplinkError, MissingApiKeyError, NotificationsNotAuthorized, WebServiceError
)
from moviebook.favourites import Favourites
from moviebook.loader import ImageLoader, RequestLoader
from moviebook.models import Artist, ArtistDetails, Movie, MovieDetails, Page
from moviebook.notifications import FileNotificationCenter, Notifications, NotificationsDelegate
from moviebook.providers import (
    DiscoverSection, artist_web_service, movie_web_service, search_web_service
)
from moviebook.spotlight import SearchIndex
from moviebook.storage import Storage
from moviebook.watchlist import (
    Suggestion, Watchlist, WatchlistItem, WatchlistItemIdentifier, WatchlistSorting, sort_entries
)
from moviebook.watchnext import WatchNextStorage, timeline

console = Console()
logger = logging.getLogger("moviebook")

T = TypeVar("T")


# ===== SESSION HELPERS =====

def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
    )


def make_loader() -> RequestLoader:
    config = get_config()
    return RequestLoader(
        persistent_cache=PersistentCache(get_cache_dir() / "requests"),
        log_requests=config.log_requests,
    )


def run_async(coro):
    """Run an async function."""
    return asyncio.run(coro)


async def _session(fetch: Callable[[RequestLoader], Awaitable[T]]) -> T:
    async with make_loader() as loader:
        try:
            return await fetch(loader)
        except (httpx.HTTPError, DecodingError) as e:
            raise WebServiceError.failed_to_load(e, retry=lambda: load(fetch)) from e


def load(fetch: Callable[[RequestLoader], Awaitable[T]]) -> T:
    """Run `fetch` with a fresh loader, offering a retry when loading fails."""
    try:
        return run_async(_session(fetch))
    except MissingApiKeyError as e:
        raise click.ClickException(str(e))
    except WebServiceError as error:
        logger.debug("Load failed: %r", error.underlying_error)
        console.print(Panel(f"[red]An error occurred[/]\n[dim]{error}[/]", border_style="red"))
        if Confirm.ask("Retry?", default=True):
            return error.retry()
        raise click.Abort()


def open_stores() -> tuple[Storage, Watchlist, Favourites]:
    storage = Storage()
    return storage, storage.load_watchlist(), storage.load_favourites()


class ConsoleNotificationsDelegate(NotificationsDelegate):

    async def should_request_authorization(self) -> bool:
        return Confirm.ask("Get notified when movies on your watchlist are released?", default=True)

    def should_authorize_notifications(self) -> None:
        console.print("[yellow]Notifications are disabled. Enable them with 'moviebook notifications enable'.[/]")


def make_notifications() -> Notifications:
    return Notifications(FileNotificationCenter(), delegate=ConsoleNotificationsDelegate())


# ===== DISPLAY HELPERS =====

def _year(movie: MovieDetails) -> str:
    return str(movie.release.year)


def display_movies_table(movies: list[MovieDetails], title: str = "Movies"):
    """Display a table of movies."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="cyan")
    table.add_column("Year", style="green", width=6)
    table.add_column("Rating", style="yellow", width=7)
    table.add_column("ID", style="dim", width=10)

    for i, movie in enumerate(movies, 1):
        table.add_row(str(i), movie.title, _year(movie), f"★ {movie.rating.value:.1f}", str(movie.id))

    console.print(table)


def display_artists_table(artists: list[ArtistDetails], title: str = "Artists"):
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan")
    table.add_column("Popularity", style="yellow", width=10)
    table.add_column("ID", style="dim", width=10)

    for i, artist in enumerate(artists, 1):
        table.add_row(str(i), artist.name, f"{artist.popularity:.1f}", str(artist.id))

    console.print(table)


def display_page_footer(next_page: Optional[int]):
    if next_page is not None:
        console.print(f"[dim]More results with --page {next_page}[/]")


def display_movie(movie: Movie, watchlist: Watchlist):
    """Display movie details."""
    config = get_config()
    details = movie.details
    region = config.effective_region
    release = details.localised_release_date(region)

    subtitle = f"[dim]{release.isoformat()}[/] • [yellow]★ {details.rating.value:.1f}[/]"
    if details.runtime:
        subtitle += f" • [dim]{int(details.runtime.total_seconds() // 60)} min[/]"
    console.print(Panel(f"[bold cyan]{details.title}[/]", subtitle=subtitle))

    if movie.genres:
        console.print("[magenta]" + ", ".join(genre.name for genre in movie.genres) + "[/]")

    entry = watchlist.item(WatchlistItemIdentifier.movie(movie.id))
    if entry is not None:
        label = "watched" if entry.is_watched else "to watch"
        console.print(f"[green]On your watchlist ({label})[/]")

    if details.overview:
        overview = details.overview
        console.print(f"\n[dim]{overview[:500]}{'...' if len(overview) > 500 else ''}[/]\n")

    if details.budget and details.budget.value:
        console.print(f"Budget: {details.budget.value:,} {details.budget.currency_code}")
    if details.revenue and details.revenue.value:
        console.print(f"Revenue: {details.revenue.value:,} {details.revenue.currency_code}")

    providers = movie.watch.collection(region) if region else None
    if providers is not None and not providers.is_empty:
        for label, items in (("Stream", providers.free), ("Rent", providers.rent), ("Buy", providers.buy)):
            if items:
                console.print(f"{label}: " + ", ".join(provider.name for provider in items))

    for video in movie.details.media.videos[:3]:
        console.print(f"[dim]{video.name}: {video.url}[/]")

    if movie.cast:
        table = Table(title=f"Cast ({len(movie.cast)})", show_header=True)
        table.add_column("Name", style="cyan")
        table.add_column("Character", style="green")
        table.add_column("ID", style="dim", width=10)
        for artist in movie.cast[:15]:
            table.add_row(artist.name, artist.character or "", str(artist.id))
        console.print(table)

    if movie.collection and movie.collection.movies:
        display_movies_table(movie.collection.movies, title=movie.collection.name)


def display_artist(artist: Artist, favourites: Favourites):
    details = artist.details
    lifespan = ""
    if details.birthday:
        lifespan = details.birthday.isoformat()
        if details.deathday:
            lifespan += f" - {details.deathday.isoformat()}"

    pinned = " [green](pinned)[/]" if favourites.is_pinned(artist.id) else ""
    console.print(Panel(f"[bold cyan]{details.name}[/]{pinned}", subtitle=f"[dim]{lifespan}[/]"))

    if details.biography:
        console.print(f"\n[dim]{details.biography[:500]}{'...' if len(details.biography) > 500 else ''}[/]\n")

    upcoming = artist.upcoming()
    if upcoming:
        display_movies_table(upcoming, title="Upcoming")
    display_movies_table(artist.filmography[:25], title=f"Filmography ({len(artist.filmography)})")


# ===== CLI COMMANDS =====

@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs")
@click.pass_context
def main(ctx, version, verbose):
    """Moviebook - Keep track of the movies you want to watch."""
    setup_logging(verbose)

    if version:
        console.print(f"Moviebook v{__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.option("--page", "-p", type=click.IntRange(min=1), default=None, help="Page to load")
def popular(page: Optional[int]):
    """Show popular movies."""
    async def fetch(loader):
        return await movie_web_service(loader).fetch_popular(page)

    result = load(fetch)
    display_movies_table(result.results, "Popular")
    display_page_footer(result.next_page)


@main.command()
@click.option("--page", "-p", type=click.IntRange(min=1), default=None, help="Page to load")
def upcoming(page: Optional[int]):
    """Show upcoming movies."""
    async def fetch(loader):
        return await movie_web_service(loader).fetch_upcoming(page)

    result = load(fetch)
    display_movies_table(result.results, "Upcoming")
    display_page_footer(result.next_page)


@main.command()
@click.argument("section", type=click.Choice([section.value for section in DiscoverSection]))
@click.option("--genre", "-g", "genres", type=int, multiple=True, help="Genre id filter (repeatable)")
@click.option("--page", "-p", type=click.IntRange(min=1), default=None, help="Page to load")
def discover(section: str, genres: tuple[int, ...], page: Optional[int]):
    """Browse a curated section of movies."""
    discover_section = DiscoverSection(section)

    async def fetch(loader):
        return await movie_web_service(loader).fetch_discover(discover_section, genres, page)

    result = load(fetch)
    display_movies_table(result.results, discover_section.label)
    display_page_footer(result.next_page)


@main.command()
def genres():
    """List movie genres."""
    async def fetch(loader):
        return await movie_web_service(loader).fetch_movie_genres()

    table = Table(title="Genres")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    for genre in load(fetch):
        table.add_row(str(genre.id), genre.name)
    console.print(table)


@main.command()
@click.argument("query", required=False, default="")
@click.option("--artists", "-a", is_flag=True, help="Search artists instead of movies")
@click.option("--page", "-p", type=click.IntRange(min=1), default=None, help="Page to load")
@click.option("--interactive/--no-interactive", "-i", default=True, help="Select a result to open it")
@click.pass_context
def search(ctx, query: str, artists: bool, page: Optional[int], interactive: bool):
    """Search movies or artists."""
    if not query:
        query = questionary.text("Search query:").ask() or ""

    scope = SearchScope.ARTIST if artists else SearchScope.MOVIE

    async def fetch(loader):
        return await SearchDataProvider(search_web_service(loader), scope, query).fetch(page)

    console.print(f"[dim]Searching {scope.value}s for '{query}'...[/]")
    result = load(fetch)

    if not result.results:
        console.print("[yellow]No results found[/]")
        return

    if not interactive:
        if scope == SearchScope.ARTIST:
            display_artists_table(result.results, f"Artists matching '{query}'")
        else:
            display_movies_table(result.results, f"Movies matching '{query}'")
        display_page_footer(result.next_page)
        return

    choices = [
        questionary.Choice(
            title=item.name if scope == SearchScope.ARTIST else f"{item.title} ({_year(item)})",
            value=item.id
        )
        for item in result.results[:20]
    ]
    choices.append(questionary.Choice(title="[Cancel]", value=None))

    selected = questionary.select("Select a result (↑↓ arrows):", choices=choices).ask()
    if selected is None:
        return

    if scope == SearchScope.ARTIST:
        ctx.invoke(artist, artist_id=selected)
    else:
        ctx.invoke(movie, movie_id=selected)


@main.command()
@click.argument("movie_id", type=int)
def movie(movie_id: int):
    """Show movie details."""
    async def fetch(loader):
        return await movie_web_service(loader).fetch_movie(movie_id)

    result = load(fetch)
    _, watchlist, _ = open_stores()
    SearchIndex().index_movie(result)
    display_movie(result, watchlist)


@main.command()
@click.argument("artist_id", type=int)
def artist(artist_id: int):
    """Show artist details and filmography."""
    async def fetch(loader):
        return await artist_web_service(loader).fetch_artist(artist_id)

    result = load(fetch)
    _, _, favourites = open_stores()
    SearchIndex().index_artist(result)
    display_artist(result, favourites)


@main.command()
@click.option("--page", "-p", type=click.IntRange(min=1), default=None, help="Page to load")
def related(page: Optional[int]):
    """Movies related to the ones on your watchlist."""
    _, watchlist, _ = open_stores()
    references = [ReferenceMovie.from_watchlist_item(item) for item in watchlist.items]

    async def fetch(loader):
        provider = DiscoverRelated(movie_web_service(loader))
        await provider.update(references)
        return await provider.fetch(page)

    result = load(fetch)
    if not result.results:
        console.print("[yellow]Add movies to your watchlist to get suggestions[/]")
        return
    display_movies_table(result.results, "Related to your watchlist")
    display_page_footer(result.next_page)


@main.command("popular-artists")
@click.option("--page", "-p", type=click.IntRange(min=1), default=None, help="Page to load")
@click.option("--worldwide", is_flag=True, help="Use TMDB popularity instead of your watchlist")
def popular_artists(page: Optional[int], worldwide: bool):
    """Artists appearing most often in your watchlist."""
    _, watchlist, _ = open_stores()

    async def fetch(loader):
        if worldwide or not len(watchlist):
            return await artist_web_service(loader).fetch_popular(page)
        provider = DiscoverPopularArtists(movie_web_service(loader))
        await provider.update(watchlist.items)
        # pages of the watchlist ranking start at 0
        result = await provider.fetch(page - 1 if page else None)
        next_page = result.next_page + 1 if result.next_page is not None else None
        return Page(results=result.results, next_page=next_page)

    result = load(fetch)
    display_artists_table(result.results, "Popular artists")
    display_page_footer(result.next_page)


@main.command("open")
@click.argument("url")
@click.pass_context
def open_cmd(ctx, url: str):
    """Open a moviebook.org link."""
    try:
        deeplink = Deeplink.parse(url)
    except DeeplinkError as e:
        raise click.BadParameter(str(e), param_hint="URL")

    logger.debug("Opening %s", deeplink)
    if deeplink.screen == "watchlist":
        ctx.invoke(watchlist_list)
    elif deeplink.screen == "search":
        ctx.invoke(search, query=deeplink.query or "")
    elif deeplink.screen == "movie":
        ctx.invoke(movie, movie_id=deeplink.identifier)
    else:
        ctx.invoke(artist, artist_id=deeplink.identifier)


@main.command()
@click.argument("text")
def spotlight(text: str):
    """Search movies and artists you have already opened."""
    items = SearchIndex().search(text)
    if not items:
        console.print("[yellow]Nothing indexed matches[/]")
        return

    table = Table(title=f"Matching '{text}'")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green", width=8)
    table.add_column("Link", style="dim")
    for item in items:
        table.add_row(item.display_name, item.domain_identifier, item.unique_identifier)
    console.print(table)


# ===== WATCHLIST =====

@main.group("watchlist", invoke_without_command=True)
@click.pass_context
def watchlist_group(ctx):
    """Manage your watchlist."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(watchlist_list)


@watchlist_group.command("list")
@click.option("--sort", "-s", "sorting", type=click.Choice([s.value for s in WatchlistSorting]), default=None)
@click.option("--watched", is_flag=True, help="Show watched movies instead")
def watchlist_list(sorting: Optional[str] = None, watched: bool = False):
    """List movies on your watchlist."""
    config = get_config()
    _, watchlist, _ = open_stores()
    items = watchlist.watched() if watched else watchlist.to_watch()

    if not items:
        console.print("[yellow]Nothing here yet. Add movies with 'moviebook watchlist add <id>'[/]")
        return

    async def fetch(loader):
        service = movie_web_service(loader)
        movies = await asyncio.gather(*(service.fetch_movie(item.id.id) for item in items))
        return list(zip(movies, items))

    entries = sort_entries(load(fetch), WatchlistSorting(sorting or config.default_sorting), config.effective_region)

    table = Table(title="Watched" if watched else "To watch", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="cyan")
    table.add_column("Release", style="green", width=12)
    table.add_column("Rating", style="yellow", width=7)
    table.add_column("Added", style="dim", width=12)
    table.add_column("ID", style="dim", width=10)

    today = date.today()
    for movie_entry, item in entries:
        release = movie_entry.details.localised_release_date(config.effective_region)
        release_text = release.isoformat() if release <= today else f"[bold]{release.isoformat()}[/]"
        rating = item.rating if item.rating is not None else movie_entry.details.rating.value
        table.add_row(
            movie_entry.details.title, release_text, f"★ {rating:.1f}",
            item.date.date().isoformat(), str(movie_entry.id)
        )

    console.print(table)


def _sync_notifications(item: WatchlistItem, removed: bool = False) -> None:
    """Keep the release notification of a watchlist movie up to date."""
    fetches = item.is_to_watch and not removed
    if fetches and not get_config().effective_api_key:
        logger.debug("No API key, release notification for %s not updated", item.id.id)
        return

    notifications = make_notifications()

    async def sync(loader):
        if not fetches:
            await notifications.remove_item(item)
        else:
            await notifications.schedule_item(item, movie_web_service(loader))

    try:
        load(sync)
    except NotificationsNotAuthorized as e:
        logger.info("Release notification for %s not scheduled: %s", item.id.id, e)
    except click.Abort:
        console.print("[dim]Release notification not updated[/]")


@watchlist_group.command("add")
@click.argument("movie_id", type=int)
@click.option("--suggested-by", default=None, help="Who suggested the movie")
@click.option("--comment", default=None, help="What they said about it")
def watchlist_add(movie_id: int, suggested_by: Optional[str], comment: Optional[str]):
    """Add a movie to watch."""
    _, watchlist, _ = open_stores()
    suggestion = Suggestion(owner=suggested_by, comment=comment) if suggested_by else None
    item = watchlist.add_to_watch(movie_id, suggestion=suggestion)
    console.print(f"[green]✓ Added {movie_id} to your watchlist[/]")
    _sync_notifications(item)


@watchlist_group.command("watched")
@click.argument("movie_id", type=int)
@click.option("--rating", "-r", type=click.FloatRange(0, 10), default=None, help="Your rating out of 10")
def watchlist_watched(movie_id: int, rating: Optional[float]):
    """Mark a movie as watched."""
    _, watchlist, _ = open_stores()
    item = watchlist.mark_watched(movie_id, rating=rating)
    console.print(f"[green]✓ Marked {movie_id} as watched[/]")
    _sync_notifications(item)


@watchlist_group.command("remove")
@click.argument("movie_id", type=int)
def watchlist_remove(movie_id: int):
    """Remove a movie from your watchlist."""
    _, watchlist, _ = open_stores()
    removed = watchlist.remove(WatchlistItemIdentifier.movie(movie_id))
    if removed is None:
        console.print("[yellow]Not on your watchlist[/]")
        return
    console.print("[green]✓ Removed from watchlist[/]")
    _sync_notifications(removed, removed=True)


# ===== FAVOURITES =====

@main.group(invoke_without_command=True)
@click.pass_context
def favourites(ctx):
    """Manage pinned artists."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(favourites_list)


@favourites.command("list")
def favourites_list():
    """List pinned artists."""
    _, _, store = open_stores()
    artist_ids = store.artist_ids()
    if not artist_ids:
        console.print("[yellow]No pinned artists yet. Pin some with 'moviebook favourites pin <id>'[/]")
        return

    async def fetch(loader):
        service = artist_web_service(loader)
        return await asyncio.gather(*(service.fetch_artist(artist_id) for artist_id in artist_ids))

    artists = load(fetch)
    display_artists_table([a.details for a in artists], f"Pinned artists ({len(artists)})")


@favourites.command("pin")
@click.argument("artist_id", type=int)
def favourites_pin(artist_id: int):
    """Pin an artist."""
    _, _, store = open_stores()
    store.pin(artist_id)
    console.print(f"[green]✓ Pinned {artist_id}[/]")


@favourites.command("remove")
@click.argument("artist_id", type=int)
def favourites_remove(artist_id: int):
    """Unpin an artist."""
    _, _, store = open_stores()
    if store.unpin(artist_id) is not None:
        console.print("[green]✓ Removed from favourites[/]")
    else:
        console.print("[yellow]Not found in favourites[/]")


# ===== NOTIFICATIONS =====

@main.group(invoke_without_command=True)
@click.pass_context
def notifications(ctx):
    """Release notifications."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(notifications_list)


@notifications.command("list")
def notifications_list():
    """Show pending and due notifications."""
    center = FileNotificationCenter()
    pending = run_async(center.pending_requests())
    if not pending:
        console.print("[yellow]No pending notifications[/]")
        return

    today = date.today()
    table = Table(title="Release notifications")
    table.add_column("Title", style="cyan")
    table.add_column("Date", style="green", width=12)
    table.add_column("Link", style="dim")
    for request in sorted(pending, key=lambda r: r.trigger_date):
        title = request.title
        if request.trigger_date <= today:
            title = f"[bold]{title}[/] {request.subtitle}"
        table.add_row(title, request.trigger_date.isoformat(), request.category)
    console.print(table)


@notifications.command("schedule")
def notifications_schedule():
    """Schedule notifications for every movie on your watchlist."""
    _, watchlist, _ = open_stores()
    scheduler = make_notifications()

    async def schedule(loader):
        await scheduler.schedule(watchlist, movie_web_service(loader))
        scheduler.stop()

    load(schedule)
    console.print("[green]✓ Notifications updated[/]")


@notifications.command("enable")
def notifications_enable():
    """Allow release notifications."""
    run_async(FileNotificationCenter().request_authorization())
    console.print("[green]✓ Notifications enabled[/]")


# ===== WATCH NEXT =====

@main.group("watch-next", invoke_without_command=True)
@click.pass_context
def watch_next(ctx):
    """Movies to watch next."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(watch_next_show)


@watch_next.command("update")
def watch_next_update():
    """Refresh the watch next list from your watchlist."""
    _, watchlist, _ = open_stores()

    async def update(loader):
        async with ImageLoader(persistent_cache=PersistentCache(get_cache_dir() / "images")) as images:
            storage = WatchNextStorage(movie_web_service(loader), image_loader=images)
            return await storage.set_items(watchlist.items)

    items = load(update)
    console.print(f"[green]✓ Stored {len(items)} movies to watch next[/]")


@watch_next.command("show")
@click.option("--offset", type=int, default=0, help="Start from the n-th movie")
def watch_next_show(offset: int = 0):
    """Show the hourly watch next timeline."""
    entries = timeline(WatchNextStorage.get_items(), offset=offset)
    if not entries:
        console.print("[yellow]Nothing to watch next. Run 'moviebook watch-next update'[/]")
        return

    table = Table(title="Watch next")
    table.add_column("At", style="green", width=6)
    table.add_column("Title", style="cyan")
    table.add_column("Link", style="dim")
    for entry in entries:
        link = entry.item.deeplink.url if entry.item.deeplink else ""
        table.add_row(entry.date.strftime("%H:%M"), entry.item.title or "", link)
    console.print(table)


# ===== CONFIG =====

@main.command()
@click.option("--show", is_flag=True, help="Show current configuration")
@click.option("--api-key", help="Set the TMDB API key")
@click.option("--language", help="Set the content language (e.g. en-US)")
@click.option("--region", help="Set the region for release dates and watch providers")
@click.option("--currency", help="Set the currency code for budgets")
@click.option("--sort", "sorting", type=click.Choice([s.value for s in WatchlistSorting]), help="Set default watchlist sorting")
@click.option("--log-requests/--no-log-requests", default=None, help="Log every HTTP request")
@click.option("--clean-cache", is_flag=True, help="Remove cached responses from older releases")
def config(
    show: bool,
    api_key: Optional[str],
    language: Optional[str],
    region: Optional[str],
    currency: Optional[str],
    sorting: Optional[str],
    log_requests: Optional[bool],
    clean_cache: bool
):
    """View or edit configuration."""
    config = get_config()

    if clean_cache:
        removed = PersistentCache.clean_legacy(get_cache_dir())
        console.print(f"[green]✓ Removed {removed} legacy cache files[/]")
        return

    changes = (api_key, language, region, currency, sorting, log_requests)
    if show or all(value is None for value in changes):
        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("API Key", "(set)" if config.effective_api_key else "(none)")
        table.add_row("Language", config.language)
        table.add_row("Region", config.effective_region or "(none)")
        table.add_row("Currency", config.currency)
        table.add_row("Default Sorting", WatchlistSorting(config.default_sorting).label)
        table.add_row("Log Requests", "yes" if config.log_requests else "no")

        console.print(table)
        return

    if api_key:
        config.api_key = api_key
    if language:
        config.language = language
    if region is not None:
        config.region = region.upper()
    if currency:
        config.currency = currency.upper()
    if sorting:
        config.default_sorting = sorting
    if log_requests is not None:
        config.log_requests = log_requests

    save_config(config)
    console.print("[green]✓ Configuration saved[/]")


if __name__ == "__main__":
    main()
