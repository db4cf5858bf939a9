"""Web services package."""

from moviebook.config import Config, get_config
from moviebook.loader import RequestLoader
from moviebook.providers.base import (
    ArtistWebService, DiscoverSection, MovieWebService, SearchWebService
)
from moviebook.providers.tmdb import (
    TheMovieDbArtistWebService, TheMovieDbMovieWebService, TheMovieDbSearchWebService
)

__all__ = [
    "ArtistWebService",
    "DiscoverSection",
    "MovieWebService",
    "SearchWebService",
    "TheMovieDbArtistWebService",
    "TheMovieDbMovieWebService",
    "TheMovieDbSearchWebService",
    "movie_web_service",
    "artist_web_service",
    "search_web_service",
]


def _settings(config: Config | None) -> dict:
    config = config or get_config()
    return {
        "api_key": config.effective_api_key,
        "language": config.language,
        "currency": config.currency,
    }


def movie_web_service(loader: RequestLoader, config: Config | None = None) -> MovieWebService:
    """Get the movie web service for the configured account."""
    return TheMovieDbMovieWebService(loader, **_settings(config))


def artist_web_service(loader: RequestLoader, config: Config | None = None) -> ArtistWebService:
    """Get the artist web service for the configured account."""
    return TheMovieDbArtistWebService(loader, **_settings(config))


def search_web_service(loader: RequestLoader, config: Config | None = None) -> SearchWebService:
    """Get the search web service for the configured account."""
    return TheMovieDbSearchWebService(loader, **_settings(config))
