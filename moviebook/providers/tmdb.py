"""The Movie Database (TMDB) web services."""

import dataclasses
import json
import logging
from typing import Any, Optional, Sequence

import httpx

from moviebook.errors import DecodingError, MissingApiKeyError
from moviebook.loader import RequestLoader
from moviebook.models import (
    Artist, ArtistDetails, Movie, MovieCollection, MovieDetails,
    MovieGenre, MovieKeyword, Page, WatchProviders
)
from moviebook.providers import responses
from moviebook.providers.base import (
    ArtistWebService, DiscoverSection, MovieWebService, SearchWebService
)
from moviebook.providers.urls import UrlFactory

logger = logging.getLogger(__name__)


class TheMovieDbService:
    """Shared plumbing: URL building, loading and JSON parsing."""

    def __init__(
        self,
        loader: RequestLoader,
        api_key: str,
        language: str = "en-US",
        currency: str = "EUR"
    ):
        if not api_key:
            raise MissingApiKeyError(
                "TMDB API key not configured.\n"
                "Get one at https://www.themoviedb.org/settings/api and run "
                "'moviebook config --api-key <key>' or set MOVIEBOOK_TMDB_API_KEY."
            )
        self.loader = loader
        self.urls = UrlFactory(api_key, language)
        self.currency = currency

    @property
    def name(self) -> str:
        return "TMDB"

    async def _get_json(self, url: str) -> dict[str, Any]:
        data = await self.loader.request(url)
        try:
            payload = json.loads(data)
        except ValueError as e:
            raise DecodingError(f"Invalid JSON from {url}: {e}") from e
        if not isinstance(payload, dict):
            raise DecodingError(f"Unexpected payload from {url}")
        return payload

    def _movie_details(self, data: Any) -> MovieDetails:
        return responses.decode_movie_details(data, self.currency)


class TheMovieDbMovieWebService(TheMovieDbService, MovieWebService):

    async def fetch_movie(self, movie_id: int) -> Movie:
        data = await self._get_json(self.urls.movie(movie_id))
        movie = responses.decode_movie(data, self.currency)

        if movie.collection is not None:
            try:
                collection = await self.fetch_movie_collection(movie.collection.id)
                movie = dataclasses.replace(movie, collection=collection)
            except (httpx.HTTPError, DecodingError) as e:
                logger.debug("Collection for movie %s unavailable: %s", movie_id, e)

        try:
            watch = await self.fetch_watch_providers(movie_id)
            movie = dataclasses.replace(movie, watch=watch)
        except (httpx.HTTPError, DecodingError) as e:
            logger.debug("Watch providers for movie %s unavailable: %s", movie_id, e)

        return movie

    async def fetch_movie_collection(self, collection_id: int) -> MovieCollection:
        data = await self._get_json(self.urls.movie_collection(collection_id))
        return responses.decode_collection(data, self.currency)

    async def fetch_watch_providers(self, movie_id: int) -> WatchProviders:
        data = await self._get_json(self.urls.watch_providers(movie_id))
        return responses.decode_watch_providers(data)

    async def fetch_movie_keywords(self, movie_id: int) -> list[MovieKeyword]:
        data = await self._get_json(self.urls.movie_keywords(movie_id))
        return responses.decode_keywords(data)

    async def fetch_movie_cast(self, movie_id: int) -> list[ArtistDetails]:
        data = await self._get_json(self.urls.movie_credits(movie_id))
        return responses.decode_cast(data)

    async def fetch_movie_genres(self) -> list[MovieGenre]:
        data = await self._get_json(self.urls.movie_genres())
        return responses.decode_genres(data)

    async def fetch_popular(self, page: Optional[int] = None) -> Page[MovieDetails]:
        data = await self._get_json(self.urls.popular(page))
        return responses.decode_page(data, self._movie_details)

    async def fetch_upcoming(self, page: Optional[int] = None) -> Page[MovieDetails]:
        data = await self._get_json(self.urls.upcoming(page))
        return responses.decode_page(data, self._movie_details)

    async def fetch_discover(
        self,
        section: DiscoverSection,
        genres: Sequence[int] = (),
        page: Optional[int] = None
    ) -> Page[MovieDetails]:
        data = await self._get_json(self.urls.discover(section, genres, page))
        return responses.decode_page(data, self._movie_details)

    async def fetch_movies(
        self,
        keywords: Sequence[int] = (),
        genres: Sequence[int] = (),
        page: Optional[int] = None
    ) -> Page[MovieDetails]:
        data = await self._get_json(self.urls.movies(keywords, genres, page))
        return responses.decode_page(data, self._movie_details)


class TheMovieDbArtistWebService(TheMovieDbService, ArtistWebService):

    async def fetch_artist(self, artist_id: int) -> Artist:
        data = await self._get_json(self.urls.artist(artist_id))
        return responses.decode_artist(data, self.currency)

    async def fetch_popular(self, page: Optional[int] = None) -> Page[ArtistDetails]:
        data = await self._get_json(self.urls.popular_artists(page))
        return responses.decode_page(data, responses.decode_artist_details)


class TheMovieDbSearchWebService(TheMovieDbService, SearchWebService):

    async def fetch_movies(self, keyword: str, page: Optional[int] = None) -> Page[MovieDetails]:
        data = await self._get_json(self.urls.search_movie(keyword, page))
        return responses.decode_page(data, self._movie_details)

    async def fetch_artists(self, keyword: str, page: Optional[int] = None) -> Page[ArtistDetails]:
        data = await self._get_json(self.urls.search_person(keyword, page))
        return responses.decode_page(data, responses.decode_artist_details)
