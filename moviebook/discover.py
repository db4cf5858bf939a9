"""Explore content: search results, movies related to the watchlist, popular artists."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence, TypeVar, Union

import httpx

from moviebook.errors import DecodingError
from moviebook.models import ArtistDetails, MovieDetails, Page
from moviebook.providers.base import MovieWebService, SearchWebService
from moviebook.sequences import get_most_popular
from moviebook.watchlist import WatchedInfo, WatchlistItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_RELATED_RESULTS = 10
FILTER_SIZE = 3
ARTISTS_PER_PAGE = 24


class SearchScope(str, Enum):
    MOVIE = "movie"
    ARTIST = "artist"


class SearchDataProvider:
    """Paged search results for a query in the current scope."""

    def __init__(self, web_service: SearchWebService, scope: SearchScope = SearchScope.MOVIE, query: str = ""):
        self.web_service = web_service
        self.scope = scope
        self.query = query

    async def fetch(self, page: Optional[int] = None) -> Page[Union[MovieDetails, ArtistDetails]]:
        if not self.query.strip():
            return Page(results=[], next_page=None)
        if self.scope == SearchScope.ARTIST:
            return await self.web_service.fetch_artists(self.query, page)
        return await self.web_service.fetch_movies(self.query, page)


# Related movies


class Weight(Enum):
    """How much a watchlist movie counts towards recommendations."""
    EXCEPTIONAL = 4
    IMPORTANT = 2
    NEUTRAL = 1
    UNWANTED = 0


@dataclass(frozen=True)
class ReferenceMovie:
    id: int
    weight: Weight = Weight.NEUTRAL

    @classmethod
    def from_watchlist_item(cls, item: WatchlistItem) -> "ReferenceMovie":
        rating = item.state.rating if isinstance(item.state, WatchedInfo) else None
        if rating is None:
            weight = Weight.NEUTRAL
        elif rating >= 9:
            weight = Weight.EXCEPTIONAL
        elif rating >= 7:
            weight = Weight.IMPORTANT
        elif rating < 6:
            weight = Weight.UNWANTED
        else:
            weight = Weight.NEUTRAL
        return cls(id=item.id.id, weight=weight)


class DiscoverRelated:
    """
    Movies sharing the most common keywords and genres of the watchlist.

    Highly rated movies count several times, badly rated ones are ignored.
    """

    def __init__(self, web_service: MovieWebService):
        self.web_service = web_service
        self.reference_movies: list[ReferenceMovie] = []
        self.keywords_filter: list[int] = []
        self.genres_filter: list[int] = []

    async def update(self, reference_movies: Sequence[ReferenceMovie], genres_filter: Sequence[int] = ()) -> None:
        self.reference_movies = list(reference_movies)

        keywords = await self._collect(self._keyword_ids)
        self.keywords_filter = get_most_popular(keywords, top_cap=FILTER_SIZE)

        if genres_filter:
            self.genres_filter = list(genres_filter)
        else:
            genres = await self._collect(self._genre_ids)
            self.genres_filter = get_most_popular(genres, top_cap=FILTER_SIZE)

        logger.debug("Related filters: keywords=%s genres=%s", self.keywords_filter, self.genres_filter)

    async def _keyword_ids(self, movie_id: int) -> list[int]:
        return [keyword.id for keyword in await self.web_service.fetch_movie_keywords(movie_id)]

    async def _genre_ids(self, movie_id: int) -> list[int]:
        movie = await self.web_service.fetch_movie(movie_id)
        return [genre.id for genre in movie.genres]

    async def _collect(self, provider: Callable[[int], Awaitable[list[T]]]) -> list[T]:
        results = await asyncio.gather(
            *(self._weighted(reference, provider) for reference in self.reference_movies)
        )
        return [item for items in results for item in items]

    async def _weighted(self, reference: ReferenceMovie, provider: Callable[[int], Awaitable[list[T]]]) -> list[T]:
        if reference.weight == Weight.UNWANTED:
            return []
        try:
            items = await provider(reference.id)
        except (httpx.HTTPError, DecodingError) as e:
            logger.debug("Ignoring movie %s for related content: %s", reference.id, e)
            return []
        return items * reference.weight.value

    async def fetch(self, page: Optional[int] = None) -> Page[MovieDetails]:
        """Fetch pages until there are enough movies not already on the watchlist."""
        if not self.keywords_filter and not self.genres_filter:
            return Page(results=[], next_page=None)

        excluded = {reference.id for reference in self.reference_movies}
        results: list[MovieDetails] = []
        next_page = page
        while True:
            response = await self.web_service.fetch_movies(
                keywords=self.keywords_filter,
                genres=self.genres_filter,
                page=next_page
            )
            results.extend(movie for movie in response.results if movie.id not in excluded)
            next_page = response.next_page
            if len(results) >= MIN_RELATED_RESULTS or next_page is None:
                break

        return Page(results=results, next_page=next_page)


# Popular artists


class DiscoverPopularArtists:
    """Artists appearing most often in the casts of watchlist movies."""

    def __init__(self, web_service: MovieWebService, per_page: int = ARTISTS_PER_PAGE):
        self.web_service = web_service
        self.per_page = per_page
        self.all_artists: list[ArtistDetails] = []

    async def update(self, watchlist_items: Sequence[WatchlistItem]) -> None:
        casts = await asyncio.gather(
            *(self._cast(item.id.id) for item in watchlist_items)
        )
        self.all_artists = [artist for cast in casts for artist in cast]

    async def _cast(self, movie_id: int) -> list[ArtistDetails]:
        try:
            return await self.web_service.fetch_movie_cast(movie_id)
        except (httpx.HTTPError, DecodingError) as e:
            logger.debug("Cast for movie %s unavailable: %s", movie_id, e)
            return []

    async def fetch(self, page: Optional[int] = None) -> Page[ArtistDetails]:
        current_page = page or 0
        bottom_cap = current_page * self.per_page
        top_cap = bottom_cap + self.per_page

        # Counted by id, the character differs between movies.
        details: dict[int, ArtistDetails] = {}
        for artist in self.all_artists:
            details.setdefault(artist.id, artist)
        ids = get_most_popular([artist.id for artist in self.all_artists], bottom_cap=bottom_cap, top_cap=top_cap)

        next_page = current_page + 1 if len(self.all_artists) > top_cap else None
        return Page(results=[details[artist_id] for artist_id in ids], next_page=next_page)
