"""Abstract web services for movie, artist and search content."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

from moviebook.models import (
    Artist, ArtistDetails, Movie, MovieCollection, MovieDetails,
    MovieGenre, MovieKeyword, Page, WatchProviders
)


class DiscoverSection(str, Enum):
    """Curated movie lists."""
    POPULAR = "popular"
    UPCOMING = "upcoming"
    TOP_RATED = "top_rated"
    NOW_PLAYING = "now_playing"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class MovieWebService(ABC):
    """Movie content."""

    @abstractmethod
    async def fetch_movie(self, movie_id: int) -> Movie:
        """Fetch a movie with its collection and watch providers."""
        ...

    @abstractmethod
    async def fetch_movie_collection(self, collection_id: int) -> MovieCollection:
        ...

    @abstractmethod
    async def fetch_watch_providers(self, movie_id: int) -> WatchProviders:
        ...

    @abstractmethod
    async def fetch_movie_keywords(self, movie_id: int) -> list[MovieKeyword]:
        ...

    @abstractmethod
    async def fetch_movie_cast(self, movie_id: int) -> list[ArtistDetails]:
        ...

    @abstractmethod
    async def fetch_movie_genres(self) -> list[MovieGenre]:
        ...

    @abstractmethod
    async def fetch_popular(self, page: Optional[int] = None) -> Page[MovieDetails]:
        ...

    @abstractmethod
    async def fetch_upcoming(self, page: Optional[int] = None) -> Page[MovieDetails]:
        ...

    @abstractmethod
    async def fetch_discover(
        self,
        section: DiscoverSection,
        genres: Sequence[int] = (),
        page: Optional[int] = None
    ) -> Page[MovieDetails]:
        """Fetch a page of a curated section, optionally narrowed to genres."""
        ...

    @abstractmethod
    async def fetch_movies(
        self,
        keywords: Sequence[int] = (),
        genres: Sequence[int] = (),
        page: Optional[int] = None
    ) -> Page[MovieDetails]:
        """Fetch popular movies matching any of the keywords and genres."""
        ...


class ArtistWebService(ABC):
    """Artist content."""

    @abstractmethod
    async def fetch_artist(self, artist_id: int) -> Artist:
        ...

    @abstractmethod
    async def fetch_popular(self, page: Optional[int] = None) -> Page[ArtistDetails]:
        ...


class SearchWebService(ABC):
    """Keyword search."""

    @abstractmethod
    async def fetch_movies(self, keyword: str, page: Optional[int] = None) -> Page[MovieDetails]:
        ...

    @abstractmethod
    async def fetch_artists(self, keyword: str, page: Optional[int] = None) -> Page[ArtistDetails]:
        ...
