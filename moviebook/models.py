"""Data models for Moviebook, shaped after The Movie Database payloads."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Generic, Literal, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Rating:
    """Average vote on a fixed scale."""
    value: float
    quota: float = 10.0

    @property
    def percentage(self) -> float:
        return self.value / self.quota


@dataclass(frozen=True)
class MoneyValue:
    """Amount with its ISO 4217 currency code."""
    value: int
    currency_code: str


@dataclass(frozen=True)
class MovieGenre:
    id: int
    name: str


@dataclass(frozen=True)
class MovieKeyword:
    id: int
    name: str


@dataclass(frozen=True)
class MovieVideo:
    """Official video hosted on YouTube."""
    id: str
    name: str
    type: Literal["teaser", "trailer", "behind_the_scenes"]
    youtube_key: str

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.youtube_key}"


@dataclass(frozen=True)
class MovieMedia:
    """Poster, backdrop and video links."""
    poster_url: Optional[str] = None
    poster_preview_url: Optional[str] = None
    poster_thumbnail_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    backdrop_preview_url: Optional[str] = None
    videos: list[MovieVideo] = field(default_factory=list)


@dataclass(frozen=True)
class MovieProduction:
    companies: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WatchProvider:
    name: str
    icon_url: str


@dataclass(frozen=True)
class WatchProviderCollection:
    """Providers for a single region, by offer type."""
    free: list[WatchProvider] = field(default_factory=list)
    rent: list[WatchProvider] = field(default_factory=list)
    buy: list[WatchProvider] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.free and not self.rent and not self.buy


@dataclass(frozen=True)
class WatchProviders:
    """Watch providers keyed by ISO 3166-1 region."""
    collections: dict[str, WatchProviderCollection] = field(default_factory=dict)

    @property
    def regions(self) -> list[str]:
        return sorted(self.collections)

    @property
    def is_empty(self) -> bool:
        return all(collection.is_empty for collection in self.collections.values())

    def collection(self, region: str) -> Optional[WatchProviderCollection]:
        return self.collections.get(region)


@dataclass(frozen=True)
class MovieDetails:
    """Summary of a movie as returned by list endpoints."""
    id: int
    title: str
    release: date
    rating: Rating
    media: MovieMedia = field(default_factory=MovieMedia)
    localised_releases: dict[str, date] = field(default_factory=dict)
    runtime: Optional[timedelta] = None
    overview: Optional[str] = None
    budget: Optional[MoneyValue] = None
    revenue: Optional[MoneyValue] = None

    def localised_release_date(self, region: str | None = None) -> date:
        """Theatrical release in the given region, falling back to the primary release."""
        if region:
            return self.localised_releases.get(region, self.release)
        return self.release

    def is_released(self, today: date | None = None) -> bool:
        return self.release <= (today or date.today())


@dataclass(frozen=True)
class MovieCollection:
    """A saga; its movies are kept in release order."""
    id: int
    name: str
    movies: Optional[list[MovieDetails]] = None

    def __post_init__(self):
        if self.movies is not None:
            object.__setattr__(self, "movies", sorted(self.movies, key=lambda m: m.release))


@dataclass(frozen=True)
class ArtistDetails:
    id: int
    name: str
    popularity: float = 0.0
    birthday: Optional[date] = None
    deathday: Optional[date] = None
    image_preview_url: Optional[str] = None
    image_original_url: Optional[str] = None
    biography: Optional[str] = None
    character: Optional[str] = None


@dataclass(frozen=True)
class Movie:
    """Full movie details."""
    id: int
    details: MovieDetails
    genres: list[MovieGenre] = field(default_factory=list)
    cast: list[ArtistDetails] = field(default_factory=list)
    production: MovieProduction = field(default_factory=MovieProduction)
    watch: WatchProviders = field(default_factory=WatchProviders)
    collection: Optional[MovieCollection] = None
    keywords: list[MovieKeyword] = field(default_factory=list)


@dataclass(frozen=True)
class Artist:
    """Full artist details; filmography is newest first."""
    id: int
    details: ArtistDetails
    filmography: list[MovieDetails] = field(default_factory=list)

    def __post_init__(self):
        object.__setattr__(
            self, "filmography", sorted(self.filmography, key=lambda m: m.release, reverse=True)
        )

    def most_recent_release(self, today: date | None = None) -> Optional[MovieDetails]:
        """Newest movie in the filmography that is already out."""
        for movie in self.filmography:
            if movie.is_released(today):
                return movie
        return None

    def upcoming(self, today: date | None = None) -> list[MovieDetails]:
        return [movie for movie in self.filmography if not movie.is_released(today)]


@dataclass(frozen=True)
class Page(Generic[T]):
    """A page of results and the page to request next, if any."""
    results: list[T]
    next_page: Optional[int] = None
