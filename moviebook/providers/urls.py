"""URL builders for The Movie Database data and image APIs."""

import calendar
import urllib.parse
from datetime import date
from typing import Literal, Optional, Sequence

from moviebook.providers.base import DiscoverSection

API_URL = "https://api.themoviedb.org"
API_VERSION = 3
IMAGE_URL = "https://image.tmdb.org"

ImageKind = Literal["poster", "backdrop", "avatar", "logo"]

IMAGE_SIZES: dict[str, dict[str, str]] = {
    "poster": {"thumbnail": "w185", "preview": "w780", "original": "original"},
    "backdrop": {"preview": "w1280", "original": "original"},
    "avatar": {"preview": "h632", "original": "original"},
    "logo": {"preview": "w154"},
}

# Documentary and TV movie genres.
TOP_RATED_EXCLUDED_GENRES = "99,10770"


def image_url(kind: ImageKind, path: Optional[str], size: str) -> Optional[str]:
    """Build an image URL; returns None when the payload has no image path."""
    if not path:
        return None
    try:
        size_code = IMAGE_SIZES[kind][size]
    except KeyError:
        raise ValueError(f"Unsupported {kind} size: {size}") from None
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{IMAGE_URL}/t/p/{size_code}{path}"


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class UrlFactory:
    """Builds versioned API URLs carrying the API key and language."""

    def __init__(self, api_key: str, language: str = "en-US"):
        self.api_key = api_key
        self.language = language

    def make_url(
        self,
        path: str,
        query: Optional[list[tuple[str, str]]] = None,
        page: Optional[int] = None
    ) -> str:
        params = [("api_key", self.api_key), ("language", self.language)]
        params.extend(query or [])
        if page is not None:
            params.append(("page", str(page)))
        return f"{API_URL}/{API_VERSION}/{path}?{urllib.parse.urlencode(params)}"

    # Movie

    def movie(self, movie_id: int) -> str:
        return self.make_url(f"movie/{movie_id}", [
            ("append_to_response", "credits,videos,release_dates")
        ])

    def movie_collection(self, collection_id: int) -> str:
        return self.make_url(f"collection/{collection_id}")

    def watch_providers(self, movie_id: int) -> str:
        return self.make_url(f"movie/{movie_id}/watch/providers")

    def movie_keywords(self, movie_id: int) -> str:
        return self.make_url(f"movie/{movie_id}/keywords")

    def movie_credits(self, movie_id: int) -> str:
        return self.make_url(f"movie/{movie_id}/credits")

    def movie_genres(self) -> str:
        return self.make_url("genre/movie/list")

    def popular(self, page: Optional[int] = None) -> str:
        return self.make_url("movie/popular", page=page)

    def upcoming(self, page: Optional[int] = None) -> str:
        return self.make_url("movie/upcoming", page=page)

    # Discover

    def discover(
        self,
        section: DiscoverSection,
        genres: Sequence[int] = (),
        page: Optional[int] = None,
        today: Optional[date] = None
    ) -> str:
        today = today or date.today()
        query: list[tuple[str, str]] = []
        if genres:
            query.append(("with_genres", ",".join(str(g) for g in genres)))

        if section == DiscoverSection.POPULAR:
            query.append(("sort_by", "popularity.desc"))
        elif section == DiscoverSection.TOP_RATED:
            query.append(("sort_by", "vote_average.desc"))
            query.append(("without_genres", TOP_RATED_EXCLUDED_GENRES))
            query.append(("vote_count.gte", "200"))
        elif section == DiscoverSection.UPCOMING:
            query.extend(self._release_window(today, add_months(today, 5)))
        elif section == DiscoverSection.NOW_PLAYING:
            query.extend(self._release_window(add_months(today, -2), add_months(today, 1)))

        return self.make_url("discover/movie", query, page=page)

    def movies(
        self,
        keywords: Sequence[int] = (),
        genres: Sequence[int] = (),
        page: Optional[int] = None
    ) -> str:
        query = [("sort_by", "popularity.desc")]
        if keywords:
            query.append(("with_keywords", "|".join(str(k) for k in keywords)))
        if genres:
            query.append(("with_genres", "|".join(str(g) for g in genres)))
        return self.make_url("discover/movie", query, page=page)

    @staticmethod
    def _release_window(start: date, end: date) -> list[tuple[str, str]]:
        return [
            ("sort_by", "popularity.desc"),
            ("with_release_type", "2|3"),
            ("primary_release_date.gte", start.isoformat()),
            ("primary_release_date.lte", end.isoformat()),
        ]

    # Artist

    def artist(self, artist_id: int) -> str:
        return self.make_url(f"person/{artist_id}", [("append_to_response", "credits")])

    def popular_artists(self, page: Optional[int] = None) -> str:
        return self.make_url("person/popular", page=page)

    # Search

    def search_movie(self, keyword: str, page: Optional[int] = None) -> str:
        return self.make_url("search/movie", [("query", keyword)], page=page)

    def search_person(self, keyword: str, page: Optional[int] = None) -> str:
        return self.make_url("search/person", [("query", keyword)], page=page)
