"""Decoders turning The Movie Database JSON payloads into Moviebook models."""

import logging
from datetime import date, timedelta
from typing import Any, Callable, Optional, TypeVar

from moviebook.errors import DecodingError
from moviebook.models import (
    Artist, ArtistDetails, MoneyValue, Movie, MovieCollection, MovieDetails,
    MovieGenre, MovieKeyword, MovieMedia, MovieProduction, MovieVideo, Page,
    Rating, WatchProvider, WatchProviderCollection, WatchProviders
)
from moviebook.providers.urls import image_url

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Release types from /movie/{id}/release_dates.
THEATRICAL_LIMITED = 2
THEATRICAL = 3

VIDEO_TYPES = {
    "Trailer": "trailer",
    "Teaser": "teaser",
    "Behind the Scenes": "behind_the_scenes",
}

_DECODE_ERRORS = (DecodingError, KeyError, TypeError, ValueError)


def _require(data: dict[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise DecodingError(f"Missing '{key}'")
    return value


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Parse 'YYYY-MM-DD' or an ISO timestamp; empty values give None."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise DecodingError(f"Invalid date: {value!r}") from None


def decode_list(items: Optional[list[Any]], decoder: Callable[[Any], T]) -> list[T]:
    """Decode every item, skipping the ones that do not decode."""
    results: list[T] = []
    for item in items or []:
        try:
            results.append(decoder(item))
        except _DECODE_ERRORS as e:
            logger.debug("Skipping undecodable item: %s", e)
    return results


def decode_page(data: dict[str, Any], decoder: Callable[[Any], T]) -> Page[T]:
    """Decode a paginated list; the next page exists while page < total_pages."""
    if not isinstance(data.get("results"), list):
        raise DecodingError("Missing 'results'")

    results = decode_list(data["results"], decoder)
    page = data.get("page")
    total_pages = data.get("total_pages")
    next_page = page + 1 if page is not None and total_pages is not None and page < total_pages else None
    return Page(results=results, next_page=next_page)


# Movie


def decode_video(data: dict[str, Any]) -> MovieVideo:
    if not data.get("official"):
        raise DecodingError("Non official video")
    if data.get("site") != "YouTube":
        raise DecodingError(f"Site not supported: {data.get('site')}")

    video_type = VIDEO_TYPES.get(data.get("type", ""))
    if video_type is None:
        raise DecodingError(f"Type not supported: {data.get('type')}")

    return MovieVideo(
        id=_require(data, "id"),
        name=_require(data, "name"),
        type=video_type,
        youtube_key=_require(data, "key"),
    )


def decode_media(data: dict[str, Any]) -> MovieMedia:
    poster = data.get("poster_path")
    backdrop = data.get("backdrop_path")
    videos = data.get("videos") or {}

    return MovieMedia(
        poster_url=image_url("poster", poster, "original"),
        poster_preview_url=image_url("poster", poster, "preview"),
        poster_thumbnail_url=image_url("poster", poster, "thumbnail"),
        backdrop_url=image_url("backdrop", backdrop, "original"),
        backdrop_preview_url=image_url("backdrop", backdrop, "preview"),
        videos=decode_list(videos.get("results"), decode_video),
    )


def decode_localised_release(data: dict[str, Any]) -> tuple[str, date]:
    """First theatrical release of a region."""
    region = _require(data, "iso_3166_1")
    for release in data.get("release_dates") or []:
        if release.get("type") in (THEATRICAL, THEATRICAL_LIMITED):
            release_date = _parse_date(release.get("release_date"))
            if release_date is not None:
                return region, release_date
    raise DecodingError(f"Missing theatrical release for {region}")


def decode_movie_details(data: dict[str, Any], currency: str = "EUR") -> MovieDetails:
    release = _parse_date(data.get("release_date"))
    if release is None:
        raise DecodingError("Missing 'release_date'")

    release_dates = data.get("release_dates") or {}
    localised_releases = dict(decode_list(release_dates.get("results"), decode_localised_release))

    minutes = data.get("runtime")
    budget = data.get("budget")
    revenue = data.get("revenue")

    return MovieDetails(
        id=_require(data, "id"),
        title=_require(data, "title"),
        release=release,
        rating=Rating(value=float(data.get("vote_average") or 0.0), quota=10.0),
        media=decode_media(data),
        localised_releases=localised_releases,
        runtime=timedelta(minutes=minutes) if minutes else None,
        overview=data.get("overview") or None,
        budget=MoneyValue(budget, currency) if budget is not None else None,
        revenue=MoneyValue(revenue, currency) if revenue is not None else None,
    )


def decode_genre(data: dict[str, Any]) -> MovieGenre:
    return MovieGenre(id=_require(data, "id"), name=_require(data, "name"))


def decode_genres(data: dict[str, Any]) -> list[MovieGenre]:
    return decode_list(data.get("genres"), decode_genre)


def decode_keyword(data: dict[str, Any]) -> MovieKeyword:
    return MovieKeyword(id=_require(data, "id"), name=_require(data, "name"))


def decode_keywords(data: dict[str, Any]) -> list[MovieKeyword]:
    return decode_list(data.get("keywords"), decode_keyword)


def decode_cast(data: dict[str, Any]) -> list[ArtistDetails]:
    return decode_list(data.get("cast"), decode_artist_details)


def decode_collection(data: dict[str, Any], currency: str = "EUR") -> MovieCollection:
    parts = data.get("parts")
    return MovieCollection(
        id=_require(data, "id"),
        name=_require(data, "name"),
        movies=decode_list(parts, lambda item: decode_movie_details(item, currency))
        if parts is not None else None,
    )


def decode_movie(data: dict[str, Any], currency: str = "EUR") -> Movie:
    details = decode_movie_details(data, currency)
    collection = data.get("belongs_to_collection")

    return Movie(
        id=details.id,
        details=details,
        genres=decode_genres(data),
        cast=decode_cast(data.get("credits") or {}),
        production=MovieProduction(
            companies=[c["name"] for c in data.get("production_companies") or [] if c.get("name")]
        ),
        watch=WatchProviders(),
        collection=decode_collection(collection, currency) if collection else None,
        keywords=decode_keywords(data.get("keywords") or {}),
    )


# Watch providers


def decode_watch_provider(data: dict[str, Any]) -> WatchProvider:
    icon = image_url("logo", _require(data, "logo_path"), "preview")
    return WatchProvider(name=_require(data, "provider_name"), icon_url=icon)


def decode_watch_providers(data: dict[str, Any]) -> WatchProviders:
    collections = {}
    for region, offers in (data.get("results") or {}).items():
        collections[region] = WatchProviderCollection(
            free=decode_list(offers.get("flatrate"), decode_watch_provider),
            rent=decode_list(offers.get("rent"), decode_watch_provider),
            buy=decode_list(offers.get("buy"), decode_watch_provider),
        )
    return WatchProviders(collections=collections)


# Artist


def decode_artist_details(data: dict[str, Any]) -> ArtistDetails:
    profile = data.get("profile_path")
    return ArtistDetails(
        id=_require(data, "id"),
        name=_require(data, "name"),
        popularity=float(data.get("popularity") or 0.0),
        birthday=_parse_date(data.get("birthday")),
        deathday=_parse_date(data.get("deathday")),
        image_preview_url=image_url("avatar", profile, "preview"),
        image_original_url=image_url("avatar", profile, "original"),
        biography=data.get("biography") or None,
        character=data.get("character") or None,
    )


def decode_artist(data: dict[str, Any], currency: str = "EUR") -> Artist:
    details = decode_artist_details(data)
    credits = data.get("credits") or {}
    return Artist(
        id=details.id,
        details=details,
        filmography=decode_list(credits.get("cast"), lambda item: decode_movie_details(item, currency)),
    )
