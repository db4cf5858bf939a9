"""Movies to watch next, shared with widgets through a JSON file."""

import asyncio
import base64
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Optional

import httpx

from moviebook.config import get_shared_dir
from moviebook.deeplink import Deeplink
from moviebook.errors import DecodingError
from moviebook.loader import ImageLoader
from moviebook.providers.base import DiscoverSection, MovieWebService
from moviebook.sequences import rotate_left
from moviebook.watchlist import WatchlistItem

logger = logging.getLogger(__name__)

STORED_FILE_NAME = "watch-next-items.json"


@dataclass(frozen=True)
class WatchNextItem:
    title: Optional[str] = None
    image: Optional[bytes] = None
    deeplink: Optional[Deeplink] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "image": base64.b64encode(self.image).decode("ascii") if self.image is not None else None,
            "deeplink": self.deeplink.url if self.deeplink is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatchNextItem":
        image = data.get("image")
        deeplink = data.get("deeplink")
        return cls(
            title=data.get("title"),
            image=base64.b64decode(image, validate=True) if image is not None else None,
            deeplink=Deeplink.from_url(deeplink) if deeplink is not None else None,
        )


@dataclass(frozen=True)
class WatchNextEntry:
    date: datetime
    item: WatchNextItem


class WatchNextStorage:
    """Computes the watch-next list and writes it where widgets can read it."""

    def __init__(
        self,
        web_service: MovieWebService,
        image_loader: Optional[ImageLoader] = None,
        directory: Optional[Path] = None
    ):
        self.web_service = web_service
        self.image_loader = image_loader or ImageLoader()
        self.directory = directory

    @staticmethod
    def path(directory: Optional[Path] = None) -> Path:
        return (directory or get_shared_dir()) / STORED_FILE_NAME

    async def set_items(self, items: list[WatchlistItem]) -> list[WatchNextItem]:
        """
        Store the to-watch movies, in watchlist order.

        With nothing to watch, now playing movies are used instead. Movies
        that fail to load are left out.
        """
        movie_ids = [item.id.id for item in items if item.is_to_watch]

        if not movie_ids:
            try:
                now_playing = await self.web_service.fetch_discover(DiscoverSection.NOW_PLAYING)
                movie_ids = [movie.id for movie in now_playing.results]
            except (httpx.HTTPError, DecodingError) as e:
                logger.warning("Now playing movies unavailable: %s", e)

        loaded = await asyncio.gather(
            *(self._load_item(movie_id) for movie_id in movie_ids),
            return_exceptions=True
        )

        watch_next_items = []
        for movie_id, result in zip(movie_ids, loaded):
            if isinstance(result, (httpx.HTTPError, DecodingError)):
                logger.debug("Skipping movie %s: %s", movie_id, result)
            elif isinstance(result, BaseException):
                raise result
            else:
                watch_next_items.append(result)

        path = self.path(self.directory)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([item.to_dict() for item in watch_next_items], f)

        return watch_next_items

    async def _load_item(self, movie_id: int) -> WatchNextItem:
        movie = await self.web_service.fetch_movie(movie_id)
        poster_url = movie.details.media.poster_thumbnail_url
        image = await self.image_loader.fetch(poster_url) if poster_url else None
        return WatchNextItem(title=movie.details.title, image=image, deeplink=Deeplink.movie(movie.id))

    @classmethod
    def get_items(cls, directory: Optional[Path] = None) -> list[WatchNextItem]:
        """Stored items, or an empty list if they cannot be read."""
        path = cls.path(directory)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [WatchNextItem.from_dict(entry) for entry in data]
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.debug("No watch next items at %s: %s", path, e)
            return []


def timeline(
    items: list[WatchNextItem],
    start: Optional[datetime] = None,
    offset: int = 0
) -> list[WatchNextEntry]:
    """One entry per item at hourly intervals, starting from the `offset`-th item."""
    start = start or datetime.now()
    return [
        WatchNextEntry(date=start + timedelta(hours=hour), item=item)
        for hour, item in enumerate(rotate_left(items, offset))
    ]
