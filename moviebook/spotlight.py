"""Local search index of visited movies and artists."""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from moviebook.config import get_data_dir
from moviebook.deeplink import Deeplink
from moviebook.models import Artist, Movie

logger = logging.getLogger(__name__)

# Key holding the indexed item's identifier in an activity payload.
ACTIVITY_IDENTIFIER_KEY = "searchable_item_identifier"


@dataclass(frozen=True)
class SearchableItem:
    unique_identifier: str
    domain_identifier: str
    display_name: str
    thumbnail_url: Optional[str] = None


def deeplink_from_activity(user_info: Mapping[str, Any]) -> Optional[Deeplink]:
    """Resolve an opened search result back to the screen it points at."""
    identifier = user_info.get(ACTIVITY_IDENTIFIER_KEY)
    if not isinstance(identifier, str):
        return None
    return Deeplink.from_url(identifier)


class SearchIndex:
    """Searchable items keyed by their deep link URL."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or get_data_dir() / "search-index.json"
        self._items: dict[str, SearchableItem] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            for entry in data:
                item = SearchableItem(**entry)
                self._items[item.unique_identifier] = item
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to load search index: %s", e)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([asdict(item) for item in self._items.values()], f, indent=2)

    def _index(self, item: SearchableItem) -> SearchableItem:
        self._items[item.unique_identifier] = item
        self._save()
        return item

    def index_movie(self, movie: Movie) -> SearchableItem:
        return self._index(SearchableItem(
            unique_identifier=Deeplink.movie(movie.id).url,
            domain_identifier="movie",
            display_name=movie.details.title,
            thumbnail_url=movie.details.media.poster_preview_url,
        ))

    def index_artist(self, artist: Artist) -> SearchableItem:
        return self._index(SearchableItem(
            unique_identifier=Deeplink.artist(artist.id).url,
            domain_identifier="artist",
            display_name=artist.details.name,
            thumbnail_url=artist.details.image_preview_url,
        ))

    def remove(self, deeplink: Deeplink) -> bool:
        if self._items.pop(deeplink.url, None) is None:
            return False
        self._save()
        return True

    def search(self, text: str) -> list[SearchableItem]:
        """Case-insensitive substring match on display names."""
        needle = text.casefold()
        return [item for item in self._items.values() if needle in item.display_name.casefold()]

    @property
    def items(self) -> list[SearchableItem]:
        return list(self._items.values())
