"""JSON persistence for the watchlist and favourites."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from moviebook.config import get_data_dir
from moviebook.favourites import FavouriteItem, Favourites
from moviebook.sequences import remove_duplicates
from moviebook.watchlist import Watchlist, WatchlistItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

WATCHLIST_FILE = "watchlist.json"
FAVOURITES_FILE = "favourites.json"


class Storage:
    """
    Loads stores from disk and writes them back whenever they change.

    Items with duplicate identifiers are dropped on load, keeping the
    first one.
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = directory or get_data_dir()
        self._unsubscribers: list[Callable[[], None]] = []

    def _path(self, name: str) -> Path:
        return self.directory / name

    def _read(self, name: str, decode: Callable[[dict[str, Any]], T]) -> list[T]:
        path = self._path(name)
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read %s: %s", path, e)
            return []

        items = []
        for entry in data if isinstance(data, list) else []:
            try:
                items.append(decode(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping invalid entry in %s: %s", path, e)
        return remove_duplicates(items, matching=lambda a, b: a.id == b.id)

    def _write(self, name: str, items: list) -> None:
        path = self._path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        temporary = path.with_name(path.name + ".tmp")
        with open(temporary, "w", encoding="utf-8") as f:
            json.dump([item.to_dict() for item in items], f, indent=2)
        os.replace(temporary, path)

    def load_watchlist(self) -> Watchlist:
        watchlist = Watchlist(self._read(WATCHLIST_FILE, WatchlistItem.from_dict))
        self._unsubscribers.append(
            watchlist.items_did_change.subscribe(lambda items: self._write(WATCHLIST_FILE, items))
        )
        return watchlist

    def load_favourites(self) -> Favourites:
        favourites = Favourites(self._read(FAVOURITES_FILE, FavouriteItem.from_dict))
        self._unsubscribers.append(
            favourites.items_did_change.subscribe(lambda items: self._write(FAVOURITES_FILE, items))
        )
        return favourites

    def close(self) -> None:
        """Stop writing store changes to disk."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
