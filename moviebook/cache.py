"""Time-bounded cache entries with in-memory and on-disk stores."""

import base64
import json
import logging
import urllib.parse
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = timedelta(hours=24)


@dataclass
class CacheEntry:
    """Cached bytes and the moment they were fetched."""
    content: bytes
    created_date: datetime = field(default_factory=datetime.now)
    lifetime: timedelta = DEFAULT_LIFETIME

    def is_expired_at(self, now: datetime) -> bool:
        return self.created_date + self.lifetime < now

    @property
    def is_expired(self) -> bool:
        return self.is_expired_at(datetime.now())

    def to_dict(self) -> dict:
        return {
            "content": base64.b64encode(self.content).decode("ascii"),
            "created_date": self.created_date.isoformat(),
            "lifetime": self.lifetime.total_seconds(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CacheEntry":
        return cls(
            content=base64.b64decode(data["content"]),
            created_date=datetime.fromisoformat(data["created_date"]),
            lifetime=timedelta(seconds=data.get("lifetime", DEFAULT_LIFETIME.total_seconds())),
        )


class MemoryCache:
    """In-memory LRU of cache entries keyed by URL."""

    def __init__(self, max_size: int = 200) -> None:
        self._max_size = max(max_size, 1)
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def set(self, key: str, entry: CacheEntry) -> None:
        if key not in self._entries and len(self._entries) >= self._max_size:
            self._entries.popitem(last=False)
        self._entries[key] = entry
        self._entries.move_to_end(key)

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry

    def delete(self, key: str) -> bool:
        if key in self._entries:
            del self._entries[key]
            return True
        return False

    def clear(self) -> None:
        self._entries.clear()


class PersistentCache:
    """Cache entries stored as JSON files, one per URL."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _file_path(self, url: str) -> Path:
        name = urllib.parse.quote(url, safe="").replace("%2F", "-")
        return self.directory / name

    def set(self, url: str, entry: CacheEntry) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._file_path(url), "w", encoding="utf-8") as f:
            json.dump(entry.to_dict(), f)

    def get(self, url: str) -> Optional[CacheEntry]:
        path = self._file_path(url)
        if not path.exists():
            return None

        with open(path, "r", encoding="utf-8") as f:
            entry = CacheEntry.from_dict(json.load(f))

        if entry.is_expired:
            path.unlink(missing_ok=True)
            return None
        return entry

    def delete(self, url: str) -> None:
        self._file_path(url).unlink(missing_ok=True)

    @staticmethod
    def clean_legacy(directory: Path) -> int:
        """Remove TMDB responses cached by older releases. Returns count removed."""
        if not directory.is_dir():
            return 0

        removed = 0
        for path in directory.iterdir():
            if path.name.startswith("."):
                continue
            if "tmdb.org" in path.name or "themoviedb" in path.name:
                try:
                    path.unlink()
                    removed += 1
                except OSError as e:
                    logger.warning("Failed to remove legacy cache file %s: %s", path, e)
        return removed
