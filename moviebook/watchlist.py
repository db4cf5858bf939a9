"""Watchlist of movies to watch and movies watched."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Literal, Optional, Union

from moviebook.models import Movie
from moviebook.store import ObservableStore


@dataclass(frozen=True)
class WatchlistItemIdentifier:
    """What a watchlist entry points at. Only movies for now."""
    kind: Literal["movie"]
    id: int

    @classmethod
    def movie(cls, movie_id: int) -> "WatchlistItemIdentifier":
        return cls(kind="movie", id=movie_id)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "id": self.id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatchlistItemIdentifier":
        return cls(kind=data.get("kind", "movie"), id=int(data["id"]))


@dataclass(frozen=True)
class Suggestion:
    """Who recommended a movie, and what they said."""
    owner: str
    comment: Optional[str] = None


@dataclass(frozen=True)
class ToWatchInfo:
    date: datetime
    suggestion: Optional[Suggestion] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"state": "to_watch", "date": self.date.isoformat()}
        if self.suggestion is not None:
            data["suggestion"] = {"owner": self.suggestion.owner, "comment": self.suggestion.comment}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToWatchInfo":
        suggestion = data.get("suggestion")
        return cls(
            date=datetime.fromisoformat(data["date"]),
            suggestion=Suggestion(**suggestion) if suggestion else None,
        )


@dataclass(frozen=True)
class WatchedInfo:
    to_watch_info: ToWatchInfo
    date: datetime
    rating: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": "watched",
            "to_watch": self.to_watch_info.to_dict(),
            "date": self.date.isoformat(),
            "rating": self.rating,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatchedInfo":
        return cls(
            to_watch_info=ToWatchInfo.from_dict(data["to_watch"]),
            date=datetime.fromisoformat(data["date"]),
            rating=data.get("rating"),
        )


WatchlistItemState = Union[ToWatchInfo, WatchedInfo]


def state_from_dict(data: dict[str, Any]) -> WatchlistItemState:
    if data.get("state") == "watched":
        return WatchedInfo.from_dict(data)
    return ToWatchInfo.from_dict(data)


@dataclass(frozen=True)
class WatchlistItem:
    id: WatchlistItemIdentifier
    state: WatchlistItemState

    @property
    def date(self) -> datetime:
        return self.state.date

    @property
    def rating(self) -> Optional[float]:
        if isinstance(self.state, WatchedInfo):
            return self.state.rating
        return None

    @property
    def is_to_watch(self) -> bool:
        return isinstance(self.state, ToWatchInfo)

    @property
    def is_watched(self) -> bool:
        return isinstance(self.state, WatchedInfo)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id.to_dict(), "state": self.state.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatchlistItem":
        return cls(
            id=WatchlistItemIdentifier.from_dict(data["id"]),
            state=state_from_dict(data["state"]),
        )


class Watchlist(ObservableStore[WatchlistItem]):
    """Movies the user wants to watch or has watched."""

    def __init__(self, items: Optional[list[WatchlistItem]] = None):
        super().__init__(items or [], lambda identifier, state: WatchlistItem(identifier, state))

    def add_to_watch(
        self,
        movie_id: int,
        suggestion: Optional[Suggestion] = None,
        when: Optional[datetime] = None
    ) -> WatchlistItem:
        info = ToWatchInfo(date=when or datetime.now(), suggestion=suggestion)
        return self.update(info, WatchlistItemIdentifier.movie(movie_id))

    def mark_watched(
        self,
        movie_id: int,
        rating: Optional[float] = None,
        when: Optional[datetime] = None
    ) -> WatchlistItem:
        """Move a movie to watched, keeping when it was first added."""
        identifier = WatchlistItemIdentifier.movie(movie_id)
        now = when or datetime.now()
        current = self.item_state(identifier)
        if isinstance(current, WatchedInfo):
            to_watch_info = current.to_watch_info
        elif isinstance(current, ToWatchInfo):
            to_watch_info = current
        else:
            to_watch_info = ToWatchInfo(date=now)
        return self.update(WatchedInfo(to_watch_info, date=now, rating=rating), identifier)

    def to_watch(self) -> list[WatchlistItem]:
        return [item for item in self._items if item.is_to_watch]

    def watched(self) -> list[WatchlistItem]:
        return [item for item in self._items if item.is_watched]


# Sorting


class WatchlistSorting(str, Enum):
    LAST_ADDED = "last_added"
    RATING = "rating"
    NAME = "name"
    RELEASE = "release"

    @property
    def label(self) -> str:
        return {
            WatchlistSorting.LAST_ADDED: "Last added",
            WatchlistSorting.RATING: "Rating",
            WatchlistSorting.NAME: "Name",
            WatchlistSorting.RELEASE: "Release",
        }[self]


def _rating(entry: tuple[Movie, WatchlistItem]) -> float:
    movie, item = entry
    if isinstance(item.state, WatchedInfo):
        return item.state.rating or 0.0
    return movie.details.rating.value


def sort_entries(
    entries: list[tuple[Movie, WatchlistItem]],
    sorting: WatchlistSorting,
    region: Optional[str] = None
) -> list[tuple[Movie, WatchlistItem]]:
    """Order loaded watchlist entries for display."""
    keys: dict[WatchlistSorting, tuple[Callable[[tuple[Movie, WatchlistItem]], Any], bool]] = {
        WatchlistSorting.LAST_ADDED: (lambda e: e[1].date, True),
        WatchlistSorting.RATING: (_rating, True),
        WatchlistSorting.NAME: (lambda e: e[0].details.title.casefold(), False),
        WatchlistSorting.RELEASE: (lambda e: e[0].details.localised_release_date(region), True),
    }
    key, reverse = keys[sorting]
    return sorted(entries, key=key, reverse=reverse)


def pending_releases(entries: list[tuple[Movie, WatchlistItem]], today: Optional[date] = None) -> list[Movie]:
    """To-watch movies not released yet."""
    today = today or date.today()
    return [movie for movie, item in entries if item.is_to_watch and movie.details.release > today]
