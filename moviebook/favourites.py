"""Pinned artists."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

from moviebook.store import ObservableStore


@dataclass(frozen=True)
class FavouriteItemIdentifier:
    kind: Literal["artist"]
    id: int

    @classmethod
    def artist(cls, artist_id: int) -> "FavouriteItemIdentifier":
        return cls(kind="artist", id=artist_id)


class FavouriteItemState(str, Enum):
    PINNED = "pinned"


@dataclass(frozen=True)
class FavouriteItem:
    """A favourite artist."""
    id: FavouriteItemIdentifier
    state: FavouriteItemState = FavouriteItemState.PINNED

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.id.kind, "id": self.id.id, "state": self.state.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FavouriteItem":
        return cls(
            id=FavouriteItemIdentifier(kind=data.get("kind", "artist"), id=int(data["id"])),
            state=FavouriteItemState(data.get("state", "pinned")),
        )


class Favourites(ObservableStore[FavouriteItem]):
    """Artists pinned by the user, in the order they were pinned."""

    def __init__(self, items: Optional[list[FavouriteItem]] = None):
        super().__init__(items or [], lambda identifier, state: FavouriteItem(identifier, state))

    def pin(self, artist_id: int) -> FavouriteItem:
        return self.update(FavouriteItemState.PINNED, FavouriteItemIdentifier.artist(artist_id))

    def unpin(self, artist_id: int) -> Optional[FavouriteItem]:
        return self.remove(FavouriteItemIdentifier.artist(artist_id))

    def is_pinned(self, artist_id: int) -> bool:
        return FavouriteItemIdentifier.artist(artist_id) in self

    def artist_ids(self) -> list[int]:
        return [item.id.id for item in self._items]
