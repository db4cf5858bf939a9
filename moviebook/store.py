"""Observable in-memory lists backing the watchlist and favourites."""

from typing import Callable, Generic, Hashable, Optional, Protocol, TypeVar

T = TypeVar("T")


class Signal(Generic[T]):
    """Broadcasts values to subscribed callbacks, in subscription order."""

    def __init__(self) -> None:
        self._subscribers: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def send(self, value: T) -> None:
        """Call every subscriber, then re-raise the first error one of them raised."""
        error: Optional[Exception] = None
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception as e:
                if error is None:
                    error = e
        if error is not None:
            raise error

    def __len__(self) -> int:
        return len(self._subscribers)


class StoreItem(Protocol):
    id: Hashable
    state: object


I = TypeVar("I", bound=StoreItem)


class ObservableStore(Generic[I]):
    """
    Ordered items looked up linearly by identifier.

    Every mutation emits `item_did_update_state` or `item_was_removed`
    followed by `items_did_change` with a snapshot of the list.
    """

    def __init__(self, items: list[I], make_item: Callable[[Hashable, object], I]):
        self._items: list[I] = list(items)
        self._make_item = make_item
        self.item_was_removed: Signal[I] = Signal()
        self.item_did_update_state: Signal[I] = Signal()
        self.items_did_change: Signal[list[I]] = Signal()

    @property
    def items(self) -> list[I]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, identifier: Hashable) -> bool:
        return self._index(identifier) is not None

    def _index(self, identifier: Hashable) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == identifier:
                return index
        return None

    def item(self, identifier: Hashable) -> Optional[I]:
        index = self._index(identifier)
        return self._items[index] if index is not None else None

    def item_state(self, identifier: Hashable):
        item = self.item(identifier)
        return item.state if item is not None else None

    def update(self, state, identifier: Hashable) -> I:
        """Set the state of an item, appending it if it is not stored yet."""
        index = self._index(identifier)
        item = self._make_item(identifier, state)
        if index is not None:
            self._items[index] = item
        else:
            self._items.append(item)

        self.item_did_update_state.send(item)
        self.items_did_change.send(self.items)
        return item

    def remove(self, identifier: Hashable) -> Optional[I]:
        index = self._index(identifier)
        removed = None
        if index is not None:
            removed = self._items.pop(index)
            self.item_was_removed.send(removed)

        self.items_did_change.send(self.items)
        return removed

    def replace_all(self, items: list[I]) -> None:
        """Swap in a new list, e.g. after loading from storage."""
        self._items = list(items)
        self.items_did_change.send(self.items)
