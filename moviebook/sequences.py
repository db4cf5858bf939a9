"""List helpers shared by the watchlist, discover and watch-next features."""

from collections import Counter
from typing import Callable, Hashable, Optional, Sequence, TypeVar

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


def rotate_left(items: Sequence[T], distance: int) -> list[T]:
    """
    Move the first `distance` items to the end.

    Negative distances leave the order untouched; distances past the end wrap.
    """
    result = list(items)
    if len(result) < 2 or distance <= 0:
        return result

    distance %= len(result)
    return result[distance:] + result[:distance]


def remove_duplicates(
    items: Sequence[T],
    matching: Optional[Callable[[T, T], bool]] = None
) -> list[T]:
    """Drop items that match an earlier one, keeping first-seen order."""
    if matching is None:
        matching = lambda lhs, rhs: lhs == rhs

    result: list[T] = []
    for item in items:
        if any(matching(item, kept) for kept in result):
            continue
        result.append(item)
    return result


def get_most_popular(
    items: Sequence[H],
    bottom_cap: Optional[int] = None,
    top_cap: Optional[int] = None
) -> list[H]:
    """
    Distinct items by descending number of occurrences, sliced to [bottom_cap:top_cap].

    Ties keep first-seen order. A negative top cap yields nothing, a top cap
    lower than the bottom cap is ignored, and caps past the end are clamped.
    """
    # Counter preserves insertion order and sorted() is stable.
    occurrences = Counter(items)
    ranked = sorted(occurrences, key=lambda item: occurrences[item], reverse=True)

    bottom = max(bottom_cap or 0, 0)
    if bottom >= len(ranked):
        return []

    if top_cap is None:
        return ranked[bottom:]
    if top_cap < 0:
        return []
    if top_cap < bottom:
        return ranked[bottom:]
    return ranked[bottom:min(top_cap, len(ranked))]
