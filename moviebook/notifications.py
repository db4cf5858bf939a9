"""Release notifications for movies on the watchlist."""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

import httpx

from moviebook.config import get_data_dir
from moviebook.deeplink import Deeplink
from moviebook.errors import DecodingError, NotificationsNotAuthorized
from moviebook.models import Movie
from moviebook.providers.base import MovieWebService
from moviebook.watchlist import Watchlist, WatchlistItem

logger = logging.getLogger(__name__)

RELEASED_SUBTITLE = "Is released!"


class AuthorizationStatus(str, Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED = "authorized"
    PROVISIONAL = "provisional"


@dataclass(frozen=True)
class NotificationRequest:
    """A pending notification, delivered once on `trigger_date`."""
    identifier: str
    title: str
    subtitle: str
    category: str
    trigger_date: date

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["trigger_date"] = self.trigger_date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NotificationRequest":
        return cls(
            identifier=data["identifier"],
            title=data["title"],
            subtitle=data["subtitle"],
            category=data["category"],
            trigger_date=date.fromisoformat(data["trigger_date"]),
        )


class NotificationCenter(ABC):
    """Where notifications get scheduled."""

    @abstractmethod
    async def get_authorization_status(self) -> AuthorizationStatus:
        ...

    @abstractmethod
    async def request_authorization(self) -> bool:
        ...

    @abstractmethod
    async def pending_requests(self) -> list[NotificationRequest]:
        ...

    @abstractmethod
    async def add(self, request: NotificationRequest) -> None:
        ...

    @abstractmethod
    async def remove_pending(self, identifiers: list[str]) -> None:
        ...


class FileNotificationCenter(NotificationCenter):
    """Keeps the authorization status and pending requests in a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or get_data_dir() / "notifications.json"

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"authorization": AuthorizationStatus.NOT_DETERMINED.value, "pending": []}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    async def get_authorization_status(self) -> AuthorizationStatus:
        return AuthorizationStatus(self._load()["authorization"])

    async def set_authorization_status(self, status: AuthorizationStatus) -> None:
        data = self._load()
        data["authorization"] = status.value
        self._save(data)

    async def request_authorization(self) -> bool:
        await self.set_authorization_status(AuthorizationStatus.AUTHORIZED)
        return True

    async def pending_requests(self) -> list[NotificationRequest]:
        return [NotificationRequest.from_dict(item) for item in self._load()["pending"]]

    async def add(self, request: NotificationRequest) -> None:
        data = self._load()
        pending = [item for item in data["pending"] if item["identifier"] != request.identifier]
        pending.append(request.to_dict())
        data["pending"] = pending
        self._save(data)

    async def remove_pending(self, identifiers: list[str]) -> None:
        data = self._load()
        data["pending"] = [item for item in data["pending"] if item["identifier"] not in identifiers]
        self._save(data)

    async def due(self, today: Optional[date] = None) -> list[NotificationRequest]:
        """Pending requests whose trigger date has come."""
        today = today or date.today()
        return [request for request in await self.pending_requests() if request.trigger_date <= today]


class NotificationsDelegate(ABC):
    """Asks the user about notification permissions."""

    @abstractmethod
    async def should_request_authorization(self) -> bool:
        ...

    @abstractmethod
    def should_authorize_notifications(self) -> None:
        """Permissions were denied; tell the user how to enable them."""


class Notifications:
    """
    Keep one pending notification per unreleased movie on the watchlist.

    After `schedule` every watchlist change is mirrored: to-watch movies get a
    notification on their release date, watched or removed ones lose it.
    """

    def __init__(
        self,
        notification_center: NotificationCenter,
        delegate: Optional[NotificationsDelegate] = None,
        clock: Callable[[], date] = date.today
    ):
        self.notification_center = notification_center
        self.delegate = delegate
        self.clock = clock
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribers: list[Callable[[], None]] = []

    async def schedule(self, watchlist: Watchlist, web_service: MovieWebService) -> None:
        """Schedule for the current items, then follow watchlist updates."""
        results = await asyncio.gather(
            *(self.schedule_item(item, web_service) for item in watchlist.items),
            return_exceptions=True
        )
        for item, result in zip(watchlist.items, results):
            if isinstance(result, Exception):
                self._log_failure(item, result)

        self._unsubscribers.append(watchlist.item_did_update_state.subscribe(
            lambda item: self._spawn(item, self.schedule_item(item, web_service))
        ))
        self._unsubscribers.append(watchlist.item_was_removed.subscribe(
            lambda item: self._spawn(item, self.remove_item(item))
        ))

    async def wait_idle(self) -> None:
        """Wait for the scheduling triggered by watchlist updates."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def stop(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    async def schedule_item(self, item: WatchlistItem, web_service: MovieWebService) -> None:
        identifier = str(item.id.id)
        if item.is_to_watch:
            movie = await web_service.fetch_movie(item.id.id)
            await self._schedule_if_needed(identifier, movie)
        else:
            await self._remove(identifier)

    async def remove_item(self, item: WatchlistItem) -> None:
        await self._remove(str(item.id.id))

    def _spawn(self, item: WatchlistItem, coroutine) -> None:
        task = asyncio.ensure_future(coroutine)
        self._tasks.add(task)

        def done(task: asyncio.Task) -> None:
            self._tasks.discard(task)
            if not task.cancelled() and task.exception() is not None:
                self._log_failure(item, task.exception())

        task.add_done_callback(done)

    def _log_failure(self, item: WatchlistItem, error: BaseException) -> None:
        if isinstance(error, (NotificationsNotAuthorized, httpx.HTTPError, DecodingError)):
            logger.warning("Notification for movie %s not scheduled: %s", item.id.id, error)
        else:
            logger.error("Notification for movie %s failed", item.id.id, exc_info=error)

    async def _schedule_if_needed(self, identifier: str, movie: Movie) -> None:
        pending = await self.notification_center.pending_requests()
        scheduled = next((request for request in pending if request.identifier == identifier), None)
        release = movie.details.release
        upcoming = release > self.clock()

        if scheduled is not None:
            if scheduled.trigger_date != release:
                await self._remove(identifier)
                if upcoming:
                    await self._schedule(identifier, movie)
        elif upcoming:
            await self._schedule(identifier, movie)

    async def _schedule(self, identifier: str, movie: Movie) -> None:
        await self._request_authorization()
        request = NotificationRequest(
            identifier=identifier,
            title=movie.details.title,
            subtitle=RELEASED_SUBTITLE,
            category=Deeplink.movie(movie.id).url,
            trigger_date=movie.details.release,
        )
        await self.notification_center.add(request)
        logger.debug("Scheduled release notification for %s on %s", movie.details.title, request.trigger_date)

    async def _remove(self, identifier: str) -> None:
        pending = await self.notification_center.pending_requests()
        if any(request.identifier == identifier for request in pending):
            await self.notification_center.remove_pending([identifier])

    async def _request_authorization(self) -> None:
        status = await self.notification_center.get_authorization_status()

        if status == AuthorizationStatus.AUTHORIZED:
            return
        if status == AuthorizationStatus.NOT_DETERMINED:
            if self.delegate is not None and await self.delegate.should_request_authorization():
                await self.notification_center.request_authorization()
                return
            raise NotificationsNotAuthorized("Notifications not authorized")
        if status == AuthorizationStatus.DENIED and self.delegate is not None:
            self.delegate.should_authorize_notifications()
        raise NotificationsNotAuthorized(f"Notifications {status.value}")
