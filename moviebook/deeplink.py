"""Deep links into Moviebook screens (https://moviebook.org/<screen>[/<id>])."""

from dataclasses import dataclass
from typing import Literal, Optional
from urllib.parse import quote, unquote, urlparse

from moviebook.errors import DeeplinkError

SCHEME = "https"
HOST = "moviebook.org"

Screen = Literal["watchlist", "search", "movie", "artist"]

# Screens from older app versions.
LEGACY_SCREENS = {
    "feed": "watchlist",
    "actor": "artist",
}


@dataclass(frozen=True)
class Deeplink:
    screen: Screen
    identifier: Optional[int] = None
    query: Optional[str] = None

    @classmethod
    def watchlist(cls) -> "Deeplink":
        return cls("watchlist")

    @classmethod
    def search(cls, query: Optional[str] = None) -> "Deeplink":
        return cls("search", query=query)

    @classmethod
    def movie(cls, movie_id: int) -> "Deeplink":
        return cls("movie", identifier=movie_id)

    @classmethod
    def artist(cls, artist_id: int) -> "Deeplink":
        return cls("artist", identifier=artist_id)

    @property
    def path(self) -> str:
        if self.screen in ("movie", "artist"):
            return f"{self.screen}/{self.identifier}"
        if self.screen == "search" and self.query is not None:
            return f"search/{quote(self.query, safe='')}"
        return self.screen

    @property
    def url(self) -> str:
        return f"{SCHEME}://{HOST}/{self.path}"

    def __str__(self) -> str:
        return self.url

    @classmethod
    def parse(cls, url: str) -> "Deeplink":
        """Parse a deep link URL, raising DeeplinkError if it is not one."""
        components = [unquote(c) for c in urlparse(url).path.split("/") if c]
        if not components:
            raise DeeplinkError(f"Missing screen: {url}")

        screen = LEGACY_SCREENS.get(components[0], components[0])
        argument = components[1] if len(components) > 1 else None

        if screen == "watchlist":
            return cls.watchlist()
        if screen == "search":
            return cls.search(argument)
        if screen in ("movie", "artist"):
            if argument is None or not (argument.isascii() and argument.isdigit()):
                raise DeeplinkError(f"Invalid {screen} identifier: {url}")
            return cls(screen, identifier=int(argument))

        raise DeeplinkError(f"Unknown screen '{components[0]}': {url}")

    @classmethod
    def from_url(cls, url: str) -> Optional["Deeplink"]:
        """Like parse, but None for URLs that are not deep links."""
        try:
            return cls.parse(url)
        except DeeplinkError:
            return None
