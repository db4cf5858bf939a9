import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

import httpx

from moviebook.deeplink import Deeplink
from moviebook.loader import ImageLoader
from moviebook.models import Page
from moviebook.watchlist import Watchlist
from moviebook.watchnext import STORED_FILE_NAME, WatchNextItem, WatchNextStorage, timeline

from tmdb_payloads import StubMovieWebService, make_details, make_movie

POSTER = "https://image.tmdb.org/t/p/w185/p.jpg"


class TestWatchNextStorage(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name)
        self.client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"\xff\xd8jpeg"))
        )
        self.images = ImageLoader(client=self.client)

    async def asyncTearDown(self) -> None:
        await self.client.aclose()
        self._tmp.cleanup()

    def _storage(self, service) -> WatchNextStorage:
        return WatchNextStorage(service, image_loader=self.images, directory=self.directory)

    async def test_stores_to_watch_movies_in_order(self) -> None:
        service = StubMovieWebService(
            movies=[make_movie(1, title="One", poster=POSTER), make_movie(2, title="Two"),
                    make_movie(3, title="Three")],
            failing=[4],
        )
        watchlist = Watchlist()
        watchlist.add_to_watch(2)
        watchlist.add_to_watch(4)
        watchlist.mark_watched(3)
        watchlist.add_to_watch(1)

        items = await self._storage(service).set_items(watchlist.items)

        self.assertEqual([item.title for item in items], ["Two", "One"])
        self.assertIsNone(items[0].image)
        self.assertEqual(items[1].image, b"\xff\xd8jpeg")
        self.assertEqual(items[1].deeplink, Deeplink.movie(1))
        self.assertEqual(WatchNextStorage.get_items(self.directory), items)

    async def test_falls_back_to_now_playing(self) -> None:
        service = StubMovieWebService(
            movies=[make_movie(7, title="In theaters")],
            pages=[Page(results=[make_details(7)])],
        )
        items = await self._storage(service).set_items([])

        self.assertEqual([item.title for item in items], ["In theaters"])
        self.assertEqual(service.page_requests[0][0].value, "now_playing")

    def test_get_items_on_bad_data(self) -> None:
        path = self.directory / STORED_FILE_NAME
        self.assertEqual(WatchNextStorage.get_items(self.directory), [])

        path.write_text("not json")
        self.assertEqual(WatchNextStorage.get_items(self.directory), [])

        path.write_text(json.dumps([{"title": "x", "image": "***", "deeplink": None}]))
        self.assertEqual(WatchNextStorage.get_items(self.directory), [])

        path.write_text(json.dumps({"title": "x"}))
        self.assertEqual(WatchNextStorage.get_items(self.directory), [])


class TestTimeline(unittest.TestCase):
    def test_hourly_rotated_entries(self) -> None:
        items = [WatchNextItem(title=t) for t in ("a", "b", "c")]
        start = datetime(2023, 6, 1, 8, 0)

        entries = timeline(items, start=start, offset=1)

        self.assertEqual([e.item.title for e in entries], ["b", "c", "a"])
        self.assertEqual([e.date.hour for e in entries], [8, 9, 10])

    def test_empty(self) -> None:
        self.assertEqual(timeline([]), [])


if __name__ == "__main__":
    unittest.main()
