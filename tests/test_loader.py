import asyncio
import gc
import tempfile
import unittest
from pathlib import Path

import httpx

from moviebook.cache import PersistentCache
from moviebook.loader import ImageLoader, RequestLoader

URL = "https://api.example.com/movie/1"


class TestRequestLoader(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.calls = 0
        self.release = asyncio.Event()
        self.status = 200

        async def handler(request: httpx.Request) -> httpx.Response:
            self.calls += 1
            await self.release.wait()
            return httpx.Response(self.status, content=b"payload")

        self.client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        self.loader = RequestLoader(client=self.client)

    async def asyncTearDown(self) -> None:
        await self.loader.aclose()
        await self.client.aclose()

    async def test_concurrent_requests_share_one_fetch(self) -> None:
        first = asyncio.ensure_future(self.loader.request(URL))
        second = asyncio.ensure_future(self.loader.request(URL))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.assertTrue(self.loader.in_flight(URL))

        self.release.set()
        results = await asyncio.gather(first, second)

        self.assertEqual(results, [b"payload", b"payload"])
        self.assertEqual(self.calls, 1)
        self.assertFalse(self.loader.in_flight(URL))

    async def test_cached_response_is_reused(self) -> None:
        self.release.set()
        await self.loader.request(URL)
        await self.loader.request(URL)
        self.assertEqual(self.calls, 1)

    async def test_failure_is_forgotten(self) -> None:
        self.release.set()
        self.status = 500
        with self.assertRaises(httpx.HTTPStatusError):
            await self.loader.request(URL)
        self.assertFalse(self.loader.in_flight(URL))

        self.status = 200
        self.assertEqual(await self.loader.request(URL), b"payload")
        self.assertEqual(self.calls, 2)

    async def test_cancelled_caller_does_not_cancel_shared_request(self) -> None:
        first = asyncio.ensure_future(self.loader.request(URL))
        second = asyncio.ensure_future(self.loader.request(URL))
        await asyncio.sleep(0)
        first.cancel()

        self.release.set()
        self.assertEqual(await second, b"payload")
        self.assertEqual(self.calls, 1)

    async def test_failure_without_callers_is_retrieved(self) -> None:
        errors = []
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(lambda _, context: errors.append(context))
        self.addCleanup(loop.set_exception_handler, None)
        self.status = 500

        caller = asyncio.ensure_future(self.loader.request(URL))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        caller.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await caller

        self.release.set()
        while self.loader.in_flight(URL):
            await asyncio.sleep(0)
        gc.collect()

        self.assertEqual(errors, [])


class TestPersistentLoading(unittest.IsolatedAsyncioTestCase):
    async def test_persistent_cache_survives_new_loader(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, content=b"image")

        with tempfile.TemporaryDirectory() as tmp:
            cache = PersistentCache(Path(tmp))
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                self.assertEqual(await ImageLoader(client=client, persistent_cache=cache).fetch(URL), b"image")
                self.assertEqual(await ImageLoader(client=client, persistent_cache=cache).fetch(URL), b"image")

        self.assertEqual(len(calls), 1)


if __name__ == "__main__":
    unittest.main()
