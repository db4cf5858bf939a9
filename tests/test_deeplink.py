import unittest

from moviebook.deeplink import Deeplink
from moviebook.errors import DeeplinkError


class TestDeeplink(unittest.TestCase):
    def test_urls(self) -> None:
        self.assertEqual(Deeplink.watchlist().url, "https://moviebook.org/watchlist")
        self.assertEqual(Deeplink.search().url, "https://moviebook.org/search")
        self.assertEqual(Deeplink.search("blade runner").url, "https://moviebook.org/search/blade%20runner")
        self.assertEqual(Deeplink.search("AC/DC").url, "https://moviebook.org/search/AC%2FDC")
        self.assertEqual(Deeplink.movie(42).url, "https://moviebook.org/movie/42")
        self.assertEqual(str(Deeplink.artist(7)), "https://moviebook.org/artist/7")

    def test_parse(self) -> None:
        self.assertEqual(Deeplink.parse("https://moviebook.org/watchlist"), Deeplink.watchlist())
        self.assertEqual(Deeplink.parse("https://moviebook.org/movie/42"), Deeplink.movie(42))
        self.assertEqual(Deeplink.parse("https://moviebook.org/artist/7"), Deeplink.artist(7))
        self.assertEqual(Deeplink.parse("https://moviebook.org/search"), Deeplink.search())
        self.assertEqual(Deeplink.parse("https://moviebook.org/search/blade%20runner"), Deeplink.search("blade runner"))

    def test_legacy_screens(self) -> None:
        self.assertEqual(Deeplink.parse("https://moviebook.org/feed"), Deeplink.watchlist())
        self.assertEqual(Deeplink.parse("https://moviebook.org/actor/7"), Deeplink.artist(7))

    def test_invalid_links(self) -> None:
        for url in (
            "https://moviebook.org/",
            "https://moviebook.org/movie",
            "https://moviebook.org/movie/abc",
            "https://moviebook.org/actor/-1",
            "https://moviebook.org/movie/²",
            "https://moviebook.org/artist/%C2%B9",
            "https://moviebook.org/profile/3",
        ):
            with self.subTest(url=url):
                with self.assertRaises(DeeplinkError):
                    Deeplink.parse(url)
                self.assertIsNone(Deeplink.from_url(url))

    def test_round_trip(self) -> None:
        for deeplink in (
            Deeplink.watchlist(), Deeplink.search("x"), Deeplink.search("AC/DC"), Deeplink.movie(1), Deeplink.artist(2)
        ):
            self.assertEqual(Deeplink.parse(deeplink.url), deeplink)


if __name__ == "__main__":
    unittest.main()
