import unittest
from datetime import date, timedelta

from moviebook.errors import DecodingError
from moviebook.providers import responses

from tmdb_payloads import artist_payload, movie_payload, page_payload


class TestMovieDecoding(unittest.TestCase):
    def test_details(self) -> None:
        data = movie_payload(
            7, "Arrival", "2016-11-10",
            runtime=116, budget=47000000, revenue=None,
            release_dates={"results": [
                {"iso_3166_1": "IT", "release_dates": [
                    {"type": 1, "release_date": "2016-09-01T00:00:00.000Z"},
                    {"type": 3, "release_date": "2017-01-19T00:00:00.000Z"},
                ]},
                {"iso_3166_1": "XX", "release_dates": [{"type": 4, "release_date": "2017-03-01"}]},
            ]},
        )
        details = responses.decode_movie_details(data, "USD")

        self.assertEqual(details.release, date(2016, 11, 10))
        self.assertEqual(details.runtime, timedelta(minutes=116))
        self.assertEqual(details.budget.value, 47000000)
        self.assertEqual(details.budget.currency_code, "USD")
        self.assertIsNone(details.revenue)
        self.assertIsNone(details.overview)
        self.assertEqual(details.localised_releases, {"IT": date(2017, 1, 19)})
        self.assertEqual(details.localised_release_date("IT"), date(2017, 1, 19))
        self.assertEqual(details.localised_release_date("FR"), date(2016, 11, 10))
        self.assertEqual(details.media.poster_thumbnail_url, "https://image.tmdb.org/t/p/w185/poster7.jpg")

    def test_missing_release_date(self) -> None:
        with self.assertRaises(DecodingError):
            responses.decode_movie_details(movie_payload(release=""))

    def test_only_official_youtube_videos(self) -> None:
        data = movie_payload(videos={"results": [
            {"id": "a", "name": "Trailer", "key": "k1", "site": "YouTube", "type": "Trailer", "official": True},
            {"id": "b", "name": "Fan cut", "key": "k2", "site": "YouTube", "type": "Trailer", "official": False},
            {"id": "c", "name": "Vimeo", "key": "k3", "site": "Vimeo", "type": "Teaser", "official": True},
            {"id": "d", "name": "Clip", "key": "k4", "site": "YouTube", "type": "Clip", "official": True},
        ]})
        videos = responses.decode_movie_details(data).media.videos

        self.assertEqual([v.id for v in videos], ["a"])
        self.assertEqual(videos[0].type, "trailer")
        self.assertEqual(videos[0].url, "https://www.youtube.com/watch?v=k1")

    def test_movie_with_collection_and_cast(self) -> None:
        data = movie_payload(
            genres=[{"id": 18, "name": "Drama"}],
            credits={"cast": [artist_payload(1, "Amy", character="Louise"), {"name": "No id"}]},
            belongs_to_collection={"id": 5, "name": "Saga"},
            production_companies=[{"name": "Studio"}, {"id": 3}],
        )
        movie = responses.decode_movie(data)

        self.assertEqual([g.name for g in movie.genres], ["Drama"])
        self.assertEqual([a.character for a in movie.cast], ["Louise"])
        self.assertEqual(movie.collection.name, "Saga")
        self.assertIsNone(movie.collection.movies)
        self.assertEqual(movie.production.companies, ["Studio"])
        self.assertTrue(movie.watch.is_empty)

    def test_collection_parts_sorted_by_release(self) -> None:
        collection = responses.decode_collection({"id": 1, "name": "Saga", "parts": [
            movie_payload(2, "Second", "2005-01-01"),
            movie_payload(1, "First", "2001-01-01"),
            movie_payload(3, "Unreleased", ""),
        ]})
        self.assertEqual([m.title for m in collection.movies], ["First", "Second"])


class TestPageDecoding(unittest.TestCase):
    def test_next_page(self) -> None:
        page = responses.decode_page(page_payload([movie_payload()], page=1, total_pages=3),
                                     responses.decode_movie_details)
        self.assertEqual(len(page.results), 1)
        self.assertEqual(page.next_page, 2)

    def test_last_page(self) -> None:
        page = responses.decode_page(page_payload([], page=3, total_pages=3), responses.decode_movie_details)
        self.assertIsNone(page.next_page)

    def test_missing_results(self) -> None:
        with self.assertRaises(DecodingError):
            responses.decode_page({"page": 1}, responses.decode_movie_details)


class TestWatchProviderDecoding(unittest.TestCase):
    def test_regions(self) -> None:
        providers = responses.decode_watch_providers({"id": 1, "results": {
            "IT": {
                "flatrate": [{"provider_name": "Netflix", "logo_path": "/n.png"}],
                "buy": [{"provider_name": "Store", "logo_path": "/s.png"}],
            },
            "US": {"rent": [{"provider_name": "No logo"}]},
        }})

        self.assertEqual(providers.regions, ["IT", "US"])
        italy = providers.collection("IT")
        self.assertEqual([p.name for p in italy.free], ["Netflix"])
        self.assertEqual(italy.free[0].icon_url, "https://image.tmdb.org/t/p/w154/n.png")
        self.assertTrue(providers.collection("US").is_empty)
        self.assertFalse(providers.is_empty)


class TestArtistDecoding(unittest.TestCase):
    def test_artist(self) -> None:
        artist = responses.decode_artist(artist_payload(
            3, "Denis", birthday="1967-10-03", deathday=None, biography="",
            credits={"cast": [movie_payload(1, "Old", "2010-01-01"), movie_payload(2, "New", "2021-01-01")]},
        ))

        self.assertEqual(artist.details.birthday, date(1967, 10, 3))
        self.assertIsNone(artist.details.deathday)
        self.assertIsNone(artist.details.biography)
        self.assertEqual([m.title for m in artist.filmography], ["New", "Old"])
        self.assertEqual(artist.most_recent_release(date(2015, 1, 1)).title, "Old")
        self.assertEqual([m.title for m in artist.upcoming(date(2015, 1, 1))], ["New"])


if __name__ == "__main__":
    unittest.main()
