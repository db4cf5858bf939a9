import unittest

import httpx

from moviebook.config import Config
from moviebook.errors import DecodingError, MissingApiKeyError
from moviebook.loader import RequestLoader
from moviebook.providers import (
    DiscoverSection, TheMovieDbMovieWebService, artist_web_service, movie_web_service, search_web_service
)

from tmdb_payloads import artist_payload, json_transport, movie_payload, page_payload

CONFIG = Config(api_key="KEY", language="en-US", currency="GBP")


class TestTheMovieDbServices(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.calls: list[httpx.Request] = []
        self.routes = {
            "/3/movie/1": movie_payload(1, "Dune", "2021-09-15", budget=165000000,
                                        belongs_to_collection={"id": 9, "name": "Dune Collection"}),
            "/3/collection/9": {"id": 9, "name": "Dune Collection", "parts": [
                movie_payload(2, "Dune: Part Two", "2024-02-27"),
                movie_payload(1, "Dune", "2021-09-15"),
            ]},
            "/3/movie/1/watch/providers": {"results": {
                "GB": {"flatrate": [{"provider_name": "Prime", "logo_path": "/p.png"}]},
            }},
            "/3/movie/1/keywords": {"id": 1, "keywords": [{"id": 4, "name": "desert"}]},
            "/3/movie/1/credits": {"cast": [artist_payload(10, "Timothée", character="Paul")]},
            "/3/genre/movie/list": {"genres": [{"id": 878, "name": "Science Fiction"}]},
            "/3/movie/popular": page_payload([movie_payload(1)], page=1, total_pages=2),
            "/3/discover/movie": page_payload([movie_payload(2)]),
            "/3/person/10": artist_payload(10, "Timothée", credits={"cast": [movie_payload(1)]}),
            "/3/person/popular": page_payload([artist_payload(10)]),
            "/3/search/movie": page_payload([movie_payload(1, "Dune")]),
            "/3/search/person": page_payload([artist_payload(10)]),
        }
        self.client = httpx.AsyncClient(transport=json_transport(self.routes, self.calls))
        self.loader = RequestLoader(client=self.client)

    async def asyncTearDown(self) -> None:
        await self.client.aclose()

    async def test_fetch_movie_includes_collection_and_providers(self) -> None:
        movie = await movie_web_service(self.loader, CONFIG).fetch_movie(1)

        self.assertEqual(movie.details.title, "Dune")
        self.assertEqual(movie.details.budget.currency_code, "GBP")
        self.assertEqual([m.title for m in movie.collection.movies], ["Dune", "Dune: Part Two"])
        self.assertEqual(movie.watch.collection("GB").free[0].name, "Prime")

    async def test_fetch_movie_ignores_secondary_failures(self) -> None:
        del self.routes["/3/collection/9"]
        self.routes["/3/movie/1/watch/providers"] = httpx.Response(200, content=b"not json")

        movie = await movie_web_service(self.loader, CONFIG).fetch_movie(1)

        self.assertEqual(movie.collection.name, "Dune Collection")
        self.assertIsNone(movie.collection.movies)
        self.assertTrue(movie.watch.is_empty)

    async def test_missing_movie_raises(self) -> None:
        with self.assertRaises(httpx.HTTPStatusError):
            await movie_web_service(self.loader, CONFIG).fetch_movie(404)

    async def test_non_object_payload(self) -> None:
        self.routes["/3/movie/1/keywords"] = [1, 2]
        with self.assertRaises(DecodingError):
            await movie_web_service(self.loader, CONFIG).fetch_movie_keywords(1)

    async def test_movie_lists(self) -> None:
        service = movie_web_service(self.loader, CONFIG)

        popular = await service.fetch_popular()
        self.assertEqual(popular.next_page, 2)
        self.assertEqual([k.name for k in await service.fetch_movie_keywords(1)], ["desert"])
        self.assertEqual([a.character for a in await service.fetch_movie_cast(1)], ["Paul"])
        self.assertEqual([g.id for g in await service.fetch_movie_genres()], [878])

        discover = await service.fetch_discover(DiscoverSection.TOP_RATED, genres=[878], page=3)
        self.assertEqual([m.id for m in discover.results], [2])
        last = self.calls[-1].url
        self.assertEqual(last.params["without_genres"], "99,10770")
        self.assertEqual(last.params["page"], "3")

        related = await service.fetch_movies(keywords=[4], genres=[878])
        self.assertEqual(self.calls[-1].url.params["with_keywords"], "4")
        self.assertEqual(len(related.results), 1)

    async def test_artist_and_search(self) -> None:
        artist = await artist_web_service(self.loader, CONFIG).fetch_artist(10)
        self.assertEqual(artist.details.name, "Timothée")
        self.assertEqual(len(artist.filmography), 1)

        popular = await artist_web_service(self.loader, CONFIG).fetch_popular()
        self.assertEqual([a.id for a in popular.results], [10])

        search = search_web_service(self.loader, CONFIG)
        movies = await search.fetch_movies("dune")
        self.assertEqual(self.calls[-1].url.params["query"], "dune")
        self.assertEqual(movies.results[0].title, "Dune")
        self.assertEqual((await search.fetch_artists("tim")).results[0].id, 10)

    async def test_requires_api_key(self) -> None:
        with self.assertRaises(MissingApiKeyError):
            TheMovieDbMovieWebService(self.loader, api_key="")


if __name__ == "__main__":
    unittest.main()
