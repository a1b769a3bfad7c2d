import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import requests

from catalog_routes.content.infrastructure.cache import TtlCache
from catalog_routes.content.infrastructure.sanity_client import SanityQueryClient
from catalog_routes.content.infrastructure.sanity_repository import SanityContentRepository
from catalog_routes.content.infrastructure.sanity_writer import SanitySlugWriter
from catalog_routes.errors import ConfigurationError, RepositoryError


class FakeResponse:
    def __init__(self, status=200, json_data=None, text_data=""):
        self.status = status
        self._json_data = json_data
        self._text_data = text_data
        self.headers = {}
        self.request_info = SimpleNamespace(real_url="http://test.invalid")
        self.history = ()

    async def json(self):
        if isinstance(self._json_data, Exception):
            raise self._json_data
        return self._json_data

    async def text(self):
        return self._text_data

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        if not self._responses:
            raise AssertionError("No more fake responses configured")
        self.calls.append((url, kwargs))
        return self._responses.pop(0)


class SanityQueryClientTests(unittest.IsolatedAsyncioTestCase):
    def make_client(self, **kwargs):
        return SanityQueryClient(project_id="abc123", dataset="production", **kwargs)

    async def test_query_returns_result_rows(self):
        client = self.make_client(token="secret")
        session = FakeSession([FakeResponse(json_data={"result": [{"_id": "a"}, "junk"]})])

        rows = await client.query(session, "*[]", operation="test")

        self.assertEqual(rows, [{"_id": "a"}])
        url, kwargs = session.calls[0]
        self.assertEqual(url, "https://abc123.api.sanity.io/v2023-05-03/data/query/production")
        self.assertEqual(kwargs["params"]["perspective"], "published")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer secret")

    async def test_retries_server_errors_then_succeeds(self):
        client = self.make_client()
        session = FakeSession([FakeResponse(status=503), FakeResponse(status=429), FakeResponse(json_data={"result": []})])

        with patch("catalog_routes.content.infrastructure.sanity_client.asyncio.sleep", new=AsyncMock()) as sleep:
            rows = await client.query(session, "*[]", operation="test")

        self.assertEqual(rows, [])
        self.assertEqual(len(session.calls), 3)
        self.assertEqual(sleep.await_count, 2)

    async def test_gives_up_after_bounded_retries(self):
        client = self.make_client(retries=2)
        session = FakeSession([FakeResponse(status=500), FakeResponse(status=500)])

        with patch("catalog_routes.content.infrastructure.sanity_client.asyncio.sleep", new=AsyncMock()):
            rows = await client.query(session, "*[]", operation="test")

        self.assertIsNone(rows)
        self.assertEqual(len(session.calls), 2)

    async def test_client_error_is_not_retried(self):
        client = self.make_client()
        session = FakeSession([FakeResponse(status=401, text_data="unauthorized")])

        rows = await client.query(session, "*[]", operation="test")

        self.assertIsNone(rows)
        self.assertEqual(len(session.calls), 1)

    def test_requires_project_id(self):
        with self.assertRaises(ConfigurationError):
            SanityQueryClient(project_id="")


class SanityContentRepositoryTests(unittest.TestCase):
    ROWS = [
        {"_id": "brand-cree", "slug": "cree", "title": "Cree", "isActive": True},
        {"_id": "brand-off", "slug": "off", "title": "Off", "isActive": False},
        {"_id": "drafts.brand-cree", "slug": "cree-draft", "title": "Cree"},
    ]

    def test_list_entities_parses_and_caches(self):
        client = SanityQueryClient(project_id="abc123")
        repo = SanityContentRepository(client=client, cache=TtlCache(max_size=10, ttl=60.0))

        with patch.object(repo, "_query_async", new=AsyncMock(return_value=self.ROWS)) as query:
            first = repo.list_entities("brand")
            second = repo.list_entities("brand")

        self.assertEqual([e.id for e in first], ["brand-cree", "brand-off"])
        self.assertEqual(first, second)
        self.assertEqual(query.await_count, 1)

    def test_known_brand_slugs_are_active_only(self):
        repo = SanityContentRepository(client=SanityQueryClient(project_id="abc123"))
        with patch.object(repo, "_query_async", new=AsyncMock(return_value=self.ROWS)):
            self.assertEqual(repo.get_known_brand_slugs(), ["cree"])

    def test_failed_query_raises_repository_error(self):
        repo = SanityContentRepository(client=SanityQueryClient(project_id="abc123"))
        with patch.object(repo, "_query_async", new=AsyncMock(return_value=None)):
            with self.assertRaises(RepositoryError):
                repo.list_entities("product")


class SanitySlugWriterTests(unittest.TestCase):
    def test_patch_posts_set_mutation(self):
        writer = SanitySlugWriter(project_id="abc123", dataset="production", api_version="2023-05-03", token="secret")
        response = MagicMock()
        with patch("catalog_routes.content.infrastructure.sanity_writer.requests.post", return_value=response) as post:
            writer.patch_slug("p1", "led-driver")

        url = post.call_args.args[0]
        self.assertEqual(url, "https://abc123.api.sanity.io/v2023-05-03/data/mutate/production")
        body = post.call_args.kwargs["json"]
        self.assertEqual(body["mutations"][0]["patch"], {"id": "p1", "set": {"slug.current": "led-driver"}})
        self.assertEqual(post.call_args.kwargs["headers"]["Authorization"], "Bearer secret")
        response.raise_for_status.assert_called_once()

    def test_http_failure_becomes_repository_error(self):
        writer = SanitySlugWriter(project_id="abc123", dataset="production", api_version="2023-05-03", token="secret")
        with patch(
            "catalog_routes.content.infrastructure.sanity_writer.requests.post",
            side_effect=requests.ConnectionError("down"),
        ):
            with self.assertRaises(RepositoryError):
                writer.patch_slug("p1", "x")

    def test_token_is_required(self):
        with self.assertRaises(ConfigurationError):
            SanitySlugWriter(project_id="abc123", dataset="production", api_version="2023-05-03", token=None)


if __name__ == "__main__":
    unittest.main()
