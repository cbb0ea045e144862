"""Tests for the Wikipedia REST client."""

from unittest import TestCase

import httpx

from assistant.encyclopedia import USER_AGENT, ArticleNotFoundError, WikipediaClient


class WikipediaClientTests(TestCase):
    def test_requests_summary_endpoint_with_encoded_title(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"title": "Ada Lovelace", "extract": "Mathematician."})

        client = WikipediaClient(language="fr", transport=httpx.MockTransport(handler))
        summary = client.summarize("Ada Lovelace")

        self.assertEqual(seen[0].url.host, "fr.wikipedia.org")
        self.assertEqual(seen[0].url.raw_path, b"/api/rest_v1/page/summary/Ada_Lovelace")
        self.assertEqual(seen[0].headers["user-agent"], USER_AGENT)
        self.assertEqual(summary.title, "Ada Lovelace")
        self.assertEqual(summary.extract, "Mathematician.")
        self.assertIsNone(summary.url)

    def test_slash_in_topic_is_escaped(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"title": "AC/DC", "extract": "Band."})

        WikipediaClient(transport=httpx.MockTransport(handler)).summarize("AC/DC")
        self.assertEqual(seen[0].url.raw_path, b"/api/rest_v1/page/summary/AC%2FDC")

    def test_404_raises_article_not_found(self):
        client = WikipediaClient(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
        with self.assertRaises(ArticleNotFoundError) as ctx:
            client.summarize("Nope")
        self.assertEqual(ctx.exception.topic, "Nope")

    def test_other_status_raises_http_error(self):
        client = WikipediaClient(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
        with self.assertRaises(httpx.HTTPStatusError):
            client.summarize("Anything")

    def test_close_releases_client(self):
        client = WikipediaClient(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
        client._get_client()
        client.close()
        self.assertIsNone(client._client)
