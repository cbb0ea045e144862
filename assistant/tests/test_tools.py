"""Tests for the assistant tools."""

from unittest import TestCase
from unittest.mock import MagicMock

import httpx

from assistant.encyclopedia import WikipediaClient
from assistant.tools import (
    NO_MEMORY_RESULT,
    MemorySearchTool,
    ProductDetailsTool,
    WikipediaSummaryTool,
    build_tool_registry,
)
from memorystore import MemoryStore
from toolchat.service.config import ChatSettings
from toolchat.service.errors import MemoryStoreError
from toolchat.types.context import RunContext

SUMMARY_JSON = {
    "title": "Alan Turing",
    "extract": "Alan Mathison Turing was an English mathematician and computer scientist.",
    "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Alan_Turing"}},
}


def wiki_client(handler) -> WikipediaClient:
    return WikipediaClient(transport=httpx.MockTransport(handler))


class ProductDetailsToolTests(TestCase):
    def setUp(self):
        self.tool = ProductDetailsTool()
        self.context = RunContext.create()

    def test_found_product(self):
        result = self.tool.run({"productId": "prod-123"}, self.context)
        self.assertEqual(result, {"id": "prod-123", "name": "Quantum Laptop", "price": 1500.00, "stock": 42})

    def test_zero_stock_is_still_found(self):
        result = self.tool.run({"productId": "prod-789"}, self.context)
        self.assertEqual(result["name"], "Cosmic Keyboard")
        self.assertEqual(result["stock"], 0)
        self.assertNotIn("error", result)

    def test_unknown_product_returns_soft_error(self):
        result = self.tool.run({"productId": "prod-999"}, self.context)
        self.assertEqual(result, {"error": "Product with ID 'prod-999' not found."})


class MemorySearchToolTests(TestCase):
    def setUp(self):
        self.client = MagicMock()
        self.collection = self.client.get_or_create_collection.return_value
        self.tool = MemorySearchTool(MemoryStore(self.client), collection_name="agent-memory", top_k=3)
        self.context = RunContext.create()

    def test_returns_matching_documents(self):
        self.collection.query.return_value = {"documents": [["doc a", "doc b"]]}
        result = self.tool.run({"query": "BlueFox"}, self.context)
        self.assertEqual(result, {"results": ["doc a", "doc b"]})
        self.assertEqual(self.collection.query.call_args.kwargs["n_results"], 3)

    def test_no_matches_returns_sentinel(self):
        self.collection.query.return_value = {"documents": [[]]}
        result = self.tool.run({"query": "nothing"}, self.context)
        self.assertEqual(result, {"result": NO_MEMORY_RESULT})

    def test_collection_is_opened_once_and_reused(self):
        self.collection.query.return_value = {"documents": [["x"]]}
        self.tool.run({"query": "a"}, self.context)
        self.tool.run({"query": "b"}, self.context)
        self.client.get_or_create_collection.assert_called_once_with(name="agent-memory")

    def test_store_errors_propagate(self):
        self.collection.query.side_effect = RuntimeError("unreachable")
        with self.assertRaises(MemoryStoreError):
            self.tool.run({"query": "a"}, self.context)


class WikipediaSummaryToolTests(TestCase):
    def setUp(self):
        self.context = RunContext.create()

    def test_success_payload(self):
        tool = WikipediaSummaryTool(wiki_client(lambda request: httpx.Response(200, json=SUMMARY_JSON)))
        result = tool.run({"topic": "Alan Turing"}, self.context)
        self.assertEqual(result["title"], "Alan Turing")
        self.assertTrue(result["summary"].startswith("Alan Mathison Turing"))
        self.assertEqual(result["url"], "https://en.wikipedia.org/wiki/Alan_Turing")

    def test_not_found_is_soft_error(self):
        tool = WikipediaSummaryTool(wiki_client(lambda request: httpx.Response(404, json={"title": "Not found."})))
        result = tool.run({"topic": "Xyzzy Plugh"}, self.context)
        self.assertEqual(set(result), {"error"})
        self.assertIn("Xyzzy Plugh", result["error"])

    def test_network_error_is_soft_error(self):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        result = WikipediaSummaryTool(wiki_client(handler)).run({"topic": "Alan Turing"}, self.context)
        self.assertIn("error", result)

    def test_server_error_is_soft_error(self):
        tool = WikipediaSummaryTool(wiki_client(lambda request: httpx.Response(503)))
        self.assertIn("error", tool.run({"topic": "Alan Turing"}, self.context))

    def test_blank_topic(self):
        tool = WikipediaSummaryTool(wiki_client(lambda request: httpx.Response(200, json=SUMMARY_JSON)))
        self.assertIn("error", tool.run({"topic": "  "}, self.context))


class BuildToolRegistryTests(TestCase):
    def test_registers_the_three_tools(self):
        registry = build_tool_registry(store=MemoryStore(MagicMock()), wikipedia=WikipediaClient())
        self.assertEqual(
            list(registry.list_tools()),
            ["getProductDetails", "searchMemory", "getWikipediaSummary"],
        )

    def test_settings_configure_memory_and_wikipedia(self):
        settings = ChatSettings(memory_collection="notes", memory_top_k=5, wikipedia_language="de")
        registry = build_tool_registry(store=MemoryStore(MagicMock()), settings=settings)
        memory = registry.resolve("searchMemory")
        self.assertEqual((memory.collection_name, memory.top_k), ("notes", 5))
        self.assertEqual(registry.resolve("getWikipediaSummary").client.language, "de")
