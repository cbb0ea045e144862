"""Assistant tools: inventory lookup, memory search, Wikipedia summaries."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

import httpx

from assistant.encyclopedia import ArticleNotFoundError, WikipediaClient
from memorystore import DEFAULT_COLLECTION, DEFAULT_TOP_K, MemoryStore
from toolchat.tools import ToolRegistry
from toolchat.types.context import RunContext

logger = logging.getLogger(__name__)

NO_MEMORY_RESULT = "No relevant information found in memory."

# Mock inventory. In a real deployment this would be a database or API.
PRODUCTS: Dict[str, Dict[str, Any]] = {
    "prod-123": {"name": "Quantum Laptop", "price": 1500.00, "stock": 42},
    "prod-456": {"name": "Starlight Mouse", "price": 89.99, "stock": 150},
    "prod-789": {"name": "Cosmic Keyboard", "price": 129.50, "stock": 0},
}


class ProductDetailsTool:
    """Look up a product in the mock inventory."""

    name = "getProductDetails"
    description = (
        "Retrieves detailed information for a specific product from the inventory database. "
        "Use this function when the user asks about the price, name, or stock quantity of an item. "
        "Returns a JSON object with id, name, price and stock. "
        "If the product is not found, it returns an object with an 'error' field."
    )
    parameters = {
        "type": "object",
        "properties": {
            "productId": {
                "type": "string",
                "description": "The unique identifier of the product (e.g., 'prod-123').",
            },
        },
        "required": ["productId"],
    }

    def run(self, args: Dict[str, Any], context: RunContext) -> Dict[str, Any]:
        product_id = args.get("productId", "")
        logger.info("Searching for product with ID: %s", product_id)
        product = PRODUCTS.get(product_id)
        if product is None:
            return {"error": f"Product with ID '{product_id}' not found."}
        return {"id": product_id, **product}


class MemorySearchTool:
    """Similarity search over the agent's long-term memory collection."""

    name = "searchMemory"
    description = (
        "Searches the agent's long-term memory for information relevant to a query. "
        "Use this when the user asks about internal projects, people or facts that "
        "were stored earlier and are not general knowledge."
    )
    parameters = {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Free-text description of the information to look for.",
            },
        },
        "required": ["query"],
    }

    def __init__(
        self,
        store: MemoryStore,
        collection_name: str = DEFAULT_COLLECTION,
        top_k: int = DEFAULT_TOP_K,
    ) -> None:
        self.store = store
        self.collection_name = collection_name
        self.top_k = top_k
        self._collection = None
        self._lock = threading.Lock()

    def _get_collection(self):
        # Opened on first search, then reused for the session.
        with self._lock:
            if self._collection is None:
                self._collection = self.store.get_or_create_collection(self.collection_name)
            return self._collection

    def run(self, args: Dict[str, Any], context: RunContext) -> Dict[str, Any]:
        query = args.get("query", "")
        documents = self.store.query(self._get_collection(), query, k=self.top_k)
        if not documents:
            return {"result": NO_MEMORY_RESULT}
        return {"results": documents}


class WikipediaSummaryTool:
    """Fetch the lead summary of a Wikipedia article."""

    name = "getWikipediaSummary"
    description = (
        "Fetches a short summary of a Wikipedia article about a topic. "
        "Use this for general knowledge questions about people, places, things or events. "
        "Returns title, summary and url, or an object with an 'error' field."
    )
    parameters = {
        "type": "object",
        "properties": {
            "topic": {
                "type": "string",
                "description": "The article title or topic to look up (e.g., 'Alan Turing').",
            },
        },
        "required": ["topic"],
    }

    def __init__(self, client: WikipediaClient) -> None:
        self.client = client

    def run(self, args: Dict[str, Any], context: RunContext) -> Dict[str, Any]:
        topic = args.get("topic", "").strip()
        if not topic:
            return {"error": "A non-empty 'topic' is required."}
        try:
            article = self.client.summarize(topic)
        except ArticleNotFoundError as exc:
            return {"error": str(exc)}
        except httpx.HTTPError as exc:
            logger.warning("getWikipediaSummary: request for %r failed: %s", topic, exc)
            return {"error": f"Could not reach Wikipedia: {exc}"}
        return {"title": article.title, "summary": article.extract, "url": article.url}


def build_tool_registry(
    store: Optional[MemoryStore] = None,
    wikipedia: Optional[WikipediaClient] = None,
    settings=None,
) -> ToolRegistry:
    """Build the assistant's fixed tool set, configured from settings when given."""
    if settings is not None:
        store = store or MemoryStore.from_settings(settings)
        wikipedia = wikipedia or WikipediaClient(
            language=settings.wikipedia_language, timeout=settings.http_timeout_seconds
        )
        memory_tool = MemorySearchTool(
            store, collection_name=settings.memory_collection, top_k=settings.memory_top_k
        )
    else:
        store = store or MemoryStore()
        wikipedia = wikipedia or WikipediaClient()
        memory_tool = MemorySearchTool(store)
    return ToolRegistry.from_tools(
        [ProductDetailsTool(), memory_tool, WikipediaSummaryTool(wikipedia)]
    )


__all__ = [
    "NO_MEMORY_RESULT",
    "PRODUCTS",
    "ProductDetailsTool",
    "MemorySearchTool",
    "WikipediaSummaryTool",
    "build_tool_registry",
]
