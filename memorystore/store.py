"""
Chroma-backed agent memory. Documents are free text; Chroma embeds them with
the collection's default embedding function.

The client is created lazily on first use: CHROMA_PATH selects an embedded
PersistentClient, otherwise an HttpClient talks to a Chroma server.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, List, Sequence

import chromadb

from toolchat.service.errors import MemoryStoreError

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "agent-memory"
DEFAULT_TOP_K = 3


class MemoryStore:
    """Insert and similarity-query text documents in Chroma collections."""

    def __init__(
        self,
        client: Any = None,
        *,
        path: str | None = None,
        host: str = "localhost",
        port: int = 8000,
    ) -> None:
        self._client = client
        self._path = path
        self._host = host
        self._port = port
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "MemoryStore":
        return cls(path=settings.chroma_path, host=settings.chroma_host, port=settings.chroma_port)

    def _get_client(self):
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is not None:
                return self._client
            try:
                if self._path:
                    self._client = chromadb.PersistentClient(path=self._path)
                else:
                    self._client = chromadb.HttpClient(host=self._host, port=self._port)
            except Exception as exc:
                target = self._path or f"{self._host}:{self._port}"
                raise MemoryStoreError(f"Could not connect to Chroma at {target}: {exc}") from exc
            return self._client

    def get_or_create_collection(self, name: str = DEFAULT_COLLECTION):
        client = self._get_client()
        try:
            return client.get_or_create_collection(name=name)
        except Exception as exc:
            raise MemoryStoreError(f"Could not open collection {name!r}: {exc}") from exc

    def add_documents(self, collection, texts: Sequence[str]) -> List[str]:
        """Insert texts with ids ``doc-<epoch-ms>-<index>``; return the ids. No dedup."""
        if not texts:
            return []
        stamp = int(time.time() * 1000)
        ids = [f"doc-{stamp}-{i}" for i in range(len(texts))]
        try:
            collection.add(ids=ids, documents=list(texts))
        except Exception as exc:
            raise MemoryStoreError(f"Adding {len(ids)} documents failed: {exc}") from exc
        logger.info("Added %d documents to %s", len(ids), getattr(collection, "name", collection))
        return ids

    def query(self, collection, text: str, k: int = DEFAULT_TOP_K) -> List[str]:
        """Return up to k documents, most similar first; [] when nothing matches."""
        try:
            res = collection.query(query_texts=[text], n_results=k, include=["documents"])
        except Exception as exc:
            raise MemoryStoreError(f"Memory query failed: {exc}") from exc
        docs = (res or {}).get("documents") or [[]]
        return [d for d in (docs[0] or []) if d]

    def count(self, collection) -> int:
        try:
            return collection.count()
        except Exception as exc:
            raise MemoryStoreError(f"Counting documents failed: {exc}") from exc


__all__ = ["MemoryStore", "DEFAULT_COLLECTION", "DEFAULT_TOP_K"]
