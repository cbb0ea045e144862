"""Populate the agent memory collection with the Project BlueFox seed documents."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape

from memorystore import MemoryStore
from toolchat.service.config import load_settings
from toolchat.service.errors import LLMError

SEED_DOCUMENTS = [
    "Project BlueFox is a top-secret initiative scheduled for Q4.",
    "The project manager for BlueFox is Dr. Evelyn Reed.",
    "Project BlueFox focuses on developing a new type of quantum-resistant encryption algorithm.",
    "The budget allocated for Project BlueFox is $5 million.",
    "Key stakeholders for BlueFox include the Department of Innovation and a security agency.",
    "Initial prototypes for BlueFox are expected by the end of October.",
]


def seed(store: MemoryStore, collection_name: str) -> tuple[list[str], int]:
    """Insert the seed documents; return the new ids and the collection size afterwards."""
    collection = store.get_or_create_collection(collection_name)
    ids = store.add_documents(collection, SEED_DOCUMENTS)
    return ids, store.count(collection)


def main() -> int:
    console = Console()
    try:
        settings = load_settings()
        ids, total = seed(MemoryStore.from_settings(settings), settings.memory_collection)
    except LLMError as exc:
        console.print(f"[bold red]Could not populate memory:[/bold red] {escape(str(exc))}", highlight=False)
        return 1
    console.print(
        f"Added {len(ids)} documents to '{settings.memory_collection}' ({total} total)."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
