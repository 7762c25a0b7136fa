"""
Retrieval: keyword lookup over the static support knowledge base.

Responsibility: Hold the knowledge chunks and return the context block that is
prepended to the customer's question before it goes to the model.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

CHUNK_DELIMITER = "\n---\n"
NO_CONTEXT_FALLBACK = (
    "No specific internal knowledge found. Answer using only general knowledge if possible."
)


@dataclass(frozen=True)
class KnowledgeChunk:
    text: str
    keywords: frozenset[str]

    def matches(self, query_lower: str) -> bool:
        """Keyword appears in the query, or the whole query appears in the chunk text."""
        if any(kw in query_lower for kw in self.keywords):
            return True
        return query_lower in self.text.lower()


class KnowledgeStore:
    """Read-only, ordered collection of knowledge chunks. Built once at import."""

    def __init__(self, chunks: Iterable[KnowledgeChunk]) -> None:
        self._chunks: tuple[KnowledgeChunk, ...] = tuple(chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[KnowledgeChunk]:
        return iter(self._chunks)

    def retrieve(self, query: str) -> str:
        """
        Return matching chunk texts joined by CHUNK_DELIMITER (store order), or
        NO_CONTEXT_FALLBACK when nothing matches. Never raises.
        """
        if not isinstance(query, str) or not query.strip():
            logger.info("[retrieval:retrieve_context] IN  query=%r -> empty, fallback", query)
            return NO_CONTEXT_FALLBACK
        query_lower = query.lower()
        relevant = [c.text for c in self._chunks if c.matches(query_lower)]
        logger.info("[retrieval:retrieve_context] IN  query=%r OUT chunks=%d", query, len(relevant))
        if relevant:
            return CHUNK_DELIMITER.join(relevant)
        return NO_CONTEXT_FALLBACK


def _chunk(text: str, *keywords: str) -> KnowledgeChunk:
    return KnowledgeChunk(text=text, keywords=frozenset(kw.lower() for kw in keywords))


KNOWLEDGE_STORE = KnowledgeStore([
    _chunk(
        "Our standard shipping takes 5-7 business days within the country. "
        "Express shipping is available for a flat rate of $15.",
        "shipping", "delivery", "cost", "express",
    ),
    _chunk(
        "Returns are accepted within 30 days of purchase, provided the item is unworn "
        "and has original tags. Refunds are processed within 10 days.",
        "returns", "refunds", "policy", "30 days",
    ),
    _chunk(
        "The main support hours are Mon-Fri, 9 AM to 5 PM EST. "
        "Outside of these hours, the AI agent handles all inquiries.",
        "hours", "support", "staff",
    ),
])


def retrieve_context(query: str) -> str:
    """Retrieve context for a customer question from the default knowledge store."""
    return KNOWLEDGE_STORE.retrieve(query)
