"""
Hybrid product retrieval for chat suggestions.

Three strategies run concurrently for every cache miss:
- full-text search over the message enriched with the top preferences
- embedding similarity on the same composed query
- direct accord matching (only when the user named accords)

Each branch absorbs its own failures and yields an empty list, so a broken
backend degrades the result instead of failing the turn. The fan-in waits for
all three branches, merges them in completion order, dedups by product id and
caps the list at top_k. Results are cached per preference profile.

Without an embedding provider the engine runs a single full-text search.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional

from aromachat.api.models import Suggestion
from aromachat.core.config import AromaConfig, get_config
from aromachat.data.catalog import EmbeddingProvider, Product, ProductSearch, as_vector
from aromachat.parsing.sanitize import sanitize_user_message
from aromachat.parsing.slot_extractor import Slots, build_search_query, profile_hash
from aromachat.recommendation.cache import TTLCache
from aromachat.utils.logger import get_logger

logger = get_logger("recommendation.retrieval")

SORT_RELEVANCE = "relevance"
SEMANTIC_REASON_SUFFIX = " • semantic similarity with your query"
ACCORD_REASON_SUFFIX = " • direct accord match"
GENERAL_MATCH_REASON = "general profile match"


def _overlap_count(wanted: List[str], offered: List[str]) -> int:
    wanted_lower = {value.lower() for value in wanted}
    return sum(1 for value in offered if value.lower() in wanted_lower)


def compatibility_reason(slots: Slots, product: Product) -> str:
    """Explain a candidate by counting tag overlaps on occasions, seasons and accords."""
    score = (
        _overlap_count(slots.occasions, product.occasions)
        + _overlap_count(slots.seasons, product.seasons)
        + _overlap_count(slots.accords, product.accords)
    )
    if score == 0:
        return GENERAL_MATCH_REASON
    return f"{score} compatibility point(s) with your preferences"


def to_suggestion(product: Product, reason: str) -> Suggestion:
    return Suggestion(
        id=product.id,
        name=product.name,
        brand=product.brand,
        slug=product.slug,
        thumbnail_url=product.thumbnail_url,
        price=product.price,
        reason=reason,
    )


def copy_suggestions(suggestions: List[Suggestion]) -> List[Suggestion]:
    """Fresh models so callers never share objects with the cache."""
    return [s.model_copy() for s in suggestions]


def accord_query(accords: List[str]) -> str:
    """OR-expression over accord labels, e.g. "(Floral | Cítrico)"."""
    return "(" + " | ".join(accords) + ")"


class RetrievalEngine:
    """
    Concurrent multi-strategy product search with a profile-keyed TTL cache.

    Args:
        products: Full-text and vector search backend
        embeddings: Query embedding provider; None switches to full-text only
        config: Limits and TTLs (global config when omitted)
        cache: Injected cache; a fresh one using config TTL when omitted
    """

    def __init__(
        self,
        products: ProductSearch,
        embeddings: Optional[EmbeddingProvider] = None,
        config: Optional[AromaConfig] = None,
        cache: Optional[TTLCache[List[Suggestion]]] = None,
        top_k: Optional[int] = None,
    ):
        self.config = config or get_config()
        self.products = products
        self.embeddings = embeddings
        self.top_k = top_k if top_k is not None else self.config.retrieval_top_k
        if cache is None:
            cache = TTLCache(self.config.retrieval_cache_ttl_seconds, namespace="retrieval")
        self.cache: TTLCache[List[Suggestion]] = cache

    async def get_suggestions(self, slots: Slots, raw_message: str) -> List[Suggestion]:
        """
        Return up to top_k deduplicated suggestions for a preference profile.

        Never raises for backend failures; an empty list means nothing was found.
        """
        key = profile_hash(slots)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Retrieval cache hit: {key}")
            return copy_suggestions(cached)

        message = sanitize_user_message(raw_message, self.config.message_max_runes)
        query = build_search_query(slots, message).strip()

        if self.embeddings is None:
            suggestions = await self._guarded("full_text", lambda: self._full_text_branch(slots, query))
        else:
            suggestions = await self._hybrid(slots, query)

        suggestions = suggestions[: self.top_k]
        self.cache.set(key, suggestions)
        logger.info(f"Retrieved {len(suggestions)} suggestions for profile {key}")
        return copy_suggestions(suggestions)

    async def _hybrid(self, slots: Slots, query: str) -> List[Suggestion]:
        # Branch results in completion order
        completed: List[List[Suggestion]] = []

        async def _collect(name: str, branch: Callable[[], Awaitable[List[Suggestion]]]) -> None:
            completed.append(await self._guarded(name, branch))

        await asyncio.gather(
            _collect("full_text", lambda: self._full_text_branch(slots, query)),
            _collect("embedding", lambda: self._embedding_branch(slots, query)),
            _collect("accords", lambda: self._accord_branch(slots)),
        )

        merged: List[Suggestion] = []
        seen = set()
        for branch_result in completed:
            for suggestion in branch_result:
                if suggestion.id in seen:
                    continue
                seen.add(suggestion.id)
                merged.append(suggestion)
        return merged

    async def _guarded(
        self, name: str, branch: Callable[[], Awaitable[List[Suggestion]]]
    ) -> List[Suggestion]:
        try:
            return await branch()
        except Exception as e:
            logger.warning(f"Retrieval branch '{name}' failed, continuing without it: {e}")
            return []

    async def _full_text_branch(self, slots: Slots, query: str) -> List[Suggestion]:
        if not query:
            return []
        products, _ = await self.products.search_products(query, self.top_k, 0, SORT_RELEVANCE)
        return [to_suggestion(p, compatibility_reason(slots, p)) for p in products]

    async def _embedding_branch(self, slots: Slots, query: str) -> List[Suggestion]:
        if not query or self.embeddings is None:
            return []
        vector = as_vector(await self.embeddings.embed_query(query))
        if vector.size == 0:
            return []
        products = await self.products.find_similar_products_by_embedding(vector, self.top_k)
        return [
            to_suggestion(p, compatibility_reason(slots, p) + SEMANTIC_REASON_SUFFIX)
            for p in products
        ]

    async def _accord_branch(self, slots: Slots) -> List[Suggestion]:
        if not slots.accords:
            return []
        products, _ = await self.products.search_products(
            accord_query(slots.accords), self.top_k, 0, SORT_RELEVANCE
        )
        return [
            to_suggestion(p, compatibility_reason(slots, p) + ACCORD_REASON_SUFFIX)
            for p in products
        ]

    def clear_cache(self) -> int:
        """Drop every cached suggestion list."""
        return self.cache.clear()
