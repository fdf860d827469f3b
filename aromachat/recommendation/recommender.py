"""
Single-shot recommendation without conversation state.

Runs one full-text search on the sanitized message and explains each hit by
echoing which of its tags the user mentioned. Results are cached for a short
window keyed by the sanitized message and limit. Unlike the hybrid engine, search
failures propagate to the caller.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from aromachat.api.models import RecommendResponse, Suggestion
from aromachat.core.config import AromaConfig, get_config
from aromachat.data.catalog import Product, ProductSearch
from aromachat.parsing.sanitize import sanitize_user_message
from aromachat.recommendation.cache import TTLCache
from aromachat.recommendation.retrieval import SORT_RELEVANCE, copy_suggestions, to_suggestion
from aromachat.utils.logger import get_logger

logger = get_logger("recommendation.recommender")

SOURCE_CACHED = "cached"
SOURCE_FULL_TEXT = "fts"

OCCASION_REASON = "matches the occasion you mentioned"
SEASON_REASON = "suited to the season you mentioned"
ACCORD_REASON = "aligned olfactory profile (accords)"
TEXT_SIMILARITY_REASON = "text similarity relevance"


def _mentions_any(message: str, tags: List[str]) -> bool:
    return any(tag and tag.lower() in message for tag in tags)


def build_simple_reason(message: str, product: Product) -> str:
    """Echo which of the product's tags appear in the message."""
    lowered = message.lower()
    parts = []
    if _mentions_any(lowered, product.occasions):
        parts.append(OCCASION_REASON)
    if _mentions_any(lowered, product.seasons):
        parts.append(SEASON_REASON)
    if _mentions_any(lowered, product.accords):
        parts.append(ACCORD_REASON)
    if not parts:
        return TEXT_SIMILARITY_REASON
    return " · ".join(parts)


class Recommender:
    """Full-text recommendation with a short-lived message-keyed cache."""

    def __init__(
        self,
        products: ProductSearch,
        config: Optional[AromaConfig] = None,
        cache: Optional[TTLCache[List[Suggestion]]] = None,
    ):
        self.config = config or get_config()
        self.products = products
        if cache is None:
            cache = TTLCache(self.config.recommend_cache_ttl_seconds, namespace="recommend")
        self.cache: TTLCache[List[Suggestion]] = cache

    def clamp_limit(self, limit: int) -> int:
        if limit <= 0 or limit > self.config.recommend_max_limit:
            return self.config.recommend_default_limit
        return limit

    async def recommend(self, raw_message: str, limit: int = 0) -> Tuple[List[Suggestion], str]:
        """
        Recommend products for a free-text request.

        Returns:
            (suggestions, source) where source is "cached" or "fts".

        Raises:
            Whatever the search backend raises.
        """
        message = sanitize_user_message(raw_message, self.config.recommend_message_max_runes)
        limit = self.clamp_limit(limit)

        key = f"{limit}:{message}"
        cached = self.cache.get(key)
        if cached is not None:
            return copy_suggestions(cached), SOURCE_CACHED

        products, total = await self.products.search_products(message, limit, 0, SORT_RELEVANCE)
        suggestions = [to_suggestion(p, build_simple_reason(message, p)) for p in products]
        logger.info(f"Recommend: {len(suggestions)} of {total} matches")

        self.cache.set(key, suggestions)
        return copy_suggestions(suggestions), SOURCE_FULL_TEXT

    async def recommend_response(self, raw_message: str, limit: int = 0) -> RecommendResponse:
        suggestions, source = await self.recommend(raw_message, limit)
        return RecommendResponse(suggestions=suggestions, reasoning=source)
