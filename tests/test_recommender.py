"""Tests for single-shot recommendation: limit clamping, message cache and reasons."""

import pytest

from aromachat.api.models import RecommendResponse
from aromachat.data.catalog import ProductSearchError
from aromachat.recommendation.cache import TTLCache
from aromachat.recommendation.recommender import (
    ACCORD_REASON,
    OCCASION_REASON,
    SEASON_REASON,
    SOURCE_CACHED,
    SOURCE_FULL_TEXT,
    TEXT_SIMILARITY_REASON,
    Recommender,
    build_simple_reason,
)
from aromachat.recommendation.retrieval import SORT_RELEVANCE


@pytest.fixture
def recommender(search, config, clock):
    cache = TTLCache(config.recommend_cache_ttl_seconds, namespace="recommend", clock=clock)
    return Recommender(search, config=config, cache=cache)


@pytest.mark.parametrize("limit, expected", [(0, 5), (-3, 5), (11, 5), (1, 1), (10, 10), (7, 7)])
def test_clamp_limit(recommender, limit, expected):
    assert recommender.clamp_limit(limit) == expected


class TestSimpleReason:
    def test_occasion_and_accord(self, catalog):
        reason = build_simple_reason("quero algo floral para o trabalho", catalog["jardim"])
        assert reason == f"{OCCASION_REASON} · {ACCORD_REASON}"

    def test_season(self, catalog):
        assert build_simple_reason("Algo para o VERÃO", catalog["brisa"]) == SEASON_REASON

    def test_nothing_mentioned(self, catalog):
        assert build_simple_reason("surpreenda-me", catalog["cedro"]) == TEXT_SIMILARITY_REASON


@pytest.mark.asyncio
async def test_first_call_searches_then_cache_serves(recommender, search, catalog):
    search.text_results = [catalog["jardim"], catalog["vetiver"]]

    first, source = await recommender.recommend("perfume para o trabalho", 3)
    assert source == SOURCE_FULL_TEXT
    assert [s.id for s in first] == [1, 6]
    assert search.search_calls == [("perfume para o trabalho", 3, 0, SORT_RELEVANCE)]

    second, source = await recommender.recommend("perfume para o trabalho", 3)
    assert source == SOURCE_CACHED
    assert second == first
    assert len(search.search_calls) == 1


@pytest.mark.asyncio
async def test_cache_key_includes_limit(recommender, search, catalog):
    search.text_results = list(catalog.values())

    await recommender.recommend("perfume floral", 2)
    _, source = await recommender.recommend("perfume floral", 4)

    assert source == SOURCE_FULL_TEXT
    assert len(search.search_calls) == 2


@pytest.mark.asyncio
async def test_cache_expires_after_two_minutes(recommender, search, clock, catalog):
    search.text_results = [catalog["jardim"]]

    await recommender.recommend("perfume floral")
    clock.advance(120)
    _, source = await recommender.recommend("perfume floral")

    assert source == SOURCE_FULL_TEXT


@pytest.mark.asyncio
async def test_message_is_sanitized_and_truncated(recommender, search):
    await recommender.recommend("  me liga 11 98765-4321 " + "a" * 600, 0)

    query, limit, _, _ = search.search_calls[0]
    assert "98765" not in query
    assert len(query) == 400
    assert limit == 5


@pytest.mark.asyncio
async def test_search_error_propagates_and_is_not_cached(recommender, search, catalog):
    search.fail_text = True
    with pytest.raises(ProductSearchError):
        await recommender.recommend("perfume floral")

    search.fail_text = False
    search.text_results = [catalog["jardim"]]
    suggestions, source = await recommender.recommend("perfume floral")
    assert source == SOURCE_FULL_TEXT
    assert [s.id for s in suggestions] == [1]


@pytest.mark.asyncio
async def test_recommend_response(recommender, search, catalog):
    search.text_results = [catalog["rosa"]]

    response = await recommender.recommend_response("perfume para festa", 1)

    assert isinstance(response, RecommendResponse)
    assert response.reasoning == SOURCE_FULL_TEXT
    assert response.suggestions[0].name == "Rosa Imperial"
    assert response.suggestions[0].reason == OCCASION_REASON


@pytest.mark.asyncio
async def test_editing_returned_models_does_not_touch_cache(recommender, search, catalog):
    search.text_results = [catalog["jardim"]]

    first, _ = await recommender.recommend("perfume para o trabalho")
    first[0].reason = "edited"
    first[0].price = 1.0
    cached, source = await recommender.recommend("perfume para o trabalho")

    assert source == SOURCE_CACHED
    assert cached[0].reason == OCCASION_REASON
    assert cached[0].price == 101.0
