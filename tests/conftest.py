"""Pytest configuration and collaborator fakes for aromachat tests."""

import asyncio
from typing import Dict, List, Optional, Tuple

import numpy as np
import pytest

from aromachat.core.config import AromaConfig, set_config
from aromachat.data.catalog import EmbeddingError, GenerationError, Product, ProductSearchError


def make_product(pid: int, name: str, brand: str = "Casa", **tags) -> Product:
    return Product(
        id=pid,
        name=name,
        brand=brand,
        slug=name.lower().replace(" ", "-"),
        thumbnail_url=f"https://cdn.example.com/{pid}.jpg",
        price=100.0 + pid,
        occasions=tags.get("occasions", []),
        seasons=tags.get("seasons", []),
        accords=tags.get("accords", []),
    )


class FakeProductSearch:
    """
    Scripted search backend.

    Full-text results are chosen by query: accord OR-expressions (starting with
    "(") return `accord_results`, everything else returns `text_results`.
    Each path can be delayed or made to fail independently.
    """

    def __init__(
        self,
        text_results: Optional[List[Product]] = None,
        accord_results: Optional[List[Product]] = None,
        similar_results: Optional[List[Product]] = None,
    ):
        self.text_results = text_results or []
        self.accord_results = accord_results or []
        self.similar_results = similar_results or []
        self.text_delay = 0.0
        self.accord_delay = 0.0
        self.similar_delay = 0.0
        self.fail_text = False
        self.fail_accords = False
        self.fail_similar = False
        self.search_calls: List[Tuple[str, int, int, str]] = []
        self.similar_calls: List[Tuple[np.ndarray, int]] = []

    @property
    def total_calls(self) -> int:
        return len(self.search_calls) + len(self.similar_calls)

    async def search_products(self, query: str, limit: int, offset: int, sort_mode: str):
        self.search_calls.append((query, limit, offset, sort_mode))
        if query.startswith("("):
            await asyncio.sleep(self.accord_delay)
            if self.fail_accords:
                raise ProductSearchError("accord search unavailable")
            results = self.accord_results
        else:
            await asyncio.sleep(self.text_delay)
            if self.fail_text:
                raise ProductSearchError("full-text search unavailable")
            results = self.text_results
        return results[:limit], len(results)

    async def find_similar_products_by_embedding(self, vector, limit: int):
        self.similar_calls.append((vector, limit))
        await asyncio.sleep(self.similar_delay)
        if self.fail_similar:
            raise ProductSearchError("vector index unavailable")
        return self.similar_results[:limit]


class FakeEmbedder:
    def __init__(self, dim: int = 8, fail: bool = False):
        self.dim = dim
        self.fail = fail
        self.calls: List[str] = []

    async def embed_query(self, text: str):
        self.calls.append(text)
        if self.fail:
            raise EmbeddingError("embedding model offline")
        return [0.1] * self.dim


class FakeGenerator:
    def __init__(self, reply: str = "", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.prompts: List[Tuple[str, int]] = []

    async def generate(self, prompt: str, max_tokens: int) -> str:
        self.prompts.append((prompt, max_tokens))
        if self.fail:
            raise GenerationError("model timed out")
        return self.reply


class ManualClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _default_config():
    """Pin the global config to code defaults so a local YAML never leaks into tests."""
    set_config(AromaConfig())
    yield
    set_config(AromaConfig())


@pytest.fixture
def config() -> AromaConfig:
    return AromaConfig()


@pytest.fixture
def catalog() -> Dict[str, Product]:
    return {
        "jardim": make_product(1, "Jardim Branco", "Flora", occasions=["Trabalho"], accords=["Floral"]),
        "cedro": make_product(2, "Cedro Noturno", "Madeiras", occasions=["Noite"], accords=["Amadeirado"]),
        "brisa": make_product(3, "Brisa Cítrica", "Mar", seasons=["Verão"], accords=["Cítrico"]),
        "rosa": make_product(4, "Rosa Imperial", "Flora", occasions=["Festa"], accords=["Floral", "Doce"]),
        "ambar": make_product(5, "Âmbar Sereno", "Oriente", seasons=["Inverno"], accords=["Oriental"]),
        "vetiver": make_product(6, "Vetiver Urbano", "Madeiras", occasions=["Trabalho"], accords=["Verde"]),
    }


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def search() -> FakeProductSearch:
    return FakeProductSearch()


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator(reply="Posso sugerir algumas opções do catálogo.")
