"""
Collaborator contracts for the recommendation core.

The catalog database, the embedding model and the text generator are owned by
the host application. The core only depends on these narrow async interfaces;
implementations signal failure by raising (the error classes below are
provided for convenience).
"""
from __future__ import annotations

from typing import List, Protocol, Sequence, Tuple

import numpy as np
from pydantic import BaseModel, Field


class ProductSearchError(RuntimeError):
    """Raised by product search implementations when a query fails."""


class EmbeddingError(RuntimeError):
    """Raised by embedding providers when a query cannot be embedded."""


class GenerationError(RuntimeError):
    """Raised by text generators when no completion can be produced."""


class Product(BaseModel):
    """Catalog entry as returned by the search backend."""
    id: int
    name: str
    brand: str = ""
    slug: str = ""
    thumbnail_url: str = ""
    price: float = 0.0
    occasions: List[str] = Field(default_factory=list)
    seasons: List[str] = Field(default_factory=list)
    accords: List[str] = Field(default_factory=list)


class ProductSearch(Protocol):
    async def search_products(
        self, query: str, limit: int, offset: int, sort_mode: str
    ) -> Tuple[List[Product], int]:
        """Full-text search. Returns (page of products, total matches)."""
        ...

    async def find_similar_products_by_embedding(
        self, vector: np.ndarray, limit: int
    ) -> List[Product]:
        """Nearest-neighbour lookup by embedding vector."""
        ...


class EmbeddingProvider(Protocol):
    async def embed_query(self, text: str) -> Sequence[float]:
        """Embed a search query into a dense vector."""
        ...


class TextGenerator(Protocol):
    async def generate(self, prompt: str, max_tokens: int) -> str:
        """Complete a prompt within a token budget."""
        ...


def as_vector(raw: Sequence[float]) -> np.ndarray:
    """Normalize a provider's output to a flat float32 vector."""
    return np.asarray(raw, dtype=np.float32).reshape(-1)
