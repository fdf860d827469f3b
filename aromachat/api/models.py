"""
Pydantic models for the chat and recommendation payloads.

These are the shapes a thin HTTP layer serializes; the core returns them
directly.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class Suggestion(BaseModel):
    """Compact product card shown inside the chat."""
    id: int = Field(description="Product ID")
    name: str = Field(description="Product name")
    brand: str = Field(default="", description="Brand name")
    slug: str = Field(default="", description="URL slug of the product page")
    thumbnail_url: str = Field(default="", description="Thumbnail image URL")
    price: float = Field(default=0.0, description="Price in BRL")
    reason: str = Field(default="", description="Human-readable compatibility reason")


class ChatRequest(BaseModel):
    """Request model for a conversational turn."""
    message: str = Field(description="User's message")
    session_id: Optional[str] = Field(default=None, description="Session ID ('anon' when omitted)")


class ChatReply(BaseModel):
    """Assistant reply plus product suggestions and the next clarifying question."""
    reply: str = Field(description="Assistant message")
    suggestions: List[Suggestion] = Field(default_factory=list, description="Recommended products")
    follow_up_hint: str = Field(default="", description="Next clarifying question")


class RecommendRequest(BaseModel):
    """Request model for single-shot recommendation (no conversation state)."""
    message: str = Field(description="Free-text description of what the user wants")
    limit: int = Field(default=5, description="Maximum number of suggestions (1-10)")


class RecommendResponse(BaseModel):
    """Response model for single-shot recommendation."""
    suggestions: List[Suggestion] = Field(default_factory=list)
    reasoning: str = Field(default="", description="'cached' or 'fts'")
