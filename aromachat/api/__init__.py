"""
Payload models for aromachat.

Consumed by whatever HTTP layer hosts the chat; routing lives outside this package.
"""
from aromachat.api.models import (
    Suggestion,
    ChatRequest,
    ChatReply,
    RecommendRequest,
    RecommendResponse,
)

__all__ = [
    "Suggestion",
    "ChatRequest",
    "ChatReply",
    "RecommendRequest",
    "RecommendResponse",
]
