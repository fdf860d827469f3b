"""
Product recommendation for aromachat.

Two entry points:
- RetrievalEngine: hybrid full-text + embedding + accord search, profile-keyed cache
- Recommender: single full-text search, message-keyed cache
"""
from aromachat.recommendation.retrieval import RetrievalEngine, compatibility_reason
from aromachat.recommendation.recommender import Recommender, build_simple_reason

__all__ = [
    "RetrievalEngine",
    "compatibility_reason",
    "Recommender",
    "build_simple_reason",
]
