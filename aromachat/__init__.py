"""
aromachat - conversational fragrance recommendation core

- Keyword slot extraction from Portuguese chat messages
- Bounded, self-summarizing session memory
- Concurrent hybrid retrieval (full-text, embeddings, accord matching) with a TTL cache
- Chat orchestration with deterministic fallbacks
"""

from aromachat.core.config import AromaConfig, get_config, set_config
from aromachat.core.conversation import Conversation, ConversationStore
from aromachat.core.orchestrator import ChatOrchestrator
from aromachat.parsing.slot_extractor import (
    Slots,
    parse,
    merge,
    next_missing,
    profile_hash,
    build_search_query,
)
from aromachat.recommendation.retrieval import RetrievalEngine
from aromachat.recommendation.recommender import Recommender

__all__ = [
    'AromaConfig',
    'get_config',
    'set_config',
    'Conversation',
    'ConversationStore',
    'ChatOrchestrator',
    'Slots',
    'parse',
    'merge',
    'next_missing',
    'profile_hash',
    'build_search_query',
    'RetrievalEngine',
    'Recommender',
]

__version__ = '0.1.0'
