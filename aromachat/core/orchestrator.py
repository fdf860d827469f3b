"""
Chat orchestration for the fragrance assistant.

One call per user turn:
1. Sanitize, then short-circuit greetings and farewells (state untouched)
2. Extract slots and record the turn in the session's conversation
3. Off-topic gate: no fragrance keyword and no known preferences -> clarify
4. Hybrid retrieval of candidate products
5. Generate a reply; fall back to a deterministic template if generation fails
6. Make sure at least one suggestion is named, attach the next clarifying question
"""
from __future__ import annotations

from typing import List, Optional

from aromachat.api.models import ChatReply, Suggestion
from aromachat.core.config import AromaConfig, get_config
from aromachat.core.conversation import ConversationStore
from aromachat.data.catalog import TextGenerator
from aromachat.interview.prompts import (
    FAREWELL_REPLY,
    GREETING_HINT,
    GREETING_REPLY,
    OFF_TOPIC_REPLY,
    build_fallback_reply,
    build_follow_up_hint,
    build_prompt,
    build_suggestion_tail,
)
from aromachat.parsing.intent import is_farewell, is_greeting_only, is_on_topic
from aromachat.parsing.sanitize import sanitize_user_message
from aromachat.parsing.slot_extractor import parse
from aromachat.recommendation.retrieval import RetrievalEngine
from aromachat.utils.logger import get_logger

logger = get_logger("core.orchestrator")


def mentions_any_suggestion(reply: str, suggestions: List[Suggestion]) -> bool:
    lowered = reply.lower()
    return any(s.name and s.name.lower() in lowered for s in suggestions)


class ChatOrchestrator:
    """
    Ties slot extraction, conversation memory, retrieval and generation together.

    Args:
        retrieval: Hybrid retrieval engine
        generator: Text generation backend
        store: Session store (a fresh in-memory one when omitted)
        config: Limits and budgets (global config when omitted)
    """

    def __init__(
        self,
        retrieval: RetrievalEngine,
        generator: TextGenerator,
        store: Optional[ConversationStore] = None,
        config: Optional[AromaConfig] = None,
    ):
        self.config = config or get_config()
        self.retrieval = retrieval
        self.generator = generator
        self.store = store if store is not None else ConversationStore(self.config)

    async def chat(self, session_id: Optional[str], raw_message: str) -> ChatReply:
        """Process one user message and return the reply, suggestions and follow-up hint."""
        sanitized = sanitize_user_message(raw_message, self.config.chat_message_max_runes)

        if is_greeting_only(sanitized):
            return ChatReply(reply=GREETING_REPLY, follow_up_hint=GREETING_HINT)
        if is_farewell(sanitized):
            return ChatReply(reply=FAREWELL_REPLY)

        extracted = parse(sanitized)
        conversation = self.store.get_or_create(session_id)
        conversation.add_message(sanitized, extracted, self.config.message_max_runes)
        prefs = conversation.prefs

        if not is_on_topic(sanitized) and prefs.is_empty():
            logger.info(f"Off-topic turn without preferences (session={session_id or 'anon'})")
            return ChatReply(reply=OFF_TOPIC_REPLY, follow_up_hint=build_follow_up_hint(prefs))

        suggestions = await self.retrieval.get_suggestions(prefs, sanitized)

        prompt = build_prompt(conversation.summary, sanitized, suggestions)
        reply = await self._generate(prompt, suggestions)

        if suggestions and not mentions_any_suggestion(reply, suggestions):
            reply += "\n\n" + build_suggestion_tail(suggestions, self.config.tail_max_names)

        return ChatReply(
            reply=reply,
            suggestions=suggestions,
            follow_up_hint=build_follow_up_hint(prefs),
        )

    async def _generate(self, prompt: str, suggestions: List[Suggestion]) -> str:
        try:
            reply = await self.generator.generate(prompt, self.config.generation_max_tokens)
        except Exception as e:
            logger.warning(f"Generation failed, using fallback reply: {e}")
            return build_fallback_reply(suggestions, self.config.fallback_max_names)
        if not reply or not reply.strip():
            logger.warning("Generation returned an empty reply, using fallback reply")
            return build_fallback_reply(suggestions, self.config.fallback_max_names)
        return reply.strip()

    def clear_retrieval_cache(self) -> int:
        return self.retrieval.clear_cache()
