"""
Per-session conversation memory.

Tracks sanitized message history, merged preference slots, a rolling summary
and an inactivity deadline. History is bounded: once it grows past the limit
the older turns collapse into a one-line preference summary followed by the
most recent raw messages.

Sessions live in an in-memory ConversationStore guarded by a single lock.
Expiry is lazy: an expired session is replaced the next time it is looked up.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from aromachat.core.config import AromaConfig, get_config
from aromachat.interview.preference_slots import PREFERENCE_SLOTS
from aromachat.parsing.sanitize import DEFAULT_MAX_RUNES, sanitize_user_message
from aromachat.parsing.slot_extractor import Slots, merge
from aromachat.utils.logger import get_logger

logger = get_logger("core.conversation")

SUMMARY_MARKER = "(summary) "
ANONYMOUS_SESSION_ID = "anon"

DEFAULT_TTL = timedelta(minutes=30)
DEFAULT_HISTORY_LIMIT = 12
DEFAULT_SUMMARY_MIN_HISTORY = 6
DEFAULT_SUMMARY_KEEP_RECENT = 2


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Conversation:
    """State for one chat session."""
    history: List[str] = field(default_factory=list)
    summary: str = ""
    prefs: Slots = field(default_factory=Slots)
    turn_count: int = 0
    expires_at: Optional[datetime] = None   # defaults to now() + ttl
    # Limits and clock, normally set by ConversationStore from config
    ttl: timedelta = field(default=DEFAULT_TTL, repr=False)
    history_limit: int = field(default=DEFAULT_HISTORY_LIMIT, repr=False)
    summary_min_history: int = field(default=DEFAULT_SUMMARY_MIN_HISTORY, repr=False)
    summary_keep_recent: int = field(default=DEFAULT_SUMMARY_KEEP_RECENT, repr=False)
    now: Callable[[], datetime] = field(default=utcnow, repr=False, compare=False)

    def __post_init__(self):
        if self.expires_at is None:
            self.expires_at = self.now() + self.ttl

    @classmethod
    def new(
        cls,
        ttl: timedelta = DEFAULT_TTL,
        now: Callable[[], datetime] = utcnow,
        **limits,
    ) -> "Conversation":
        """Create an empty conversation that expires ttl from now."""
        return cls(ttl=ttl, now=now, **limits)

    def add_message(self, raw: str, extracted: Slots, max_runes: int = DEFAULT_MAX_RUNES) -> None:
        """
        Record a user turn.

        Sanitizes the text, merges the extracted slots into prefs, appends to
        history, bumps turn_count and refreshes the expiry. Summarizes when the
        history exceeds the configured limit.
        """
        text = sanitize_user_message(raw, max_runes)
        self.prefs = merge(self.prefs, extracted)
        self.history.append(text)
        self.turn_count += 1
        self.expires_at = self.now() + self.ttl
        if len(self.history) > self.history_limit:
            self.summarize()

    def summarize(self) -> None:
        """Collapse history into a preference summary plus the latest raw messages."""
        if len(self.history) < self.summary_min_history:
            return
        parts = []
        for slot in PREFERENCE_SLOTS:
            values = getattr(self.prefs, slot.field_name)
            if values:
                parts.append(f"{slot.name}={','.join(values)}")
        self.summary = " | ".join(parts)
        recent = self.history[-self.summary_keep_recent:] if self.summary_keep_recent > 0 else []
        self.history = [SUMMARY_MARKER + self.summary] + recent
        logger.debug(f"Conversation summarized: {self.summary!r}")

    def is_expired(self, at: Optional[datetime] = None) -> bool:
        return (at or self.now()) >= self.expires_at


class ConversationStore:
    """In-memory session map keyed by session id, with lazy expiry."""

    def __init__(
        self,
        config: Optional[AromaConfig] = None,
        now: Callable[[], datetime] = utcnow,
    ):
        self.config = config or get_config()
        self._now = now
        self._lock = threading.Lock()
        self._sessions: Dict[str, Conversation] = {}

    def _new_conversation(self) -> Conversation:
        return Conversation.new(
            ttl=timedelta(minutes=self.config.conversation_ttl_minutes),
            now=self._now,
            history_limit=self.config.history_limit,
            summary_min_history=self.config.summary_min_history,
            summary_keep_recent=self.config.summary_keep_recent,
        )

    def get_or_create(self, session_id: Optional[str]) -> Conversation:
        """Return the live conversation for a session, replacing it if it expired."""
        sid = session_id or ANONYMOUS_SESSION_ID
        with self._lock:
            conversation = self._sessions.get(sid)
            if conversation is not None and not conversation.is_expired(self._now()):
                return conversation
            if conversation is not None:
                logger.info(f"Session expired, starting over: {sid}")
            conversation = self._new_conversation()
            self._sessions[sid] = conversation
            return conversation

    def get(self, session_id: Optional[str]) -> Optional[Conversation]:
        """Return the live conversation for a session without creating one."""
        sid = session_id or ANONYMOUS_SESSION_ID
        with self._lock:
            conversation = self._sessions.get(sid)
            if conversation is None or conversation.is_expired(self._now()):
                return None
            return conversation

    def reset(self, session_id: Optional[str]) -> None:
        sid = session_id or ANONYMOUS_SESSION_ID
        with self._lock:
            self._sessions.pop(sid, None)
        logger.info(f"Reset session: {sid}")

    def session_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
