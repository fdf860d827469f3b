"""
Lightweight turn gating: greetings, farewells and the fragrance topic check.

Deterministic keyword rules, checked before any slot parsing or retrieval.
Single-locale (Portuguese, plus a few English greetings).
"""
from typing import Tuple

GREETINGS: Tuple[str, ...] = (
    "oi", "ola", "olá", "hello", "hi", "hey", "bom dia", "boa tarde", "boa noite",
)
FAREWELLS: Tuple[str, ...] = ("tchau", "até", "valeu", "obrigado", "obrigada")
TOPIC_KEYWORDS: Tuple[str, ...] = (
    "perfume", "fragr", "cheiro", "aroma", "odor", "eau", "parfum", "toilette",
)

_TRAILING_PUNCTUATION = "!.?,;:~ "


def _normalize(message: str) -> str:
    return " ".join((message or "").lower().split())


def is_greeting_only(message: str) -> bool:
    """True when the whole message is a pleasantry such as "Oi!" or "bom dia."."""
    text = _normalize(message).rstrip(_TRAILING_PUNCTUATION)
    if not text:
        return False
    return text in GREETINGS


def is_farewell(message: str) -> bool:
    text = _normalize(message)
    return any(text.startswith(token) for token in FAREWELLS)


def is_on_topic(message: str) -> bool:
    """True when the message mentions the fragrance domain explicitly."""
    text = (message or "").lower()
    return any(keyword in text for keyword in TOPIC_KEYWORDS)
