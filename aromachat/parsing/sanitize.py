"""
User message sanitization.

Strips contact details and links out of free text before it reaches the
conversation memory, the search backend or the prompt, and bounds its length.
"""
import re

DEFAULT_MAX_RUNES = 800

EMAIL_RE = re.compile(r"[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,}", re.IGNORECASE)
PHONE_RE = re.compile(r"\+?\d[\d\s().\-]{7,}\d")
URL_RE = re.compile(r"\bhttps?://\S+", re.IGNORECASE)


def truncate_runes(text: str, max_runes: int) -> str:
    """Truncate to at most max_runes code points (never splits a character)."""
    if max_runes <= 0:
        return ""
    return text[:max_runes]


def sanitize_user_message(text: str, max_runes: int = DEFAULT_MAX_RUNES) -> str:
    """
    Redact e-mails, phone numbers and URLs, then truncate.

    Args:
        text: Raw user input
        max_runes: Maximum length in code points; values <= 0 mean the default (800)

    Returns:
        The sanitized message
    """
    cleaned = (text or "").strip()
    if max_runes <= 0:
        max_runes = DEFAULT_MAX_RUNES

    # URLs first so the phone pattern never eats digits inside a link
    cleaned = URL_RE.sub("[link]", cleaned)
    cleaned = EMAIL_RE.sub("[redacted-email]", cleaned)
    cleaned = PHONE_RE.sub("[redacted-phone]", cleaned)

    return truncate_runes(cleaned, max_runes)
