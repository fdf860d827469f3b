"""
Configuration management for aromachat.

Loads limits, TTLs and budgets from a YAML file and provides typed access.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
# Load environment variables from .env file
from dotenv import load_dotenv

from aromachat.utils.logger import configure as configure_logging

load_dotenv()


def _project_root() -> Path:
    """Return project root (parent of aromachat package)."""
    return Path(__file__).resolve().parent.parent.parent


DEFAULT_CONFIG_PATH = _project_root() / "config" / "default.yaml"


@dataclass
class AromaConfig:
    """Configuration for the conversational recommendation core."""

    # Conversation memory
    conversation_ttl_minutes: int = 30      # Inactivity window before a session is replaced
    history_limit: int = 12                 # Summarize once history grows past this
    summary_min_history: int = 6            # Never summarize shorter histories
    summary_keep_recent: int = 2            # Raw messages kept after the summary marker
    message_max_runes: int = 800            # Default sanitizer truncation

    # Chat turn
    chat_message_max_runes: int = 500
    generation_max_tokens: int = 180
    fallback_max_names: int = 3             # Products named by the deterministic fallback
    tail_max_names: int = 2                 # Products named by the appended tail

    # Hybrid retrieval
    retrieval_top_k: int = 5
    retrieval_cache_ttl_seconds: int = 300

    # Single-strategy recommendation
    recommend_cache_ttl_seconds: int = 120
    recommend_message_max_runes: int = 400
    recommend_default_limit: int = 5
    recommend_max_limit: int = 10

    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "AromaConfig":
        """Load configuration from YAML file."""
        path = config_path or Path(os.getenv("AROMACHAT_CONFIG", str(DEFAULT_CONFIG_PATH)))
        if not path.exists():
            return cls()

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        conversation = data.get('conversation', {})
        chat = data.get('chat', {})
        retrieval = data.get('retrieval', {})
        recommend = data.get('recommend', {})
        logging_config = data.get('logging', {})

        return cls(
            conversation_ttl_minutes=conversation.get('ttl_minutes', 30),
            history_limit=conversation.get('history_limit', 12),
            summary_min_history=conversation.get('summary_min_history', 6),
            summary_keep_recent=conversation.get('summary_keep_recent', 2),
            message_max_runes=conversation.get('message_max_runes', 800),
            chat_message_max_runes=chat.get('message_max_runes', 500),
            generation_max_tokens=chat.get('max_tokens', 180),
            fallback_max_names=chat.get('fallback_max_names', 3),
            tail_max_names=chat.get('tail_max_names', 2),
            retrieval_top_k=retrieval.get('top_k', 5),
            retrieval_cache_ttl_seconds=retrieval.get('cache_ttl_seconds', 300),
            recommend_cache_ttl_seconds=recommend.get('cache_ttl_seconds', 120),
            recommend_message_max_runes=recommend.get('message_max_runes', 400),
            recommend_default_limit=recommend.get('default_limit', 5),
            recommend_max_limit=recommend.get('max_limit', 10),
            log_level=logging_config.get('level', 'INFO'),
        )


# Global config instance
_config: Optional[AromaConfig] = None


def get_config() -> AromaConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AromaConfig.from_yaml()
        configure_logging(_config.log_level)
    return _config


def set_config(config: AromaConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
    configure_logging(config.log_level)
