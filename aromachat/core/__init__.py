"""Configuration, conversation memory and chat orchestration."""
