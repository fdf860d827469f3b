"""Shared helpers (logging)."""
