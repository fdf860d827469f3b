"""Preference slot definitions, follow-up questions and prompt copy."""
