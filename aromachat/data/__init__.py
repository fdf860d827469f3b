"""Collaborator contracts (catalog search, embeddings, text generation)."""
