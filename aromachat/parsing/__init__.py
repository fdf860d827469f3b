"""Message sanitization, slot extraction and turn gating."""
