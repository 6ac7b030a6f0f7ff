"""
Meeting-minutes drafting boundary.

Design intent:
- Keep agenda schema, prompt text, vendor call, and action-item extraction separate.
- Let the API layer orchestrate without embedding prompt or parsing logic.
"""
