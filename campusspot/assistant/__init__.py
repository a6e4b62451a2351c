"""
Conversational study-spot assistant.

Responsibilities:
- Generate short descriptions for newly added places.
- Recommend 1-3 places from the catalog for a free-text request.
- Fall back to local substring matching when no LLM credential is configured.
- Keep the chat message history.
"""
