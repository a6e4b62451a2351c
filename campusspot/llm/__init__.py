"""
LLM integration layer.

Responsibilities:
- Resolve the Groq API credential from the environment.
- Construct the async Groq client lazily, only when a credential exists.
- Send single-prompt completions for the study-spot assistant.
"""
