"""LLM client wrapper around litellm.

Hands a compact API document to any model supported by litellm.
"""

import os

from litellm import completion

DEFAULT_MODEL = "claude-sonnet-4-20250514"

SYSTEM_PROMPT = """You answer questions about an HTTP API. The API is given in a compact JSON notation:
- host: base URL; sec: security scheme names
- endpoints: list of {m: method, p: path, desc: summary, pp: path params, qp: query params, req: request body schema, res: success response schema, codes: status codes}
- params are "name:type", "?" marks optional, "(fmt)" is the format, "[a|b]" lists allowed values
- schemas: compact schemas; a property key "<type> <name>": true means a property <name> of that type
Answer from this description only. If something is not described, say so."""


class LlmClient:
    """Wrapper for LLM API calls via litellm."""

    def __init__(self, model: str | None = None):
        self.model = model or os.getenv("OPENAPI_SLIM_MODEL") or DEFAULT_MODEL

    def call(self, system: str, user: str) -> str:
        """Send a system+user message to the LLM and return the response text."""
        response = completion(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
        return response.choices[0].message.content

    def ask(self, compact: str, question: str) -> str:
        """Ask a question about the API described by a compact document."""
        user_prompt = f"API:\n```json\n{compact}\n```\n\nQuestion: {question}"
        return self.call(system=SYSTEM_PROMPT, user=user_prompt)
