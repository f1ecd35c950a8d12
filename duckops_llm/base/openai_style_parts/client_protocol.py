"""Protocol definition for OpenAI-style SDK clients.

Describes the minimal client surface ``BaseOpenAIStyleProvider`` relies on,
so tests can substitute a lightweight fake for ``openai.OpenAI``.
"""

from __future__ import annotations

from typing import Protocol


class _ChatCompletionsClient(Protocol):
    """Structural view of ``openai.OpenAI`` as used by the adapters.

    ``chat.completions.create(**params)`` returns a response with
    ``choices[0].message.content`` or, with ``stream=True``, an iterable of
    chunks exposing ``choices[0].delta.content`` and ``close()``.
    ``models.retrieve(model)`` and ``models.list()`` back the health check.
    """

    class _ChatNS(Protocol):  # pragma: no cover - structural hint only
        class _CompletionsNS(Protocol):
            def create(self, **params):  # noqa: D401 - SDK parity
                ...

        completions: _CompletionsNS

    class _ModelsNS(Protocol):  # pragma: no cover - structural hint only
        def retrieve(self, model: str):  # noqa: D401 - SDK parity
            ...

        def list(self):  # noqa: D401 - SDK parity
            ...

    chat: _ChatNS
    models: _ModelsNS


__all__ = ["_ChatCompletionsClient"]
