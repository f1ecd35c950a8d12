"""Offline stand-ins for the backend SDK clients used across the test suite.

The fakes implement only the attribute paths the adapters touch:
``chat.completions.create`` / ``models.retrieve`` / ``models.list`` for the
OpenAI SDK and ``chats.create`` / ``models.list`` for google-genai.
"""
from __future__ import annotations

import threading
from types import SimpleNamespace
from typing import Any, Iterable, List, Optional

from duckops_llm.base.models import Message


def openai_response(*texts: Optional[str]) -> SimpleNamespace:
    """Non-streaming chat completion with one choice per text."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(role="assistant", content=t)) for t in texts]
    )


def openai_chunk(text: Optional[str]) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text))])


class FakeStream:
    """Iterable backend stream that records ``close`` calls.

    ``error`` is raised after the items are exhausted. ``gate`` (an Event)
    must be set before each item after the first is produced.
    """

    def __init__(
        self,
        items: Iterable[Any],
        *,
        error: Optional[Exception] = None,
        gate: Optional[threading.Event] = None,
    ) -> None:
        self._items = list(items)
        self._error = error
        self._gate = gate
        self.close_calls = 0
        self.produced = 0

    def __iter__(self):
        for index, item in enumerate(self._items):
            if index > 0 and self._gate is not None:
                self._gate.wait(5)
            self.produced += 1
            yield item
        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self.close_calls += 1


class FakeOpenAIClient:
    """Records ``create`` parameters and replays canned results."""

    def __init__(
        self,
        response: Any = None,
        *,
        stream: Optional[FakeStream] = None,
        error: Optional[Exception] = None,
        stream_error: Optional[Exception] = None,
        models_error: Optional[Exception] = None,
        block: Optional[threading.Event] = None,
    ) -> None:
        self.response = response if response is not None else openai_response("ok")
        self.stream = stream if stream is not None else FakeStream([])
        self.error = error
        self.stream_error = stream_error
        self.models_error = models_error
        self.block = block
        self.calls: List[dict] = []
        self.model_calls: List[tuple] = []
        self.closed = False
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        self.models = SimpleNamespace(retrieve=self._retrieve, list=self._list)

    def _create(self, **params):
        self.calls.append(params)
        if self.block is not None:
            self.block.wait(5)
        if params.get("stream"):
            if self.stream_error is not None:
                raise self.stream_error
            return self.stream
        if self.error is not None:
            raise self.error
        return self.response

    def _retrieve(self, model: str):
        self.model_calls.append(("retrieve", model))
        if self.models_error is not None:
            raise self.models_error
        return SimpleNamespace(id=model)

    def _list(self):
        self.model_calls.append(("list",))
        if self.models_error is not None:
            raise self.models_error
        return [SimpleNamespace(id="local-model")]

    def close(self) -> None:
        self.closed = True


def gemini_response(*parts: str) -> SimpleNamespace:
    """google-genai style response with a single candidate."""
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text=p) for p in parts]))]
    )


class FakeGeminiChat:
    def __init__(self, owner: "FakeGeminiClient", model: str, config: Any, history: list) -> None:
        self._owner = owner
        self.model = model
        self.config = config
        self.history = history
        self.sent: List[str] = []

    def send_message(self, message: str):
        self.sent.append(message)
        if self._owner.block is not None:
            self._owner.block.wait(5)
        if self._owner.error is not None:
            raise self._owner.error
        return self._owner.response

    def send_message_stream(self, message: str):
        self.sent.append(message)
        return self._owner.stream


class FakeGeminiClient:
    def __init__(
        self,
        response: Any = None,
        *,
        stream: Optional[FakeStream] = None,
        error: Optional[Exception] = None,
        models: Optional[list] = None,
        models_error: Optional[Exception] = None,
        block: Optional[threading.Event] = None,
    ) -> None:
        self.response = response if response is not None else gemini_response("ok")
        self.stream = stream if stream is not None else FakeStream([])
        self.error = error
        self.models_error = models_error
        self.block = block
        self._models = models if models is not None else [SimpleNamespace(name="models/gemini-1.5-flash")]
        self.chat_sessions: List[FakeGeminiChat] = []
        self.list_configs: List[Any] = []
        self.close_calls = 0
        self.chats = SimpleNamespace(create=self._create_chat)
        self.models = SimpleNamespace(list=self._list_models)

    def _create_chat(self, *, model: str, config: Any = None, history: Optional[list] = None):
        chat = FakeGeminiChat(self, model, config, list(history or []))
        self.chat_sessions.append(chat)
        return chat

    def _list_models(self, *, config: Any = None):
        self.list_configs.append(config)
        if self.models_error is not None:
            raise self.models_error
        return iter(self._models)

    def close(self) -> None:
        self.close_calls += 1


class StaticProvider:
    """Minimal provider returning a fixed reply; used by registry/JSON tests."""

    def __init__(self, name: str, reply: str = "", error: Optional[Exception] = None) -> None:
        self._name = name
        self.reply = reply
        self.error = error
        self.close_calls = 0

    @property
    def provider_name(self) -> str:
        return self._name

    def generate(self, messages, options=None, *, token=None) -> str:
        if self.error is not None:
            raise self.error
        return self.reply

    def stream(self, messages, options=None, *, token=None):
        raise NotImplementedError

    def health_check(self, *, token=None) -> None:
        return None

    def generate_json(self, messages, options=None, target=None, *, token=None):
        from duckops_llm.base.structured_output import generate_json

        return generate_json(self, messages, options, target, token=token)


class ClosableProvider(StaticProvider):
    def close(self) -> None:
        self.close_calls += 1


CONVERSATION = [
    Message.system("be brief"),
    Message.user("hi"),
    Message.assistant("hello"),
    Message(role="user", content="status?", name="ops"),
]
