"""Gemini provider adapter (google-genai SDK).

Purpose:
- Native Gemini access through one persistent ``genai.Client`` reused for
  every call, created through :meth:`GeminiProvider.connect` (cancellable)
  or injected directly.

Conversation mapping:
- Every message except the last becomes chat history; the last one is sent
  as the live turn. ``assistant`` maps to Gemini's ``model`` role and every
  other role (system and tool included) maps to ``user``.

External dependencies:
- ``google-genai`` (``genai.Client``, ``types.Content``/``Part``,
  ``types.GenerateContentConfig``). The SDK performs a single attempt per
  request unless retry options are configured; none are.

Failure modes:
- Client construction failure -> ``ProviderError(INTERNAL)``.
- Backend failure, or a reply without candidates/parts ->
  ``ProviderError(AGENT_FAILED)``.
"""

from __future__ import annotations

import threading
import time
from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types

from ..base.cancellation import CancellationToken, CancelledError, close_quietly, run_cancellable
from ..base.errors import ErrorCode, ProviderError, wrap_agent_failure
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import GenerateOptions, Message, options_or_empty
from ..base.streaming import ChunkChannel, start_stream_producer
from ..base.structured_output import JSONOutputMixin
from ..config.defaults import GEMINI_DEFAULT_MODEL

__all__ = ["GeminiProvider", "to_gemini_history", "extract_candidate_text"]

_ROLE_MAP = {"assistant": "model"}


def to_gemini_history(messages: Sequence[Message]) -> List[types.Content]:
    """Map prior turns to ``types.Content`` (assistant -> model, else user)."""
    return [
        types.Content(role=_ROLE_MAP.get(m.role, "user"), parts=[types.Part(text=m.content)])
        for m in messages
    ]


def _first_candidate_parts(resp: Any) -> list:
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def extract_candidate_text(resp: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    return "".join(p.text for p in _first_candidate_parts(resp) if getattr(p, "text", None))


def _build_generation_config(opts: GenerateOptions) -> Optional[types.GenerateContentConfig]:
    """Only explicit overrides are sent; otherwise the model defaults apply."""
    fields = {
        "max_output_tokens": opts.max_tokens_or(None),
        "temperature": opts.temperature_or(None),
        "top_p": opts.top_p_or(None),
    }
    fields = {k: v for k, v in fields.items() if v is not None}
    return types.GenerateContentConfig(**fields) if fields else None


class GeminiProvider(JSONOutputMixin):
    """Gemini adapter holding one persistent SDK client."""

    def __init__(self, client: genai.Client, model: Optional[str] = None) -> None:
        self._client = client
        self._model = model or GEMINI_DEFAULT_MODEL
        self._logger = get_logger("duckops_llm.gemini")
        self._close_lock = threading.Lock()
        self._closed = False

    @classmethod
    def connect(
        cls,
        api_key: str,
        model: Optional[str] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> "GeminiProvider":
        """Create the persistent client, honouring ``token`` while waiting.

        Raises:
            CancelledError: The token was cancelled first.
            ProviderError: ``INTERNAL`` when the SDK client cannot be created.
        """
        try:
            client = run_cancellable(
                lambda: genai.Client(api_key=api_key),
                token,
                name="gemini-connect",
                on_late_result=close_quietly,
            )
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - normalized below
            raise ProviderError.wrap(
                exc, ErrorCode.INTERNAL, "failed to initialize persistent gemini client", provider="gemini", model=model
            ) from exc
        return cls(client, model)

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self._model

    @property
    def closed(self) -> bool:
        return self._closed

    def _start_chat(self, messages: Sequence[Message], opts: GenerateOptions, model: str):
        return self._client.chats.create(
            model=model,
            config=_build_generation_config(opts),
            history=to_gemini_history(messages[:-1]),
        )

    def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Send the last message on a chat seeded with the earlier ones."""
        if not messages:
            return ""
        opts = options_or_empty(options)
        model = opts.resolve_model(self._model)
        ctx = LogContext(provider="gemini", model=model, operation="generate")
        normalized_log_event(self._logger, "generate.start", ctx, phase="start", messages=len(messages))
        t0 = time.perf_counter()
        live_turn = messages[-1].content

        def _send():
            return self._start_chat(messages, opts, model).send_message(live_turn)

        try:
            resp = run_cancellable(_send, token, name="gemini-generate")
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - normalized below
            err = wrap_agent_failure(exc, "failed to generate from gemini API", provider="gemini", model=model)
            self._log_error("generate.error", ctx, err)
            raise err from exc
        if not _first_candidate_parts(resp):
            err = ProviderError(
                code=ErrorCode.AGENT_FAILED,
                message="empty response generated from gemini",
                provider="gemini",
                model=model,
            )
            self._log_error("generate.error", ctx, err)
            raise err
        text = extract_candidate_text(resp)
        normalized_log_event(
            self._logger,
            "generate.end",
            ctx,
            phase="finalize",
            emitted=bool(text),
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )
        return text

    def stream(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> ChunkChannel:
        """Stream the reply to the last message.

        The SDK opens the HTTP stream lazily, so backend failures arrive as an
        error chunk rather than being raised here.
        """
        if not messages:
            raise ProviderError(
                code=ErrorCode.INVALID_INPUT,
                message="no messages provided for streaming",
                provider="gemini",
            )
        opts = options_or_empty(options)
        model = opts.resolve_model(self._model)
        ctx = LogContext(provider="gemini", model=model, operation="stream")
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", messages=len(messages))
        try:
            chat = self._start_chat(messages, opts, model)
            backend_stream = chat.send_message_stream(messages[-1].content)
        except Exception as exc:  # noqa: BLE001 - normalized below
            err = wrap_agent_failure(exc, "gemini streaming error", provider="gemini", model=model)
            self._log_error("stream.error", ctx, err, phase="start")
            raise err from exc

        channel = ChunkChannel()
        start_stream_producer(
            channel,
            backend_stream,
            translate=extract_candidate_text,
            wrap_error=lambda exc: wrap_agent_failure(exc, "gemini streaming error", provider="gemini", model=model),
            close_stream=getattr(backend_stream, "close", None),
            token=token,
            logger=self._logger,
            ctx=ctx,
        )
        return channel

    def health_check(self, *, token: Optional[CancellationToken] = None) -> None:
        """List a single model; an empty listing counts as healthy."""
        ctx = LogContext(provider="gemini", model=self._model, operation="health_check")

        def _probe():
            pager = self._client.models.list(config={"page_size": 1})
            return next(iter(pager), None)

        try:
            run_cancellable(_probe, token, name="gemini-health")
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - normalized below
            err = wrap_agent_failure(exc, "gemini health check failed", provider="gemini", model=self._model)
            self._log_error("health.error", ctx, err)
            raise err from exc

    def close(self) -> None:
        """Release the client's network resources (idempotent)."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        closer = getattr(self._client, "close", None)
        if callable(closer):
            closer()

    def _log_error(self, event: str, ctx: LogContext, err: ProviderError, *, phase: str = "finalize") -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase=phase,
            error_code=err.code.value,
            emitted=False,
            failure_class=err.context.get("failure_class"),
            error=str(err),
        )
