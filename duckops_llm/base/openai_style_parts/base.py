"""BaseOpenAIStyleProvider: shared adapter for OpenAI-protocol backends.

Purpose:
- One implementation of ``generate``/``stream``/``health_check`` for every
  backend speaking the OpenAI Chat Completions protocol (OpenAI, OpenRouter,
  LM Studio, arbitrary compatible servers). Subclasses only supply a
  ``_ProviderInit`` bundle and, where needed, override messages or the client.

External dependencies:
- ``openai`` SDK (``OpenAI`` client, constructed once per adapter with SDK
  retries disabled).
- ``httpx`` client from ``duckops_llm.base.http`` when headers, pool sizing or
  a client timeout are configured.

Failure semantics:
- Backend errors become ``ProviderError(AGENT_FAILED)`` with a
  ``failure_class`` context entry; a response without choices is
  ``AGENT_FAILED`` too. Cancellation surfaces as ``CancelledError``.
"""

from __future__ import annotations

import time
from typing import Any, Optional, Sequence

import httpx
from openai import OpenAI

from ..cancellation import CancellationToken, CancelledError, close_quietly, run_cancellable
from ..errors import ErrorCode, ProviderError, wrap_agent_failure
from ..http import build_http_client
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import GenerateOptions, Message, options_or_empty
from ..streaming import ChunkChannel, start_stream_producer
from ..structured_output import JSONOutputMixin
from .client_protocol import _ChatCompletionsClient
from .provider_init import _ProviderInit
from .style_helpers import (
    build_chat_params,
    build_stream_params,
    extract_delta_text,
    extract_openai_text,
    has_choices,
)


class BaseOpenAIStyleProvider(JSONOutputMixin):
    """Reusable base class for OpenAI-compatible providers.

    The SDK client is built once in ``__init__`` (or injected via ``client``)
    and reused for every call. ``base_transport`` replaces the network
    transport underneath the header/pool layer, which tests use to route
    requests to ``httpx.MockTransport``.
    """

    generate_failed_message = "{name} generation failed"
    empty_response_message = "empty response received from {name}"
    stream_failed_message = "{name} streaming error"
    health_failed_message = "{name} health check failed"

    def __init__(
        self,
        init: _ProviderInit,
        *,
        client: Optional[_ChatCompletionsClient] = None,
        base_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._init = init
        self._name = init.provider_name
        self._model = init.default_model
        self._max_tokens = init.default_max_tokens
        self._temperature = init.default_temperature
        self._logger = get_logger(init.logger_name)
        self._client = client if client is not None else self._make_client(base_transport)

    # ----- identity -----
    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def model(self) -> str:
        """Default model used when options don't override it."""
        return self._model

    @property
    def client(self) -> _ChatCompletionsClient:
        return self._client

    def _make_client(self, base_transport: Optional[httpx.BaseTransport] = None) -> _ChatCompletionsClient:
        """Create the SDK client.

        A custom ``httpx.Client`` is only built when the provider needs
        headers, pooling or a timeout, or when a transport is injected.
        """
        init = self._init
        kwargs: dict[str, Any] = {"api_key": init.api_key, "max_retries": 0}
        if init.base_url:
            kwargs["base_url"] = init.base_url
        if init.timeout_seconds is not None:
            kwargs["timeout"] = init.timeout_seconds
        if init.needs_http_client or base_transport is not None:
            kwargs["http_client"] = build_http_client(
                init.headers,
                pool=init.pool,
                timeout=init.timeout_seconds,
                base_transport=base_transport,
            )
        return OpenAI(**kwargs)

    def _fmt(self, template: str) -> str:
        return template.format(name=self._name)

    # ----- generate -----
    def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Run one chat completion and return the first choice's text.

        An empty conversation returns ``""`` without contacting the backend.
        """
        if not messages:
            return ""
        opts = options_or_empty(options)
        model = opts.resolve_model(self._model)
        ctx = LogContext(provider=self._name, model=model, operation="generate")
        params = build_chat_params(
            model,
            messages,
            max_tokens=opts.max_tokens_or(self._max_tokens),
            temperature=opts.temperature_or(self._temperature),
            top_p=opts.top_p_or(None),
        )
        normalized_log_event(
            self._logger,
            "generate.start",
            ctx,
            phase="start",
            messages=len(messages),
            max_tokens=params.get("max_tokens"),
        )
        t0 = time.perf_counter()
        try:
            resp = run_cancellable(
                lambda: self._client.chat.completions.create(**params),
                token,
                name=f"{self._name}-generate",
            )
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - normalized below
            err = wrap_agent_failure(exc, self._fmt(self.generate_failed_message), provider=self._name, model=model)
            self._log_error("generate.error", ctx, err)
            raise err from exc
        if not has_choices(resp):
            err = ProviderError(
                code=ErrorCode.AGENT_FAILED,
                message=self._fmt(self.empty_response_message),
                provider=self._name,
                model=model,
            )
            self._log_error("generate.error", ctx, err)
            raise err
        text = extract_openai_text(resp)
        normalized_log_event(
            self._logger,
            "generate.end",
            ctx,
            phase="finalize",
            emitted=bool(text),
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )
        return text

    # ----- stream -----
    def stream(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> ChunkChannel:
        """Open a streaming completion and return the channel feeding its deltas.

        Only explicit option overrides are sent; the adapter's default token
        cap and temperature apply to ``generate`` only.
        """
        if not messages:
            raise ProviderError(
                code=ErrorCode.INVALID_INPUT,
                message="no messages provided for streaming",
                provider=self._name,
            )
        opts = options_or_empty(options)
        model = opts.resolve_model(self._model)
        ctx = LogContext(provider=self._name, model=model, operation="stream")
        params = build_stream_params(
            model,
            messages,
            max_tokens=opts.max_tokens_or(None),
            temperature=opts.temperature_or(None),
            top_p=opts.top_p_or(None),
        )
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", messages=len(messages))
        try:
            backend_stream = run_cancellable(
                lambda: self._client.chat.completions.create(**params),
                token,
                name=f"{self._name}-stream-open",
                on_late_result=close_quietly,
            )
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - normalized below
            err = wrap_agent_failure(exc, self._fmt(self.stream_failed_message), provider=self._name, model=model)
            self._log_error("stream.error", ctx, err, phase="start")
            raise err from exc

        channel = ChunkChannel()
        start_stream_producer(
            channel,
            backend_stream,
            translate=extract_delta_text,
            wrap_error=lambda exc: wrap_agent_failure(
                exc, self._fmt(self.stream_failed_message), provider=self._name, model=model
            ),
            close_stream=getattr(backend_stream, "close", None),
            token=token,
            logger=self._logger,
            ctx=ctx,
        )
        return channel

    # ----- health -----
    def health_check(self, *, token: Optional[CancellationToken] = None) -> None:
        """Retrieve the configured model (or list models) as a reachability probe."""
        ctx = LogContext(provider=self._name, model=self._model, operation="health_check")
        if self._init.list_models_for_health or not self._model:
            probe = self._client.models.list
        else:
            def probe():
                return self._client.models.retrieve(self._model)
        try:
            run_cancellable(probe, token, name=f"{self._name}-health")
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - normalized below
            err = wrap_agent_failure(exc, self._fmt(self.health_failed_message), provider=self._name, model=self._model)
            self._log_error("health.error", ctx, err)
            raise err from exc

    def close(self) -> None:
        """Release the SDK client's HTTP resources."""
        closer = getattr(self._client, "close", None)
        if callable(closer):
            closer()

    # ----- helpers -----
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


__all__ = ["BaseOpenAIStyleProvider"]
