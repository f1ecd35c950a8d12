"""LLMProvider Protocol (single-class module).

Defines the uniform contract every backend adapter implements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, runtime_checkable

from ..cancellation import CancellationToken
from ..models import GenerateOptions, Message

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..streaming import ChunkChannel


@runtime_checkable
class LLMProvider(Protocol):
    """Uniform interface for Large Language Model backends.

    Implementations translate ``Message`` sequences and ``GenerateOptions``
    into their SDK's request shape and never leak SDK objects upstream.
    Backend failures surface as ``ProviderError``; cancellation as
    ``CancelledError``.
    """

    @property
    def provider_name(self) -> str:
        """Stable identifier, e.g. ``"openai"`` or a configured compatible name."""
        ...

    def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Run one blocking round trip and return the reply text."""
        ...

    def stream(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> "ChunkChannel":
        """Open a backend stream and return the channel its chunks arrive on."""
        ...

    def health_check(self, *, token: Optional[CancellationToken] = None) -> None:
        """Probe reachability; raise ``ProviderError`` when unhealthy."""
        ...

    def generate_json(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        target: Any = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> Any:
        """Generate a reply and parse it as JSON into ``target``."""
        ...
