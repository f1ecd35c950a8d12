"""
Streaming increment DTO.

A ``ChatChunk`` carries either a piece of generated text or the error that
ended the stream. Adapters never set ``done``; the end of a stream is the
channel closing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import ProviderError


@dataclass(frozen=True)
class ChatChunk:
    """One increment of a streamed reply."""

    content: str = ""
    error: Optional[ProviderError] = None
    done: bool = False

    @property
    def is_error(self) -> bool:
        return self.error is not None


__all__ = ["ChatChunk"]
