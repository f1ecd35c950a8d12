"""Streaming delivery: hand-off channel, producer loop and consumer helpers."""

from __future__ import annotations

from .chunk_channel import ChunkChannel, SEND_POLL_INTERVAL
from .stream_producer import StreamOutcome, start_stream_producer


def accumulate_chunks(channel: ChunkChannel) -> str:
    """Drain ``channel`` and return the concatenated text.

    Raises the ``ProviderError`` of the first error chunk, if any.
    """
    parts = []
    with channel:
        for chunk in channel:
            if chunk.error is not None:
                raise chunk.error
            parts.append(chunk.content)
    return "".join(parts)


__all__ = [
    "ChunkChannel",
    "SEND_POLL_INTERVAL",
    "StreamOutcome",
    "start_stream_producer",
    "accumulate_chunks",
]
