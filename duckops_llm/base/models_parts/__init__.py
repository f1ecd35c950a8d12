"""Model DTOs (one-class-per-file)."""

from .message import Message, Role
from .generate_options import GenerateOptions, EMPTY_OPTIONS, options_or_empty
from .chat_chunk import ChatChunk

__all__ = [
    "Message",
    "Role",
    "GenerateOptions",
    "EMPTY_OPTIONS",
    "options_or_empty",
    "ChatChunk",
]
