"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Conversations are ordered sequences of messages; adapters translate them
into their backend's message shape without reordering.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True)
class Message:
    """A single conversation turn.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"``,
            ``"assistant"``, or ``"tool"``).
        content: Plain text content of the turn.
        name: Optional participant name passed through to backends that
            support it.
    """

    role: Role
    content: str
    name: Optional[str] = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)


__all__ = [
    "Message",
    "Role",
]
