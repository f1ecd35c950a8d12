"""
Structured provider error exception type.

Wraps backend-specific exceptions with a normalized `ErrorCode`, a timestamp
and a free-form context mapping for consistent handling and structured
logging. The wrapped exception is kept both as ``cause`` and as the standard
``__cause__`` so ``raise ... from`` chains and traceback printing keep working.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .error_code import ErrorCode


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        cause: Optional underlying exception (also exposed as ``__cause__``).
        timestamp: UTC time the error was created.
        context: Free-form diagnostic values (e.g., ``raw_response``).
    """

    code: ErrorCode
    message: str
    provider: Optional[str] = None
    model: Optional[str] = None
    cause: Optional[BaseException] = None
    timestamp: datetime = field(default_factory=_utcnow)
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.cause is not None:
            self.__cause__ = self.cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"[{self.code.value}] {self.message}: {self.cause}"
        return f"[{self.code.value}] {self.message}"

    def with_context(self, key: str, value: Any) -> "ProviderError":
        """Attach a diagnostic value and return ``self`` for chaining."""
        self.context[key] = value
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly mapping (cause is rendered as text)."""
        data: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": dict(self.context),
        }
        if self.provider:
            data["provider"] = self.provider
        if self.model:
            data["model"] = self.model
        if self.cause is not None:
            data["cause"] = str(self.cause)
        return data

    @classmethod
    def wrap(
        cls,
        err: BaseException,
        code: ErrorCode,
        message: str,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> "ProviderError":
        """Wrap an existing exception under ``code`` keeping it as the cause."""
        return cls(code=code, message=message, provider=provider, model=model, cause=err)

    @classmethod
    def from_exception(cls, err: Optional[BaseException]) -> Optional["ProviderError"]:
        """Convert any exception into a ``ProviderError``.

        Existing ``ProviderError`` instances (directly or anywhere in the
        ``__cause__`` chain) are returned unchanged; anything else is wrapped
        as ``ErrorCode.INTERNAL``.
        """
        if err is None:
            return None
        current: Optional[BaseException] = err
        while current is not None:
            if isinstance(current, ProviderError):
                return current
            current = current.__cause__
        return cls.wrap(err, ErrorCode.INTERNAL, "internal system error")


__all__ = ["ProviderError"]
