"""duckops_llm.config.env
======================

Environment variable conventions for provider configuration.

Purpose
-------
- Map provider names to the environment variables holding their API keys
  (canonical name first, then aliases).
- Derive the ``<NAME>_MODEL`` / ``<NAME>_BASE_URL`` variables for any
  provider name, including OpenAI-compatible names added by configuration.

Failure Modes
-------------
- Lookups return ``None`` when nothing (or only a placeholder) is set; they
  never raise.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "lmstudio": "LMSTUDIO_API_KEY",
    # Gemini has used both GEMINI_API_KEY and GOOGLE_API_KEY historically.
    "gemini": "GEMINI_API_KEY",
}

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

ENV_FIELD_SUFFIXES: Dict[str, str] = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "model": "MODEL",
    "base_url": "BASE_URL",
}

# Process-level switches
CONFIG_FILE_ENV = "DUCKOPS_LLM_CONFIG_FILE"
DEFAULT_PROVIDER_ENV = "DUCKOPS_LLM_DEFAULT"
EXTRA_PROVIDERS_ENV = "DUCKOPS_LLM_PROVIDERS"
DOTENV_FILE_ENV = "DOTENV_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a secret.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_' (case-insensitive, surrounding spaces ignored).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def env_prefix(provider: str) -> str:
    """Upper-case ``provider`` with non-alphanumerics folded to ``_``."""
    return re.sub(r"[^A-Z0-9]+", "_", (provider or "").upper()).strip("_")


def get_env_var_candidates(provider: str, field: str = "api_key") -> Iterable[str]:
    """Yield env var names for ``field`` of ``provider`` in priority order."""
    p = (provider or "").lower()
    seen = set()
    if field == "api_key":
        for name in (ENV_MAP.get(p),) + ENV_ALIASES.get(p, ()):
            if name and name not in seen:
                seen.add(name)
                yield name
    derived = f"{env_prefix(p)}_{ENV_FIELD_SUFFIXES[field]}"
    if derived not in seen:
        yield derived


def resolve_env_value(
    provider: str, field: str, environ: Mapping[str, str]
) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first usable value.

    Placeholder API keys are skipped; other fields only need to be non-empty.
    """
    for name in get_env_var_candidates(provider, field):
        val = environ.get(name)
        if val and not (field == "api_key" and is_placeholder(val)):
            return val, name
    return None, None


def resolve_provider_key(provider: str, environ: Mapping[str, str]) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``provider`` from ``environ``."""
    return resolve_env_value(provider, "api_key", environ)


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "ENV_FIELD_SUFFIXES",
    "CONFIG_FILE_ENV",
    "DEFAULT_PROVIDER_ENV",
    "EXTRA_PROVIDERS_ENV",
    "DOTENV_FILE_ENV",
    "is_placeholder",
    "env_prefix",
    "get_env_var_candidates",
    "resolve_env_value",
    "resolve_provider_key",
]
