"""Configuration loading for the provider registry.

Goals
-----
* Produce one validated :class:`~duckops_llm.base.dto.Config` the registry
  is built from.
* Merge sources in a predictable order (later wins):
    1. Optional JSON config file (``path`` argument or ``DUCKOPS_LLM_CONFIG_FILE``)
    2. Environment variables ``<NAME>_API_KEY``, ``<NAME>_MODEL``, ``<NAME>_BASE_URL``
       for the built-in providers, every provider named in the file and any extra
       names listed (comma-separated) in ``DUCKOPS_LLM_PROVIDERS``
    3. ``DUCKOPS_LLM_DEFAULT`` for the fallback provider name
* A ``.env`` file (``DOTENV_FILE``, default ``.env``) is loaded once into the
  process environment without overriding real values.

Config File Shape
-----------------
```
{
  "default": "openrouter",
  "providers": {
    "openrouter": {"apiKey": "...", "model": "openai/gpt-4o-mini"},
    "groq": {"apiKey": "...", "model": "llama-3.1-8b", "baseURL": "https://api.groq.com/openai/v1"}
  }
}
```

Public API
----------
* load_config(path=None, *, environ=None) -> Config
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..base.dto import Config, ProviderConfig
from ..base.errors import ErrorCode, ProviderError
from .env import (
    CONFIG_FILE_ENV,
    DEFAULT_PROVIDER_ENV,
    DOTENV_FILE_ENV,
    ENV_FIELD_SUFFIXES,
    EXTRA_PROVIDERS_ENV,
    is_placeholder,
    resolve_env_value,
)

BUILTIN_PROVIDERS = ("openai", "openrouter", "lmstudio", "gemini")

_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables are only replaced when they hold a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                if k.startswith("export "):
                    k = k[len("export "):].strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _read_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load the JSON config file; a missing path yields ``{}``."""
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ProviderError.wrap(exc, ErrorCode.INVALID_INPUT, "invalid llm config file").with_context(
            "path", str(p)
        ) from exc
    if not isinstance(data, dict):
        raise ProviderError(
            code=ErrorCode.INVALID_INPUT,
            message="llm config file must contain a JSON object",
            context={"path": str(p)},
        )
    return data


def _extra_provider_names(environ: Mapping[str, str]) -> List[str]:
    raw = environ.get(EXTRA_PROVIDERS_ENV, "")
    return [n.strip().lower() for n in raw.split(",") if n.strip()]


def _env_overrides(provider: str, environ: Mapping[str, str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for field in ENV_FIELD_SUFFIXES:
        value, _ = resolve_env_value(provider, field, environ)
        if value is not None:
            out[field] = value
    return out


def load_config(path: Optional[str] = None, *, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a :class:`Config` from the config file and environment.

    Parameters
    ----------
    path:
        JSON config file. Defaults to ``$DUCKOPS_LLM_CONFIG_FILE``.
    environ:
        Mapping to read variables from. Defaults to ``os.environ`` (after the
        one-time ``.env`` load); pass a dict to keep tests hermetic.

    Raises
    ------
    ProviderError
        ``INVALID_INPUT`` when the file is not valid JSON or fails validation.
    """
    if environ is None:
        _load_dotenv_once()
        environ = os.environ
    data = _read_config_file(path or environ.get(CONFIG_FILE_ENV))

    providers: Dict[str, Dict[str, Any]] = {}
    try:
        for name, section in (data.get("providers") or {}).items():
            providers[name] = ProviderConfig.model_validate(section or {}).model_dump()
    except (ValidationError, AttributeError) as exc:
        raise ProviderError.wrap(exc, ErrorCode.INVALID_INPUT, "invalid llm config file") from exc

    names: List[str] = list(BUILTIN_PROVIDERS)
    for name in list(providers) + _extra_provider_names(environ):
        if name not in names:
            names.append(name)
    for name in names:
        if overrides := _env_overrides(name, environ):
            providers.setdefault(name, {}).update(overrides)

    default = environ.get(DEFAULT_PROVIDER_ENV) or str(data.get("default") or "")
    return Config(providers={k: ProviderConfig(**v) for k, v in providers.items()}, default=default)


__all__ = ["load_config", "BUILTIN_PROVIDERS"]
