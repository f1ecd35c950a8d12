"""duckops_llm.config.defaults
===========================

Central place for the stable default values used by the provider adapters.
Adapters import these instead of embedding literals.

Only plain constants live here; importing this module has no side effects.
"""

from __future__ import annotations

# ---- Registry ----
# Name the registry falls back to when the configuration sets no default.
REGISTRY_DEFAULT_NAME = "default"

# ---- Shared headers ----
# Opt-in header for prompt caching on backends that honour it.
PROMPT_CACHING_HEADER = ("anthropic-beta", "prompt-caching-2024-07-31")

# ---- OpenAI ----
OPENAI_DEFAULT_MODEL = "gpt-4o"
OPENAI_DEFAULT_MAX_TOKENS = 5000

# ---- OpenRouter ----
OPENROUTER_DEFAULT_MODEL = "arcee-ai/trinity-large-preview:free"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MAX_TOKENS = 5000
OPENROUTER_HEADERS = {
    "HTTP-Referer": "https://github.com/DuckOps/DuckOps",
    "X-Title": "DuckOps Agent",
    "Cache-Control": "max-age=3600",
    "X-OpenRouter-Client": "duckops",
    PROMPT_CACHING_HEADER[0]: PROMPT_CACHING_HEADER[1],
}
OPENROUTER_MAX_IDLE_CONNECTIONS = 100
OPENROUTER_MAX_IDLE_PER_HOST = 100
OPENROUTER_IDLE_TIMEOUT_SECONDS = 90.0
OPENROUTER_CLIENT_TIMEOUT_SECONDS = 60.0

# ---- LM Studio (local server) ----
LMSTUDIO_DEFAULT_MODEL = "local-model"
LMSTUDIO_DEFAULT_BASE_URL = "http://localhost:1234/v1"
LMSTUDIO_DEFAULT_MAX_TOKENS = 4000
# The local server ignores credentials but the SDK requires a value.
LMSTUDIO_PLACEHOLDER_API_KEY = "not-needed"

# ---- Generic OpenAI-compatible servers ----
COMPATIBLE_DEFAULT_MAX_TOKENS = 4096
COMPATIBLE_DEFAULT_TEMPERATURE = 0.7

# ---- Gemini ----
GEMINI_DEFAULT_MODEL = "gemini-1.5-flash"
