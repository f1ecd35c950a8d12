"""Tests for configuration loading and environment variable conventions."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from duckops_llm.base.errors import ErrorCode, ProviderError
from duckops_llm.config import load_config
from duckops_llm.config.env import (
    env_prefix,
    get_env_var_candidates,
    is_placeholder,
    resolve_provider_key,
)


def _write(tmp_path: Path, data) -> str:
    path = tmp_path / "llm.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_file_sections_accept_camel_case_aliases(tmp_path):
    path = _write(
        tmp_path,
        {
            "default": "groq",
            "providers": {
                "groq": {"apiKey": "gk", "model": "llama", "baseURL": "https://api.groq.test/openai/v1"},
                "openai": {"api_key": "ok"},
            },
        },
    )
    config = load_config(path, environ={})
    assert config.default == "groq"
    groq = config.providers["groq"]
    assert (groq.api_key, groq.model, groq.base_url) == ("gk", "llama", "https://api.groq.test/openai/v1")
    assert config.providers["openai"].api_key == "ok"


def test_environment_overrides_file_values(tmp_path):
    path = _write(tmp_path, {"providers": {"openai": {"apiKey": "from-file", "model": "gpt-4o"}}})
    config = load_config(path, environ={"OPENAI_API_KEY": "from-env", "OPENAI_MODEL": "gpt-4o-mini"})
    assert config.providers["openai"].api_key == "from-env"
    assert config.providers["openai"].model == "gpt-4o-mini"


def test_builtin_providers_come_from_environment_alone():
    config = load_config(
        environ={"OPENROUTER_API_KEY": "or", "GOOGLE_API_KEY": "g", "LMSTUDIO_BASE_URL": "http://10.0.0.2:1234/v1"}
    )
    assert sorted(config.providers) == ["gemini", "lmstudio", "openrouter"]
    assert config.providers["gemini"].api_key == "g"
    assert config.providers["lmstudio"].base_url == "http://10.0.0.2:1234/v1"
    assert config.default == ""


def test_placeholder_keys_are_ignored():
    config = load_config(environ={"OPENAI_API_KEY": "changeme", "OPENROUTER_API_KEY": "test_key"})
    assert config.providers == {}


def test_extra_provider_names_and_default_from_environment(tmp_path):
    path = _write(tmp_path, {"default": "openai", "providers": {}})
    config = load_config(
        path,
        environ={
            "DUCKOPS_LLM_PROVIDERS": "Groq, together-ai",
            "GROQ_API_KEY": "gk",
            "GROQ_BASE_URL": "https://api.groq.test/openai/v1",
            "TOGETHER_AI_API_KEY": "tk",
            "DUCKOPS_LLM_DEFAULT": "groq",
        },
    )
    assert config.default == "groq"
    assert config.providers["groq"].base_url == "https://api.groq.test/openai/v1"
    assert config.providers["together-ai"].api_key == "tk"


def test_config_file_path_from_environment(tmp_path):
    path = _write(tmp_path, {"providers": {"openai": {"apiKey": "k"}}})
    config = load_config(environ={"DUCKOPS_LLM_CONFIG_FILE": path})
    assert config.providers["openai"].api_key == "k"


def test_missing_file_yields_empty_config(tmp_path):
    config = load_config(str(tmp_path / "absent.json"), environ={})
    assert config.providers == {}
    assert config.default == ""


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"providers": {"x": {"apiKey": 5}}}'])
def test_invalid_file_is_invalid_input(tmp_path, content):
    path = tmp_path / "llm.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ProviderError) as info:
        load_config(str(path), environ={})
    assert info.value.code is ErrorCode.INVALID_INPUT


def test_env_var_candidates_and_prefixes():
    assert list(get_env_var_candidates("gemini")) == ["GEMINI_API_KEY", "GOOGLE_API_KEY"]
    assert list(get_env_var_candidates("openai", "model")) == ["OPENAI_MODEL"]
    assert list(get_env_var_candidates("my.vendor", "base_url")) == ["MY_VENDOR_BASE_URL"]
    assert env_prefix("together-ai") == "TOGETHER_AI"


def test_resolve_provider_key_reports_variable_used():
    assert resolve_provider_key("gemini", {"GEMINI_API_KEY": "placeholder", "GOOGLE_API_KEY": "g"}) == (
        "g",
        "GOOGLE_API_KEY",
    )
    assert resolve_provider_key("openai", {}) == (None, None)


@pytest.mark.parametrize(
    "value,expected",
    [(None, False), ("sk-real", False), ("CHANGEME", True), (" your-example-key ", True), ("test_abc", True)],
)
def test_is_placeholder(value, expected):
    assert is_placeholder(value) is expected
