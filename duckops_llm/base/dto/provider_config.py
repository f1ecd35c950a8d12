"""Provider configuration DTOs.

Purpose
-------
Typed shape of the provider configuration the registry is built from. Field
aliases accept the camel-case keys used in JSON configuration files
(``apiKey``, ``baseURL``) while Python code uses snake-case names.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and alias handling.

Failure modes & side effects
----------------------------
- Pure data containers; ``pydantic.ValidationError`` on wrongly typed input.
"""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class ProviderConfig(BaseModel):
    """Credentials and endpoint for one named provider.

    Attributes
    ----------
    api_key:
        Backend credential. Empty means "not configured" for every provider
        except the local LM Studio server.
    model:
        Default model identifier; empty selects the adapter default.
    base_url:
        Endpoint override. Required for OpenAI-compatible providers that are
        not built in.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    api_key: str = Field(default="", alias="apiKey")
    model: str = ""
    base_url: str = Field(default="", alias="baseURL")


class Config(BaseModel):
    """Provider map plus the name of the fallback provider."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    providers: Dict[str, ProviderConfig] = Field(default_factory=dict)
    default: str = ""


__all__ = ["ProviderConfig", "Config"]
