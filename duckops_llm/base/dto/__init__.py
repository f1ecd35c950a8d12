"""Pydantic DTOs used at the configuration boundary."""

from .provider_config import Config, ProviderConfig

__all__ = ["Config", "ProviderConfig"]
