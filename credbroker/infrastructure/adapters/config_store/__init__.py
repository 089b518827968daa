"""Configuration store adapters."""

from .yaml_store import YamlConfigStore

__all__ = ["YamlConfigStore"]
