"""Capability registries — the static catalog of tools, resources and prompts."""

from javadev_mcp.registry.catalog import ServerCatalog, build_catalog
from javadev_mcp.registry.registry import Binding, CapabilityRegistry

__all__ = ["Binding", "CapabilityRegistry", "ServerCatalog", "build_catalog"]
