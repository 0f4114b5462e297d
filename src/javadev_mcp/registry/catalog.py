"""The fixed catalog of tools, resources and prompts this server offers.

:func:`build_catalog` is called once at startup; the resulting
:class:`ServerCatalog` is immutable and shared by every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from javadev_mcp.prompts import development
from javadev_mcp.protocol.models import (
    InputSchema,
    PromptDescriptor,
    ResourceDescriptor,
    ToolDescriptor,
)
from javadev_mcp.registry.registry import (
    Binding,
    CapabilityRegistry,
    PromptHandler,
    ResourceHandler,
    ToolHandler,
)
from javadev_mcp.resources import project_structure
from javadev_mcp.tools import code_analysis, spring_boot

STRUCTURE_URI = "java-project://current/structure"
DEPENDENCIES_URI = "java-project://current/dependencies"
CONFIGURATION_URI = "java-project://current/configuration"

ToolRegistry = CapabilityRegistry[ToolDescriptor, ToolHandler]
ResourceRegistry = CapabilityRegistry[ResourceDescriptor, ResourceHandler]
PromptRegistry = CapabilityRegistry[PromptDescriptor, PromptHandler]


def _prop(kind: str, description: str, **extra: Any) -> dict[str, Any]:
    return {"type": kind, "description": description, **extra}


def _tool(name: str, description: str, properties: dict[str, dict[str, Any]]) -> ToolDescriptor:
    return ToolDescriptor(
        name=name,
        description=description,
        input_schema=InputSchema.from_properties(properties),
    )


def _tool_entries() -> list[tuple[ToolDescriptor, ToolHandler]]:
    return [
        (
            _tool(
                "java-class-analyzer",
                "Analyze Java classes for patterns, dependencies, and potential issues",
                {
                    "filePath": _prop("string", "Path to Java file to analyze"),
                    "includeMetrics": _prop("boolean", "Include complexity metrics", default=True),
                },
            ),
            code_analysis.analyze_java_class,
        ),
        (
            _tool(
                "spring-controller-generator",
                "Generate Spring Boot REST controllers with proper annotations",
                {
                    "entityName": _prop("string", "Name of the entity"),
                    "packageName": _prop("string", "Package name for the controller"),
                    "includeCrud": _prop("boolean", "Include CRUD operations", default=True),
                    "useResponseEntity": _prop(
                        "boolean", "Use ResponseEntity wrapper", default=True
                    ),
                },
            ),
            spring_boot.generate_controller,
        ),
        (
            _tool(
                "jpa-entity-generator",
                "Create JPA entities from specifications",
                {
                    "entityName": _prop("string", "Name of the entity"),
                    "packageName": _prop("string", "Package name for the entity"),
                    "fields": _prop("array", "List of entity fields with types"),
                    "tableName": _prop("string", "Database table name"),
                },
            ),
            spring_boot.generate_jpa_entity,
        ),
        (
            _tool(
                "unit-test-generator",
                "Generate JUnit 5 test templates for existing classes",
                {
                    "classPath": _prop("string", "Path to the class to test"),
                    "testType": _prop(
                        "string", "Type of test (unit, integration)", default="unit"
                    ),
                    "includeMockito": _prop("boolean", "Include Mockito mocks", default=True),
                },
            ),
            code_analysis.generate_unit_test,
        ),
    ]


def _resource_entries() -> list[tuple[ResourceDescriptor, ResourceHandler]]:
    return [
        (
            ResourceDescriptor.for_uri(
                STRUCTURE_URI, "Current Java project structure and organization"
            ),
            project_structure.read_structure,
        ),
        (
            ResourceDescriptor.for_uri(DEPENDENCIES_URI, "Project dependencies and their versions"),
            project_structure.read_dependencies,
        ),
        (
            ResourceDescriptor.for_uri(CONFIGURATION_URI, "Application configuration files"),
            project_structure.read_configuration,
        ),
    ]


def _prompt_entries() -> list[tuple[PromptDescriptor, PromptHandler]]:
    return [
        (
            PromptDescriptor(
                name="create-spring-boot-service",
                description="Step-by-step service creation with best practices",
                arguments={
                    "serviceName": _prop("string", "Name of the service to create"),
                    "includeDatabase": _prop(
                        "boolean", "Include database integration", default=False
                    ),
                },
            ),
            development.create_spring_boot_service,
        ),
        (
            PromptDescriptor(
                name="implement-crud-operations",
                description="Generate complete CRUD operations for entities",
                arguments={
                    "entityName": _prop("string", "Name of the entity"),
                    "includeValidation": _prop(
                        "boolean", "Include validation annotations", default=True
                    ),
                },
            ),
            development.implement_crud_operations,
        ),
    ]


@dataclass(frozen=True)
class ServerCatalog:
    """Everything the server offers, grouped by capability kind."""

    tools: ToolRegistry
    resources: ResourceRegistry
    prompts: PromptRegistry

    def lookup_tool(self, name: str) -> Binding[ToolDescriptor, ToolHandler] | None:
        return self.tools.lookup(name)

    def lookup_resource(self, uri: str) -> Binding[ResourceDescriptor, ResourceHandler] | None:
        return self.resources.lookup(uri)

    def lookup_prompt(self, name: str) -> Binding[PromptDescriptor, PromptHandler] | None:
        return self.prompts.lookup(name)


def build_catalog() -> ServerCatalog:
    """Assemble the default catalog from the built-in collaborators."""
    return ServerCatalog(
        tools=CapabilityRegistry("tool", "name", _tool_entries()),
        resources=CapabilityRegistry("resource", "uri", _resource_entries()),
        prompts=CapabilityRegistry("prompt", "name", _prompt_entries()),
    )
