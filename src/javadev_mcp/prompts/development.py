"""Development prompts — guided Spring Boot service and CRUD requests.

A prompt provider turns its arguments into a description plus a list of
chat messages the client relays to its language model.
"""

from __future__ import annotations

import logging
from typing import Any

from javadev_mcp.arguments import flag, require_text

logger = logging.getLogger(__name__)


def create_spring_boot_service(arguments: dict[str, Any]) -> dict[str, Any]:
    service_name = require_text(arguments, "serviceName")
    include_database = flag(arguments, "includeDatabase", False)

    logger.info("Creating Spring Boot service prompt for: %s", service_name)

    return {
        "description": "Step-by-step guide to create a Spring Boot service",
        "messages": [user_message(service_creation_text(service_name, include_database))],
    }


def implement_crud_operations(arguments: dict[str, Any]) -> dict[str, Any]:
    entity_name = require_text(arguments, "entityName")
    include_validation = flag(arguments, "includeValidation", True)

    logger.info("Creating CRUD operations prompt for entity: %s", entity_name)

    return {
        "description": "Complete guide to implement CRUD operations",
        "messages": [user_message(crud_implementation_text(entity_name, include_validation))],
    }


def user_message(text: str) -> dict[str, Any]:
    return {"role": "user", "content": {"type": "text", "text": text}}


def service_creation_text(service_name: str, include_database: bool) -> str:
    parts = [
        f"I need to create a new Spring Boot service called '{service_name}'. "
        "Please help me implement this service following Spring Boot best practices.\n\n",
        "Requirements:\n",
        "1. Create a clean, well-structured service class\n",
        "2. Follow Spring Boot conventions and annotations\n",
        "3. Include proper logging\n",
        "4. Add comprehensive error handling\n",
        "5. Write unit tests for the service\n",
    ]
    if include_database:
        parts += [
            "6. Include database integration with JPA/Hibernate\n",
            "7. Create repository layer\n",
            "8. Add transaction management\n",
        ]

    parts += [
        "\nPlease provide:\n",
        "- Service interface and implementation\n",
        "- Proper dependency injection setup\n",
        "- Exception handling classes\n",
        "- Unit test templates\n",
    ]
    if include_database:
        parts += [
            "- Repository interface\n",
            "- Entity class if needed\n",
            "- Database configuration\n",
        ]

    parts += [
        "\nCode should be:\n",
        "- Production-ready\n",
        "- Well-documented\n",
        "- Follow SOLID principles\n",
        "- Include validation where appropriate\n",
    ]
    return "".join(parts)


def crud_implementation_text(entity_name: str, include_validation: bool) -> str:
    resource = f"/api/{entity_name.lower()}s"
    parts = [
        f"I need to implement complete CRUD operations for the '{entity_name}' entity. "
        "Please help me create a full-stack implementation following Spring Boot best practices.\n\n",
        "Required Components:\n",
        "1. JPA Entity class with proper annotations\n",
        "2. Repository interface extending JpaRepository\n",
        "3. Service layer with business logic\n",
        "4. REST Controller with all CRUD endpoints\n",
        "5. Exception handling for all scenarios\n",
    ]
    if include_validation:
        parts += [
            "6. Bean validation annotations\n",
            "7. Custom validation logic where needed\n",
        ]

    parts += [
        "\nCRUD Operations to implement:\n",
        f"- CREATE: POST {resource}\n",
        f"- READ: GET {resource} (all) and GET {resource}/{{id}} (single)\n",
        f"- UPDATE: PUT {resource}/{{id}}\n",
        f"- DELETE: DELETE {resource}/{{id}}\n",
        "\nAdditional Requirements:\n",
        "- Use ResponseEntity for proper HTTP responses\n",
        "- Include pagination for list endpoints\n",
        "- Add proper error responses (404, 400, 500)\n",
        "- Include audit fields (createdAt, updatedAt)\n",
        "- Write comprehensive unit and integration tests\n",
    ]
    if include_validation:
        parts += [
            "- Validate input data with appropriate constraints\n",
            "- Return meaningful validation error messages\n",
        ]

    parts += [
        "\nPlease provide:\n",
        "1. Complete entity class with JPA annotations\n",
        "2. Repository interface\n",
        "3. Service interface and implementation\n",
        "4. Controller class with all endpoints\n",
        "5. Custom exception classes\n",
        "6. Global exception handler\n",
        "7. Test classes for all layers\n",
        "\nEnsure the code is:\n",
        "- Production-ready and secure\n",
        "- Well-documented with JavaDoc\n",
        "- Following RESTful conventions\n",
        "- Optimized for performance\n",
        "- Easy to maintain and extend\n",
    ]
    return "".join(parts)
