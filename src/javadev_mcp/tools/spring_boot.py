"""Spring Boot generators — REST controller and JPA entity skeletons.

Both tools are pure string builders: they read their arguments, render a
Java source file, and return it alongside a suggested file name and
follow-up instructions for the user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from javadev_mcp.arguments import flag, optional_text, require_text
from javadev_mcp.protocol.errors import ArgumentError
from javadev_mcp.tools.naming import lower_camel, snake_case, upper_camel

logger = logging.getLogger(__name__)

_NUMERIC_TYPES = frozenset({"Integer", "Long"})


@dataclass(frozen=True)
class EntityField:
    """One user-declared column of a generated entity."""

    name: str
    type: str
    nullable: bool = True


# ---------------------------------------------------------------------------
# Tool entry points
# ---------------------------------------------------------------------------


def generate_controller(arguments: dict[str, Any]) -> dict[str, Any]:
    """Render a ``@RestController`` for an entity."""
    entity_name = require_text(arguments, "entityName")
    package_name = require_text(arguments, "packageName")
    include_crud = flag(arguments, "includeCrud", True)
    use_response_entity = flag(arguments, "useResponseEntity", True)

    logger.info("Generating Spring Boot controller for entity: %s", entity_name)

    code = render_controller(entity_name, package_name, include_crud, use_response_entity)
    file_name = f"{entity_name}Controller.java"
    return {
        "content": [{"type": "text", "text": "Spring Boot controller generated successfully"}],
        "controllerCode": code,
        "fileName": file_name,
        "instructions": [
            f"1. Create controller file: {file_name}",
            "2. Copy the generated controller code",
            "3. Adjust package imports if needed",
            "4. Implement the service layer methods",
            "5. Add validation annotations as needed",
        ],
    }


def generate_jpa_entity(arguments: dict[str, Any]) -> dict[str, Any]:
    """Render an ``@Entity`` class from a field list."""
    entity_name = require_text(arguments, "entityName")
    package_name = require_text(arguments, "packageName")
    table_name = optional_text(arguments, "tableName", entity_name.lower())
    fields = _parse_fields(arguments.get("fields"))

    logger.info("Generating JPA entity: %s", entity_name)

    code = render_entity(entity_name, package_name, table_name, fields)
    file_name = f"{entity_name}.java"
    return {
        "content": [{"type": "text", "text": "JPA Entity generated successfully"}],
        "entityCode": code,
        "fileName": file_name,
        "instructions": [
            f"1. Create entity file: {file_name}",
            "2. Copy the generated entity code",
            "3. Add additional validation annotations if needed",
            "4. Consider adding relationships with other entities",
            "5. Review and adjust database column mappings",
        ],
    }


def _parse_fields(raw: Any) -> list[EntityField]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ArgumentError("fields", "expected an array of {name, type} objects")
    fields: list[EntityField] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ArgumentError("fields", "expected an array of {name, type} objects")
        fields.append(
            EntityField(
                name=require_text(item, "name"),
                type=require_text(item, "type"),
                nullable=str(item.get("nullable", "true")).lower() == "true",
            )
        )
    return fields


# ---------------------------------------------------------------------------
# Controller rendering
# ---------------------------------------------------------------------------


def render_controller(
    entity: str,
    package_name: str,
    include_crud: bool,
    use_response_entity: bool,
) -> str:
    lines = [f"package {package_name};", ""]
    lines.append("import org.springframework.beans.factory.annotation.Autowired;")
    lines.append("import org.springframework.web.bind.annotation.*;")
    if use_response_entity:
        lines.append("import org.springframework.http.ResponseEntity;")
        lines.append("import org.springframework.http.HttpStatus;")
    lines += [
        "import org.springframework.validation.annotation.Validated;",
        "import jakarta.validation.Valid;",
        "import java.util.List;",
        "import java.util.Optional;",
        "",
    ]

    var = lower_camel(entity)
    service_type = f"{entity}Service"
    service = lower_camel(service_type)

    lines += [
        "@RestController",
        f'@RequestMapping("/api/{var}s")',
        "@Validated",
        f"public class {entity}Controller {{",
        "",
        "    @Autowired",
        f"    private {service_type} {service};",
        "",
    ]

    if include_crud:
        for render in (_get_all, _get_by_id, _create, _update, _delete):
            lines += render(entity, var, service, use_response_entity)
            lines.append("")

    lines.append("}")
    return "\n".join(lines) + "\n"


def _get_all(entity: str, var: str, service: str, wrapped: bool) -> list[str]:
    if wrapped:
        body = [
            f"    public ResponseEntity<List<{entity}>> getAll{entity}s() {{",
            f"        List<{entity}> entities = {service}.findAll();",
            "        return ResponseEntity.ok(entities);",
        ]
    else:
        body = [
            f"    public List<{entity}> getAll{entity}s() {{",
            f"        return {service}.findAll();",
        ]
    return ["    @GetMapping", *body, "    }"]


def _get_by_id(entity: str, var: str, service: str, wrapped: bool) -> list[str]:
    if wrapped:
        body = [
            f"    public ResponseEntity<{entity}> get{entity}ById(@PathVariable Long id) {{",
            f"        Optional<{entity}> {var} = {service}.findById(id);",
            f"        return {var}.map(ResponseEntity::ok)",
            "                .orElse(ResponseEntity.notFound().build());",
        ]
    else:
        body = [
            f"    public {entity} get{entity}ById(@PathVariable Long id) {{",
            f"        return {service}.findById(id)",
            f'                .orElseThrow(() -> new RuntimeException("{entity} not found with id: " + id));',
        ]
    return ['    @GetMapping("/{id}")', *body, "    }"]


def _create(entity: str, var: str, service: str, wrapped: bool) -> list[str]:
    signature = f"create{entity}(@Valid @RequestBody {entity} {var})"
    if wrapped:
        body = [
            f"    public ResponseEntity<{entity}> {signature} {{",
            f"        {entity} saved{entity} = {service}.save({var});",
            f"        return ResponseEntity.status(HttpStatus.CREATED).body(saved{entity});",
        ]
    else:
        body = [
            f"    public {entity} {signature} {{",
            f"        return {service}.save({var});",
        ]
    return ["    @PostMapping", *body, "    }"]


def _update(entity: str, var: str, service: str, wrapped: bool) -> list[str]:
    signature = f"update{entity}(@PathVariable Long id, @Valid @RequestBody {entity} {var})"
    if wrapped:
        body = [
            f"    public ResponseEntity<{entity}> {signature} {{",
            f"        if (!{service}.existsById(id)) {{",
            "            return ResponseEntity.notFound().build();",
            "        }",
            f"        {var}.setId(id);",
            f"        {entity} updated{entity} = {service}.save({var});",
            f"        return ResponseEntity.ok(updated{entity});",
        ]
    else:
        body = [
            f"    public {entity} {signature} {{",
            f"        {var}.setId(id);",
            f"        return {service}.save({var});",
        ]
    return ['    @PutMapping("/{id}")', *body, "    }"]


def _delete(entity: str, var: str, service: str, wrapped: bool) -> list[str]:
    if wrapped:
        body = [
            f"    public ResponseEntity<Void> delete{entity}(@PathVariable Long id) {{",
            f"        if (!{service}.existsById(id)) {{",
            "            return ResponseEntity.notFound().build();",
            "        }",
            f"        {service}.deleteById(id);",
            "        return ResponseEntity.noContent().build();",
        ]
    else:
        body = [
            f"    public void delete{entity}(@PathVariable Long id) {{",
            f"        {service}.deleteById(id);",
        ]
    return ['    @DeleteMapping("/{id}")', *body, "    }"]


# ---------------------------------------------------------------------------
# Entity rendering
# ---------------------------------------------------------------------------


def render_entity(entity: str, package_name: str, table_name: str, fields: list[EntityField]) -> str:
    lines = [
        f"package {package_name};",
        "",
        "import jakarta.persistence.*;",
        "import jakarta.validation.constraints.*;",
        "import java.time.LocalDateTime;",
        "import java.util.Objects;",
        "",
        "@Entity",
        f'@Table(name = "{table_name}")',
        f"public class {entity} {{",
        "",
        "    @Id",
        "    @GeneratedValue(strategy = GenerationType.IDENTITY)",
        "    private Long id;",
        "",
    ]

    for field in fields:
        lines += _column(field)

    lines += [
        '    @Column(name = "created_at")',
        "    private LocalDateTime createdAt;",
        "",
        '    @Column(name = "updated_at")',
        "    private LocalDateTime updatedAt;",
        "",
    ]

    lines += _constructors(entity, fields)
    lines += _accessors(fields)
    lines += _equality(entity)
    lines += _to_string(entity, fields)

    lines += [
        "    @PrePersist",
        "    protected void onCreate() {",
        "        createdAt = LocalDateTime.now();",
        "        updatedAt = LocalDateTime.now();",
        "    }",
        "",
        "    @PreUpdate",
        "    protected void onUpdate() {",
        "        updatedAt = LocalDateTime.now();",
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def _column(field: EntityField) -> list[str]:
    lines: list[str] = []
    column = f'    @Column(name = "{snake_case(field.name)}"'
    if field.type == "String" or field.type in _NUMERIC_TYPES:
        if not field.nullable:
            lines.append("    @NotBlank" if field.type == "String" else "    @NotNull")
            column += ", nullable = false"
    lines.append(column + ")")
    lines.append(f"    private {field.type} {field.name};")
    lines.append("")
    return lines


def _constructors(entity: str, fields: list[EntityField]) -> list[str]:
    lines = [f"    public {entity}() {{", "    }", ""]
    if fields:
        params = ", ".join(f"{f.type} {f.name}" for f in fields)
        lines.append(f"    public {entity}({params}) {{")
        lines += [f"        this.{f.name} = {f.name};" for f in fields]
        lines += ["    }", ""]
    return lines


def _accessors(fields: list[EntityField]) -> list[str]:
    lines = [
        "    public Long getId() {",
        "        return id;",
        "    }",
        "",
        "    public void setId(Long id) {",
        "        this.id = id;",
        "    }",
        "",
    ]
    for f in fields:
        prop = upper_camel(f.name)
        lines += [
            f"    public {f.type} get{prop}() {{",
            f"        return {f.name};",
            "    }",
            "",
            f"    public void set{prop}({f.type} {f.name}) {{",
            f"        this.{f.name} = {f.name};",
            "    }",
            "",
        ]
    lines += [
        "    public LocalDateTime getCreatedAt() {",
        "        return createdAt;",
        "    }",
        "",
        "    public LocalDateTime getUpdatedAt() {",
        "        return updatedAt;",
        "    }",
        "",
    ]
    return lines


def _equality(entity: str) -> list[str]:
    return [
        "    @Override",
        "    public boolean equals(Object o) {",
        "        if (this == o) return true;",
        "        if (o == null || getClass() != o.getClass()) return false;",
        f"        {entity} that = ({entity}) o;",
        "        return Objects.equals(id, that.id);",
        "    }",
        "",
        "    @Override",
        "    public int hashCode() {",
        "        return Objects.hash(id);",
        "    }",
        "",
    ]


def _to_string(entity: str, fields: list[EntityField]) -> list[str]:
    lines = [
        "    @Override",
        "    public String toString() {",
        f'        return "{entity}{{" +',
        '                "id=" + id +',
    ]
    lines += [f"                \", {f.name}='\" + {f.name} + '\\'' +" for f in fields]
    lines += [
        '                ", createdAt=" + createdAt +',
        '                ", updatedAt=" + updatedAt +',
        "                '}';",
        "    }",
        "",
    ]
    return lines
