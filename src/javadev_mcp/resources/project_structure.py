"""Project introspection resources — layout, dependencies, configuration.

Each provider takes the project root explicitly and returns a JSON-ready
mapping.  Nothing here reads the process working directory.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from javadev_mcp.protocol.errors import CollaboratorError

logger = logging.getLogger(__name__)

CONFIG_CANDIDATES = (
    "application.properties",
    "application.yml",
    "application.yaml",
    "config/application.properties",
    "src/main/resources/application.properties",
    "src/main/resources/application.yml",
)

_GRADLE_DEPENDENCY = re.compile(r"implementation|testImplementation|api")


def read_structure(root: Path) -> dict[str, Any]:
    """``java-project://current/structure``"""
    logger.info("Analyzing project structure for: %s", root)
    try:
        structure = analyze_structure(root)
    except OSError as exc:
        raise CollaboratorError(f"Error analyzing project structure: {exc}") from exc
    return {
        "contents": [{"type": "text", "text": "Project structure analysis completed"}],
        "structure": structure,
    }


def read_dependencies(root: Path) -> dict[str, Any]:
    """``java-project://current/dependencies``"""
    logger.info("Analyzing project dependencies for: %s", root)
    try:
        dependencies = analyze_dependencies(root)
    except OSError as exc:
        raise CollaboratorError(f"Error analyzing dependencies: {exc}") from exc
    return {
        "contents": [{"type": "text", "text": "Project dependencies analysis completed"}],
        "dependencies": dependencies,
    }


def read_configuration(root: Path) -> dict[str, Any]:
    """``java-project://current/configuration``"""
    logger.info("Analyzing project configuration for: %s", root)
    try:
        configuration = analyze_configuration(root)
    except OSError as exc:
        raise CollaboratorError(f"Error analyzing configuration: {exc}") from exc
    return {
        "contents": [{"type": "text", "text": "Project configuration analysis completed"}],
        "configuration": configuration,
    }


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


def detect_project_type(root: Path) -> str:
    if (root / "pom.xml").exists():
        return "Maven"
    if (root / "build.gradle").exists() or (root / "build.gradle.kts").exists():
        return "Gradle"
    if (root / "package.json").exists():
        return "Node.js"
    return "Unknown"


def analyze_structure(root: Path) -> dict[str, Any]:
    if not root.is_dir():
        msg = f"project root is not a directory: {root}"
        raise NotADirectoryError(msg)

    directories: dict[str, Any] = {}
    if (root / "src").exists():
        directories["src"] = _source_layout(root / "src")
    if (root / "test").exists() or (root / "src" / "test").exists():
        directories["test"] = _test_layout(root)
    if (root / "target").exists():
        directories["target"] = {"type": "build", "description": "Maven build output"}
    if (root / "build").exists():
        directories["build"] = {"type": "build", "description": "Gradle build output"}

    return {
        "rootPath": str(root),
        "projectName": root.resolve().name,
        "projectType": detect_project_type(root),
        "directories": directories,
        "fileCounts": count_files_by_extension(root),
    }


def _source_layout(src: Path) -> dict[str, Any]:
    layout: dict[str, Any] = {}
    if (src / "main" / "java").exists():
        layout["mainJava"] = _java_packages(src / "main" / "java")
    if (src / "main" / "resources").exists():
        layout["mainResources"] = _resource_files(src / "main" / "resources")
    if (src / "test" / "java").exists():
        layout["testJava"] = _java_packages(src / "test" / "java")
    return layout


def _java_packages(java_root: Path) -> dict[str, Any]:
    packages: dict[str, Any] = {}
    for package_dir in sorted(p for p in java_root.rglob("*") if p.is_dir()):
        java_files = sum(1 for f in package_dir.iterdir() if f.name.endswith(".java"))
        if java_files:
            name = ".".join(package_dir.relative_to(java_root).parts)
            packages[name] = {"javaFiles": java_files, "path": str(package_dir)}
    return packages


def _resource_files(resources: Path) -> dict[str, Any]:
    files: dict[str, Any] = {}
    for path in sorted(resources.iterdir()):
        if path.is_file():
            files[path.name] = {"type": _resource_type(path.name), "size": path.stat().st_size}
    return files


def _test_layout(root: Path) -> dict[str, Any]:
    test_root = root / "src" / "test" / "java"
    if not test_root.exists():
        test_root = root / "test"
    if not test_root.exists():
        return {}
    count = sum(
        1 for p in test_root.rglob("*") if p.name.endswith(("Test.java", "Tests.java"))
    )
    return {"testFileCount": count, "testPath": str(test_root)}


def count_files_by_extension(root: Path) -> dict[str, int]:
    counts: dict[str, int] = {}
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            if not os.path.isfile(os.path.join(dirpath, name)):
                continue
            ext = _extension(name)
            counts[ext] = counts.get(ext, 0) + 1
    return counts


def _extension(file_name: str) -> str:
    if "." not in file_name:
        return "no-extension"
    return file_name.rsplit(".", 1)[1]


def _resource_type(file_name: str) -> str:
    if file_name.endswith(".properties"):
        return "properties"
    if file_name.endswith((".yml", ".yaml")):
        return "yaml"
    if file_name.endswith(".xml"):
        return "xml"
    if file_name.endswith(".json"):
        return "json"
    return "other"


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def analyze_dependencies(root: Path) -> dict[str, Any]:
    dependencies: dict[str, Any] = {}
    pom = root / "pom.xml"
    if pom.exists():
        dependencies["maven"] = _scan_build_file(
            pom,
            has_dependencies=lambda text: "<dependencies>" in text,
            count=lambda text: len(text.split("<dependency>")) - 1,
        )
    for gradle_name in ("build.gradle", "build.gradle.kts"):
        gradle = root / gradle_name
        if gradle.exists():
            dependencies["gradle"] = _scan_build_file(
                gradle,
                has_dependencies=lambda text: "dependencies" in text,
                count=lambda text: len(_GRADLE_DEPENDENCY.findall(text)),
            )
            break
    return dependencies


def _scan_build_file(
    path: Path,
    *,
    has_dependencies: Callable[[str], bool],
    count: Callable[[str], int],
) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        logger.warning("Error reading %s", path, exc_info=True)
        return {"error": f"Unable to read {path.name}"}
    return {
        "hasDependencies": has_dependencies(text),
        "hasSpringBoot": "spring-boot" in text,
        "hasJUnit": "junit" in text,
        "hasMockito": "mockito" in text,
        "dependencyCount": count(text),
    }


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def analyze_configuration(root: Path) -> dict[str, Any]:
    found: list[dict[str, Any]] = []
    for candidate in CONFIG_CANDIDATES:
        path = root / candidate
        if path.exists():
            found.append(
                {"file": candidate, "type": _config_type(candidate), "size": path.stat().st_size}
            )
    return {"configurationFiles": found}


def _config_type(file_name: str) -> str:
    if ".properties" in file_name:
        return "Properties"
    if ".yml" in file_name or ".yaml" in file_name:
        return "YAML"
    return "Unknown"
