"""Shared fixtures: the built-in catalog, a dispatcher, and sample Java sources."""

from __future__ import annotations

from pathlib import Path

import pytest

from javadev_mcp.protocol.dispatcher import McpDispatcher
from javadev_mcp.registry.catalog import ServerCatalog, build_catalog

USER_SERVICE_SOURCE = """\
package com.example.service;

import java.util.List;
import java.util.Optional;

public class UserService {
    private final UserRepository repository;
    private int counter;

    public UserService() {
    }

    public List<User> findAll() {
        return repository.findAll();
    }

    public Optional<User> findById(Long id) {
        return repository.findById(id);
    }

    private void audit(int a, int b, int c, int d, int e, int f) {
    }

    static class Inner {
        void run() {
        }
    }
}
"""


@pytest.fixture
def catalog() -> ServerCatalog:
    return build_catalog()


@pytest.fixture
def dispatcher(catalog: ServerCatalog, tmp_path: Path) -> McpDispatcher:
    return McpDispatcher(catalog, project_root=tmp_path)


@pytest.fixture
def user_service_file(tmp_path: Path) -> Path:
    path = tmp_path / "UserService.java"
    path.write_text(USER_SERVICE_SOURCE, encoding="utf-8")
    return path
