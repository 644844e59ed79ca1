"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from surrealqb import ModelRegistry, model
from surrealqb.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings re-read from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry():
    """Isolated ModelRegistry."""
    return ModelRegistry()


@pytest.fixture
def schemas(registry):
    """Account / Project / Release schemas declared in an isolated registry."""
    release = model("Release", "name", registry=registry)
    project = model(
        "Project",
        "name",
        "->has->Release as releases",
        "<-manage<-Account as authors",
        registry=registry,
    )
    account = model(
        "Account",
        "handle",
        "password",
        "email",
        "friend<Account>",
        "->manage->Project as managed_projects",
        registry=registry,
    )
    return account, project, release
