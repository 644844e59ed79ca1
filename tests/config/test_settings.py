"""Tests for configuration and logging setup."""

import json
import logging

import pytest
import structlog

from surrealqb import QueryBuilder, model
from surrealqb.config import QueryBuilderSettings, configure_logging, get_settings


@pytest.fixture
def reset_logging():
    """Undo configure_logging after the test."""
    yield
    package_logger = logging.getLogger("surrealqb")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    structlog.reset_defaults()


def test_defaults():
    settings = QueryBuilderSettings()

    assert settings.parameter_prefix == "$"
    assert settings.segment_separator == " "
    assert settings.verbose is False
    assert settings.log_json is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SURREALQB_PARAMETER_PREFIX", ":")
    monkeypatch.setenv("SURREALQB_VERBOSE", "true")

    settings = QueryBuilderSettings()

    assert settings.parameter_prefix == ":"
    assert settings.verbose is True


def test_explicit_values_win(monkeypatch):
    monkeypatch.setenv("SURREALQB_PARAMETER_PREFIX", ":")

    assert QueryBuilderSettings(parameter_prefix="@").parameter_prefix == "@"


def test_get_settings_is_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("SURREALQB_PARAMETER_PREFIX", ":")

    assert get_settings() is first

    get_settings.cache_clear()

    assert get_settings().parameter_prefix == ":"


def test_configure_logging_levels(reset_logging):
    configure_logging(verbose=True)
    assert logging.getLogger("surrealqb").level == logging.DEBUG

    configure_logging(verbose=False)
    assert logging.getLogger("surrealqb").level == logging.WARNING


def test_configure_logging_reads_settings(monkeypatch, reset_logging):
    monkeypatch.setenv("SURREALQB_VERBOSE", "true")
    get_settings.cache_clear()

    configure_logging()

    assert logging.getLogger("surrealqb").level == logging.DEBUG


def test_json_logs_report_builds_and_registrations(capsys, registry, reset_logging):
    configure_logging(verbose=True, log_json=True)

    model("Logged", "a", registry=registry)
    QueryBuilder().select("*").param("{{x}}", "y").build()

    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
    events = {line["event"]: line for line in lines}

    assert events["model_registered"]["model"] == "Logged"
    assert events["query_built"]["segments"] == 2
    assert events["query_built"]["parameters"] == 1


def test_quiet_by_default(capsys, registry, reset_logging):
    configure_logging(verbose=False, log_json=True)

    QueryBuilder().select("*").build()

    assert capsys.readouterr().err == ""
