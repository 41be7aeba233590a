"""Tests for the application factory and server launcher."""

import pytest
from fastapi import FastAPI

from messages_relay import main


@pytest.fixture
def uvicorn_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(main, "configure_root_logging", lambda level: None)
    return calls


def test_run_server_serves_the_prepared_app(uvicorn_calls, make_config):
    main.run_server(make_config(log_level="info"), port=9000)

    app, kwargs = uvicorn_calls[0]
    assert isinstance(app, FastAPI)
    assert kwargs["factory"] is False
    assert kwargs["port"] == 9000
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["log_config"] is None
    assert kwargs["log_level"] is None


def test_run_server_with_reload_uses_factory_import_string(uvicorn_calls, relay_config):
    main.run_server(relay_config, reload=True)

    app, kwargs = uvicorn_calls[0]
    assert app == "messages_relay.main:create_app"
    assert kwargs["factory"] is True
    assert kwargs["reload"] is True
    assert kwargs["log_config"] is None


def test_factory_without_config_configures_logging(monkeypatch):
    levels = []
    monkeypatch.setattr(main, "configure_root_logging", levels.append)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    app = main.create_app()

    assert levels == ["debug"]
    assert app.state.config.log_level == "debug"


def test_factory_with_config_leaves_logging_alone(monkeypatch, relay_config):
    levels = []
    monkeypatch.setattr(main, "configure_root_logging", levels.append)

    app = main.create_app(relay_config)

    assert levels == []
    assert app.state.config is relay_config
