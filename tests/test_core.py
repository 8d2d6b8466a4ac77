import asyncio
import importlib
import logging

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

import run
from bookstore_api.app import main
from bookstore_api.app.core import config
from bookstore_api.app.core.config import _split_csv
from bookstore_api.app.core.db import connect, open_database
from bookstore_api.app.core.logging_config import setup_logging


def refuse(*args, **kwargs):
    raise ServerSelectionTimeoutError("127.0.0.1:1: [Errno 111] Connection refused")


@pytest.fixture
def reload_config(monkeypatch):
    """Re-read settings from the (patched) environment; restore afterwards."""
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


@pytest.fixture
def uvicorn_loggers():
    names = ("bookstore_api", "uvicorn", "uvicorn.error", "uvicorn.access")
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers)) for name in names}
    yield names
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers[:] = handlers


def test_port_defaults_to_3000(monkeypatch, reload_config):
    monkeypatch.delenv("PORT", raising=False)
    reloaded = reload_config()
    assert reloaded.settings.port == 3000
    assert reloaded.settings.base_path == "/api/bookstore"


def test_port_can_be_overridden(monkeypatch, reload_config):
    monkeypatch.setenv("PORT", "8081")
    reloaded = reload_config()
    assert reloaded.settings.port == 8081


def test_cors_origins_are_read_from_environment(monkeypatch, reload_config):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test,http://b.test")
    assert reload_config().settings.cors_origins == ["http://a.test", "http://b.test"]


def test_split_csv():
    assert _split_csv("*") == ["*"]
    assert _split_csv(" http://a.test , ,http://b.test") == ["http://a.test", "http://b.test"]
    assert _split_csv("") == []


def test_setup_logging_applies_level_to_service_and_uvicorn(uvicorn_loggers):
    logging.getLogger("uvicorn.access").addHandler(logging.NullHandler())

    setup_logging("warning")

    for name in uvicorn_loggers:
        assert logging.getLogger(name).level == logging.WARNING
    access = logging.getLogger("uvicorn.access")
    assert access.handlers == []
    assert access.propagate


def test_setup_logging_installs_root_handlers_once(tmp_path, uvicorn_loggers):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    root.handlers.clear()
    logfile = tmp_path / "logs" / "bookstore.log"
    try:
        setup_logging("DEBUG", str(logfile))
        setup_logging("DEBUG", str(logfile))
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG
        assert logfile.exists()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_open_database_uses_explicit_name():
    client = mongomock.MongoClient()
    assert open_database(client, "Shop").name == "Shop"


def test_connect_fails_when_server_is_unreachable():
    with pytest.raises(ServerSelectionTimeoutError):
        connect("mongodb://127.0.0.1:1/Book", timeout_ms=50)


def test_failed_startup_connection_prevents_serving(monkeypatch):
    monkeypatch.setattr(main, "connect", refuse)
    app = main.create_app()
    with pytest.raises(ServerSelectionTimeoutError):
        with TestClient(app):
            pass


def test_startup_connects_when_no_database_is_given(monkeypatch):
    store = mongomock.MongoClient()
    monkeypatch.setattr(main, "connect", lambda: store)
    monkeypatch.setattr(main, "open_database", lambda client: client["Book"])

    app = main.create_app()
    with TestClient(app) as client:
        assert client.get("/api/bookstore/").json() == []
        assert app.state.client is store


def test_custom_base_path():
    app = main.create_app(database=mongomock.MongoClient()["Book"], base_path="/books/")
    with TestClient(app) as client:
        assert client.get("/books/").status_code == 200
        assert client.get("/books", follow_redirects=False).status_code == 200


def test_run_exits_without_listening_when_store_is_unreachable(monkeypatch, caplog, uvicorn_loggers):
    served = []
    monkeypatch.setattr(run, "connect", refuse)
    monkeypatch.setattr(run, "serve", served.append)

    with caplog.at_level(logging.ERROR):
        assert run.main() == 1

    assert served == []
    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert any("Error connecting to MongoDB" in record.getMessage() for record in errors)


def test_run_serves_after_successful_connection(monkeypatch, uvicorn_loggers):
    served = []

    async def fake_serve(app):
        served.append(app)

    monkeypatch.setattr(run, "connect", lambda: mongomock.MongoClient())
    monkeypatch.setattr(run, "open_database", lambda client: client["Book"])
    monkeypatch.setattr(run, "serve", fake_serve)

    assert run.main() == 0
    assert len(served) == 1


def test_serve_hands_configured_level_to_uvicorn(monkeypatch, uvicorn_loggers):
    captured = {}

    class RecordingServer:
        def __init__(self, config):
            captured["config"] = config

        async def serve(self):
            captured["served"] = True

    monkeypatch.setattr(run, "Server", RecordingServer)
    monkeypatch.setattr(run.settings, "log_level", "WARNING")

    asyncio.run(run.serve(main.create_app(database=mongomock.MongoClient()["Book"])))

    uvicorn_config = captured["config"]
    assert captured["served"]
    assert uvicorn_config.log_level == "warning"
    assert uvicorn_config.log_config is None
    assert uvicorn_config.port == run.settings.port
