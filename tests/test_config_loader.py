import textwrap

import pytest
from pydantic import ValidationError

from userseed.config_loader import load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("MONGODB_URI", raising=False)
    monkeypatch.delenv("MONGODB_DB", raising=False)
    # keep a stray .env in the repo out of the picture
    monkeypatch.chdir(tmp_path)


def _write_config(tmp_path, body: str) -> str:
    cfg = tmp_path / "config.yaml"
    cfg.write_text(textwrap.dedent(body))
    return str(cfg)


def test_defaults_fill_in_around_uri(tmp_path):
    path = _write_config(
        tmp_path,
        """
        mongo:
          uri: "mongodb://localhost:27017"
        """,
    )
    s = load_settings(path)
    assert s.mongo.uri == "mongodb://localhost:27017"
    assert s.mongo.db == "backend_challenge"
    assert s.mongo.server_selection_timeout_ms is None
    assert s.bootstrap.collection == "users"
    assert s.bootstrap.strict is False
    assert s.seed.email == "admin@example.com"


def test_yaml_values_are_loaded(tmp_path):
    path = _write_config(
        tmp_path,
        """
        mongo:
          uri: "mongodb://db:27017"
          db: "app"
          server_selection_timeout_ms: 2000
        bootstrap:
          collection: "accounts"
          strict: true
        seed:
          name: "Root"
          email: "root@example.com"
        """,
    )
    s = load_settings(path)
    assert s.mongo.db == "app"
    assert s.mongo.server_selection_timeout_ms == 2000
    assert s.bootstrap.collection == "accounts"
    assert s.bootstrap.strict is True
    assert s.seed.name == "Root"
    assert s.seed.password.startswith("$2a$06$")


def test_env_overrides_connection(tmp_path, monkeypatch):
    path = _write_config(
        tmp_path,
        """
        mongo:
          uri: "mongodb://from-yaml:27017"
          db: "yaml_db"
        """,
    )
    monkeypatch.setenv("MONGODB_URI", "mongodb://from-env:27017")
    monkeypatch.setenv("MONGODB_DB", "env_db")
    s = load_settings(path)
    assert s.mongo.uri == "mongodb://from-env:27017"
    assert s.mongo.db == "env_db"


def test_missing_file_uses_env(tmp_path, monkeypatch):
    monkeypatch.setenv("MONGODB_URI", "mongodb://from-env:27017")
    s = load_settings(str(tmp_path / "missing.yaml"))
    assert s.mongo.uri == "mongodb://from-env:27017"


def test_missing_uri_is_rejected(tmp_path):
    path = _write_config(tmp_path, "mongo: {}\n")
    with pytest.raises(ValidationError):
        load_settings(path)


def test_empty_sections_fall_back_to_defaults(tmp_path):
    path = _write_config(
        tmp_path,
        """
        mongo:
          uri: "mongodb://x"
        bootstrap:
        seed:
        """,
    )
    s = load_settings(path)
    assert s.bootstrap.collection == "users"
    assert s.seed.email == "admin@example.com"
