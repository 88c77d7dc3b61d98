"""Tests for config schema and loader."""

import json

import pytest

from kbgate.config.loader import load_config, save_config
from kbgate.config.schema import (
    AccessConfig,
    Config,
    DatabaseConfig,
    LimitsConfig,
    ServerConfig,
)
from kbgate.safety.policy import AccessLevel


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("KBGATE_ACCESS__MODE", "KBGATE_ACCESS__DEFAULT_SCHEMA", "KBGATE_DATABASE__HOST"):
        monkeypatch.delenv(key, raising=False)


class TestDatabaseConfig:
    def test_defaults(self):
        cfg = DatabaseConfig()
        assert cfg.type == "kingbase"
        assert cfg.host == "localhost"
        assert cfg.port == 54321
        assert cfg.user == "system"
        assert cfg.database == "kingbase"
        assert cfg.pool_max_size == 5

    def test_postgresql_type(self):
        cfg = DatabaseConfig(type="postgresql", port=5432)
        assert cfg.type == "postgresql"

    def test_invalid_type_rejected(self):
        with pytest.raises(Exception):
            DatabaseConfig(type="oracle")


class TestAccessConfig:
    def test_defaults(self):
        cfg = AccessConfig()
        assert cfg.mode is AccessLevel.READONLY
        assert cfg.default_schema == "public"

    @pytest.mark.parametrize("raw, level", [
        ("admin", AccessLevel.ADMIN),
        ("ReadWrite", AccessLevel.READWRITE),
        ("FULL", AccessLevel.FULL),
        ("bogus", AccessLevel.READONLY),
        ("", AccessLevel.READONLY),
    ])
    def test_mode_parsing(self, raw, level):
        assert AccessConfig(mode=raw).mode is level

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_schema_falls_back_to_public(self, raw):
        assert AccessConfig(default_schema=raw).default_schema == "public"

    def test_policy(self):
        assert AccessConfig(mode="full").policy().level is AccessLevel.FULL

    def test_mode_serialized_by_name(self):
        assert AccessConfig(mode="admin").model_dump()["mode"] == "admin"


class TestOtherSections:
    def test_limits(self):
        cfg = LimitsConfig()
        assert cfg.default_row_limit == 100
        assert cfg.max_row_limit == 1000
        assert cfg.character_limit == 50000

    def test_server(self):
        assert ServerConfig().transport == "stdio"
        assert ServerConfig(transport="HTTP").transport == "http"
        with pytest.raises(Exception):
            ServerConfig(transport="grpc")


class TestEnvironment:
    def test_access_mode_from_env(self, monkeypatch):
        monkeypatch.setenv("KBGATE_ACCESS__MODE", "full")
        monkeypatch.setenv("KBGATE_ACCESS__DEFAULT_SCHEMA", "app")
        cfg = Config()
        assert cfg.access.mode is AccessLevel.FULL
        assert cfg.access.default_schema == "app"

    def test_invalid_env_mode_falls_back(self, monkeypatch):
        monkeypatch.setenv("KBGATE_ACCESS__MODE", "root")
        assert Config().access.mode is AccessLevel.READONLY


class TestLoader:
    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nope.json")
        assert cfg.access.mode is AccessLevel.READONLY

    def test_round_trip(self, tmp_path):
        path = tmp_path / "config.json"
        cfg = Config(access=AccessConfig(mode="admin", default_schema="app"))
        save_config(cfg, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["access"]["mode"] == "admin"

        loaded = load_config(path)
        assert loaded.access.mode is AccessLevel.ADMIN
        assert loaded.access.default_schema == "app"

    def test_malformed_file_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_config(path).access.mode is AccessLevel.READONLY

    def test_invalid_values_fall_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"database": {"type": "oracle"}}), encoding="utf-8")
        assert load_config(path).database.type == "kingbase"
