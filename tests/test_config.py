"""Tests for configuration loading."""

from pathlib import Path

import pytest

from stations_api.config import Config


def _write(tmp_path: Path, content: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(content)
    return str(path)


class TestConfig:
    def test_when_file_has_placeholders_then_substituted_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("STATIONS_DB", "sqlite+aiosqlite:///from-env.db")
        path = _write(tmp_path, "database:\n  url: ${STATIONS_DB}\n  pool_size: 4\n")

        config = Config(filepath=path)

        assert config.database["url"] == "sqlite+aiosqlite:///from-env.db"
        assert config.database["pool_size"] == 4

    def test_when_section_omitted_then_defaults_apply(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "database:\n  url: sqlite+aiosqlite:///x.db\n")

        config = Config(filepath=path)

        assert config.server["port"] == 3000
        assert config.auth["header"] == "Authorization"
        assert config.database["pool_size"] == 10

    def test_when_database_url_env_set_then_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///override.db")
        path = _write(tmp_path, "database:\n  url: sqlite+aiosqlite:///file.db\n")

        assert Config(filepath=path).database["url"] == "sqlite+aiosqlite:///override.db"

    def test_when_port_env_set_then_overrides_server_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8080")

        config = Config(data={"database": {"url": "sqlite+aiosqlite:///x.db"}})

        assert config.server["port"] == 8080

    def test_when_plain_postgres_url_then_async_driver_selected(self) -> None:
        config = Config(data={"database": {"url": "postgres://user:pw@db:5432/stations"}})

        assert config.database["url"] == "postgresql+asyncpg://user:pw@db:5432/stations"

    def test_when_no_database_url_then_fails_fast(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="database connection URL"):
            Config(filepath=str(tmp_path / "absent.yaml"))

    def test_when_placeholder_undefined_then_fails_fast(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "database:\n  url: ${NOT_DEFINED_ANYWHERE_123}\n")

        with pytest.raises(RuntimeError, match="NOT_DEFINED_ANYWHERE_123"):
            Config(filepath=path)

    def test_when_yaml_invalid_then_fails_fast(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "database: [unclosed\n")

        with pytest.raises(RuntimeError, match="Error reading config"):
            Config(filepath=path)

    def test_when_pool_size_not_positive_then_fails_fast(self) -> None:
        with pytest.raises(RuntimeError, match="pool_size"):
            Config(data={"database": {"url": "sqlite+aiosqlite:///x.db", "pool_size": 0}})

    def test_when_pool_timeout_omitted_then_waits_indefinitely(self) -> None:
        config = Config(data={"database": {"url": "sqlite+aiosqlite:///x.db"}})

        assert config.database["pool_timeout"] is None

    def test_when_pool_timeout_given_then_kept(self) -> None:
        config = Config(data={"database": {"url": "sqlite+aiosqlite:///x.db", "pool_timeout": 5}})

        assert config.database["pool_timeout"] == 5

    @pytest.mark.parametrize("pool_timeout", [0, -1, "soon"])
    def test_when_pool_timeout_invalid_then_fails_fast(self, pool_timeout: object) -> None:
        with pytest.raises(RuntimeError, match="pool_timeout"):
            Config(data={"database": {"url": "sqlite+aiosqlite:///x.db", "pool_timeout": pool_timeout}})
