"""Tests for configuration paths, persistence and precedence resolution."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from pexels_cli.config import (
    _atomic_write,
    config_path,
    get_config_dir,
    get_data_dir,
    load_config,
    mask_secret,
    require_token,
    resolve_request_config,
    resolve_token,
    save_config,
    set_config_value,
    token_status,
)
from pexels_cli.exceptions import AuthError, ConfigError, InvalidUsageError
from pexels_cli.models import (
    DEFAULT_HOST,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    PexelsConfig,
    TokenSource,
)

# ---------------------------------------------------------------------------
# Directory layout
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pexels_cli.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "pexels"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("pexels_cli.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "pexels"

    def test_data_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_data"
        monkeypatch.setattr("pexels_cli.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(custom))

        assert get_data_dir() == custom / "pexels"


class TestXDGPathsFallback:
    """Fallback paths on non-XDG platforms (macOS, Windows)."""

    def test_config_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pexels_cli.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".pexels"
        assert result.is_dir()

    def test_data_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("pexels_cli.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_data_dir() == tmp_path / ".pexels" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes and the config file
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_with_private_mode(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "file.json"
        _atomic_write(target, "{}")
        assert target.read_text() == "{}"
        assert stat.S_IMODE(os.stat(target).st_mode) == 0o600

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        _atomic_write(target, "a")
        _atomic_write(target, "b")
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]
        assert target.read_text() == "b"


class TestConfigFile:
    def test_missing_file_gives_defaults(self, isolated_config: Path) -> None:
        assert load_config() == PexelsConfig()

    def test_round_trip(self, isolated_config: Path) -> None:
        save_config(PexelsConfig(token="abc", timeout=30))
        assert load_config() == PexelsConfig(token="abc", timeout=30)

    def test_unset_fields_not_written(self, isolated_config: Path) -> None:
        save_config(PexelsConfig(locale="de-DE"))
        assert json.loads(config_path().read_text()) == {"locale": "de-DE"}

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        config_path().write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config()

    def test_invalid_field_raises(self, isolated_config: Path) -> None:
        config_path().write_text(json.dumps({"timeout": "soon"}))
        with pytest.raises(ConfigError):
            load_config()

    def test_file_is_private(self, isolated_config: Path) -> None:
        save_config(PexelsConfig(token="abc"))
        assert stat.S_IMODE(os.stat(config_path()).st_mode) == 0o600


class TestSetConfigValue:
    def test_coerces_integers(self, isolated_config: Path) -> None:
        assert set_config_value("timeout", "45").timeout == 45
        assert load_config().timeout == 45

    def test_api_key_alias(self, isolated_config: Path) -> None:
        set_config_value("api_key", "k-123")
        assert load_config().token == "k-123"

    def test_unknown_key(self, isolated_config: Path) -> None:
        with pytest.raises(InvalidUsageError, match="Unsupported config key"):
            set_config_value("colour", "red")

    def test_invalid_value(self, isolated_config: Path) -> None:
        with pytest.raises(InvalidUsageError, match="Invalid value"):
            set_config_value("max_retries", "many")
        assert load_config().max_retries is None


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveRequestConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_request_config()
        assert config.host == DEFAULT_HOST
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.max_retries == DEFAULT_MAX_RETRIES
        assert config.retry_after is None

    def test_file_over_defaults(self, isolated_config: Path) -> None:
        stored = PexelsConfig(host="http://file.local", timeout=20, max_retries=0, locale="fr-FR")
        config = resolve_request_config(config=stored)
        assert config.host == "http://file.local"
        assert config.timeout == 20
        assert config.max_retries == 0
        assert config.locale == "fr-FR"

    def test_env_over_file(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PEXELS_HOST", "http://env.local/")
        config = resolve_request_config(config=PexelsConfig(host="http://file.local"))
        assert config.host == "http://env.local"

    def test_cli_over_everything(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PEXELS_HOST", "http://env.local")
        config = resolve_request_config(
            cli_host="http://cli.local",
            cli_timeout=3,
            cli_max_retries=5,
            cli_retry_after=2,
            cli_locale="ja-JP",
            config=PexelsConfig(timeout=20, max_retries=1, locale="fr-FR"),
        )
        assert config.host == "http://cli.local"
        assert (config.timeout, config.max_retries, config.retry_after) == (3, 5, 2)
        assert config.locale == "ja-JP"


class TestResolveToken:
    def test_none(self, isolated_config: Path) -> None:
        assert resolve_token() == (None, TokenSource.NONE)

    def test_config(self, isolated_config: Path) -> None:
        save_config(PexelsConfig(token="from-file"))
        assert resolve_token() == ("from-file", TokenSource.CONFIG)

    def test_env_wins_over_config(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        save_config(PexelsConfig(token="from-file"))
        monkeypatch.setenv("PEXELS_API_KEY", "from-api-key")
        assert resolve_token() == ("from-api-key", TokenSource.ENV)
        monkeypatch.setenv("PEXELS_TOKEN", "from-token")
        assert resolve_token() == ("from-token", TokenSource.ENV)

    def test_empty_env_is_ignored(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PEXELS_TOKEN", "")
        assert resolve_token()[1] is TokenSource.NONE

    def test_require_token_raises(self, isolated_config: Path) -> None:
        with pytest.raises(AuthError, match="pexels auth login"):
            require_token()


class TestTokenStatus:
    def test_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PEXELS_API_KEY", "k")
        assert token_status() == {
            "present": True,
            "source": "env",
            "details": {"var": "PEXELS_API_KEY", "set": True},
        }

    def test_config(self, isolated_config: Path) -> None:
        save_config(PexelsConfig(token="k"))
        status = token_status()
        assert status["source"] == "config"
        assert status["details"] == {"path": str(config_path())}

    def test_none(self, isolated_config: Path) -> None:
        assert token_status() == {
            "present": False,
            "source": "none",
            "details": {"reason": "no token found"},
        }


class TestMaskSecret:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, None), ("", ""), ("abc", "***"), ("abcdefgh", "****efgh")],
    )
    def test_mask(self, value, expected) -> None:
        assert mask_secret(value) == expected
