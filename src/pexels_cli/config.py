"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for pexels-cli:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.pexels/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Config file** -- a single :class:`~pexels_cli.models.PexelsConfig`
  JSON file holding the API token and request defaults. It is written with
  ``0o600`` permissions because it may contain the token.
* **Precedence resolution** -- :func:`resolve_request_config` merges CLI
  flags, environment variables, and the config file into the effective
  HTTP settings; :func:`resolve_token` does the same for the API token.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pexels_cli.exceptions import AuthError, ConfigError, InvalidUsageError
from pexels_cli.models import (
    DEFAULT_HOST,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    PexelsConfig,
    RequestConfig,
    TokenSource,
)

_APP_NAME = "pexels"
_CONFIG_FILENAME = "config.json"

TOKEN_ENV_VARS = ("PEXELS_TOKEN", "PEXELS_API_KEY")
"""Environment variables checked for the API token, in order."""

HOST_ENV_VAR = "PEXELS_HOST"

CONFIG_KEYS = ("token", "host", "locale", "timeout", "max_retries")
"""Keys accepted by ``pexels config set/get``."""

_KEY_ALIASES = {"api_key": "token"}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/pexels/`` (default ``~/.config/pexels/``).
    On macOS/Windows: ``~/.pexels/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/pexels/`` (default ``~/.local/share/pexels/``).
    On macOS/Windows: ``~/.pexels/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_path() -> Path:
    """Path to the config file (which may not exist yet)."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str, mode: int = 0o600) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems, and its permissions
    are set to *mode* before any content is written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config file ---


def load_config() -> PexelsConfig:
    """Load the config file.

    Returns:
        The deserialised :class:`~pexels_cli.models.PexelsConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_path()
    if not path.is_file():
        return PexelsConfig()
    try:
        text = path.read_text(encoding="utf-8")
        return PexelsConfig.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: PexelsConfig) -> None:
    """Persist the config atomically, omitting unset fields."""
    data = config.model_dump(mode="json", exclude_none=True)
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


def canonical_key(key: str) -> str:
    """Map a user-facing config key to its field name.

    Raises:
        InvalidUsageError: If the key is not one of :data:`CONFIG_KEYS`.
    """
    name = _KEY_ALIASES.get(key, key)
    if name not in CONFIG_KEYS:
        allowed = ", ".join(CONFIG_KEYS)
        raise InvalidUsageError(f"Unsupported config key '{key}' (expected one of: {allowed})")
    return name


def set_config_value(key: str, value: str) -> PexelsConfig:
    """Validate and persist one config value, returning the updated config."""
    name = canonical_key(key)
    data: dict[str, Any] = load_config().model_dump()
    data[name] = value
    try:
        config = PexelsConfig.model_validate(data)
    except ValueError as exc:
        raise InvalidUsageError(f"Invalid value for {key}: {value!r}") from exc
    save_config(config)
    return config


# --- Precedence resolution ---


def resolve_request_config(
    cli_host: Optional[str] = None,
    cli_timeout: Optional[int] = None,
    cli_max_retries: Optional[int] = None,
    cli_retry_after: Optional[int] = None,
    cli_locale: Optional[str] = None,
    config: Optional[PexelsConfig] = None,
) -> RequestConfig:
    """Resolve the effective HTTP settings.

    Precedence (high to low):
        1. CLI flags (``--host``, ``--timeout``, ``--max-retries``,
           ``--retry-after``, ``--locale``)
        2. Environment variables (``PEXELS_HOST``)
        3. Config file (``~/.config/pexels/config.json``)
        4. Defaults
    """
    if config is None:
        config = load_config()

    host = cli_host or os.environ.get(HOST_ENV_VAR) or config.host or DEFAULT_HOST
    timeout = cli_timeout if cli_timeout is not None else config.timeout
    max_retries = cli_max_retries if cli_max_retries is not None else config.max_retries

    return RequestConfig(
        host=host.rstrip("/"),
        timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        max_retries=max_retries if max_retries is not None else DEFAULT_MAX_RETRIES,
        retry_after=cli_retry_after,
        locale=cli_locale or config.locale,
    )


def resolve_token(config: Optional[PexelsConfig] = None) -> tuple[Optional[str], TokenSource]:
    """Return the API token and where it came from.

    Non-empty environment variables (``PEXELS_TOKEN``, then
    ``PEXELS_API_KEY``) win over the config file.
    """
    for var in TOKEN_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value, TokenSource.ENV
    if config is None:
        config = load_config()
    if config.token:
        return config.token, TokenSource.CONFIG
    return None, TokenSource.NONE


def require_token(config: Optional[PexelsConfig] = None) -> str:
    """Like :func:`resolve_token` but raise :class:`AuthError` when no token is set."""
    token, _source = resolve_token(config)
    if not token:
        raise AuthError(
            "No API token found. Run 'pexels auth login <token>' or set PEXELS_TOKEN."
        )
    return token


def token_status(config: Optional[PexelsConfig] = None) -> dict[str, Any]:
    """Describe the active token source without revealing the token."""
    if config is None:
        config = load_config()
    token, source = resolve_token(config)

    details: dict[str, Any]
    if source is TokenSource.ENV:
        var = next(v for v in TOKEN_ENV_VARS if os.environ.get(v))
        details = {"var": var, "set": True}
    elif source is TokenSource.CONFIG:
        details = {"path": str(config_path())}
    else:
        details = {"reason": "no token found"}

    return {"present": bool(token), "source": source.value, "details": details}


def mask_secret(value: Optional[str]) -> Optional[str]:
    """Mask all but the last four characters of a secret."""
    if not value:
        return value
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]
