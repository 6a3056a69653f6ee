"""Configuration management with XDG paths, atomic writes, and target resolution.

This module handles all persistent configuration for paasctl:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.paasctl/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~paasctl.models.GlobalConfig`
  JSON file storing the target URL and request settings.
* **Target resolution** -- :func:`resolve_target` merges the CLI flag, the
  environment and the global config into the effective API base URL.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from paasctl.exceptions import ConfigError
from paasctl.models import GlobalConfig

_APP_NAME = "paasctl"
_CONFIG_FILENAME = "config.json"

TARGET_ENV_VAR = "PAASCTL_TARGET"
TOKEN_ENV_VAR = "PAASCTL_TOKEN"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform uses the XDG Base Directory layout (Linux/FreeBSD)."""
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/paasctl/`` (default ``~/.config/paasctl/``).
    On macOS/Windows: ``~/.paasctl/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (session file, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/paasctl/`` (default ``~/.local/share/paasctl/``).
    On macOS/Windows: ``~/.paasctl/data/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    When *mode* is given the permissions are applied to the temp file
    before any content is written.

    Args:
        path: Destination file.
        data: Text content to write.
        mode: Optional permission bits (e.g. ``0o600``).

    Raises:
        OSError: If the file cannot be written.
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
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
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


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~paasctl.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk.

    Args:
        config: The configuration to save.
    """
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Target resolution ---


def normalize_target(url: str) -> str:
    """Validate a target URL and strip any trailing slash.

    Args:
        url: The URL given by the user.

    Returns:
        The URL without trailing slashes.

    Raises:
        ConfigError: If the URL is not an absolute http(s) URL.
    """
    candidate = url.strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(
            f"Invalid target '{url}': expected an http:// or https:// URL"
        )
    return candidate.rstrip("/")


def resolve_target(
    cli_target: Optional[str] = None,
    config: Optional[GlobalConfig] = None,
) -> str:
    """Resolve the control-plane base URL.

    Precedence (high to low):
        1. CLI flag (``--target``)
        2. Environment variable (``PAASCTL_TARGET``)
        3. User config (``~/.config/paasctl/config.json``)

    Args:
        cli_target: Value of the ``--target`` flag, if given.
        config: Already-loaded global config; loaded from disk when ``None``.

    Returns:
        The normalised target URL.

    Raises:
        ConfigError: If no target is defined anywhere or it is malformed.
    """
    if cli_target:
        return normalize_target(cli_target)

    env_target = os.environ.get(TARGET_ENV_VAR)
    if env_target:
        return normalize_target(env_target)

    if config is None:
        config = load_global_config()
    if config.target:
        return normalize_target(config.target)

    raise ConfigError(
        "No target defined. Set one with: paasctl target set <url>"
    )


def resolve_env_token() -> Optional[str]:
    """Return the session token override from ``PAASCTL_TOKEN``, if set."""
    value = os.environ.get(TOKEN_ENV_VAR, "").strip()
    return value or None
