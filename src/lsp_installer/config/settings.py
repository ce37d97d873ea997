"""Load installer settings from YAML files.

Settings are always passed explicitly to the backends that read them; there
is no process-wide settings object.

Example file::

    python3_host_prog: ~/.pyenv/versions/3.12.2/bin/python3
    pip:
      install_args: ["--proxy", "http://localhost:8080"]
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from lsp_installer.errors import SettingsError

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "LSP_INSTALLER_SETTINGS"


@dataclass(frozen=True, slots=True)
class PipSettings:
    """Options for pip invocations."""

    install_args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Settings:
    """Installer settings.

    ``python3_host_prog`` is a user-preferred Python 3 interpreter. When set it
    is tried before ``python3`` and ``python`` to create virtual environments.
    """

    pip: PipSettings = field(default_factory=PipSettings)
    python3_host_prog: str | None = None


DEFAULT_SETTINGS = Settings()


def load_settings(path: Path | str) -> Settings:
    """Load settings from a YAML file.

    An empty file yields the defaults.

    Raises:
        SettingsError: If the file is missing, unparsable, or has invalid shape.
    """
    path = Path(path)
    if not path.exists():
        raise SettingsError(f"Settings file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
        return parse_settings(text, source=str(path))
    except SettingsError:
        raise
    except Exception as exc:
        raise SettingsError(f"Failed to parse settings file '{path}': {exc}") from exc


def settings_from_env() -> Settings:
    """Load settings from the file named by $LSP_INSTALLER_SETTINGS, else defaults."""
    path = os.environ.get(SETTINGS_ENV_VAR, "")
    if not path:
        return DEFAULT_SETTINGS
    logger.info("Loading settings from %s", path)
    return load_settings(path)


def parse_settings(text: str, source: str = "") -> Settings:
    """Parse YAML text into a Settings object."""
    data = yaml.safe_load(text)
    if data is None:
        return DEFAULT_SETTINGS
    if not isinstance(data, dict):
        raise SettingsError(f"Invalid settings format in {source}: expected a YAML mapping.")

    pip_data = data.get("pip") or {}
    if not isinstance(pip_data, dict):
        raise SettingsError(f"Invalid settings format in {source}: 'pip' must be a mapping.")

    install_args = pip_data.get("install_args") or []
    if not isinstance(install_args, list):
        raise SettingsError(
            f"Invalid settings format in {source}: 'pip.install_args' must be a list."
        )

    host_prog = data.get("python3_host_prog")
    if host_prog is not None and not isinstance(host_prog, str):
        raise SettingsError(
            f"Invalid settings format in {source}: 'python3_host_prog' must be a string."
        )

    return Settings(
        pip=PipSettings(install_args=tuple(str(arg) for arg in install_args)),
        python3_host_prog=host_prog or None,
    )
