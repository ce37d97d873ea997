"""Exception hierarchy for lsp-installer.

All exceptions inherit from LspInstallerError (single catch point).
Expected failures travel as Result values; these exceptions are either the
Failure payloads themselves or the few conditions that abort an install.
"""

from __future__ import annotations

from collections.abc import Sequence

_OUTPUT_EXCERPT_LIMIT = 2000


class LspInstallerError(Exception):
    """Base exception for all lsp-installer errors."""


class SpawnError(LspInstallerError):
    """A spawned process could not be started or exited with a non-zero code."""

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        reason: str = "",
    ) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = reason or (stderr or stdout)[:_OUTPUT_EXCERPT_LIMIT].strip()
        if returncode is None:
            message = f"Failed to spawn {' '.join(self.cmd)}"
        else:
            message = f"{' '.join(self.cmd)} exited with code {returncode}"
        super().__init__(f"{message}: {detail}" if detail else message)


class InstallError(LspInstallerError):
    """Package installation failed."""


class ExecutableResolutionError(InstallError):
    """No candidate executable could create the virtual environment."""


class ReceiptError(LspInstallerError):
    """Receipt could not be built or was assigned more than once."""


class SettingsError(LspInstallerError):
    """Settings file could not be read or has an invalid shape."""
