"""Ports: process spawning and package-manager backends."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from lsp_installer.core.result import Result
from lsp_installer.errors import SpawnError
from lsp_installer.models import OutdatedPackage, Receipt, SpawnOutput

if TYPE_CHECKING:
    from lsp_installer.installer.context import InstallContext


class Spawner(Protocol):
    """Port for invoking external programs by executable identity.

    The identity is either a bare name resolved through ``PATH`` (``"python3"``,
    ``"python"``) or an absolute path. Implementations must not keep a shared
    working directory or any other mutable state between calls.
    """

    async def spawn(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> Result[SpawnOutput, SpawnError]:
        """Run ``executable`` with ``args``. Never raises for a failed process."""
        ...


class PackageManager(Protocol):
    """Port for a package-manager backend that installs into an isolated directory."""

    async def install(
        self, ctx: InstallContext, packages: Sequence[str]
    ) -> Result[SpawnOutput, SpawnError]:
        """Install ``packages`` into ``ctx`` and assign the receipt on success."""
        ...

    async def get_installed_primary_package_version(
        self, receipt: Receipt, install_dir: Path | str, spawner: Spawner
    ) -> Result[str, object]:
        """Return the installed version of the receipt's primary package."""
        ...

    async def check_outdated_primary_package(
        self, receipt: Receipt, install_dir: Path | str, spawner: Spawner
    ) -> Result[OutdatedPackage, object]:
        """Return current and latest versions if the primary package is outdated."""
        ...
