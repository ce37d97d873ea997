"""pip3 package-manager backend: venv creation, pip install, and version queries."""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from lsp_installer.config.settings import DEFAULT_SETTINGS, Settings
from lsp_installer.core.result import Failure, Result, Success
from lsp_installer.errors import ExecutableResolutionError, InstallError, SpawnError
from lsp_installer.installer.base import Spawner
from lsp_installer.installer.context import InstallContext
from lsp_installer.installer.receipt import ReceiptBuilder, pip3_source
from lsp_installer.installer.resolver import resolve_first_successful
from lsp_installer.models import InstalledPackage, OutdatedPackage, Receipt, SpawnOutput

logger = logging.getLogger(__name__)

VENV_DIR = "venv"
_IS_WINDOWS = sys.platform == "win32"

_VENV_ERROR = "Unable to create python3 venv environment."
NOT_OUTDATED = "Primary package is not outdated."


def normalize_package(package: str) -> str:
    """Strip the extras suffix: ``"pkg[all]"`` -> ``"pkg"``."""
    return package.split("[", 1)[0]


def python3_candidates(settings: Settings = DEFAULT_SETTINGS) -> list[str]:
    """Executables to try, in order, when creating a virtual environment.

    The user's ``python3_host_prog`` comes first when configured.
    """
    defaults = ["python", "python3"] if _IS_WINDOWS else ["python3", "python"]
    candidates: list[str] = []
    if settings.python3_host_prog:
        candidates.append(os.path.expandvars(os.path.expanduser(settings.python3_host_prog)))
    for name in defaults:
        if name not in candidates:
            candidates.append(name)
    return candidates


def venv_path(install_dir: Path | str) -> Path:
    """Directory holding the venv's executables."""
    return Path(install_dir) / VENV_DIR / ("Scripts" if _IS_WINDOWS else "bin")


def env(install_dir: Path | str) -> dict[str, str]:
    """The inherited environment with the venv's executables first on PATH."""
    merged = dict(os.environ)
    existing = merged.get("PATH", "")
    bin_dir = str(venv_path(install_dir))
    merged["PATH"] = f"{bin_dir}{os.pathsep}{existing}" if existing else bin_dir
    return merged


def executable(install_dir: Path | str, name: str) -> Path:
    """Path of a console script installed into the venv."""
    return venv_path(install_dir) / (f"{name}.exe" if _IS_WINDOWS else name)


def parse_pip_list(text: str) -> Result[list[InstalledPackage], str]:
    """Decode ``pip list --format=json`` output.

    Entries that are not objects or lack a string ``name``/``version`` are
    skipped. Optional ``latest_version``/``latest_filetype`` may be absent.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return Failure(f"Failed to parse pip list output: {exc}")
    if not isinstance(data, list):
        return Failure("Failed to parse pip list output: expected a JSON array.")

    packages: list[InstalledPackage] = []
    for entry in data:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object pip list entry: %r", entry)
            continue
        name = entry.get("name")
        version = entry.get("version")
        if not isinstance(name, str) or not isinstance(version, str):
            logger.debug("Skipping pip list entry without name/version: %r", entry)
            continue
        latest_version = entry.get("latest_version")
        latest_filetype = entry.get("latest_filetype")
        packages.append(
            InstalledPackage(
                name=name,
                version=version,
                latest_version=latest_version if isinstance(latest_version, str) else None,
                latest_filetype=latest_filetype if isinstance(latest_filetype, str) else None,
            )
        )
    return Success(packages)


def _find_primary(packages: list[InstalledPackage], receipt: Receipt) -> InstalledPackage | None:
    wanted = normalize_package(receipt.primary_source.package)
    for pkg in packages:
        if normalize_package(pkg.name) == wanted:
            return pkg
    return None


@dataclass(frozen=True, slots=True)
class Pip3Manager:
    """Installs Python packages into an isolated venv under the install dir."""

    settings: Settings = DEFAULT_SETTINGS

    async def install(
        self, ctx: InstallContext, packages: Sequence[str]
    ) -> Result[SpawnOutput, SpawnError]:
        """Create ``venv`` in ``ctx.cwd`` and pip-install ``packages`` into it.

        The first package is the primary one: it receives the requested
        version pin and is recorded as the receipt's primary source.

        Returns:
            The pip install invocation's Result. The receipt is assigned to
            ``ctx`` only on Success.

        Raises:
            InstallError: If ``packages`` is empty.
            ExecutableResolutionError: If no candidate executable could
                create the venv.
        """
        if not packages:
            raise InstallError("At least one package must be requested.")

        pkgs = list(packages)
        version = ctx.requested_version.get_or_none()
        if version is not None:
            pkgs[0] = f"{pkgs[0]}=={version}"

        python = await self._create_venv(ctx)

        logger.info("Installing %s into %s", ", ".join(pkgs), ctx.cwd)
        result = await ctx.spawner.spawn(
            python,
            ["-m", "pip", "install", "-U", *self.settings.pip.install_args, *pkgs],
            cwd=ctx.cwd,
            env=env(ctx.install_dir),
        )
        if result.is_failure():
            logger.warning("pip install failed in %s: %s", ctx.cwd, result.err_or_none())
            return result

        primary = normalize_package(packages[0])
        builder = ReceiptBuilder().with_primary_source(pip3_source(primary))
        for package in packages[1:]:
            name = normalize_package(package)
            if name != primary:
                builder.with_secondary_source(pip3_source(name))
        ctx.set_receipt(builder.build())
        return result

    async def _create_venv(self, ctx: InstallContext) -> str:
        """Create the venv with the first working interpreter and promote cwd into it."""
        candidates = python3_candidates(self.settings)
        logger.info("Creating venv in %s (candidates: %s)", ctx.cwd, ", ".join(candidates))

        async def create(candidate: str) -> Result[SpawnOutput, SpawnError]:
            return await ctx.spawner.spawn(candidate, ["-m", "venv", VENV_DIR], cwd=ctx.cwd)

        resolved = await resolve_first_successful(candidates, create)
        if resolved.is_failure():
            raise ExecutableResolutionError(_VENV_ERROR)

        python, _output = resolved.get_or_none()
        ctx.promote_cwd(ctx.cwd / VENV_DIR)
        return python

    async def _pip_list(
        self, install_dir: Path | str, spawner: Spawner, *flags: str
    ) -> Result[list[InstalledPackage], object]:
        result = await spawner.spawn(
            "python",
            ["-m", "pip", "list", *flags, "--format=json"],
            cwd=install_dir,
            env=env(install_dir),
        )
        return result.and_then(lambda output: parse_pip_list(output.stdout))

    async def get_installed_primary_package_version(
        self, receipt: Receipt, install_dir: Path | str, spawner: Spawner
    ) -> Result[str, object]:
        """Return the version pip reports for the receipt's primary package."""
        listing = await self._pip_list(install_dir, spawner)
        if listing.is_failure():
            return listing

        package = _find_primary(listing.get_or_none(), receipt)
        if package is None:
            return Failure(f"Failed to find pip package {receipt.primary_source.package}.")
        return Success(package.version)

    async def check_outdated_primary_package(
        self, receipt: Receipt, install_dir: Path | str, spawner: Spawner
    ) -> Result[OutdatedPackage, object]:
        """Return current and latest versions when a newer primary package exists.

        ``Failure("Primary package is not outdated.")`` is the normal answer
        for an up-to-date package.
        """
        listing = await self._pip_list(install_dir, spawner, "--outdated")
        if listing.is_failure():
            return listing

        package = _find_primary(listing.get_or_none(), receipt)
        if package is None or package.latest_version is None:
            return Failure(NOT_OUTDATED)
        return Success(
            OutdatedPackage(
                name=package.name,
                current_version=package.version,
                latest_version=package.latest_version,
            )
        )
