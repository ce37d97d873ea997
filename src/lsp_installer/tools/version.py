"""get_installed_version / check_outdated tools -- query pip inside a venv."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from lsp_installer.errors import LspInstallerError
from lsp_installer.installer.pip3 import NOT_OUTDATED
from lsp_installer.models import VersionResult
from lsp_installer.tools._helpers import get_context, primary_receipt


async def get_installed_version(
    package: str,
    install_dir: str,
    ctx: Context,
) -> dict[str, object]:
    """Report the installed version of a package in an install directory.

    Args:
        package: Package name, extras allowed (e.g. "python-lsp-server[all]").
        install_dir: Directory passed to install_python_packages.

    Returns:
        Result with success status and current_version.
    """
    try:
        app = get_context(ctx)
        result = await app.manager.get_installed_primary_package_version(
            primary_receipt(package), install_dir, app.spawner
        )
    except LspInstallerError as exc:
        return asdict(VersionResult(success=False, package=package, message=str(exc)))
    except Exception as exc:
        await ctx.error(f"Unexpected error in get_installed_version: {exc}")
        return asdict(
            VersionResult(
                success=False,
                package=package,
                message=f"Internal error: {type(exc).__name__}",
            )
        )

    if result.is_failure():
        return asdict(
            VersionResult(success=False, package=package, message=str(result.err_or_none()))
        )
    return asdict(
        VersionResult(success=True, package=package, current_version=result.get_or_none())
    )


async def check_outdated(
    package: str,
    install_dir: str,
    ctx: Context,
) -> dict[str, object]:
    """Check whether a newer release of an installed package is available.

    Args:
        package: Package name, extras allowed.
        install_dir: Directory passed to install_python_packages.

    Returns:
        Result with the outdated flag, plus current_version and
        latest_version when an update exists.
    """
    try:
        app = get_context(ctx)
        result = await app.manager.check_outdated_primary_package(
            primary_receipt(package), install_dir, app.spawner
        )
    except LspInstallerError as exc:
        return asdict(VersionResult(success=False, package=package, message=str(exc)))
    except Exception as exc:
        await ctx.error(f"Unexpected error in check_outdated: {exc}")
        return asdict(
            VersionResult(
                success=False,
                package=package,
                message=f"Internal error: {type(exc).__name__}",
            )
        )

    if result.is_failure():
        error = result.err_or_none()
        # Up to date is an answer, not an error.
        return asdict(
            VersionResult(success=error == NOT_OUTDATED, package=package, message=str(error))
        )

    outdated = result.get_or_none()
    return asdict(
        VersionResult(
            success=True,
            package=package,
            message=f"{outdated.name} {outdated.current_version} -> {outdated.latest_version}",
            current_version=outdated.current_version,
            latest_version=outdated.latest_version,
            outdated=True,
        )
    )
