"""install_python_packages tool -- create a venv and pip-install into it."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

from mcp.server.fastmcp import Context

from lsp_installer.core import optional
from lsp_installer.errors import LspInstallerError
from lsp_installer.installer.context import InstallContext
from lsp_installer.models import InstallResult
from lsp_installer.tools._helpers import get_context

logger = logging.getLogger(__name__)


async def install_python_packages(
    packages: list[str],
    install_dir: str,
    ctx: Context,
    version: str = "",
) -> dict[str, object]:
    """Install Python packages into a fresh virtual environment.

    Creates ``<install_dir>/venv`` and runs ``pip install -U`` inside it.
    The first package is the primary one: it is the package ``version``
    pins and the one later version checks look at.

    Args:
        packages: Package specifiers, primary first (e.g.
            ["python-lsp-server[all]", "pylsp-mypy"]).
        install_dir: Existing directory to create the venv in.
        version: Exact version of the primary package. Empty for latest.

    Returns:
        Result with success status, message, the promoted working
        directory, and the receipt of what was installed.
    """
    if not packages:
        return asdict(
            InstallResult(
                success=False,
                install_dir=install_dir,
                message="At least one package must be requested.",
            )
        )

    try:
        app = get_context(ctx)
        install_ctx = InstallContext(
            install_dir=Path(install_dir),
            spawner=app.spawner,
            requested_version=optional.of_nullable(version or None),
        )
        result = await app.manager.install(install_ctx, packages)

        if result.is_failure():
            error = result.err_or_none()
            return asdict(
                InstallResult(
                    success=False,
                    install_dir=install_dir,
                    cwd=str(install_ctx.cwd),
                    message=f"Failed to install {packages[0]}: {error}",
                    command_output=getattr(error, "stderr", "") or getattr(error, "stdout", ""),
                )
            )

        receipt = install_ctx.receipt
        return asdict(
            InstallResult(
                success=True,
                install_dir=install_dir,
                cwd=str(install_ctx.cwd),
                message=f"Installed {', '.join(packages)} into {install_ctx.cwd}.",
                receipt=receipt.to_dict() if receipt else {},
            )
        )

    except LspInstallerError as exc:
        return asdict(InstallResult(success=False, install_dir=install_dir, message=str(exc)))
    except Exception as exc:
        logger.debug("install_python_packages failed", exc_info=True)
        await ctx.error(f"Unexpected error in install_python_packages: {exc}")
        return asdict(
            InstallResult(
                success=False,
                install_dir=install_dir,
                message=f"Internal error: {type(exc).__name__}",
            )
        )
