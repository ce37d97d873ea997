"""MCP server that installs Python-based language servers into isolated venvs."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from lsp_installer.config.settings import Settings, settings_from_env
from lsp_installer.installer.base import PackageManager, Spawner
from lsp_installer.installer.pip3 import Pip3Manager
from lsp_installer.installer.spawn import SubprocessSpawner
from lsp_installer.tools.install import install_python_packages
from lsp_installer.tools.version import check_outdated, get_installed_version


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations.

    Nothing here is mutated by tools; each install gets its own InstallContext.
    """

    spawner: Spawner
    settings: Settings
    manager: PackageManager


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Build the adapters once per server run -- the composition root."""
    settings = settings_from_env()
    yield AppContext(
        spawner=SubprocessSpawner(),
        settings=settings,
        manager=Pip3Manager(settings=settings),
    )


mcp = FastMCP(
    "lsp-installer",
    instructions=(
        "lsp-installer installs Python language servers (e.g. python-lsp-server) "
        "into an isolated virtual environment under a directory you choose, and "
        "reports installed and available versions.\n\n"
        "### Tools\n"
        "- **install_python_packages**: Create a venv in install_dir and pip-install "
        "the packages. The first package is the primary one; pass version to pin it.\n"
        "- **get_installed_version**: Version of a package installed in install_dir.\n"
        "- **check_outdated**: Whether a newer release of the package exists.\n"
    ),
    lifespan=app_lifespan,
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_installed_version)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(check_outdated)

# ─── Destructive tools ────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(install_python_packages)
