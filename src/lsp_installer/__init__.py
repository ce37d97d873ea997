"""lsp-installer: install Python language servers into isolated virtual environments."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lsp-installer")
except PackageNotFoundError:
    # running from a source checkout without install metadata
    __version__ = "0.0.0+local"


def main() -> None:
    """Serve the install and version tools over stdio."""
    from lsp_installer.server import mcp

    mcp.run(transport="stdio")
