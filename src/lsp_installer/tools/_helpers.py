"""Helpers for extracting AppContext from FastMCP Context."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

from lsp_installer.installer.receipt import pip3_source
from lsp_installer.models import Receipt

if TYPE_CHECKING:
    from lsp_installer.server import AppContext


def get_context(ctx: Context) -> AppContext:
    """Extract AppContext from FastMCP's lifespan context.

    Raises TypeError if the lifespan context is not an AppContext instance.
    """
    from lsp_installer.server import AppContext

    app = ctx.request_context.lifespan_context
    if not isinstance(app, AppContext):
        msg = (
            f"Expected AppContext in lifespan_context, got {type(app).__name__}. "
            "Is the server configured with app_lifespan?"
        )
        raise TypeError(msg)
    return app


def primary_receipt(package: str) -> Receipt:
    """A receipt naming ``package`` as primary, for version queries by name."""
    return Receipt(primary_source=pip3_source(package))
