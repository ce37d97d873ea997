"""Assemble a Receipt from the sources an install actually used."""

from __future__ import annotations

from datetime import UTC, datetime

from lsp_installer.errors import ReceiptError
from lsp_installer.models import Receipt, ReceiptSource, SourceKind


def _now_iso() -> str:
    """Return current UTC time as an ISO 8601 string with Z suffix."""
    return datetime.now(tz=UTC).isoformat().replace("+00:00", "Z")


def pip3_source(package: str) -> ReceiptSource:
    return ReceiptSource(type=SourceKind.PIP3, package=package)


class ReceiptBuilder:
    """Collects receipt sources during an install, then freezes them."""

    def __init__(self) -> None:
        self._primary: ReceiptSource | None = None
        self._secondary: list[ReceiptSource] = []
        self._started_at = _now_iso()

    def with_primary_source(self, source: ReceiptSource) -> ReceiptBuilder:
        self._primary = source
        return self

    def with_secondary_source(self, source: ReceiptSource) -> ReceiptBuilder:
        self._secondary.append(source)
        return self

    def build(self) -> Receipt:
        """Freeze the collected sources into a Receipt.

        Raises:
            ReceiptError: If no primary source was recorded.
        """
        if self._primary is None:
            raise ReceiptError("Cannot build a receipt without a primary source.")
        return Receipt(
            primary_source=self._primary,
            secondary_sources=tuple(self._secondary),
            started_at=self._started_at,
            completed_at=_now_iso(),
        )
