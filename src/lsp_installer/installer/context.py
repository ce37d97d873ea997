"""Per-install-attempt state handed to a package-manager backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from lsp_installer.core import optional
from lsp_installer.core.optional import Optional
from lsp_installer.errors import InstallError, ReceiptError
from lsp_installer.installer.base import Spawner
from lsp_installer.models import Receipt

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InstallContext:
    """Mutable state owned by exactly one install attempt.

    ``install_dir`` never changes; ``cwd`` starts there and is promoted at most
    once to the environment subdirectory. ``receipt`` is assigned once, when
    the install succeeds.
    """

    install_dir: Path
    spawner: Spawner
    requested_version: Optional[str] = field(default_factory=optional.empty)
    cwd: Path = field(init=False)
    receipt: Receipt | None = field(default=None, init=False)
    _promoted: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.install_dir = Path(self.install_dir)
        self.cwd = self.install_dir

    def promote_cwd(self, path: Path | str) -> None:
        """Make ``path`` the working root for the rest of the install."""
        if self._promoted:
            raise InstallError(f"Working directory already promoted to {self.cwd}.")
        self.cwd = Path(path)
        self._promoted = True
        logger.debug("Promoted working directory to %s", self.cwd)

    def set_receipt(self, receipt: Receipt) -> None:
        if self.receipt is not None:
            raise ReceiptError("Receipt already assigned for this install.")
        self.receipt = receipt
