"""Production Spawner backed by real subprocesses."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from lsp_installer.core.result import Failure, Result, Success
from lsp_installer.errors import SpawnError
from lsp_installer.installer.subprocess import run_command
from lsp_installer.models import SpawnOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubprocessSpawner:
    """Spawns executables with asyncio subprocesses.

    A non-zero exit code, a timeout, or a command that cannot be started
    all become ``Failure(SpawnError)``.
    """

    timeout: float = 300.0

    async def spawn(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> Result[SpawnOutput, SpawnError]:
        cmd = [executable, *args]
        logger.debug("Spawning %s (cwd=%s)", cmd, cwd)
        try:
            returncode, stdout, stderr = await run_command(
                cmd,
                env=env,
                cwd=cwd,
                timeout=self.timeout,
            )
        except (OSError, ValueError) as exc:
            return Failure(SpawnError(cmd, reason=str(exc)))

        if returncode != 0:
            return Failure(SpawnError(cmd, returncode, stdout, stderr))
        return Success(SpawnOutput(stdout=stdout, stderr=stderr, returncode=returncode))
