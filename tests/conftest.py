"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest

from lsp_installer.core.result import Failure
from lsp_installer.errors import SpawnError


@dataclass(frozen=True, slots=True)
class SpawnCall:
    executable: str
    args: list[str]
    cwd: Path | str | None
    env: Mapping[str, str] | None


class ScriptedSpawner:
    """Spawner test double with scripted responses keyed by executable identity.

    A response is a Result (returned), an exception instance (raised), or a
    list of those consumed in order (the last one repeats). Unscripted
    executables fail as if they were missing from PATH.
    """

    def __init__(self, responses: dict[str, object] | None = None) -> None:
        self.responses = {
            name: list(r) if isinstance(r, list) else [r] for name, r in (responses or {}).items()
        }
        self.calls: list[SpawnCall] = []

    async def spawn(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ):
        self.calls.append(SpawnCall(executable, list(args), cwd, env))
        queue = self.responses.get(executable)
        if not queue:
            return Failure(SpawnError([executable, *args], reason="No such file or directory"))
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, BaseException):
            raise response
        return response

    def calls_for(self, executable: str) -> list[SpawnCall]:
        return [c for c in self.calls if c.executable == executable]


@pytest.fixture
def make_spawner() -> Callable[..., ScriptedSpawner]:
    """Factory for ScriptedSpawner instances."""
    return ScriptedSpawner
