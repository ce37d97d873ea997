"""Domain models for lsp-installer. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class SourceKind(StrEnum):
    PIP3 = "pip3"


# ─── Process Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SpawnOutput:
    """Captured output of a process that exited successfully."""

    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


# ─── Receipt Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ReceiptSource:
    """One requested package and the backend that installed it."""

    type: SourceKind
    package: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "package": self.package}


@dataclass(frozen=True, slots=True)
class Receipt:
    """Record of what an install attempt actually installed.

    ``primary_source`` is the package version pins and update checks apply
    to. ``secondary_sources`` holds every other requested package, in
    request order.
    """

    primary_source: ReceiptSource
    secondary_sources: tuple[ReceiptSource, ...] = ()
    schema_version: str = "1.1"
    started_at: str = ""
    completed_at: str = ""

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {
            "schema_version": self.schema_version,
            "primary_source": self.primary_source.to_dict(),
            "secondary_sources": [s.to_dict() for s in self.secondary_sources],
        }
        if self.started_at:
            result["metrics"] = {
                "start_time": self.started_at,
                "completion_time": self.completed_at,
            }
        return result


# ─── Version Inspection Models ────────────────────────────────


@dataclass(frozen=True, slots=True)
class InstalledPackage:
    """A single entry of ``pip list --format=json`` output.

    ``latest_version`` is None when the package is up to date or pip did not
    report it (plain ``pip list`` never does).
    """

    name: str
    version: str
    latest_version: str | None = None
    latest_filetype: str | None = None


@dataclass(frozen=True, slots=True)
class OutdatedPackage:
    name: str
    current_version: str
    latest_version: str


# ─── Tool Return Models ───────────────────────────────────────


@dataclass(frozen=True, slots=True)
class InstallResult:
    success: bool
    install_dir: str
    message: str
    cwd: str = ""
    receipt: dict[str, object] = field(default_factory=dict)
    command_output: str = ""


@dataclass(frozen=True, slots=True)
class VersionResult:
    success: bool
    package: str
    message: str = ""
    current_version: str = ""
    latest_version: str = ""
    outdated: bool = False
