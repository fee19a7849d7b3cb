######## models.py
########

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class RawIdentity:
    product_name: str
    edition_id: str
    build_number: int
    update_build_revision: int


@dataclass(frozen=True)
class OSDescriptor:
    product_name: str           # normalized label, e.g. "Windows 11 Pro"
    edition_id: str
    build_number: int
    update_build_revision: int

    @property
    def full_build(self) -> str:
        return f"{self.build_number}.{self.update_build_revision}"


@dataclass(frozen=True)
class RepairSource:
    image_path: Optional[Path] = None

    @staticmethod
    def none() -> "RepairSource":
        return RepairSource()

    @staticmethod
    def local_image(path: Path) -> "RepairSource":
        return RepairSource(image_path=Path(path))

    @property
    def is_local(self) -> bool:
        return self.image_path is not None

    def describe(self) -> str:
        if self.image_path is None:
            return "None (component store / Windows Update)"
        return f"Local image: {self.image_path}"


class RepairMode(Enum):
    CURRENT_STORE = "1"
    LOCAL_MEDIA = "2"


class Stage(Enum):
    CHECK_HEALTH = "CheckHealth"
    SCAN_HEALTH = "ScanHealth"
    RESTORE_HEALTH = "RestoreHealth"
    FILE_CHECK = "FileCheck"


@dataclass(frozen=True)
class ToolInvocationResult:
    """
    Combined stdout+stderr of one stage, in emission order. Lines are
    normalized: trailing whitespace stripped, blank lines dropped, progress
    redraws (bare CR) split into separate lines.
    """
    stage: Stage
    command: tuple[str, ...]
    lines: tuple[str, ...]
    exit_code: Optional[int]    # None when the tool could not be launched

    @property
    def command_line(self) -> str:
        return " ".join(self.command)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class ErrorCategory(Enum):
    KNOWN_SOURCE_MISSING = "KnownSourceMissing"
    UPDATE_SERVICE_UNAVAILABLE = "UpdateServiceUnavailable"
    GENERIC_SOURCE_MISSING = "GenericSourceMissing"
    UNDETECTED = "Undetected"


@dataclass(frozen=True)
class Diagnosis:
    category: ErrorCategory
    message: str


@dataclass(frozen=True)
class OrchestrationResult:
    stages: tuple[ToolInvocationResult, ...]
    diagnosis: Diagnosis

    def stage(self, stage: Stage) -> Optional[ToolInvocationResult]:
        return next((s for s in self.stages if s.stage is stage), None)


@dataclass(frozen=True)
class RunContext:
    """
    Per-run paths derived once at startup from settings + timestamp.
    Passed explicitly to whatever needs them.
    """
    run_id: str                 # YYYYmmdd_HHMMSS
    generated_at: str           # YYYY-mm-dd HH:MM:SS
    log_path: Path
    report_path: Path


@dataclass(frozen=True)
class TaskReport:
    descriptor: OSDescriptor
    mode: RepairMode
    source: RepairSource
    orchestration: Optional[OrchestrationResult]    # None when orchestration was skipped
    error_text: str
    reboot_pending: bool
    guidance_url: Optional[str]
    log_path: Path
    report_path: Path
    generated_at: str
