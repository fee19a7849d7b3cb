from __future__ import annotations

import logging
from dataclasses import dataclass

from winrepair.adapters.process_runner import ProcessRunner
from winrepair.domain.models import (
    OrchestrationResult,
    RepairSource,
    Stage,
    ToolInvocationResult,
)
from winrepair.services.error_classifier import RULES_VERSION, classify

log = logging.getLogger(__name__)

STAGE_ORDER: tuple[Stage, ...] = (
    Stage.CHECK_HEALTH,
    Stage.SCAN_HEALTH,
    Stage.RESTORE_HEALTH,
    Stage.FILE_CHECK,
)

CLEANUP_IMAGE = ["/Online", "/Cleanup-Image"]
LIMIT_ACCESS = "/LimitAccess"


@dataclass
class RepairOrchestrator:
    """
    Runs DISM CheckHealth -> ScanHealth -> RestoreHealth, then SFC.
    Every stage runs whatever the previous one reported; nothing is retried.
    """
    runner: ProcessRunner
    dism_path: str = "dism.exe"
    sfc_path: str = "sfc.exe"
    image_index: int = 1

    def build_command(self, stage: Stage, source: RepairSource) -> list[str]:
        if stage is Stage.CHECK_HEALTH:
            return [self.dism_path, *CLEANUP_IMAGE, "/CheckHealth"]
        if stage is Stage.SCAN_HEALTH:
            return [self.dism_path, *CLEANUP_IMAGE, "/ScanHealth"]
        if stage is Stage.RESTORE_HEALTH:
            cmd = [self.dism_path, *CLEANUP_IMAGE, "/RestoreHealth"]
            # explicit source and no Windows Update fallback go together
            if source.is_local:
                cmd += [f"/Source:WIM:{source.image_path}:{self.image_index}", LIMIT_ACCESS]
            return cmd
        if stage is Stage.FILE_CHECK:
            return [self.sfc_path, "/scannow"]
        raise ValueError(f"Unknown stage: {stage}")

    def run_stage(self, stage: Stage, source: RepairSource) -> ToolInvocationResult:
        cmd = self.build_command(stage, source)
        log.info("Stage %s: %s", stage.value, " ".join(cmd))

        out = self.runner.run(cmd)

        if out.exit_code is None:
            log.error("Stage %s could not start: %s", stage.value, "; ".join(out.lines))
        else:
            log.info("Stage %s finished with exit code %s (%d lines)", stage.value, out.exit_code, len(out.lines))

        return ToolInvocationResult(
            stage=stage,
            command=tuple(cmd),
            lines=tuple(out.lines),
            exit_code=out.exit_code,
        )

    def run(self, source: RepairSource) -> OrchestrationResult:
        log.info("Repair source: %s", source.describe())

        results = tuple(self.run_stage(stage, source) for stage in STAGE_ORDER)

        # Only RestoreHealth output is classified; SFC text is reported raw.
        restore = next(r for r in results if r.stage is Stage.RESTORE_HEALTH)
        diagnosis = classify(restore.text)
        log.info("RestoreHealth diagnosis: %s (rules v%d)", diagnosis.category.value, RULES_VERSION)

        return OrchestrationResult(stages=results, diagnosis=diagnosis)
