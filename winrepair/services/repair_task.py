from __future__ import annotations

import logging
from dataclasses import dataclass

from winrepair.domain.models import RepairMode, RepairSource, RunContext, TaskReport
from winrepair.repositories.media_repository import MediaLocator
from winrepair.services.guidance import GuidanceAdvisor
from winrepair.services.os_profiler import OSProfiler
from winrepair.services.reboot_policy import RebootPolicyChecker
from winrepair.services.repair_orchestrator import RepairOrchestrator
from winrepair.services.report_writer import ReportWriter

log = logging.getLogger(__name__)

NO_MEDIA_TEXT = "No install media found"


@dataclass
class RepairTaskService:
    """
    Service layer: one repair run from OS detection to the written report.
    Keeps the CLI thin.
    """
    profiler: OSProfiler
    media_locator: MediaLocator
    orchestrator: RepairOrchestrator
    reboot_checker: RebootPolicyChecker
    guidance: GuidanceAdvisor
    report_writer: ReportWriter

    def run(self, mode: RepairMode, ctx: RunContext) -> TaskReport:
        log.info("Run %s started, mode=%s", ctx.run_id, mode.name)

        # Fatal if identity cannot be read; let it propagate.
        descriptor = self.profiler.profile()

        source = RepairSource.none()
        orchestration = None
        error_text = NO_MEDIA_TEXT
        skip_repair = False

        if mode is RepairMode.LOCAL_MEDIA:
            image = self.media_locator.find_image()
            if image is None:
                log.warning("Local media mode selected but no install image was found; skipping repair stages")
                skip_repair = True
            else:
                source = RepairSource.local_image(image)

        if not skip_repair:
            orchestration = self.orchestrator.run(source)
            error_text = orchestration.diagnosis.message

        reboot_pending = self.reboot_checker.reboot_pending()
        log.info("Reboot pending: %s", reboot_pending)

        guidance_url = self.guidance.advise(descriptor)

        report = TaskReport(
            descriptor=descriptor,
            mode=mode,
            source=source,
            orchestration=orchestration,
            error_text=error_text,
            reboot_pending=reboot_pending,
            guidance_url=guidance_url,
            log_path=ctx.log_path,
            report_path=ctx.report_path,
            generated_at=ctx.generated_at,
        )
        self.report_writer.write(report)

        log.info("Run %s finished", ctx.run_id)
        return report
