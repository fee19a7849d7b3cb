from __future__ import annotations

import logging
from dataclasses import dataclass

from winrepair.domain.models import ErrorCategory, RepairMode, TaskReport

log = logging.getLogger(__name__)

RULE = "=" * 60

DISM_LOG = r"%WINDIR%\Logs\DISM\dism.log"
CBS_LOG = r"%WINDIR%\Logs\CBS\CBS.log"

MODE_LABELS = {
    RepairMode.CURRENT_STORE: "Repair using current component store (option 1)",
    RepairMode.LOCAL_MEDIA: "Repair using local install media (option 2)",
}

SKIPPED_ACTIONS = "None - repair stages were not run"


def _actions(report: TaskReport) -> list[str]:
    lines = [f"Mode         : {MODE_LABELS[report.mode]}"]
    if report.orchestration is None:
        lines.append(f"Stages       : {SKIPPED_ACTIONS}")
        return lines
    for r in report.orchestration.stages:
        exit_text = "not started" if r.exit_code is None else f"exit {r.exit_code}"
        lines.append(f"{r.stage.value:<13}: {r.command_line} ({exit_text})")
    return lines


def _notes(report: TaskReport) -> list[str]:
    notes: list[str] = []
    if report.orchestration is None:
        notes.append("No repair stage ran. Place a matching install image in a searched folder and re-run option 2.")
    else:
        category = report.orchestration.diagnosis.category
        if category in (ErrorCategory.KNOWN_SOURCE_MISSING, ErrorCategory.GENERIC_SOURCE_MISSING):
            notes.append(
                f"Obtain media for {report.descriptor.product_name} build {report.descriptor.build_number} "
                "and re-run option 2."
            )
        elif category is ErrorCategory.UPDATE_SERVICE_UNAVAILABLE:
            notes.append("Windows Update could not supply repair files; option 2 avoids it.")
        notes.append("SFC results are not classified; see CBS.log for file-level detail.")
    if report.reboot_pending:
        notes.append("A restart is pending. Restart before running further servicing operations.")
    return notes


def render_report(report: TaskReport) -> str:
    """
    Fixed-template, plain-text report. Pure: the same TaskReport always
    renders to the same text.
    """
    d = report.descriptor
    out: list[str] = [
        RULE,
        " Windows Repair Report",
        f" Generated: {report.generated_at}",
        RULE,
        "",
        "[System]",
        f"Product      : {d.product_name}",
        f"Edition      : {d.edition_id}",
        f"Build        : {d.full_build}",
        "",
        "[Actions]",
        *_actions(report),
        "",
        "[Repair Source]",
        report.source.describe(),
        "",
        "[DISM-equivalent Result]",
        report.error_text,
        "",
        "[Reboot Required]",
        "Yes" if report.reboot_pending else "No",
        "",
        "[Guidance Provided]",
        report.guidance_url or "None",
        "",
        "[Logs]",
        f"Run log      : {report.log_path}",
        f"Report       : {report.report_path}",
        f"DISM log     : {DISM_LOG}",
        f"CBS log      : {CBS_LOG}",
        "",
        "[Notes]",
        *[f"- {n}" for n in _notes(report)],
    ]
    return "\n".join(out) + "\n"


@dataclass
class ReportWriter:
    encoding: str = "utf-8"

    def write(self, report: TaskReport) -> str:
        text = render_report(report)
        report.report_path.parent.mkdir(parents=True, exist_ok=True)
        # overwrite, never append
        report.report_path.write_text(text, encoding=self.encoding)
        log.info("Report written: %s", report.report_path)
        return text
