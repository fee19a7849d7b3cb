from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

REPORT_PREFIX = "RepairReport_"
LOG_PREFIX = "RepairLog_"


@dataclass
class ReportRepository:
    """
    Repository pattern: locating reports and run logs in the log directory.
    """
    log_dir: Path

    def list_reports(self) -> list[Path]:
        if not self.log_dir.exists():
            return []
        reports = [p for p in self.log_dir.glob(f"{REPORT_PREFIX}*.txt") if p.is_file()]
        # run ids are timestamps, so name order is chronological
        return sorted(reports, key=lambda p: p.name, reverse=True)

    def resolve(self, filename: str) -> Optional[Path]:
        """
        Returns the file if it lives directly in log_dir, else None.
        Raises PermissionError for names escaping log_dir.
        """
        base = self.log_dir.resolve()
        full = (base / filename).resolve()
        if full.parent != base:
            raise PermissionError(filename)
        if not full.exists() or not full.is_file():
            return None
        return full

    def log_for(self, report: Path) -> Optional[Path]:
        run_id = report.stem[len(REPORT_PREFIX):]
        candidate = self.log_dir / f"{LOG_PREFIX}{run_id}.log"
        return candidate if candidate.exists() else None
