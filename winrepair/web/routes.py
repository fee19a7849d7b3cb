## routes.py
from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

from flask import Blueprint, abort, current_app, render_template, send_file

from winrepair.repositories.report_repository import REPORT_PREFIX, ReportRepository


def _run_id_for(p: Path) -> str:
    return p.stem[len(REPORT_PREFIX):]


def create_blueprint(report_repo: ReportRepository) -> Blueprint:
    bp = Blueprint("web", __name__)

    def _resolve_or_abort(filename: str) -> Path:
        try:
            full = report_repo.resolve(filename)
        except PermissionError:
            current_app.logger.warning("Rejected path outside log dir: %r", filename)
            abort(403)
        if full is None:
            abort(404)
        return full

    @bp.get("/")
    def index():
        reports = []
        for p in report_repo.list_reports():
            log_path = report_repo.log_for(p)
            reports.append(
                SimpleNamespace(
                    name=p.name,
                    run_id=_run_id_for(p),
                    log_name=log_path.name if log_path else None,
                )
            )

        current_app.logger.info("Reports listed: %d", len(reports))
        return render_template("index.html", reports=reports, log_dir=str(report_repo.log_dir))

    @bp.get("/reports/<filename>")
    def view_report(filename: str):
        full = _resolve_or_abort(filename)
        if not full.name.startswith(REPORT_PREFIX):
            abort(404)

        log_path = report_repo.log_for(full)
        return render_template(
            "report.html",
            name=full.name,
            run_id=_run_id_for(full),
            text=full.read_text(encoding="utf-8", errors="replace"),
            log_name=log_path.name if log_path else None,
        )

    @bp.get("/download/<filename>")
    def download(filename: str):
        full = _resolve_or_abort(filename)
        if full.suffix.lower() not in {".txt", ".log"}:
            abort(404)
        return send_file(full, mimetype="text/plain", as_attachment=True)

    return bp
