from __future__ import annotations

from typing import Optional

from flask import Flask

from winrepair.adapters.process_runner import ProcessRunner
from winrepair.adapters.windows_registry import (
    IdentityReader,
    MarkerLookup,
    RegistryIdentityReader,
    RegistryKeyLookup,
)
from winrepair.config.ini_config import AppSettings, IniConfig
from winrepair.repositories.media_repository import MediaLocator
from winrepair.repositories.report_repository import ReportRepository
from winrepair.services.guidance import BrowserUrlLauncher, GuidanceAdvisor, UrlLauncher
from winrepair.services.os_profiler import OSProfiler
from winrepair.services.reboot_policy import RebootPolicyChecker
from winrepair.services.repair_orchestrator import RepairOrchestrator
from winrepair.services.repair_task import RepairTaskService
from winrepair.services.report_writer import ReportWriter
from winrepair.web.routes import create_blueprint


def create_task_service(
    settings: AppSettings,
    *,
    identity_reader: Optional[IdentityReader] = None,
    marker_lookup: Optional[MarkerLookup] = None,
    runner: Optional[ProcessRunner] = None,
    launcher: Optional[UrlLauncher] = None,
) -> RepairTaskService:
    """
    Composition root for a repair run. The keyword arguments let tests swap
    in fakes for the platform-facing pieces.
    """
    if launcher is None and settings.open_browser:
        launcher = BrowserUrlLauncher()

    orchestrator = RepairOrchestrator(
        runner=runner or ProcessRunner(),
        dism_path=settings.dism_path,
        sfc_path=settings.sfc_path,
        image_index=settings.image_index,
    )

    return RepairTaskService(
        profiler=OSProfiler(reader=identity_reader or RegistryIdentityReader()),
        media_locator=MediaLocator(
            candidate_dirs=settings.media_candidate_dirs,
            image_extension=settings.image_extension,
        ),
        orchestrator=orchestrator,
        reboot_checker=RebootPolicyChecker(lookup=marker_lookup or RegistryKeyLookup()),
        guidance=GuidanceAdvisor(launcher=launcher),
        report_writer=ReportWriter(),
    )


def create_app(settings: Optional[AppSettings] = None) -> Flask:
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    report_repo = ReportRepository(log_dir=settings.log_dir)

    app = Flask(__name__)
    app.register_blueprint(create_blueprint(report_repo))

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    return app
