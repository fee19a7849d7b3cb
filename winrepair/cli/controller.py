from __future__ import annotations

import argparse
import ctypes
import logging
from pathlib import Path
from typing import Callable, Optional

from winrepair.config.ini_config import AppSettings, IniConfig
from winrepair.config.logging_setup import setup_logging
from winrepair.domain.errors import IdentitySourceUnavailable
from winrepair.domain.models import RepairMode, TaskReport
from winrepair.services.repair_task import RepairTaskService

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_MEDIA = 1
EXIT_NO_IDENTITY = 2

MENU = """
=======================================================
    Windows Repair - DISM + SFC
=======================================================

  1. Repair using the current component store
  2. Repair using local install media

  Q. Quit
-------------------------------------------------------"""


def is_admin() -> bool:
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False


def load_settings(ini: Optional[str]) -> AppSettings:
    config = IniConfig(Path(ini)) if ini else IniConfig.from_env_or_default()
    return config.load_settings()


def choose_mode(raw: Optional[str]) -> Optional[RepairMode]:
    """'1' / '2' select a mode; anything else means quit."""
    raw = (raw or "").strip()
    for mode in RepairMode:
        if mode.value == raw:
            return mode
    return None


def prompt_mode(input_fn: Callable[[str], str] = input, out: Callable[[str], None] = print) -> Optional[RepairMode]:
    out(MENU)
    try:
        return choose_mode(input_fn("Select option: "))
    except EOFError:
        return None


def _summarize(report: TaskReport, out: Callable[[str], None]) -> None:
    out("")
    out(f"System          : {report.descriptor.product_name} ({report.descriptor.full_build})")
    out(f"Repair source   : {report.source.describe()}")
    out(f"Result          : {report.error_text}")
    out(f"Reboot required : {'Yes' if report.reboot_pending else 'No'}")
    out(f"Guidance        : {report.guidance_url or 'None'}")
    out(f"Report          : {report.report_path}")
    out(f"Log             : {report.log_path}")


def run_repair(
    args: argparse.Namespace,
    *,
    service_factory: Callable[[AppSettings], RepairTaskService],
    settings: Optional[AppSettings] = None,
    input_fn: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> int:
    """Controller: gathers the mode, calls the service, maps outcomes to exit codes."""
    settings = settings or load_settings(args.ini)
    ctx = settings.new_run_context()
    setup_logging(ctx.log_path)
    log.info("winrepair started, log=%s", ctx.log_path)

    if not is_admin():
        out("[WARNING] Not running as Administrator; DISM and SFC will likely fail.")
        log.warning("Process is not elevated")

    mode = choose_mode(args.mode) if args.mode else prompt_mode(input_fn, out)
    if mode is None:
        out("No action taken.")
        log.info("User quit without selecting a repair mode")
        return EXIT_OK

    out(f"\nRunning {mode.name.replace('_', ' ').lower()} repair. This can take a long time...")

    service = service_factory(settings)
    try:
        report = service.run(mode, ctx)
    except IdentitySourceUnavailable as e:
        log.error("Cannot continue: %s", e)
        out(f"[ERROR] {e}")
        return EXIT_NO_IDENTITY

    _summarize(report, out)

    if mode is RepairMode.LOCAL_MEDIA and report.orchestration is None:
        return EXIT_NO_MEDIA
    return EXIT_OK
