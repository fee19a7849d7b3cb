from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from winrepair.adapters.process_runner import ProcessOutput
from winrepair.app_factory import create_task_service
from winrepair.config.ini_config import IniConfig
from winrepair.domain.errors import IdentitySourceUnavailable
from winrepair.domain.models import ErrorCategory, RepairMode
from winrepair.services.error_classifier import RULES
from winrepair.services.guidance import resolve_guidance_url
from winrepair.services.reboot_policy import REBOOT_MARKERS
from winrepair.services.repair_task import NO_MEDIA_TEXT
from winrepair.services.report_writer import render_report
from winrepair.tests.fakes import (
    FakeIdentityReader,
    FakeMarkerLookup,
    FakeProcessRunner,
    RecordingLauncher,
)


# -----------------------------
# Helpers
# -----------------------------
def make_settings(tmp_path: Path):
    media = ", ".join(str(tmp_path / d) for d in ("media1", "media2", "media3"))
    ini = tmp_path / "WinRepair.ini"
    ini.write_text(
        f"[paths]\nlog_dir = {tmp_path / 'logs'}\n[media]\ncandidate_dirs = {media}\n",
        encoding="utf-8",
    )
    return IniConfig(ini).load_settings()


def make_service(tmp_path: Path, runner=None, lookup=None, reader=None, launcher=None):
    settings = make_settings(tmp_path)
    service = create_task_service(
        settings,
        identity_reader=reader or FakeIdentityReader(),
        marker_lookup=lookup or FakeMarkerLookup(),
        runner=runner or FakeProcessRunner(),
        launcher=launcher or RecordingLauncher(),
    )
    ctx = settings.new_run_context(datetime(2026, 10, 18, 12, 0, 0))
    return service, ctx


def test_local_media_without_image_skips_stages(tmp_path: Path):
    runner = FakeProcessRunner()
    launcher = RecordingLauncher()
    service, ctx = make_service(
        tmp_path, runner=runner, lookup=FakeMarkerLookup([REBOOT_MARKERS[1]]), launcher=launcher
    )

    report = service.run(RepairMode.LOCAL_MEDIA, ctx)

    assert runner.commands == []
    assert report.orchestration is None
    assert report.error_text == NO_MEDIA_TEXT
    assert report.reboot_pending is True
    assert report.guidance_url == resolve_guidance_url("Windows 11 Pro")
    assert launcher.opened == [report.guidance_url]

    text = ctx.report_path.read_text(encoding="utf-8")
    assert NO_MEDIA_TEXT in text
    assert report.guidance_url in text


def test_local_media_with_image_passes_source(tmp_path: Path):
    image = tmp_path / "media2" / "sources" / "install.wim"
    image.parent.mkdir(parents=True)
    image.write_bytes(b"wim")
    runner = FakeProcessRunner()
    service, ctx = make_service(tmp_path, runner=runner)

    report = service.run(RepairMode.LOCAL_MEDIA, ctx)

    assert report.source.image_path == image
    restore = next(c for c in runner.commands if "/RestoreHealth" in c)
    assert f"/Source:WIM:{image}:1" in restore
    assert "/LimitAccess" in restore


def test_current_store_with_known_source_error(tmp_path: Path):
    runner = FakeProcessRunner(
        outputs={"/RestoreHealth": ProcessOutput(exit_code=1, lines=("Error: 0x800f081f",))}
    )
    service, ctx = make_service(tmp_path, runner=runner)

    report = service.run(RepairMode.CURRENT_STORE, ctx)

    assert len(runner.commands) == 4
    assert report.orchestration.diagnosis.category is ErrorCategory.KNOWN_SOURCE_MISSING
    assert report.reboot_pending is False

    lines = ctx.report_path.read_text(encoding="utf-8").splitlines()
    result_line = lines[lines.index("[DISM-equivalent Result]") + 1]
    assert result_line == RULES[0].message


def test_current_store_never_searches_media(tmp_path: Path):
    image = tmp_path / "media1" / "install.wim"
    image.parent.mkdir(parents=True)
    image.write_bytes(b"wim")
    runner = FakeProcessRunner()
    service, ctx = make_service(tmp_path, runner=runner)

    report = service.run(RepairMode.CURRENT_STORE, ctx)

    assert not report.source.is_local
    restore = next(c for c in runner.commands if "/RestoreHealth" in c)
    assert "/LimitAccess" not in restore


def test_identity_failure_is_fatal_and_runs_nothing(tmp_path: Path):
    runner = FakeProcessRunner()
    service, ctx = make_service(
        tmp_path, runner=runner, reader=FakeIdentityReader(error=IdentitySourceUnavailable("UBR"))
    )

    with pytest.raises(IdentitySourceUnavailable):
        service.run(RepairMode.CURRENT_STORE, ctx)

    assert runner.commands == []
    assert not ctx.report_path.exists()


def test_written_report_matches_render(tmp_path: Path):
    service, ctx = make_service(tmp_path)

    report = service.run(RepairMode.CURRENT_STORE, ctx)

    assert ctx.report_path.read_text(encoding="utf-8") == render_report(report)
