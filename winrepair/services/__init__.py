from .error_classifier import classify
from .guidance import BrowserUrlLauncher, GuidanceAdvisor, UrlLauncher
from .os_profiler import OSProfiler, normalize_product_name
from .reboot_policy import RebootPolicyChecker
from .repair_orchestrator import RepairOrchestrator
from .repair_task import RepairTaskService
from .report_writer import ReportWriter, render_report

__all__ = [
    "BrowserUrlLauncher",
    "GuidanceAdvisor",
    "OSProfiler",
    "RebootPolicyChecker",
    "RepairOrchestrator",
    "RepairTaskService",
    "ReportWriter",
    "UrlLauncher",
    "classify",
    "normalize_product_name",
    "render_report",
]
