from __future__ import annotations

import logging
import webbrowser
from dataclasses import dataclass
from typing import Optional

from winrepair.domain.models import OSDescriptor

log = logging.getLogger(__name__)

GENERIC_DOWNLOAD_URL = "https://www.microsoft.com/software-download"

# (substring of the normalized product name, download page), first match wins.
GUIDANCE_URLS: tuple[tuple[str, str], ...] = (
    ("Windows 10", "https://www.microsoft.com/software-download/windows10"),
    ("Windows 11", "https://www.microsoft.com/software-download/windows11"),
    ("Server 2016", "https://www.microsoft.com/evalcenter/evaluate-windows-server-2016"),
    ("Server 2019", "https://www.microsoft.com/evalcenter/evaluate-windows-server-2019"),
    ("Server 2022", "https://www.microsoft.com/evalcenter/evaluate-windows-server-2022"),
    ("Server 2025", "https://www.microsoft.com/evalcenter/evaluate-windows-server-2025"),
)


def resolve_guidance_url(product_name: str) -> str:
    name = product_name or ""
    for pattern, url in GUIDANCE_URLS:
        if pattern in name:
            return url
    return GENERIC_DOWNLOAD_URL


class UrlLauncher:
    """Strategy interface."""
    def open(self, url: str) -> bool:
        raise NotImplementedError


class BrowserUrlLauncher(UrlLauncher):
    def open(self, url: str) -> bool:
        return bool(webbrowser.open(url))


@dataclass
class GuidanceAdvisor:
    """
    Picks the vendor download page for the detected OS and tries to show it.
    The URL is returned whether or not the browser came up.
    """
    launcher: Optional[UrlLauncher] = None

    def advise(self, descriptor: OSDescriptor) -> str:
        url = resolve_guidance_url(descriptor.product_name)
        log.info("Guidance URL for %s: %s", descriptor.product_name, url)
        self._try_open(url)
        return url

    def _try_open(self, url: str) -> None:
        if self.launcher is None:
            return
        try:
            opened = self.launcher.open(url)
        except Exception as e:
            log.warning("Could not open browser for %s: %s", url, e)
            return
        if not opened:
            log.info("No browser available to open %s", url)
