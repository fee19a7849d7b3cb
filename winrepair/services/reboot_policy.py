from __future__ import annotations

import logging
from dataclasses import dataclass

from winrepair.adapters.windows_registry import MarkerLookup

log = logging.getLogger(__name__)

REBOOT_MARKERS: tuple[str, ...] = (
    r"SOFTWARE\Microsoft\Windows\CurrentVersion\Component Based Servicing\RebootPending",
    r"SOFTWARE\Microsoft\Windows\CurrentVersion\WindowsUpdate\Auto Update\RebootRequired",
)


@dataclass
class RebootPolicyChecker:
    lookup: MarkerLookup
    markers: tuple[str, ...] = REBOOT_MARKERS

    def reboot_pending(self) -> bool:
        found = [m for m in self.markers if self.lookup.exists(m)]
        for m in found:
            log.info("Reboot marker present: %s", m)
        return bool(found)
