from __future__ import annotations

import logging
from dataclasses import dataclass

from winrepair.adapters.windows_registry import IdentityReader
from winrepair.domain.models import OSDescriptor, RawIdentity

log = logging.getLogger(__name__)

# (minimum build, label), highest first. First threshold the build reaches wins.
SERVER_LABELS: tuple[tuple[int, str], ...] = (
    (26100, "Windows Server 2025"),
    (20348, "Windows Server 2022"),
    (17763, "Windows Server 2019"),
    (14393, "Windows Server 2016"),
)

WINDOWS_11_MIN_BUILD = 22000


def normalize_product_name(product_name: str, build_number: int) -> str:
    """
    The registry keeps reporting "Windows 10 ..." on Windows 11 and a stale
    year on some Server builds; the build number is the reliable signal.
    """
    name = (product_name or "").strip()

    if "Server" in name:
        for min_build, label in SERVER_LABELS:
            if build_number >= min_build:
                return label
        return name

    if build_number >= WINDOWS_11_MIN_BUILD and "Windows 10" in name:
        return name.replace("Windows 10", "Windows 11", 1)

    return name


def describe(raw: RawIdentity) -> OSDescriptor:
    return OSDescriptor(
        product_name=normalize_product_name(raw.product_name, raw.build_number),
        edition_id=(raw.edition_id or "").strip(),
        build_number=raw.build_number,
        update_build_revision=raw.update_build_revision,
    )


@dataclass
class OSProfiler:
    reader: IdentityReader

    def profile(self) -> OSDescriptor:
        # IdentitySourceUnavailable propagates: nothing runs without identity
        raw = self.reader.read()
        descriptor = describe(raw)
        log.info(
            "OS detected: %s (%s) build %s [raw ProductName=%r]",
            descriptor.product_name,
            descriptor.edition_id,
            descriptor.full_build,
            raw.product_name,
        )
        return descriptor
