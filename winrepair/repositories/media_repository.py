from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

log = logging.getLogger(__name__)


def _first_image_in(base: Path, extension: str) -> Optional[Path]:
    if not base.is_dir():
        return None
    # os.walk skips unreadable directories (onerror=None); names are sorted
    # so "first" is stable for the same directory contents.
    for root, dirs, files in os.walk(base):
        dirs.sort()
        for name in sorted(files):
            if name.lower().endswith(extension):
                return Path(root) / name
    return None


@dataclass
class MediaLocator:
    """
    Repository pattern: encapsulates where install images may live.
    """
    candidate_dirs: Iterable[Path]
    image_extension: str = ".wim"

    def find_image(self) -> Optional[Path]:
        ext = self.image_extension.lower()
        for base in self.candidate_dirs:
            try:
                found = _first_image_in(Path(base), ext)
            except OSError as e:
                log.debug("Skipping %s: %s", base, e)
                continue
            if found:
                log.info("Install image found: %s", found)
                return found
            log.info("No install image under %s", base)
        return None
