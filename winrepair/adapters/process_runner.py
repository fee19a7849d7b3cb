from __future__ import annotations

import ctypes
import locale
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class ProcessOutput:
    exit_code: Optional[int]    # None when the process never started
    lines: tuple[str, ...]


def console_encoding() -> str:
    """
    Piped console tools write in the OEM code page (cp437, cp850, ...),
    not the ANSI one locale reports. Off Windows, use the locale.
    """
    try:
        oem_cp = ctypes.windll.kernel32.GetOEMCP()
    except (AttributeError, OSError):
        return locale.getpreferredencoding(False) or "utf-8"
    return f"cp{oem_cp}"


def decode_output(raw: bytes, encoding: Optional[str] = None) -> str:
    """
    dism.exe writes in the OEM console code page, sfc.exe writes UTF-16LE.
    NUL bytes are the tell for the latter.
    """
    if not raw:
        return ""
    if b"\x00" in raw:
        text = raw.decode("utf-16-le", errors="ignore")
    else:
        encoding = encoding or console_encoding()
        try:
            text = raw.decode(encoding, errors="replace")
        except LookupError:
            text = raw.decode("utf-8", errors="replace")
    return text.replace("\x00", "")


def split_lines(text: str) -> tuple[str, ...]:
    """Line endings and progress carriage returns split lines; blank lines are dropped."""
    lines = [line.rstrip() for line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n")]
    return tuple(line for line in lines if line.strip())


class ProcessRunner:
    """
    Runs a command to completion and returns its combined stdout+stderr.
    Blocking, fully buffered, no timeout.
    """

    def run(self, command: Sequence[str]) -> ProcessOutput:
        try:
            proc = subprocess.run(
                list(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            return ProcessOutput(exit_code=None, lines=(f"Failed to execute: {e}",))

        return ProcessOutput(exit_code=proc.returncode, lines=split_lines(decode_output(proc.stdout)))
