from __future__ import annotations

from winrepair.domain.errors import IdentitySourceUnavailable
from winrepair.domain.models import RawIdentity

CURRENT_VERSION_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion"


class IdentityReader:
    """Strategy interface: where raw OS identity fields come from."""
    def read(self) -> RawIdentity:
        raise NotImplementedError


class MarkerLookup:
    """Strategy interface: existence check for a platform marker."""
    def exists(self, marker: str) -> bool:
        raise NotImplementedError


def _winreg():
    # winreg only exists on Windows; imported lazily so the rest of the
    # package stays importable elsewhere.
    import winreg
    return winreg


class RegistryIdentityReader(IdentityReader):
    """
    Reads ProductName / EditionID / CurrentBuildNumber / UBR from
    HKLM\\SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion.
    """

    def __init__(self, key_path: str = CURRENT_VERSION_KEY):
        self.key_path = key_path

    def read(self) -> RawIdentity:
        try:
            winreg = _winreg()
            key = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, self.key_path)
        except (ImportError, OSError) as e:
            raise IdentitySourceUnavailable(self.key_path, e) from e

        with key:
            product_name = str(self._query(winreg, key, "ProductName"))
            edition_id = str(self._query(winreg, key, "EditionID"))
            build_raw = self._query(winreg, key, "CurrentBuildNumber", "CurrentBuild")
            ubr_raw = self._query(winreg, key, "UBR")

        try:
            build_number = int(build_raw)
            update_build_revision = int(ubr_raw)
        except (TypeError, ValueError) as e:
            raise IdentitySourceUnavailable("CurrentBuildNumber/UBR", e) from e

        return RawIdentity(
            product_name=product_name,
            edition_id=edition_id,
            build_number=build_number,
            update_build_revision=update_build_revision,
        )

    @staticmethod
    def _query(winreg, key, *names: str):
        last_error: OSError | None = None
        for name in names:
            try:
                value, _ = winreg.QueryValueEx(key, name)
                return value
            except OSError as e:
                last_error = e
        raise IdentitySourceUnavailable(names[0], last_error)


class RegistryKeyLookup(MarkerLookup):
    """A marker exists when the HKLM subkey can be opened."""

    def exists(self, marker: str) -> bool:
        try:
            winreg = _winreg()
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, marker):
                return True
        except (ImportError, OSError):
            return False
