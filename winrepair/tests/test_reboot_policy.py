from winrepair.adapters.windows_registry import MarkerLookup
from winrepair.services.reboot_policy import REBOOT_MARKERS, RebootPolicyChecker


class SetLookup(MarkerLookup):
    def __init__(self, present):
        self.present = set(present)
        self.asked = []

    def exists(self, marker: str) -> bool:
        self.asked.append(marker)
        return marker in self.present


def test_no_markers_means_no_reboot():
    assert RebootPolicyChecker(lookup=SetLookup([])).reboot_pending() is False


def test_servicing_marker_alone_means_reboot():
    assert RebootPolicyChecker(lookup=SetLookup([REBOOT_MARKERS[0]])).reboot_pending() is True


def test_update_marker_alone_means_reboot():
    assert RebootPolicyChecker(lookup=SetLookup([REBOOT_MARKERS[1]])).reboot_pending() is True


def test_both_markers_are_checked():
    lookup = SetLookup(REBOOT_MARKERS)

    assert RebootPolicyChecker(lookup=lookup).reboot_pending() is True
    assert lookup.asked == list(REBOOT_MARKERS)
