from __future__ import annotations

from dataclasses import dataclass

from winrepair.domain.models import Diagnosis, ErrorCategory

RULES_VERSION = 1


@dataclass(frozen=True)
class ClassificationRule:
    needle: str
    category: ErrorCategory
    message: str

    def matches(self, text: str) -> bool:
        return self.needle.lower() in text.lower()


# Evaluated top-down, first match wins.
RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        needle="0x800f081f",
        category=ErrorCategory.KNOWN_SOURCE_MISSING,
        message=(
            "0x800f081f: the source files could not be found. "
            "Use installation media that matches the installed build, edition and language."
        ),
    ),
    ClassificationRule(
        needle="0x800f0906",
        category=ErrorCategory.UPDATE_SERVICE_UNAVAILABLE,
        message=(
            "0x800f0906: repair files could not be downloaded from Windows Update. "
            "Check connectivity and update policy (WSUS), or repair from local media."
        ),
    ),
    ClassificationRule(
        needle="source files could not be found",
        category=ErrorCategory.GENERIC_SOURCE_MISSING,
        message="The source files could not be found. Provide matching installation media and run option 2.",
    ),
)

UNDETECTED = Diagnosis(
    category=ErrorCategory.UNDETECTED,
    message="No known failure pattern detected - review raw output",
)


def classify(text: str) -> Diagnosis:
    text = text or ""
    for rule in RULES:
        if rule.matches(text):
            return Diagnosis(category=rule.category, message=rule.message)
    return UNDETECTED
