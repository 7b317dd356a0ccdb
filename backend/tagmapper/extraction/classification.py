"""Heuristic classification of extracted tags."""

from __future__ import annotations

from collections.abc import Callable

TagPredicate = Callable[[str, str], bool]

AT_TAG_LABEL = "@tag (comma/space terminated)"
DEFAULT_CONFIDENCE = 85


def _contains(*keywords: str) -> TagPredicate:
    def predicate(_start_delimiter: str, upper_content: str) -> bool:
        return any(keyword in upper_content for keyword in keywords)

    return predicate


def _is_at_tag(start_delimiter: str, _upper_content: str) -> bool:
    return start_delimiter == "@"


# Evaluated top to bottom; the first matching rule wins.
CLASSIFICATION_RULES: tuple[tuple[TagPredicate, str, int], ...] = (
    (_is_at_tag, AT_TAG_LABEL, 90),
    (_contains("DATE"), "Date field", 95),
    (_contains("NAME"), "Name field", 90),
    (_contains("EMAIL"), "Email field", 95),
    (_contains("PHONE"), "Phone field", 90),
    (_contains("ADDRESS"), "Address field", 90),
    (_contains("VALUE", "AMOUNT"), "Currency/Value field", 90),
    (_contains("NUMBER"), "Number field", 85),
    (_contains("COMPANY"), "Company information field", 95),
)


def classify_tag(tag_content: str, start_delimiter: str, end_delimiter: str) -> tuple[str, int]:
    """Return the ``(pattern label, confidence)`` pair for one tag."""

    upper_content = tag_content.upper()
    for predicate, label, confidence in CLASSIFICATION_RULES:
        if predicate(start_delimiter, upper_content):
            return label, confidence
    return f"{start_delimiter}...{end_delimiter} tag", DEFAULT_CONFIDENCE
