"""Deterministic delimiter/regex tag extractor for template text."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from tagmapper.extraction.classification import classify_tag
from tagmapper.extraction.extractor_interface import TagExtractorInterface
from tagmapper.extraction.types import (
    DEFAULT_DELIMITER_PAIR,
    DelimiterPair,
    ExtractedTagResult,
    ExtractionConfig,
)

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = r"(?-i:[A-Za-z_][A-Za-z0-9_]*)"
AT_TAG_PATTERN = rf"(?P<at_start>@)(?P<at_tag>{IDENTIFIER_PATTERN})(?=[, \t\n\r]|\Z)"
CONTEXT_RADIUS = 30
TERMINATOR_LOOKAHEAD = 10
LOGICAL_TERMINATORS = frozenset(", \t\n")

TagParts = tuple[str, str, str]


def _escape_end_delimiter(end: str) -> str:
    if end == " ":
        return r"\s+"
    return re.escape(end)


def build_pattern(delimiter_pairs: Iterable[DelimiterPair], case_sensitive: bool) -> re.Pattern[str]:
    """Build one alternation pattern covering every valid delimiter pair plus at-tags.

    Each pair becomes ``(?P<startN>...)(?P<tagN>...)(?P<endN>...)``. Pairs missing
    either delimiter are ignored; when none remain the default ``[``/``]`` pair is
    used. The at-tag alternative is always appended last.
    """

    valid_pairs = [pair for pair in delimiter_pairs if pair.is_valid] or [DEFAULT_DELIMITER_PAIR]
    alternatives = [
        (
            f"(?P<start{index}>{re.escape(pair.start)})"
            f"(?P<tag{index}>{IDENTIFIER_PATTERN})"
            f"(?P<end{index}>{_escape_end_delimiter(pair.end)})"
        )
        for index, pair in enumerate(valid_pairs)
    ]
    alternatives.append(AT_TAG_PATTERN)
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile("|".join(alternatives), flags)


def _named_parts(match: re.Match[str]) -> TagParts | None:
    groups = match.groupdict()
    index = 0
    while f"start{index}" in groups:
        start = groups[f"start{index}"]
        tag = groups[f"tag{index}"]
        if start and tag:
            return start, tag, groups[f"end{index}"] or ""
        index += 1
    if groups.get("at_start") and groups.get("at_tag"):
        return groups["at_start"], groups["at_tag"], ""
    return None


def _positional_parts(match: re.Match[str]) -> TagParts | None:
    """Read a caller-supplied pattern's groups.

    The first ``(start)(tag)(end)`` triple with populated start and tag wins.
    Otherwise the first populated group is the tag and the surrounding match
    text becomes its delimiters; a pattern without groups yields the whole match.
    """

    groups = match.groups()
    for index in range(0, len(groups) - 1, 3):
        start, tag = groups[index], groups[index + 1]
        end = groups[index + 2] if index + 2 < len(groups) else None
        if start and tag:
            return start, tag, end or ""

    for group_number, value in enumerate(groups, start=1):
        if value:
            offset = match.start()
            full = match.group(0)
            return (
                full[: match.start(group_number) - offset],
                value,
                full[match.end(group_number) - offset :],
            )

    if not groups and match.group(0):
        return "", match.group(0), ""
    return None


def _logical_terminator(text: str, match_end: int) -> str:
    window = text[match_end : match_end + TERMINATOR_LOOKAHEAD]
    for char in window:
        if char in LOGICAL_TERMINATORS:
            return char
    return ""


def _context_window(text: str, start: int, end: int) -> str:
    return text[max(0, start - CONTEXT_RADIUS) : min(len(text), end + CONTEXT_RADIUS)].strip()


def extract_tags(text: str, config: ExtractionConfig | None = None) -> list[ExtractedTagResult]:
    """Scan ``text`` once and return unique tags in first-occurrence order.

    A repeated tag string is discarded entirely: it consumes no position and
    contributes nothing to the first occurrence. A malformed ``regex_pattern``
    raises ``re.error`` unchanged.
    """

    active_config = config or ExtractionConfig()
    if active_config.regex_pattern:
        flags = 0 if active_config.case_sensitive else re.IGNORECASE
        pattern = re.compile(active_config.regex_pattern, flags)
        read_parts = _positional_parts
    else:
        pattern = build_pattern(active_config.delimiter_pairs, active_config.case_sensitive)
        read_parts = _named_parts

    results: list[ExtractedTagResult] = []
    seen_tags: set[str] = set()
    if not text:
        return results

    for match in pattern.finditer(text):
        parts = read_parts(match)
        if parts is None:
            logger.debug("tag_extraction.unparsed_match index=%d match=%r", match.start(), match.group(0))
            continue
        start_delimiter, tag_content, end_delimiter = parts

        recorded_end = end_delimiter
        if start_delimiter == "@" and not end_delimiter:
            recorded_end = _logical_terminator(text, match.end())

        if active_config.include_delimiters:
            tag_text = f"{start_delimiter}{tag_content}{end_delimiter}"
        else:
            tag_text = tag_content
        if tag_text in seen_tags:
            continue
        seen_tags.add(tag_text)

        label, confidence = classify_tag(tag_content, start_delimiter, recorded_end)
        results.append(
            ExtractedTagResult(
                text=tag_text,
                tag_content=tag_content,
                start_delimiter=start_delimiter,
                end_delimiter=recorded_end,
                pattern=label,
                position=len(results) + 1,
                context=_context_window(text, match.start(), match.end()),
                confidence=confidence,
            )
        )
    return results


class RegexTagExtractor(TagExtractorInterface):
    """Default extractor backed by :func:`extract_tags`."""

    def extract(self, text: str, config: ExtractionConfig | None = None) -> list[ExtractedTagResult]:
        """Extract unique, position-ordered tags from raw document text."""

        return extract_tags(text, config)
