"""Typed extraction inputs and outputs independent of persistence."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DelimiterPair:
    """One bracket style to recognize, e.g. ``<<`` / ``>>``."""

    start: str
    end: str

    @property
    def is_valid(self) -> bool:
        return bool(self.start) and bool(self.end)


DEFAULT_DELIMITER_PAIR = DelimiterPair(start="[", end="]")


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """Caller-supplied extraction settings for a single call."""

    delimiter_pairs: tuple[DelimiterPair, ...] = (DEFAULT_DELIMITER_PAIR,)
    case_sensitive: bool = False
    include_delimiters: bool = True
    regex_pattern: str | None = None


@dataclass(slots=True)
class ExtractedTagResult:
    """One unique tag found in the scanned text."""

    text: str
    tag_content: str
    start_delimiter: str
    end_delimiter: str
    pattern: str
    position: int
    context: str
    confidence: int


def resolve_config(
    delimiter_pairs: list[DelimiterPair] | tuple[DelimiterPair, ...] | None = None,
    case_sensitive: bool | None = None,
    include_delimiters: bool | None = None,
    regex_pattern: str | None = None,
) -> ExtractionConfig:
    """Merge caller-supplied fields over the documented defaults."""

    defaults = ExtractionConfig()
    return ExtractionConfig(
        delimiter_pairs=tuple(delimiter_pairs) if delimiter_pairs is not None else defaults.delimiter_pairs,
        case_sensitive=defaults.case_sensitive if case_sensitive is None else case_sensitive,
        include_delimiters=defaults.include_delimiters if include_delimiters is None else include_delimiters,
        regex_pattern=regex_pattern or None,
    )
