"""Tag extraction engine."""

from tagmapper.extraction.classification import CLASSIFICATION_RULES, classify_tag
from tagmapper.extraction.extractor_interface import TagExtractorInterface
from tagmapper.extraction.tag_extractor import RegexTagExtractor, build_pattern, extract_tags
from tagmapper.extraction.types import (
    DEFAULT_DELIMITER_PAIR,
    DelimiterPair,
    ExtractedTagResult,
    ExtractionConfig,
    resolve_config,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "DEFAULT_DELIMITER_PAIR",
    "DelimiterPair",
    "ExtractedTagResult",
    "ExtractionConfig",
    "RegexTagExtractor",
    "TagExtractorInterface",
    "build_pattern",
    "classify_tag",
    "extract_tags",
    "resolve_config",
]
