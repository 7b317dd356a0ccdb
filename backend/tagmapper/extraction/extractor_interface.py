"""Extractor interface for pluggable tag extraction implementations."""

from abc import ABC, abstractmethod

from tagmapper.extraction.types import ExtractedTagResult, ExtractionConfig


class TagExtractorInterface(ABC):
    """Abstract tag extractor interface."""

    @abstractmethod
    def extract(self, text: str, config: ExtractionConfig | None = None) -> list[ExtractedTagResult]:
        """Extract unique, position-ordered tags from raw document text."""
