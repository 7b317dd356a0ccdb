"""ORM models package exports."""

from tagmapper.models.extracted_tag import ExtractedTag
from tagmapper.models.tag_extraction_run import TagExtractionRun
from tagmapper.models.tag_mapping import TagMapping
from tagmapper.models.template import Template

__all__ = [
    "Template",
    "ExtractedTag",
    "TagExtractionRun",
    "TagMapping",
]
