"""SQLAlchemy metadata registry import for Alembic."""

from tagmapper.models import ExtractedTag, TagExtractionRun, TagMapping, Template
from tagmapper.models.base import Base

__all__ = ["Base", "Template", "ExtractedTag", "TagExtractionRun", "TagMapping"]
