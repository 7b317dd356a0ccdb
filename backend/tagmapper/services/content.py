"""Template content acquisition from metadata or file storage."""

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Literal

from tagmapper.models.template import Template
from tagmapper.services.errors import ContentUnavailableError

logger = logging.getLogger(__name__)

ContentSource = Literal["metadata", "storage", "empty"]


@dataclass(slots=True)
class ProcessedContent:
    """Plain text derived for a template and where it came from."""

    content: str
    source: ContentSource


def load_template_content(template: Template, storage_dir: Path) -> ProcessedContent:
    """Return plain text for a template.

    Metadata text wins over the stored file. A template with neither yields empty
    content rather than an error; PDFs that still need structural parsing and
    unreadable files raise :class:`ContentUnavailableError`.
    """

    metadata = template.metadata_json or {}
    metadata_text = metadata.get("extractedText") or metadata.get("content")
    if metadata_text:
        original_type = str(metadata.get("originalFileType") or "").lower()
        if metadata.get("needsDocumentParsing") and "pdf" in original_type:
            raise ContentUnavailableError(
                "PDF documents require proper parsing; convert the template to plain text first."
            )
        content = str(metadata_text)
        logger.info("template_content.loaded template_id=%s source=metadata length=%d", template.id, len(content))
        return ProcessedContent(content=content, source="metadata")

    if template.file_path:
        content = _read_storage_file(storage_dir, template.file_path)
        logger.info("template_content.loaded template_id=%s source=storage length=%d", template.id, len(content))
        return ProcessedContent(content=content, source="storage")

    logger.warning("template_content.empty template_id=%s", template.id)
    return ProcessedContent(content="", source="empty")


def _read_storage_file(storage_dir: Path, file_path: str) -> str:
    root = storage_dir.resolve()
    target = (root / file_path).resolve()
    if not target.is_relative_to(root):
        raise ContentUnavailableError(f"Template file path escapes the storage directory: {file_path}")
    try:
        return target.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise ContentUnavailableError(f"Cannot read template file: {file_path}") from exc
