"""Tag extraction orchestration and persistence services."""

from dataclasses import asdict
import logging
from pathlib import Path
from time import perf_counter

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tagmapper.config import get_settings
from tagmapper.extraction.extractor_interface import TagExtractorInterface
from tagmapper.extraction.tag_extractor import RegexTagExtractor
from tagmapper.extraction.types import ExtractedTagResult, ExtractionConfig
from tagmapper.models.extracted_tag import ExtractedTag
from tagmapper.models.tag_extraction_run import TagExtractionRun
from tagmapper.models.tag_mapping import TagMapping
from tagmapper.models.template import TEMPLATE_STATUS_COMPLETED, Template
from tagmapper.schemas.extraction import TemplateExtractionResult
from tagmapper.services.content import ProcessedContent, load_template_content
from tagmapper.services.errors import TagStorageError
from tagmapper.services.templates import get_template

logger = logging.getLogger(__name__)


def get_default_extractor() -> TagExtractorInterface:
    """Return the regex/delimiter extractor implementation."""

    return RegexTagExtractor()


def preview_extraction(
    text: str,
    config: ExtractionConfig | None = None,
    extractor: TagExtractorInterface | None = None,
) -> list[ExtractedTagResult]:
    """Run extraction over ad-hoc text without touching storage."""

    return (extractor or get_default_extractor()).extract(text, config)


def run_extraction_for_template(
    db: Session,
    template_id: str,
    config: ExtractionConfig | None = None,
    *,
    user_id: str | None = None,
    extractor: TagExtractorInterface | None = None,
    storage_dir: Path | None = None,
) -> TemplateExtractionResult:
    """Extract tags from a template and replace its previously stored tags."""

    total_started = perf_counter()
    active_config = config or ExtractionConfig()
    try:
        template = get_template(db, template_id)

        started = perf_counter()
        content = load_template_content(template, storage_dir or get_settings().template_storage_dir)
        content_load_ms = (perf_counter() - started) * 1000.0

        active_extractor = extractor or get_default_extractor()
        started = perf_counter()
        results = active_extractor.extract(content.content, active_config)
        extract_ms = (perf_counter() - started) * 1000.0

        started = perf_counter()
        extraction_run = _replace_extracted_tags(
            db,
            template,
            results,
            content=content,
            config=active_config,
            user_id=user_id,
        )
        persist_ms = (perf_counter() - started) * 1000.0

        total_ms = (perf_counter() - total_started) * 1000.0
        result = TemplateExtractionResult(
            extraction_run_id=extraction_run.id,
            template_id=template.id,
            template_name=template.name,
            content_source=content.source,
            content_length=len(content.content),
            tags_created=len(results),
            processing_ms=round(total_ms, 2),
        )
        logger.info(
            (
                "tag_extraction.timing template_id=%s extraction_run_id=%s source=%s "
                "content_length=%d content_load_ms=%.2f extract_ms=%.2f persist_ms=%.2f "
                "total_ms=%.2f tags=%d"
            ),
            result.template_id,
            result.extraction_run_id,
            result.content_source,
            result.content_length,
            content_load_ms,
            extract_ms,
            persist_ms,
            total_ms,
            result.tags_created,
        )
        return result
    except Exception:
        logger.exception(
            "tag_extraction.failed template_id=%s elapsed_ms=%.2f",
            template_id,
            (perf_counter() - total_started) * 1000.0,
        )
        raise


def _replace_extracted_tags(
    db: Session,
    template: Template,
    results: list[ExtractedTagResult],
    *,
    content: ProcessedContent,
    config: ExtractionConfig,
    user_id: str | None,
) -> TagExtractionRun:
    """Delete prior tags for the template, insert the new ones, and mark it completed.

    Mappings whose tag is no longer extracted are removed in the same transaction.
    """

    extracted_texts = {tag.text for tag in results}
    try:
        db.execute(delete(ExtractedTag).where(ExtractedTag.template_id == template.id))
        db.execute(
            delete(TagMapping).where(
                TagMapping.template_id == template.id,
                TagMapping.tag_text.not_in(extracted_texts),
            )
        )
        db.add_all(
            ExtractedTag(
                template_id=template.id,
                text=tag.text,
                tag_content=tag.tag_content,
                start_delimiter=tag.start_delimiter,
                end_delimiter=tag.end_delimiter,
                pattern=tag.pattern,
                position=tag.position,
                context=tag.context,
                confidence=tag.confidence,
                extracted_by=user_id,
            )
            for tag in results
        )
        extraction_run = TagExtractionRun(
            template_id=template.id,
            content_source=content.source,
            content_length=len(content.content),
            config_json=_serialize_config(config),
            tag_count=len(results),
            extracted_by=user_id,
        )
        db.add(extraction_run)
        template.status = TEMPLATE_STATUS_COMPLETED
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise TagStorageError(f"Failed to store extracted tags: {exc}") from exc
    db.refresh(extraction_run)
    return extraction_run


def _serialize_config(config: ExtractionConfig) -> dict[str, object]:
    payload = asdict(config)
    payload["delimiter_pairs"] = [asdict(pair) for pair in config.delimiter_pairs]
    return payload
