"""Tag-to-field mapping services."""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tagmapper.models.extracted_tag import ExtractedTag
from tagmapper.models.tag_mapping import TagMapping
from tagmapper.schemas.mapping import TagMappingInput
from tagmapper.services.errors import TagStorageError, UnknownTagError
from tagmapper.services.templates import get_template


def list_tag_mappings(db: Session, template_id: str) -> list[TagMapping]:
    """Return mappings for a template ordered by tag text."""

    get_template(db, template_id)
    stmt = (
        select(TagMapping)
        .where(TagMapping.template_id == template_id)
        .order_by(TagMapping.tag_text.asc(), TagMapping.id.asc())
    )
    return list(db.scalars(stmt).all())


def replace_tag_mappings(
    db: Session,
    template_id: str,
    mappings: list[TagMappingInput],
    user_id: str | None = None,
) -> list[TagMapping]:
    """Replace every mapping of a template with the given set.

    Each mapping must name a tag currently stored for the template. A tag listed
    more than once keeps its last assignment.
    """

    get_template(db, template_id)
    known_tags = set(
        db.scalars(select(ExtractedTag.text).where(ExtractedTag.template_id == template_id)).all()
    )
    unknown = sorted({mapping.tag_text for mapping in mappings} - known_tags)
    if unknown:
        raise UnknownTagError(f"Tags not extracted for template {template_id}: {', '.join(unknown)}")

    latest_by_tag: dict[str, TagMappingInput] = {}
    for mapping in mappings:
        latest_by_tag[mapping.tag_text] = mapping

    created = [
        TagMapping(
            template_id=template_id,
            tag_text=mapping.tag_text,
            field_name=mapping.field_name.strip(),
            notes=mapping.notes,
            mapped_by=user_id,
        )
        for mapping in latest_by_tag.values()
    ]
    try:
        db.execute(delete(TagMapping).where(TagMapping.template_id == template_id))
        db.add_all(created)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise TagStorageError(f"Failed to store tag mappings: {exc}") from exc
    return list_tag_mappings(db, template_id)
