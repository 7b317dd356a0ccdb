"""Template registration and retrieval services."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from tagmapper.models.extracted_tag import ExtractedTag
from tagmapper.models.template import Template
from tagmapper.schemas.template import TemplateCreate
from tagmapper.services.errors import TemplateNotFoundError


def create_template(db: Session, payload: TemplateCreate, user_id: str | None = None) -> Template:
    """Persist a new template record."""

    template = Template(
        name=payload.name,
        file_path=payload.file_path,
        metadata_json=dict(payload.metadata),
        uploaded_by=user_id,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def get_template(db: Session, template_id: str) -> Template:
    """Return one template or raise :class:`TemplateNotFoundError`."""

    template = db.get(Template, template_id)
    if template is None:
        raise TemplateNotFoundError(f"Template not found: {template_id}")
    return template


def list_templates(db: Session, *, limit: int = 50, offset: int = 0) -> list[Template]:
    """List templates, newest first."""

    stmt = (
        select(Template)
        .order_by(Template.created_at.desc(), Template.name.asc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.scalars(stmt).all())


def list_extracted_tags(db: Session, template_id: str) -> list[ExtractedTag]:
    """Return stored tags for a template ordered by position."""

    get_template(db, template_id)
    stmt = (
        select(ExtractedTag)
        .where(ExtractedTag.template_id == template_id)
        .order_by(ExtractedTag.position.asc(), ExtractedTag.id.asc())
    )
    return list(db.scalars(stmt).all())
