"""Tag-to-field mapping ORM model."""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tagmapper.models.base import Base, CreatedAtMixin, IdMixin


class TagMapping(Base, IdMixin, CreatedAtMixin):
    """Maps one extracted tag of a template to an internal data field."""

    __tablename__ = "tag_mappings"
    __table_args__ = (UniqueConstraint("template_id", "tag_text", name="uq_tag_mappings_template_tag"),)

    template_id: Mapped[str] = mapped_column(
        ForeignKey("templates.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    tag_text: Mapped[str] = mapped_column(String(512), nullable=False)
    field_name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    mapped_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
