"""Extracted tag ORM model."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tagmapper.models.base import Base, CreatedAtMixin, IdMixin


class ExtractedTag(Base, IdMixin, CreatedAtMixin):
    """Tag stored from the latest extraction of a template."""

    __tablename__ = "extracted_tags"

    template_id: Mapped[str] = mapped_column(
        ForeignKey("templates.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    text: Mapped[str] = mapped_column(String(512), nullable=False)
    tag_content: Mapped[str] = mapped_column(String(512), nullable=False)
    start_delimiter: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    end_delimiter: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    pattern: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    context: Mapped[str] = mapped_column(Text, default="", nullable=False)
    confidence: Mapped[int] = mapped_column(Integer, nullable=False)
    extracted_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
