"""Tag extraction run audit log model."""

from sqlalchemy import JSON, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tagmapper.models.base import Base, CreatedAtMixin, IdMixin


class TagExtractionRun(Base, IdMixin, CreatedAtMixin):
    """Stores the effective configuration and outcome of each extraction."""

    __tablename__ = "tag_extraction_runs"

    template_id: Mapped[str] = mapped_column(
        ForeignKey("templates.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    content_source: Mapped[str] = mapped_column(String(32), nullable=False)
    content_length: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    config_json: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
    tag_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    extracted_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
