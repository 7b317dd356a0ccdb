"""Template ORM model."""

from uuid import uuid4

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from tagmapper.models.base import Base, CreatedAtMixin

TEMPLATE_STATUS_UPLOADED = "uploaded"
TEMPLATE_STATUS_COMPLETED = "completed"


class Template(Base, CreatedAtMixin):
    """Uploaded document template."""

    __tablename__ = "templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    status: Mapped[str] = mapped_column(String(32), default=TEMPLATE_STATUS_UPLOADED, nullable=False, index=True)
    metadata_json: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
    uploaded_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
