"""Template request/response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TemplateCreate(BaseModel):
    """Template registration payload."""

    name: str = Field(min_length=1, max_length=255)
    file_path: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class TemplateRead(BaseModel):
    """Serialized template."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    file_path: str | None
    status: str
    metadata_json: dict[str, Any]
    uploaded_by: str | None
    created_at: datetime


class ExtractedTagRead(BaseModel):
    """Serialized stored tag."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: str
    text: str
    tag_content: str
    start_delimiter: str
    end_delimiter: str
    pattern: str
    position: int
    context: str
    confidence: int
    extracted_by: str | None
    created_at: datetime
