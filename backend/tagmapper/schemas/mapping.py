"""Tag mapping request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TagMappingInput(BaseModel):
    """One tag-to-field assignment."""

    tag_text: str = Field(min_length=1)
    field_name: str = Field(min_length=1, max_length=255)
    notes: str | None = None


class TagMappingsReplaceRequest(BaseModel):
    """Full replacement set of mappings for a template."""

    mappings: list[TagMappingInput] = Field(default_factory=list)


class TagMappingRead(BaseModel):
    """Serialized tag mapping."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: str
    tag_text: str
    field_name: str
    notes: str | None
    mapped_by: str | None
    created_at: datetime
