"""Extraction endpoint schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tagmapper.extraction.types import DelimiterPair, ExtractedTagResult, ExtractionConfig, resolve_config


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DelimiterPairPayload(_CamelModel):
    """One start/end delimiter pair."""

    start: str = ""
    end: str = ""


class ExtractionConfigPayload(_CamelModel):
    """Caller-supplied extraction settings; omitted fields take the defaults."""

    delimiter_pairs: list[DelimiterPairPayload] | None = None
    case_sensitive: bool | None = None
    include_delimiters: bool | None = None
    regex_pattern: str | None = None

    def to_config(self) -> ExtractionConfig:
        pairs = None
        if self.delimiter_pairs is not None:
            pairs = [DelimiterPair(start=pair.start, end=pair.end) for pair in self.delimiter_pairs]
        return resolve_config(
            delimiter_pairs=pairs,
            case_sensitive=self.case_sensitive,
            include_delimiters=self.include_delimiters,
            regex_pattern=self.regex_pattern,
        )


class TemplateExtractionRequest(_CamelModel):
    """Body of a template extraction request."""

    extraction_config: ExtractionConfigPayload | None = None


class ExtractionPreviewRequest(_CamelModel):
    """Ad-hoc text extraction that stores nothing."""

    text: str = ""
    extraction_config: ExtractionConfigPayload | None = None


class ExtractedTagResultRead(_CamelModel):
    """Serialized extraction result."""

    text: str
    tag_content: str
    start_delimiter: str
    end_delimiter: str
    pattern: str
    position: int
    context: str
    confidence: int = Field(ge=0, le=100)

    @classmethod
    def from_result(cls, result: ExtractedTagResult) -> "ExtractedTagResultRead":
        return cls(
            text=result.text,
            tag_content=result.tag_content,
            start_delimiter=result.start_delimiter,
            end_delimiter=result.end_delimiter,
            pattern=result.pattern,
            position=result.position,
            context=result.context,
            confidence=result.confidence,
        )


class ExtractionPreviewResult(_CamelModel):
    """Preview response."""

    tags: list[ExtractedTagResultRead]
    total_tags: int


class TemplateExtractionResult(BaseModel):
    """Extraction execution summary."""

    extraction_run_id: int | None = None
    template_id: str
    template_name: str
    content_source: str
    content_length: int
    tags_created: int
    processing_ms: float
