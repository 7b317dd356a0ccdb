"""Ad-hoc extraction preview routes."""

import re

from fastapi import APIRouter, HTTPException

from tagmapper.schemas.common import ApiResponse
from tagmapper.schemas.extraction import ExtractedTagResultRead, ExtractionPreviewRequest, ExtractionPreviewResult
from tagmapper.services.extraction import preview_extraction


router = APIRouter(prefix="/extraction")


@router.post("/preview", response_model=ApiResponse[ExtractionPreviewResult])
def preview_tags(payload: ExtractionPreviewRequest) -> ApiResponse[ExtractionPreviewResult]:
    """Extract tags from posted text without storing anything."""

    config = payload.extraction_config.to_config() if payload.extraction_config else None
    try:
        results = preview_extraction(payload.text, config)
    except re.error as exc:
        raise HTTPException(status_code=400, detail=f"Invalid regex pattern: {exc}") from exc
    tags = [ExtractedTagResultRead.from_result(result) for result in results]
    return ApiResponse(data=ExtractionPreviewResult(tags=tags, total_tags=len(tags)))
