"""Template registration, extraction and tag listing routes."""

import re

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from tagmapper.db.dependencies import get_db
from tagmapper.routers.dependencies import get_acting_user_id
from tagmapper.schemas.common import ApiResponse
from tagmapper.schemas.extraction import TemplateExtractionRequest, TemplateExtractionResult
from tagmapper.schemas.template import ExtractedTagRead, TemplateCreate, TemplateRead
from tagmapper.services.errors import ContentUnavailableError, TagStorageError, TemplateNotFoundError
from tagmapper.services.extraction import run_extraction_for_template
from tagmapper.services.templates import create_template, get_template, list_extracted_tags, list_templates


router = APIRouter(prefix="/templates")


@router.post("", response_model=ApiResponse[TemplateRead], status_code=201)
def register_template(
    payload: TemplateCreate,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_acting_user_id),
) -> ApiResponse[TemplateRead]:
    """Register an uploaded template."""

    template = create_template(db, payload, user_id=user_id)
    return ApiResponse(data=TemplateRead.model_validate(template))


@router.get("", response_model=ApiResponse[list[TemplateRead]])
def get_templates(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> ApiResponse[list[TemplateRead]]:
    """List templates, newest first."""

    records = list_templates(db, limit=limit, offset=offset)
    return ApiResponse(data=[TemplateRead.model_validate(template) for template in records])


@router.get("/{template_id}", response_model=ApiResponse[TemplateRead])
def get_template_detail(
    template_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
) -> ApiResponse[TemplateRead]:
    """Return one template."""

    try:
        template = get_template(db, template_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ApiResponse(data=TemplateRead.model_validate(template))


@router.post("/{template_id}/extract", response_model=ApiResponse[TemplateExtractionResult])
def extract_template_tags(
    template_id: str = Path(..., min_length=1),
    payload: TemplateExtractionRequest | None = Body(default=None),
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_acting_user_id),
) -> ApiResponse[TemplateExtractionResult]:
    """Extract tags from a template and replace its stored tags."""

    config = payload.extraction_config.to_config() if payload and payload.extraction_config else None
    try:
        result = run_extraction_for_template(db, template_id, config, user_id=user_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ContentUnavailableError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except TagStorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except re.error as exc:
        raise HTTPException(status_code=400, detail=f"Invalid regex pattern: {exc}") from exc
    return ApiResponse(data=result)


@router.get("/{template_id}/tags", response_model=ApiResponse[list[ExtractedTagRead]])
def get_template_tags(
    template_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
) -> ApiResponse[list[ExtractedTagRead]]:
    """List stored tags for a template ordered by position."""

    try:
        records = list_extracted_tags(db, template_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ApiResponse(data=[ExtractedTagRead.model_validate(tag) for tag in records])
