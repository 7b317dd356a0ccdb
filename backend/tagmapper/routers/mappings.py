"""Tag-to-field mapping routes."""

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from tagmapper.db.dependencies import get_db
from tagmapper.routers.dependencies import get_acting_user_id
from tagmapper.schemas.common import ApiResponse
from tagmapper.schemas.mapping import TagMappingRead, TagMappingsReplaceRequest
from tagmapper.services.errors import TagStorageError, TemplateNotFoundError, UnknownTagError
from tagmapper.services.mappings import list_tag_mappings, replace_tag_mappings


router = APIRouter(prefix="/templates/{template_id}")


@router.get("/mappings", response_model=ApiResponse[list[TagMappingRead]])
def get_mappings(
    template_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
) -> ApiResponse[list[TagMappingRead]]:
    """List tag-to-field mappings for a template."""

    try:
        records = list_tag_mappings(db, template_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ApiResponse(data=[TagMappingRead.model_validate(mapping) for mapping in records])


@router.put("/mappings", response_model=ApiResponse[list[TagMappingRead]])
def put_mappings(
    payload: TagMappingsReplaceRequest,
    template_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_acting_user_id),
) -> ApiResponse[list[TagMappingRead]]:
    """Replace the tag-to-field mappings of a template."""

    try:
        records = replace_tag_mappings(db, template_id, payload.mappings, user_id=user_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UnknownTagError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except TagStorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return ApiResponse(data=[TagMappingRead.model_validate(mapping) for mapping in records])
