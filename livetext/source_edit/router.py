# FILE: livetext/source_edit/router.py
"""Source edit router: endpoints called by the inspector UI.

Endpoints:
- POST /files/replace-text-by-selector - Replace an element's text using tag/id/class hints
- POST /files/replace-text-in-project - Replace plain text across project files
- POST /files/read-as-base64 - Read a project file as base64
- POST /files/save-base64-image - Write a base64 image into the project

The replace endpoints always answer 200; failures are reported in the body.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from livetext.db import get_db
from livetext.projects.service import SqlProjectRegistry
from livetext.source_edit import assets
from livetext.source_edit.errors import (
    InvalidInputError,
    PathOutsideProjectError,
    ProjectNotFoundError,
)
from livetext.source_edit.schemas import (
    FileWriteResult,
    OperationResult,
    ReadBase64Request,
    ReadBase64Response,
    ReplaceBySelectorRequest,
    ReplaceInProjectRequest,
    SaveBase64ImageRequest,
)
from livetext.source_edit.service import SourceEditService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


def get_registry(db: Session = Depends(get_db)) -> SqlProjectRegistry:
    return SqlProjectRegistry(db)


def get_source_edit_service(registry: SqlProjectRegistry = Depends(get_registry)) -> SourceEditService:
    return SourceEditService(registry)


# =============================================================================
# Text replacement
# =============================================================================

@router.post("/replace-text-by-selector", response_model=OperationResult)
async def replace_text_by_selector(
    request: ReplaceBySelectorRequest,
    service: SourceEditService = Depends(get_source_edit_service),
):
    return await service.replace_text_by_selector(
        request.project_id,
        request.element_info,
        request.original_text,
        request.new_text,
    )


@router.post("/replace-text-in-project", response_model=OperationResult)
async def replace_text_in_project(
    request: ReplaceInProjectRequest,
    service: SourceEditService = Depends(get_source_edit_service),
):
    return await service.replace_text_in_project(
        request.project_id,
        request.original_text,
        request.new_text,
    )


# =============================================================================
# Assets
# =============================================================================

@router.post("/read-as-base64", response_model=ReadBase64Response)
async def read_as_base64(
    request: ReadBase64Request,
    registry: SqlProjectRegistry = Depends(get_registry),
):
    try:
        data = await assets.read_file_as_base64(registry, request.project_id, request.file_path)
    except ProjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (InvalidInputError, PathOutsideProjectError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    except OSError as exc:
        logger.error("[files] Error reading file as base64: %s", exc)
        raise HTTPException(status_code=500, detail="Could not read file")
    return ReadBase64Response(data=data)


@router.post("/save-base64-image", response_model=FileWriteResult)
async def save_base64_image(
    request: SaveBase64ImageRequest,
    registry: SqlProjectRegistry = Depends(get_registry),
):
    try:
        return await assets.save_base64_image(
            registry, request.project_id, request.file_path, request.base64_data,
        )
    except ProjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (InvalidInputError, PathOutsideProjectError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


__all__ = ["router", "get_registry", "get_source_edit_service"]
