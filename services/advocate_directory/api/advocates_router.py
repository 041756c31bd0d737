# services/advocate_directory/api/advocates_router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from services.advocate_directory.controllers.advocate_service import list_advocates, parse_list_params
from services.advocate_directory.schemas.advocates import AdvocateListResponse, ErrorResponse
from shared.config import Settings
from shared.db import get_db
from shared.errors import AdvocateQueryFailed
from shared.logger import get_logger

router = APIRouter(prefix="/advocates", tags=["Advocates"])
logger = get_logger(component="advocates_router")


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# --- LIST / SEARCH ADVOCATES ---
@router.get(
    "",
    response_model=AdvocateListResponse,
    responses={500: {"model": ErrorResponse, "description": "Database not connected or query failure"}},
)
async def get_advocates(
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Page through advocates, optionally filtered by a free-text search and
    sorted by one column.
    """
    params = parse_list_params(
        settings,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    try:
        return await list_advocates(db, params, settings.search_min_length)
    except Exception as e:
        logger.exception("Error in fetching advocates", error=str(e))
        raise AdvocateQueryFailed() from e
