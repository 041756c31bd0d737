# services/advocate_directory/controllers/advocate_service.py

import math
from typing import Optional

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.advocate_directory.models.advocates import Advocate
from services.advocate_directory.schemas.advocates import (
    AdvocateListParams,
    AdvocateListResponse,
    AdvocateOut,
    Pagination,
    SortField,
    SortOrder,
)
from shared.config import Settings
from shared.logger import get_logger

logger = get_logger(component="advocate_service")

# specialties is multi-valued and not sortable; it falls back like an unknown field
SORT_COLUMNS = {
    SortField.ID: Advocate.id,
    SortField.FIRST_NAME: Advocate.first_name,
    SortField.LAST_NAME: Advocate.last_name,
    SortField.CITY: Advocate.city,
    SortField.DEGREE: Advocate.degree,
    SortField.YEARS_OF_EXPERIENCE: Advocate.years_of_experience,
    SortField.PHONE_NUMBER: Advocate.phone_number,
}

DEFAULT_SORT_FIELD = SortField.FIRST_NAME

LIKE_ESCAPE = "\\"


def parse_positive_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def parse_sort_field(raw: Optional[str]) -> SortField:
    try:
        field = SortField(raw)
    except ValueError:
        return DEFAULT_SORT_FIELD
    return field if field in SORT_COLUMNS else DEFAULT_SORT_FIELD


def parse_list_params(
    settings: Settings,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> AdvocateListParams:
    """
    Turn raw query-string values into listing params.

    Malformed values never fail the request: they fall back to defaults, and
    the page size is capped at ``settings.max_page_size``.
    """
    page_size = parse_positive_int(limit, settings.default_page_size)
    return AdvocateListParams(
        search=search or None,
        sort_by=parse_sort_field(sort_by),
        sort_order=SortOrder.DESC if sort_order == SortOrder.DESC.value else SortOrder.ASC,
        page=parse_positive_int(page, 1),
        limit=min(page_size, settings.max_page_size),
    )


def escape_like(term: str) -> str:
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_search_filter(search: Optional[str], min_length: int):
    """
    OR-filter matching ``search`` case-insensitively anywhere in the text
    columns, the phone number and the serialized specialties. Returns None
    when the term is absent or shorter than ``min_length``.
    """
    if not search or len(search) < min_length:
        return None

    pattern = f"%{escape_like(search)}%"
    return or_(
        Advocate.first_name.ilike(pattern, escape=LIKE_ESCAPE),
        Advocate.last_name.ilike(pattern, escape=LIKE_ESCAPE),
        Advocate.city.ilike(pattern, escape=LIKE_ESCAPE),
        Advocate.degree.ilike(pattern, escape=LIKE_ESCAPE),
        cast(Advocate.phone_number, String).ilike(pattern, escape=LIKE_ESCAPE),
        cast(Advocate.specialties, String).ilike(pattern, escape=LIKE_ESCAPE),
    )


def build_order_by(sort_by: SortField, sort_order: SortOrder):
    column = SORT_COLUMNS.get(sort_by, SORT_COLUMNS[DEFAULT_SORT_FIELD])
    primary = column.desc() if sort_order == SortOrder.DESC else column.asc()
    if column is Advocate.id:
        return (primary,)
    # id breaks ties so that pages are stable between requests
    return (primary, Advocate.id.asc())


async def list_advocates(
    db: AsyncSession,
    params: AdvocateListParams,
    search_min_length: int,
) -> AdvocateListResponse:
    where_clause = build_search_filter(params.search, search_min_length)

    count_stmt = select(func.count()).select_from(Advocate)
    rows_stmt = select(Advocate)
    if where_clause is not None:
        count_stmt = count_stmt.where(where_clause)
        rows_stmt = rows_stmt.where(where_clause)

    total = (await db.execute(count_stmt)).scalar_one()

    # pages past the end never reach the database, whatever their offset
    advocates = []
    if params.offset < total:
        rows_stmt = (
            rows_stmt.order_by(*build_order_by(params.sort_by, params.sort_order))
            .limit(params.limit)
            .offset(params.offset)
        )
        result = await db.execute(rows_stmt)
        advocates = result.scalars().all()

    logger.debug(
        "Fetched advocates",
        search=params.search,
        sort_by=params.sort_by.value,
        sort_order=params.sort_order.value,
        page=params.page,
        limit=params.limit,
        total=total,
        returned=len(advocates),
    )

    return AdvocateListResponse(
        data=[AdvocateOut.model_validate(a) for a in advocates],
        pagination=Pagination(
            page=params.page,
            limit=params.limit,
            total=total,
            total_pages=math.ceil(total / params.limit),
        ),
    )
