# services/advocate_directory/schemas/advocates.py

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SortField(str, Enum):
    ID = "id"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    CITY = "city"
    DEGREE = "degree"
    SPECIALTIES = "specialties"
    YEARS_OF_EXPERIENCE = "yearsOfExperience"
    PHONE_NUMBER = "phoneNumber"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class AdvocateListParams:
    """Normalized listing request: every value already validated and defaulted."""
    search: Optional[str] = None
    sort_by: SortField = SortField.FIRST_NAME
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class AdvocateOut(BaseModel):
    id: int
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    city: str
    degree: str
    specialties: List[str] = Field(default_factory=list)
    years_of_experience: int = Field(alias="yearsOfExperience")
    phone_number: int = Field(alias="phoneNumber")

    class Config:
        from_attributes = True
        populate_by_name = True


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True


class AdvocateListResponse(BaseModel):
    data: List[AdvocateOut]
    pagination: Pagination


class ErrorResponse(BaseModel):
    error: str
