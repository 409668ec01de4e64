"""Employee records and the view-model parameter objects."""

import math
from datetime import date
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _truncate_datetime(value: Any) -> Any:
    # Upstream sometimes sends full ISO timestamps for calendar dates.
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


class EmployeeFormData(_CamelModel):
    """Writable attributes of an employee, as entered on the form."""

    name: str
    position: str
    department: str
    salary: float = Field(gt=0)
    email: EmailStr
    phone: str
    hire_date: date = Field(alias="hireDate")

    @field_validator("name", "position", "department", "phone", "email", mode="before")
    @classmethod
    def _required_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("is required")
        return value

    @field_validator("hire_date", mode="before")
    @classmethod
    def _hire_date(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("is required")
        return _truncate_datetime(value)


class Employee(_CamelModel):
    """An employee record as held by the store. Never mutated in place."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    position: str
    department: str
    salary: float = Field(ge=0)
    email: str
    phone: str = ""
    hire_date: date = Field(alias="hireDate")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("hire_date", mode="before")
    @classmethod
    def _hire_date(cls, value: Any) -> Any:
        return _truncate_datetime(value)

    @classmethod
    def from_form(cls, employee_id: str, data: EmployeeFormData) -> "Employee":
        return cls(id=employee_id, **data.model_dump())


ANY_DEPARTMENT = "any"


def _as_bound(value: Any) -> Optional[float]:
    """Coerce a salary bound; anything unusable means 'no bound'."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        bound = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(bound):
        return None
    return bound


class FilterCriteria(_CamelModel):
    """Active predicates narrowing the visible employee set."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    department: Optional[str] = None
    search: str = ""
    min_salary: Optional[float] = Field(default=None, alias="minSalary")
    max_salary: Optional[float] = Field(default=None, alias="maxSalary")

    @field_validator("min_salary", "max_salary", mode="before")
    @classmethod
    def _lenient_bound(cls, value: Any) -> Optional[float]:
        return _as_bound(value)

    @field_validator("search", mode="before")
    @classmethod
    def _search_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @property
    def department_filter(self) -> Optional[str]:
        if not self.department or self.department == ANY_DEPARTMENT:
            return None
        return self.department

    @property
    def search_term(self) -> str:
        return self.search.strip().casefold()


class SortKey(str, Enum):
    NAME = "name"
    POSITION = "position"
    DEPARTMENT = "department"
    SALARY = "salary"
    HIRE_DATE = "hireDate"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortSpec(_CamelModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    key: SortKey = SortKey.NAME
    direction: SortDirection = SortDirection.ASC


class PageRequest(_CamelModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page_number: int = Field(default=1, ge=1, alias="pageNumber")
    page_size: int = Field(default=10, ge=1, alias="pageSize")


class DerivedPage(_CamelModel):
    """The visible page of rows plus the counts the table footer needs."""

    rows: List[Employee]
    total_filtered: int = Field(alias="totalFiltered")
    total_pages: int = Field(alias="totalPages")


class EmployeeSummary(_CamelModel):
    total: int
    avg_salary: float = Field(alias="avgSalary")
    max_salary: float = Field(alias="maxSalary")
    department_count: int = Field(alias="departmentCount")


class EmployeeView(_CamelModel):
    """Response body of the table view endpoint."""

    rows: List[Employee]
    total_filtered: int = Field(alias="totalFiltered")
    total_pages: int = Field(alias="totalPages")
    page: int
    page_size: int = Field(alias="pageSize")
    summary: EmployeeSummary
