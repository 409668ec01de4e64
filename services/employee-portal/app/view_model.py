"""Employee table view-model: filter, sort and paginate an in-memory list.

Every function here is pure. Callers own the employee snapshot and the
parameter objects and simply call :func:`derive` again whenever one of them
changes.
"""

import math
import unicodedata
from typing import Any, Callable, Dict, List, Sequence, Tuple

from app.models import (
    DerivedPage,
    Employee,
    EmployeeSummary,
    FilterCriteria,
    PageRequest,
    SortDirection,
    SortKey,
    SortSpec,
)


def collation_key(value: str) -> Tuple[str, str, str]:
    """Locale-independent ordering key for display strings.

    Compares letters ignoring accents and case first, then accents, then
    case, so "eve" < "Ève" < "Fay" regardless of the process locale.
    """
    folded = value.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, folded, value


_SORT_KEYS: Dict[SortKey, Callable[[Employee], Any]] = {
    SortKey.NAME: lambda e: collation_key(e.name),
    SortKey.POSITION: lambda e: collation_key(e.position),
    SortKey.DEPARTMENT: lambda e: collation_key(e.department),
    SortKey.SALARY: lambda e: e.salary,
    SortKey.HIRE_DATE: lambda e: e.hire_date,
}


def _matches(employee: Employee, criteria: FilterCriteria) -> bool:
    department = criteria.department_filter
    if department is not None and employee.department != department:
        return False

    term = criteria.search_term
    if term and not any(
        term in field.casefold()
        for field in (employee.name, employee.email, employee.position)
    ):
        return False

    if criteria.min_salary is not None and employee.salary < criteria.min_salary:
        return False
    if criteria.max_salary is not None and employee.salary > criteria.max_salary:
        return False

    return True


def filter_employees(employees: Sequence[Employee], criteria: FilterCriteria) -> List[Employee]:
    """Keep the records that satisfy every active predicate, in input order."""
    return [employee for employee in employees if _matches(employee, criteria)]


def sort_employees(employees: Sequence[Employee], spec: SortSpec) -> List[Employee]:
    """Stable sort in either direction."""
    try:
        key = _SORT_KEYS[SortKey(spec.key)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown sort key: {spec.key!r}")
    # list.sort keeps equal elements in input order even with reverse=True
    return sorted(employees, key=key, reverse=spec.direction == SortDirection.DESC)


def total_pages(count: int, page_size: int) -> int:
    if count <= 0:
        return 0
    return math.ceil(count / page_size)


def paginate(employees: Sequence[Employee], page: PageRequest) -> List[Employee]:
    """Slice one page out; a page past the end is simply empty."""
    start = (page.page_number - 1) * page.page_size
    return list(employees[start:start + page.page_size])


def derive(
    employees: Sequence[Employee],
    criteria: FilterCriteria,
    spec: SortSpec,
    page: PageRequest,
) -> DerivedPage:
    ordered = sort_employees(filter_employees(employees, criteria), spec)
    return DerivedPage(
        rows=paginate(ordered, page),
        total_filtered=len(ordered),
        total_pages=total_pages(len(ordered), page.page_size),
    )


def summarize(employees: Sequence[Employee]) -> EmployeeSummary:
    """Dashboard counters. An empty list reports zeros rather than failing."""
    salaries = [employee.salary for employee in employees]
    return EmployeeSummary(
        total=len(employees),
        avg_salary=sum(salaries) / len(salaries) if salaries else 0,
        max_salary=max(salaries, default=0),
        department_count=len({employee.department for employee in employees}),
    )
