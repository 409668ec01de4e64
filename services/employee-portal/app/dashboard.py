"""Caller-side state for the employee table.

The dashboard owns the last employee snapshot plus the filter, sort and page
parameters, and recomputes the view from them on demand. Mutations go through
the store, and only a successful re-fetch replaces the snapshot.
"""

from dataclasses import dataclass
from typing import List, Optional

import structlog

from app.errors import TransportError
from app.models import (
    DerivedPage,
    Employee,
    EmployeeFormData,
    EmployeeSummary,
    FilterCriteria,
    PageRequest,
    SortSpec,
)
from app.store import EmployeeStore
from app.view_model import derive, filter_employees, summarize, total_pages

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    message: str
    retryable: bool


@dataclass(frozen=True)
class DashboardView:
    page: DerivedPage
    summary: EmployeeSummary
    error: Optional[Notification] = None


class EmployeeDashboard:
    def __init__(
        self,
        store: EmployeeStore,
        criteria: Optional[FilterCriteria] = None,
        sort: Optional[SortSpec] = None,
        page_size: int = 10,
    ):
        self.store = store
        self.employees: List[Employee] = []
        self.criteria = criteria or FilterCriteria()
        self.sort = sort or SortSpec()
        self.page = PageRequest(page_number=1, page_size=page_size)
        self.error: Optional[Notification] = None

    def _fail(self, action: str, exc: TransportError) -> None:
        logger.warning(
            "Employee store call failed",
            action=action,
            status_code=exc.status_code,
            error=str(exc),
        )
        self.error = Notification(
            message=f"Failed to {action}. Please try again.",
            retryable=exc.retryable,
        )

    async def refresh(self) -> bool:
        """Reload the full list. On failure the previous snapshot is kept."""
        try:
            self.employees = await self.store.list_employees()
        except TransportError as exc:
            self._fail("load employees", exc)
            return False
        self.error = None
        return True

    async def create_employee(self, data: EmployeeFormData) -> bool:
        try:
            await self.store.create_employee(data)
        except TransportError as exc:
            self._fail("create employee", exc)
            return False
        return await self.refresh()

    async def update_employee(self, employee_id: str, data: EmployeeFormData) -> bool:
        try:
            await self.store.update_employee(employee_id, data)
        except TransportError as exc:
            self._fail("update employee", exc)
            return False
        return await self.refresh()

    async def delete_employee(self, employee_id: str) -> bool:
        try:
            await self.store.delete_employee(employee_id)
        except TransportError as exc:
            self._fail("delete employee", exc)
            return False
        return await self.refresh()

    def apply_filter(self, criteria: FilterCriteria) -> None:
        self.criteria = criteria
        self.page = PageRequest(page_number=1, page_size=self.page.page_size)

    def set_page_size(self, page_size: int) -> None:
        self.page = PageRequest(page_number=1, page_size=page_size)

    def set_sort(self, sort: SortSpec) -> None:
        self.sort = sort

    def go_to_page(self, page_number: int) -> None:
        filtered = len(filter_employees(self.employees, self.criteria))
        last_page = max(total_pages(filtered, self.page.page_size), 1)
        clamped = min(max(page_number, 1), last_page)
        self.page = PageRequest(page_number=clamped, page_size=self.page.page_size)

    def view(self) -> DashboardView:
        return DashboardView(
            page=derive(self.employees, self.criteria, self.sort, self.page),
            summary=summarize(self.employees),
            error=self.error,
        )
