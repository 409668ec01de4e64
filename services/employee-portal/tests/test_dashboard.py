import pytest

from app.dashboard import EmployeeDashboard
from app.errors import TransportError
from app.models import FilterCriteria, SortSpec
from app.store import InMemoryEmployeeStore


class FlakyStore:
    """Delegates to an in-memory store unless told to fail."""

    def __init__(self, inner: InMemoryEmployeeStore):
        self.inner = inner
        self.fail_with = None
        self.list_calls = 0

    def _check(self):
        if self.fail_with is not None:
            raise TransportError(self.fail_with, "upstream unavailable")

    async def list_employees(self):
        self.list_calls += 1
        self._check()
        return await self.inner.list_employees()

    async def create_employee(self, data):
        self._check()
        return await self.inner.create_employee(data)

    async def update_employee(self, employee_id, data):
        self._check()
        return await self.inner.update_employee(employee_id, data)

    async def delete_employee(self, employee_id):
        self._check()
        return await self.inner.delete_employee(employee_id)


@pytest.fixture
def store(memory_store):
    return FlakyStore(memory_store)


@pytest.mark.asyncio
async def test_refresh_then_view(store):
    dashboard = EmployeeDashboard(store, page_size=2)

    assert await dashboard.refresh()
    view = dashboard.view()

    assert [row.name for row in view.page.rows] == ["Ann", "Bob"]
    assert view.page.total_pages == 2
    assert view.summary.total == 3
    assert view.error is None


@pytest.mark.asyncio
async def test_mutations_refetch_the_full_list(store, form_data):
    dashboard = EmployeeDashboard(store)
    await dashboard.refresh()
    calls_before = store.list_calls

    assert await dashboard.create_employee(form_data)
    assert await dashboard.update_employee("1", form_data)
    assert await dashboard.delete_employee("2")

    assert store.list_calls == calls_before + 3
    assert sorted(e.id for e in dashboard.employees) == ["1", "3", "4"]


@pytest.mark.asyncio
async def test_filter_and_page_size_changes_reset_to_first_page(store):
    dashboard = EmployeeDashboard(store, page_size=1)
    await dashboard.refresh()
    dashboard.go_to_page(3)
    assert dashboard.page.page_number == 3

    dashboard.apply_filter(FilterCriteria(department="Eng"))
    assert dashboard.page.page_number == 1
    assert dashboard.page.page_size == 1

    dashboard.go_to_page(2)
    dashboard.set_page_size(5)
    assert (dashboard.page.page_number, dashboard.page.page_size) == (1, 5)


@pytest.mark.asyncio
async def test_sort_change_keeps_the_page(store):
    dashboard = EmployeeDashboard(store, page_size=1)
    await dashboard.refresh()
    dashboard.go_to_page(2)

    dashboard.set_sort(SortSpec(key="salary", direction="desc"))

    assert dashboard.page.page_number == 2
    assert [row.name for row in dashboard.view().page.rows] == ["Cid"]


@pytest.mark.asyncio
async def test_go_to_page_clamps_to_available_pages(store):
    dashboard = EmployeeDashboard(store, page_size=2)
    await dashboard.refresh()

    dashboard.go_to_page(9)
    assert dashboard.page.page_number == 2
    dashboard.go_to_page(-4)
    assert dashboard.page.page_number == 1

    dashboard.apply_filter(FilterCriteria(department="Nowhere"))
    dashboard.go_to_page(3)
    assert dashboard.page.page_number == 1


@pytest.mark.asyncio
async def test_failed_refresh_keeps_snapshot_and_reports_error(store):
    dashboard = EmployeeDashboard(store)
    await dashboard.refresh()

    store.fail_with = 503
    assert not await dashboard.refresh()

    view = dashboard.view()
    assert view.summary.total == 3
    assert view.error.message == "Failed to load employees. Please try again."
    assert view.error.retryable

    store.fail_with = None
    assert await dashboard.refresh()
    assert dashboard.view().error is None


@pytest.mark.asyncio
async def test_failed_mutation_does_not_refetch(store, form_data):
    dashboard = EmployeeDashboard(store)
    await dashboard.refresh()
    calls_before = store.list_calls

    store.fail_with = 400
    assert not await dashboard.create_employee(form_data)

    assert store.list_calls == calls_before
    assert dashboard.error.message == "Failed to create employee. Please try again."
    assert not dashboard.error.retryable
    assert len(dashboard.employees) == 3
