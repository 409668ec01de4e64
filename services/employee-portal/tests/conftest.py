import pytest
import httpx

from app.models import Employee, EmployeeFormData
from app.store import InMemoryEmployeeStore


@pytest.fixture
def make_employee():
    def _make(
        employee_id,
        name,
        department="Engineering",
        salary=50000,
        position="Engineer",
        email=None,
        hire_date="2020-01-01",
    ):
        return Employee(
            id=str(employee_id),
            name=name,
            position=position,
            department=department,
            salary=salary,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            phone="+1-555-0100",
            hire_date=hire_date,
        )
    return _make


@pytest.fixture
def trio(make_employee):
    """Bob/Sales/50000, Ann/Eng/90000, Cid/Eng/70000 in that order."""
    return [
        make_employee(1, "Bob", department="Sales", salary=50000),
        make_employee(2, "Ann", department="Eng", salary=90000),
        make_employee(3, "Cid", department="Eng", salary=70000),
    ]


@pytest.fixture
def form_payload():
    return {
        "name": "John Doe",
        "position": "Software Engineer",
        "department": "Engineering",
        "salary": 120000,
        "email": "john.doe@example.com",
        "phone": "+1-555-0123",
        "hireDate": "2024-02-01",
    }


@pytest.fixture
def form_data(form_payload):
    return EmployeeFormData.model_validate(form_payload)


@pytest.fixture
def memory_store(trio):
    store = InMemoryEmployeeStore()
    for employee in trio:
        store._insert(EmployeeFormData(**employee.model_dump(exclude={"id"})))
    return store


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-access-token"}


@pytest.fixture
def portal(monkeypatch, memory_store):
    """The FastAPI app running against the in-memory store."""
    from app import main
    from app.config import PortalSettings, get_settings
    from py_hrone_auth import jwt_dep

    monkeypatch.setattr(jwt_dep, "JWKS_URL", "")
    main.app.dependency_overrides[get_settings] = lambda: PortalSettings(employee_store="memory")
    main.app.state.memory_store = memory_store
    yield main.app
    main.app.dependency_overrides.clear()
    del main.app.state.memory_store


@pytest.fixture
def client(portal):
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=portal), base_url="http://test")
