import pytest

from app.config import STORE_MEMORY, STORE_REMOTE, get_settings
from app.seed import DEMO_EMPLOYEES, seeded_store


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_defaults(monkeypatch, fresh_settings):
    for name in ("HR_API_BASE_URL", "HR_API_KEY", "HR_API_TIMEOUT", "EMPLOYEE_STORE", "JSON_LOGS", "HSTS"):
        monkeypatch.delenv(name, raising=False)

    settings = fresh_settings()

    assert settings.employee_store == STORE_REMOTE
    assert settings.hr_api_timeout == 10.0
    assert settings.json_logs is True
    assert settings.hsts is True


def test_environment_overrides(monkeypatch, fresh_settings):
    monkeypatch.setenv("HR_API_BASE_URL", "https://hr.example.com/api/")
    monkeypatch.setenv("HR_API_KEY", "secret-key")
    monkeypatch.setenv("HR_API_TIMEOUT", "2.5")
    monkeypatch.setenv("EMPLOYEE_STORE", " Memory ")
    monkeypatch.setenv("JSON_LOGS", "false")
    monkeypatch.setenv("HSTS", "off")

    settings = fresh_settings()

    assert settings.hr_api_base_url == "https://hr.example.com/api"
    assert settings.hr_api_key == "secret-key"
    assert settings.hr_api_timeout == 2.5
    assert settings.employee_store == STORE_MEMORY
    assert settings.json_logs is False
    assert settings.hsts is False


@pytest.mark.asyncio
async def test_demo_store_is_seeded():
    employees = await seeded_store().list_employees()

    assert len(employees) == len(DEMO_EMPLOYEES)
    assert [e.id for e in employees[:3]] == ["1", "2", "3"]
