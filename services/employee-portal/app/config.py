"""Environment configuration for the employee portal."""

import os
from functools import lru_cache

from pydantic import BaseModel

STORE_REMOTE = "remote"
STORE_MEMORY = "memory"


class PortalSettings(BaseModel):
    hr_api_base_url: str = "http://localhost:8000"
    hr_api_key: str = ""
    hr_api_timeout: float = 10.0
    employee_store: str = STORE_REMOTE
    log_level: str = "INFO"
    json_logs: bool = True
    hsts: bool = True


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@lru_cache(maxsize=1)
def get_settings() -> PortalSettings:
    return PortalSettings(
        hr_api_base_url=os.getenv("HR_API_BASE_URL", "http://localhost:8000").rstrip("/"),
        hr_api_key=os.getenv("HR_API_KEY", ""),
        hr_api_timeout=float(os.getenv("HR_API_TIMEOUT", "10")),
        employee_store=os.getenv("EMPLOYEE_STORE", STORE_REMOTE).strip().lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        json_logs=_env_flag("JSON_LOGS", "true"),
        hsts=_env_flag("HSTS", "true"),
    )
