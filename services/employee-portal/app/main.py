"""Employee Portal - authenticated proxy to the HR API plus the employee table view."""

from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
import structlog
from fastapi import FastAPI, Depends, Query, Request, status
from fastapi.responses import JSONResponse, Response

from app.config import STORE_MEMORY, PortalSettings, get_settings
from app.errors import TransportError
from app.models import (
    Employee,
    EmployeeFormData,
    EmployeeView,
    FilterCriteria,
    PageRequest,
    SortDirection,
    SortKey,
    SortSpec,
)
from app.seed import seeded_store
from app.store import EmployeeStore, RemoteEmployeeStore
from app.view_model import derive, summarize
from py_hrone_auth import AuthContext, SecurityHeadersMiddleware, get_auth_context
from py_hrone_observability import (
    configure_logging, LoggingMiddleware,
    MetricsMiddleware, timed_operation,
    get_metrics, get_metrics_content_type,
    log_employee_event, set_service_info, set_user_context,
)

logger = structlog.get_logger(__name__)

SERVICE_NAME = "employee-portal"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    configure_logging(
        service_name=SERVICE_NAME,
        store_mode=settings.employee_store,
        log_level=settings.log_level,
        json_logs=settings.json_logs,
    )
    set_service_info(SERVICE_NAME, app.version, store=settings.employee_store)

    logger.info("Starting employee-portal", store=settings.employee_store)
    app.state.http_client = httpx.AsyncClient(timeout=settings.hr_api_timeout)
    if settings.employee_store == STORE_MEMORY:
        app.state.memory_store = seeded_store()
    yield
    await app.state.http_client.aclose()
    logger.info("Shutting down employee-portal")

app = FastAPI(
    title="employee-portal",
    description="Employee management portal backed by the HR API",
    version="0.1.0",
    lifespan=lifespan
)


def get_employee_store(
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
    settings: PortalSettings = Depends(get_settings),
) -> EmployeeStore:
    """Pick the store for this request; the remote one forwards the caller's token."""
    set_user_context(auth.user_id)

    if settings.employee_store == STORE_MEMORY:
        store = getattr(request.app.state, "memory_store", None)
        if store is None:
            store = request.app.state.memory_store = seeded_store()
        return store

    return RemoteEmployeeStore(
        client=request.app.state.http_client,
        base_url=settings.hr_api_base_url,
        api_key=settings.hr_api_key,
        access_token=auth.access_token,
        timeout=settings.hr_api_timeout,
    )


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    status_code = exc.status_code or status.HTTP_502_BAD_GATEWAY
    logger.warning(
        "Employee store request failed",
        path=request.url.path,
        status_code=status_code,
        detail=exc.detail,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.detail or "Upstream request failed"},
    )


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME}


@app.get("/metrics")
async def get_service_metrics():
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


@app.get("/api/employees", response_model=List[Employee])
async def list_employees(store: EmployeeStore = Depends(get_employee_store)):
    """Full employee list, unfiltered."""
    return await store.list_employees()


@app.get("/api/employees/view", response_model=EmployeeView)
async def employee_view(
    store: EmployeeStore = Depends(get_employee_store),
    department: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    min_salary: Optional[str] = Query(None, alias="minSalary"),
    max_salary: Optional[str] = Query(None, alias="maxSalary"),
    sort: SortKey = Query(SortKey.NAME),
    direction: SortDirection = Query(SortDirection.ASC),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
):
    """Filtered, sorted page of the employee table with dashboard counters.

    The page is not clamped: asking past the last page returns no rows.
    """
    employees = await store.list_employees()
    criteria = FilterCriteria(
        department=department,
        search=search or "",
        min_salary=min_salary,
        max_salary=max_salary,
    )
    page_request = PageRequest(page_number=page, page_size=page_size)

    with timed_operation("derive_employee_view", employee_count=len(employees)):
        derived = derive(employees, criteria, SortSpec(key=sort, direction=direction), page_request)
        summary = summarize(employees)

    return EmployeeView(
        rows=derived.rows,
        total_filtered=derived.total_filtered,
        total_pages=derived.total_pages,
        page=page,
        page_size=page_size,
        summary=summary,
    )


@app.post("/api/employees", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee: EmployeeFormData,
    store: EmployeeStore = Depends(get_employee_store),
):
    """Create a new employee."""
    created = await store.create_employee(employee)
    log_employee_event("created", created.id, department=created.department)
    return created


@app.put("/api/employees/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    employee: EmployeeFormData,
    store: EmployeeStore = Depends(get_employee_store),
):
    """Replace an employee record."""
    updated = await store.update_employee(employee_id, employee)
    log_employee_event("updated", employee_id)
    return updated


@app.delete("/api/employees/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    store: EmployeeStore = Depends(get_employee_store),
):
    """Delete an employee."""
    await store.delete_employee(employee_id)
    log_employee_event("deleted", employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.add_middleware(LoggingMiddleware)
app.add_middleware(MetricsMiddleware, service_name=SERVICE_NAME)
app.add_middleware(SecurityHeadersMiddleware, hsts=get_settings().hsts)
