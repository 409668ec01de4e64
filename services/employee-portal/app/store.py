"""Employee store capability and its two implementations.

``InMemoryEmployeeStore`` keeps records in a dict with auto-increment ids and
backs the tests and the demo mode. ``RemoteEmployeeStore`` proxies every call
to the HR API with the caller's bearer token and the service API key.
"""

import itertools
from typing import Any, Dict, Iterable, List, Optional, Protocol
from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from app.errors import EmployeeNotFoundError, TransportError
from app.models import Employee, EmployeeFormData
from py_hrone_observability import track_upstream_call

logger = structlog.get_logger(__name__)

SERVICE_NAME = "employee-portal"


class EmployeeStore(Protocol):
    async def list_employees(self) -> List[Employee]: ...

    async def create_employee(self, data: EmployeeFormData) -> Employee: ...

    async def update_employee(self, employee_id: str, data: EmployeeFormData) -> Employee: ...

    async def delete_employee(self, employee_id: str) -> None: ...


class InMemoryEmployeeStore:
    def __init__(self, employees: Iterable[EmployeeFormData] = ()):
        self._employees: Dict[str, Employee] = {}
        self._ids = itertools.count(1)
        for data in employees:
            self._insert(data)

    def _insert(self, data: EmployeeFormData) -> Employee:
        employee = Employee.from_form(str(next(self._ids)), data)
        self._employees[employee.id] = employee
        return employee

    async def list_employees(self) -> List[Employee]:
        return list(self._employees.values())

    async def create_employee(self, data: EmployeeFormData) -> Employee:
        return self._insert(data)

    async def update_employee(self, employee_id: str, data: EmployeeFormData) -> Employee:
        if employee_id not in self._employees:
            raise EmployeeNotFoundError(employee_id)
        employee = Employee.from_form(employee_id, data)
        self._employees[employee_id] = employee
        return employee

    async def delete_employee(self, employee_id: str) -> None:
        if self._employees.pop(employee_id, None) is None:
            raise EmployeeNotFoundError(employee_id)


class RemoteEmployeeStore:
    """Forwards CRUD calls to ``{base_url}/employees`` on the HR API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        api_key: str,
        access_token: str,
        timeout: Optional[float] = 10.0,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout

    def _headers(self, with_body: bool = False) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "X-API-Key": self.api_key,
            "Accept": "application/json",
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(
                method,
                url,
                headers=self._headers(with_body=json is not None),
                json=json,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("HR API unreachable", method=method, url=url, error=str(e))
            raise TransportError(None, f"HR API unreachable: {e}") from e

        if not response.is_success:
            logger.warning(
                "HR API call failed",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            raise TransportError(response.status_code, response.text)

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(502, "HR API returned a non-JSON body") from e

    @staticmethod
    def _parse(payload: Any) -> Employee:
        try:
            return Employee.model_validate(payload)
        except ValidationError as e:
            logger.error("HR API returned a malformed employee", error=str(e))
            raise TransportError(502, "Malformed employee record from HR API") from e

    @staticmethod
    def _body(data: EmployeeFormData) -> dict:
        return data.model_dump(mode="json", by_alias=True)

    @track_upstream_call("list_employees", SERVICE_NAME)
    async def list_employees(self) -> List[Employee]:
        response = await self._request("GET", "/employees")
        payload = self._json(response)
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.error("HR API returned a non-list employee collection", payload_type=type(payload).__name__)
            raise TransportError(502, "Malformed employee list from HR API")
        return [self._parse(item) for item in payload]

    @track_upstream_call("create_employee", SERVICE_NAME)
    async def create_employee(self, data: EmployeeFormData) -> Employee:
        response = await self._request("POST", "/employees", json=self._body(data))
        return self._parse(self._json(response))

    @track_upstream_call("update_employee", SERVICE_NAME)
    async def update_employee(self, employee_id: str, data: EmployeeFormData) -> Employee:
        response = await self._request("PUT", f"/employees/{quote(employee_id, safe='')}", json=self._body(data))
        return self._parse(self._json(response))

    @track_upstream_call("delete_employee", SERVICE_NAME)
    async def delete_employee(self, employee_id: str) -> None:
        await self._request("DELETE", f"/employees/{quote(employee_id, safe='')}")
