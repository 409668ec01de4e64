"""Errors raised around the employee store and the entry form."""

from typing import Dict, Optional

from pydantic import ValidationError

from app.models import EmployeeFormData


class TransportError(Exception):
    """The employee store answered with a non-success status, or not at all."""

    def __init__(self, status_code: Optional[int], detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP error! status: {status_code}" if status_code else detail)

    @property
    def retryable(self) -> bool:
        return self.status_code is None or self.status_code >= 500 or self.status_code == 429


class EmployeeNotFoundError(TransportError):
    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(404, f"Employee {employee_id} not found")


class FormValidationError(Exception):
    """Field-level problems with an employee form submission."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


_FIELD_NAMES = {"hireDate": "hire_date"}


def validate_form(raw: dict) -> EmployeeFormData:
    """Validate a form submission, collecting one message per field."""
    try:
        return EmployeeFormData.model_validate(raw)
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            location = error["loc"][0] if error["loc"] else "__root__"
            field = _FIELD_NAMES.get(str(location), str(location))
            errors.setdefault(field, error["msg"])
        raise FormValidationError(errors) from exc
