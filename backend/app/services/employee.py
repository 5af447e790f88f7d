# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from app.models.enums import EmploymentTerm


class EmployeeInfo(BaseModel):
    """Employee metadata from the Employee Service."""

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    employment_term: EmploymentTerm | None = None  # selects the default monthly rate
    birth_date: date | None = None  # required for birthday leave


@runtime_checkable
class EmployeeService(Protocol):
    """Interface for the Employee Service."""

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch employee metadata. Returns None if not found."""
        ...

    async def list_employees(self) -> list[EmployeeInfo]:
        """List all employees."""
        ...


class InMemoryEmployeeService:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._employees: dict[uuid.UUID, EmployeeInfo] = {}

    def seed(self, employee: EmployeeInfo) -> None:
        """Seed an employee for testing."""
        self._employees[employee.id] = employee

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch employee metadata. Returns None if not found."""
        return self._employees.get(employee_id)

    async def list_employees(self) -> list[EmployeeInfo]:
        """List all employees."""
        return list(self._employees.values())


_employee_service: EmployeeService = InMemoryEmployeeService()


def get_employee_service() -> EmployeeService:
    """FastAPI dependency for the Employee Service."""
    return _employee_service


def set_employee_service(service: EmployeeService) -> None:
    """Override the service (for testing or production wiring)."""
    global _employee_service
    _employee_service = service
