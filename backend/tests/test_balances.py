"""API tests for balances, adjustments and employee leave rates."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from app.models.audit import AuditLog
from app.models.enums import EmploymentTerm
from app.services.employee import EmployeeInfo

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.services.employee import InMemoryEmployeeService

HR_ID = uuid.uuid4()
HR_HEADERS = {"X-User-Id": str(HR_ID), "X-Role": "hr"}


def _seed_employee(svc: InMemoryEmployeeService, term: EmploymentTerm = EmploymentTerm.PART_TIME) -> uuid.UUID:
    emp_id = uuid.uuid4()
    svc.seed(
        EmployeeInfo(id=emp_id, first_name="Dev", last_name="Nair", email="dev@example.com", employment_term=term)
    )
    return emp_id


def _adjustment(employee_id: uuid.UUID, amount: str, target: str = "LEAVE_BALANCE") -> dict[str, str]:
    return {"employee_id": str(employee_id), "target": target, "amount_days": amount, "reason": "Correction"}


async def test_balance_without_row_reads_zero(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)

    resp = await async_client.get(f"/employees/{emp_id}/balance", headers=HR_HEADERS)

    assert resp.status_code == 200
    data = resp.json()
    assert data["employee_id"] == str(emp_id)
    assert Decimal(data["allocated_days"]) == 0
    assert Decimal(data["remaining_days"]) == 0
    assert data["rate_of_leave"] is None
    assert Decimal(data["effective_monthly_rate"]) == 0
    assert data["updated_at"] is None


async def test_employee_reads_own_balance_only(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)
    other_id = _seed_employee(employee_service)
    own_headers = {"X-User-Id": str(emp_id)}

    assert (await async_client.get(f"/employees/{emp_id}/balance", headers=own_headers)).status_code == 200
    assert (await async_client.get(f"/employees/{other_id}/balance", headers=own_headers)).status_code == 403


async def test_leave_balance_adjustments(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)

    resp = await async_client.post("/adjustments", json=_adjustment(emp_id, "4.5"), headers=HR_HEADERS)
    assert resp.status_code == 201
    assert Decimal(resp.json()["allocated_days"]) == Decimal("4.5")

    # debits may take the balance below zero
    resp = await async_client.post("/adjustments", json=_adjustment(emp_id, "-6"), headers=HR_HEADERS)
    assert resp.status_code == 201
    data = resp.json()
    assert Decimal(data["allocated_days"]) == Decimal("-1.5")
    assert Decimal(data["remaining_days"]) == Decimal("-1.5")
    assert data["updated_at"] is not None


async def test_comp_off_adjustments(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)

    resp = await async_client.post("/adjustments", json=_adjustment(emp_id, "2", "COMP_OFF"), headers=HR_HEADERS)
    assert resp.status_code == 201
    assert Decimal(resp.json()["comp_off_balance_days"]) == Decimal(2)
    assert Decimal(resp.json()["allocated_days"]) == 0

    resp = await async_client.post("/adjustments", json=_adjustment(emp_id, "-3", "COMP_OFF"), headers=HR_HEADERS)
    assert resp.status_code == 400
    assert "comp-off balance negative" in resp.json()["detail"]


async def test_adjustment_requires_hr(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)

    resp = await async_client.post(
        "/adjustments", json=_adjustment(emp_id, "5"), headers={"X-User-Id": str(emp_id), "X-Role": "employee"}
    )

    assert resp.status_code == 403


async def test_zero_adjustment_rejected(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)

    resp = await async_client.post("/adjustments", json=_adjustment(emp_id, "0"), headers=HR_HEADERS)

    assert resp.status_code == 422


async def test_adjustment_writes_audit(
    async_client: AsyncClient, db_session: AsyncSession, employee_service: InMemoryEmployeeService
):
    emp_id = _seed_employee(employee_service)
    await async_client.post("/adjustments", json=_adjustment(emp_id, "3"), headers=HR_HEADERS)

    result = await db_session.execute(select(AuditLog).where(col(AuditLog.entity_id) == str(emp_id)))
    entry = result.scalar_one()

    assert entry.action == "ADJUST"
    assert entry.entity_type == "LEAVE_BALANCE"
    assert entry.actor_id == HR_ID
    adjustment = entry.after_json["adjustment"]
    assert adjustment["target"] == "LEAVE_BALANCE"
    assert adjustment["amount_days"] == "3"
    assert adjustment["reason"] == "Correction"


async def test_adjustment_history(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)
    await async_client.post("/adjustments", json=_adjustment(emp_id, "4"), headers=HR_HEADERS)
    await async_client.post("/adjustments", json=_adjustment(emp_id, "-1.5"), headers=HR_HEADERS)

    resp = await async_client.get(f"/employees/{emp_id}/adjustments", headers=HR_HEADERS)

    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    latest, first = data["items"]
    assert Decimal(latest["amount_days"]) == Decimal("-1.5")
    assert Decimal(latest["previous_days"]) == Decimal(4)
    assert Decimal(latest["new_days"]) == Decimal("2.5")
    assert Decimal(first["previous_days"]) == 0
    assert Decimal(first["new_days"]) == Decimal(4)
    assert first["adjusted_by"] == str(HR_ID)
    assert first["target"] == "LEAVE_BALANCE"


async def test_adjustment_history_records_comp_off(
    async_client: AsyncClient, employee_service: InMemoryEmployeeService
):
    emp_id = _seed_employee(employee_service)
    await async_client.post("/adjustments", json=_adjustment(emp_id, "2", "COMP_OFF"), headers=HR_HEADERS)

    resp = await async_client.get(f"/employees/{emp_id}/adjustments", headers=HR_HEADERS)

    (entry,) = resp.json()["items"]
    assert entry["target"] == "COMP_OFF"
    assert Decimal(entry["new_days"]) == Decimal(2)


async def test_adjustment_history_visible_to_owner_only(
    async_client: AsyncClient, employee_service: InMemoryEmployeeService
):
    emp_id = _seed_employee(employee_service)
    other_id = _seed_employee(employee_service)
    await async_client.post("/adjustments", json=_adjustment(emp_id, "1"), headers=HR_HEADERS)
    own_headers = {"X-User-Id": str(emp_id)}

    own = await async_client.get(f"/employees/{emp_id}/adjustments", headers=own_headers)
    assert own.status_code == 200
    assert own.json()["total"] == 1
    other = await async_client.get(f"/employees/{other_id}/adjustments", headers=own_headers)
    assert other.status_code == 403


async def test_leave_rate_override(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)
    await async_client.put("/leave-rates/part_time", json={"leave_rate": "0.75"}, headers=HR_HEADERS)

    before = await async_client.get(f"/employees/{emp_id}/balance", headers=HR_HEADERS)
    assert Decimal(before.json()["effective_monthly_rate"]) == Decimal("0.75")

    resp = await async_client.put(
        f"/employees/{emp_id}/leave-rate", json={"rate_of_leave": "2"}, headers=HR_HEADERS
    )
    assert resp.status_code == 200
    assert Decimal(resp.json()["rate_of_leave"]) == Decimal(2)
    assert Decimal(resp.json()["effective_monthly_rate"]) == Decimal(2)

    cleared = await async_client.put(
        f"/employees/{emp_id}/leave-rate", json={"rate_of_leave": None}, headers=HR_HEADERS
    )
    assert cleared.status_code == 200
    assert cleared.json()["rate_of_leave"] is None
    assert Decimal(cleared.json()["effective_monthly_rate"]) == Decimal("0.75")


async def test_leave_rate_requires_hr(async_client: AsyncClient, employee_service: InMemoryEmployeeService):
    emp_id = _seed_employee(employee_service)

    resp = await async_client.put(
        f"/employees/{emp_id}/leave-rate", json={"rate_of_leave": "5"}, headers={"X-User-Id": str(emp_id)}
    )

    assert resp.status_code == 403
