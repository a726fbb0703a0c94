"""Employee and check (clock event) API routes.

Every handler asks AuthorizationService before touching state:
reads are open to anonymous callers, writes need a logged-in user,
and the target row must exist. Handlers then delegate to
EmployeeService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from pointage.auth.authorization import AuthorizationService
from pointage.auth.dependencies import get_authorization_service, get_current_user
from pointage.auth.models import Action, AuthProfile
from pointage.db.engine import get_db
from pointage.schemas.employee import (
    CheckCreate,
    CheckRead,
    CheckReplace,
    CheckUpdate,
    CountResponse,
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
)
from pointage.services.employee_service import EmployeeService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    return EmployeeService(db)


# ─── Employees ──────────────────────────────────────────

@router.post("/employees", response_model=EmployeeRead, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    _: AuthProfile = Depends(get_current_user),
    svc: EmployeeService = Depends(_svc),
):
    return await svc.create_employee(
        first_name=body.first_name, last_name=body.last_name, email=body.email
    )


@router.get("/employees/count", response_model=CountResponse)
async def count_employees(
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("App", 0, Action.READ)
    return CountResponse(count=await svc.count_employees())


@router.get("/employees", response_model=list[EmployeeRead])
async def list_employees(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("App", 0, Action.READ)
    return await svc.list_employees(limit=limit, offset=offset)


@router.get("/employees/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: int,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Employee", employee_id, Action.READ)
    return await svc.get_employee(employee_id)


@router.patch("/employees/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Employee", employee_id, Action.UPDATE)
    employee = await svc.get_employee(employee_id)
    return await svc.update_employee(employee, body.model_dump(exclude_unset=True))


@router.put("/employees/{employee_id}", response_model=EmployeeRead)
async def replace_employee(
    employee_id: int,
    body: EmployeeCreate,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Employee", employee_id, Action.UPDATE)
    employee = await svc.get_employee(employee_id)
    return await svc.update_employee(employee, body.model_dump())


@router.delete("/employees/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: int,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Employee", employee_id, Action.DELETE)
    await svc.delete_employee(await svc.get_employee(employee_id))
    return Response(status_code=204)


# ─── Checks ─────────────────────────────────────────────

@router.post("/checks/{employee_id}", response_model=CheckRead, status_code=201)
async def create_check(
    employee_id: int,
    body: CheckCreate,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    """Record a check-in (checkin=true) or check-out for an employee."""
    await authz.authorize("Employee", employee_id, Action.CREATE)
    return await svc.create_check(employee_id, checkin=body.checkin, date=body.date)


@router.get("/checks/count", response_model=CountResponse)
async def count_checks(
    employee_id: Optional[int] = None,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("App", 0, Action.READ)
    return CountResponse(count=await svc.count_checks(employee_id))


@router.get("/checks", response_model=list[CheckRead])
async def list_checks(
    employee_id: Optional[int] = None,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("App", 0, Action.READ)
    return await svc.list_checks(employee_id=employee_id, limit=limit, offset=offset)


@router.get("/checks/{check_id}", response_model=CheckRead)
async def get_check(
    check_id: int,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Check", check_id, Action.READ)
    return await svc.get_check(check_id)


@router.patch("/checks/{check_id}", response_model=CheckRead)
async def update_check(
    check_id: int,
    body: CheckUpdate,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Check", check_id, Action.UPDATE)
    check = await svc.get_check(check_id)
    return await svc.update_check(check, body.model_dump(exclude_unset=True))


@router.put("/checks/{check_id}", response_model=CheckRead)
async def replace_check(
    check_id: int,
    body: CheckReplace,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Check", check_id, Action.UPDATE)
    await authz.authorize("Employee", body.employee_id, Action.UPDATE)
    check = await svc.get_check(check_id)
    return await svc.update_check(check, body.model_dump())


@router.delete("/checks/{check_id}", status_code=204)
async def delete_check(
    check_id: int,
    authz: AuthorizationService = Depends(get_authorization_service),
    svc: EmployeeService = Depends(_svc),
):
    await authz.authorize("Check", check_id, Action.DELETE)
    await svc.delete_check(await svc.get_check(check_id))
    return Response(status_code=204)
