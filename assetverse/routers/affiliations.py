# assetverse/routers/affiliations.py
from fastapi import APIRouter, Depends, status
from typing import List

from assetverse.database import transaction
from assetverse.errors import NotFound
from assetverse.models.user import User
from assetverse.schemas.affiliation import AffiliationCreate, AffiliationOut, EmployeeSummary, CompanySummary, TeamMember
from assetverse.services.container import Services, get_services
from assetverse.utils.auth import require_employee, require_hr

router = APIRouter()

@router.post("/", response_model=AffiliationOut, status_code=status.HTTP_201_CREATED)
def add_employee(payload: AffiliationCreate, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    """Affiliate a registered employee with the current HR's company"""
    with transaction(services.db):
        employee = services.repos.users.by_email(payload.employee_email)
        if employee is None or employee.role != "employee":
            raise NotFound("Employee not found")
        services.packages.ensure_capacity(current_user.email)
        affiliation = services.affiliations.affiliate(
            current_user.email,
            employee.email,
            payload.employee_name or employee.name,
            current_user.company_name,
            current_user.company_logo,
        )
    return affiliation

@router.get("/hr", response_model=List[EmployeeSummary])
def get_my_employees(services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    return services.affiliations.list_active_for_hr(current_user.email)

@router.get("/employee", response_model=List[CompanySummary])
def get_my_companies(services: Services = Depends(get_services), current_user: User = Depends(require_employee)):
    return services.affiliations.list_active_for_employee(current_user.email)

@router.get("/employee-team", response_model=List[TeamMember])
def get_my_team(hr_email: str, services: Services = Depends(get_services), current_user: User = Depends(require_employee)):
    """Everyone currently working for ``hr_email``; the caller must be one of them"""
    return services.affiliations.list_team(hr_email, current_user.email)

@router.patch("/remove/{employee_email}")
def remove_employee(employee_email: str, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    with transaction(services.db):
        services.affiliations.deactivate(current_user.email, employee_email)
    return {"message": "Employee removed from the team"}
