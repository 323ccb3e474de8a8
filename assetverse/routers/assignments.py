# assetverse/routers/assignments.py
from fastapi import APIRouter, Depends
from typing import List, Optional

from assetverse.database import transaction
from assetverse.models.user import User
from assetverse.schemas.assignment import AssignAsset, AssignmentOut
from assetverse.services.container import Services, get_services
from assetverse.utils.auth import get_current_user, require_employee, require_hr

router = APIRouter()

@router.get("/assigned-assets", response_model=List[AssignmentOut])
def get_assigned_assets(
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    services: Services = Depends(get_services),
    current_user: User = Depends(require_employee)
):
    """Assets handed to the current employee"""
    return services.assignments.list_for_employee(current_user.email, status, skip, limit)

@router.patch("/assets/assign/{asset_id}", response_model=AssignmentOut)
def assign_asset(asset_id: str, payload: AssignAsset, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    """Hand one unit of an asset directly to an affiliated employee"""
    with transaction(services.db):
        assignment = services.assignments.assign_direct(
            asset_id, current_user.email, payload.employee_email, payload.employee_name
        )
    return assignment

@router.patch("/assets/return/{assignment_id}", response_model=AssignmentOut)
def return_asset(assignment_id: str, services: Services = Depends(get_services), current_user: User = Depends(get_current_user)):
    """Return a returnable asset; the holder or the owning HR may do this"""
    with transaction(services.db):
        assignment = services.assignments.return_asset(assignment_id, current_user.email)
    return assignment
