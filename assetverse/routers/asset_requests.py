# assetverse/routers/asset_requests.py
from fastapi import APIRouter, Depends, status
from typing import List, Optional

from assetverse.database import transaction
from assetverse.models.user import User
from assetverse.schemas.asset_request import AssetRequestCreate, AssetRequestOut, RequestAction
from assetverse.services.container import Services, get_services
from assetverse.utils.auth import require_employee, require_hr

router = APIRouter()

@router.post("/", response_model=AssetRequestOut, status_code=status.HTTP_201_CREATED)
def submit_request(payload: AssetRequestCreate, services: Services = Depends(get_services), current_user: User = Depends(require_employee)):
    """Ask an HR for one unit of an asset"""
    with transaction(services.db):
        request = services.requests.submit_request(
            payload.asset_id, current_user.email, current_user.name, payload.note
        )
    return request

@router.get("/hr", response_model=List[AssetRequestOut])
def get_hr_requests(
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    services: Services = Depends(get_services),
    current_user: User = Depends(require_hr)
):
    return services.requests.list_for_hr(current_user.email, status, skip, limit)

@router.get("/mine", response_model=List[AssetRequestOut])
def get_my_requests(
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    services: Services = Depends(get_services),
    current_user: User = Depends(require_employee)
):
    return services.requests.list_for_requester(current_user.email, status, skip, limit)

@router.patch("/{request_id}", response_model=AssetRequestOut)
def process_request(request_id: str, payload: RequestAction, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    """Approve or reject a pending request"""
    with transaction(services.db):
        request = services.requests.process_request(request_id, payload.action, current_user.email)
    return request
