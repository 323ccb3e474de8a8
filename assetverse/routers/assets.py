# assetverse/routers/assets.py
from fastapi import APIRouter, Depends, status
from typing import List, Optional

from assetverse.database import transaction
from assetverse.models.user import User
from assetverse.schemas.asset import AssetCreate, AssetUpdate, AssetRestock, AssetOut
from assetverse.services.container import Services, get_services
from assetverse.utils.auth import get_current_user, require_hr

router = APIRouter()

@router.post("/", response_model=AssetOut, status_code=status.HTTP_201_CREATED)
def create_asset(asset: AssetCreate, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    """Add an asset to the HR's inventory"""
    with transaction(services.db):
        created = services.inventory.create_asset(
            **asset.model_dump(),
            hr_email=current_user.email,
            company_name=current_user.company_name,
        )
    return created

@router.get("/", response_model=List[AssetOut])
def list_assets(
    product_type: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    services: Services = Depends(get_services),
    current_user: User = Depends(require_hr)
):
    """Assets owned by the current HR"""
    return services.inventory.list_assets(current_user.email, product_type, skip, limit)

@router.get("/available", response_model=List[AssetOut])
def list_available_assets(
    hr_email: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    services: Services = Depends(get_services),
    current_user: User = Depends(get_current_user)
):
    """Assets with stock left, optionally from one company"""
    return services.inventory.list_available(hr_email, skip, limit)

@router.get("/{asset_id}", response_model=AssetOut)
def get_asset(asset_id: str, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    return services.inventory.get_asset(asset_id, current_user.email)

@router.patch("/{asset_id}", response_model=AssetOut)
def update_asset(asset_id: str, asset_update: AssetUpdate, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    with transaction(services.db):
        asset = services.inventory.update_asset(asset_id, current_user.email, asset_update.model_dump(exclude_unset=True))
    return asset

@router.post("/{asset_id}/restock", response_model=AssetOut)
def restock_asset(asset_id: str, payload: AssetRestock, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    """Add units to an asset's available stock"""
    with transaction(services.db):
        asset = services.inventory.restock(asset_id, current_user.email, payload.quantity)
    return asset

@router.delete("/{asset_id}")
def delete_asset(asset_id: str, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    with transaction(services.db):
        services.inventory.delete_asset(asset_id, current_user.email)
    return {"message": "Asset deleted successfully"}
