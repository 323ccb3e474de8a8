# assetverse/routers/users.py
from fastapi import APIRouter, Depends, status

from assetverse.database import transaction
from assetverse.models.user import User
from assetverse.schemas.user import UserCreate, UserOut, UserRole
from assetverse.services.container import Services, get_services
from assetverse.utils.auth import get_current_user

router = APIRouter()

@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, services: Services = Depends(get_services)):
    """Register an HR or employee account (no auth; the identity provider already knows the user)"""
    with transaction(services.db):
        new_user = services.users.register(**user.model_dump())
    return new_user

@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user

@router.get("/{email}", response_model=UserOut)
def get_user(email: str, services: Services = Depends(get_services), current_user: User = Depends(get_current_user)):
    return services.users.get(email)

@router.get("/{email}/role", response_model=UserRole)
def get_user_role(email: str, services: Services = Depends(get_services), current_user: User = Depends(get_current_user)):
    user = services.users.get(email)
    return {"email": user.email, "role": user.role}
