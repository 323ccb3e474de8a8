# assetverse/routers/packages.py
from fastapi import APIRouter, Depends, status
from typing import List

from assetverse.database import transaction
from assetverse.models.user import User
from assetverse.schemas.package import (
    CheckoutRequest, CheckoutSession, DowngradeResult, LimitStatus,
    PackageOut, PaymentCreate, PaymentOut, PaymentResult,
)
from assetverse.services.container import Services, get_services, get_checkout_gateway
from assetverse.services.payment_gateway import CheckoutGateway
from assetverse.utils.auth import require_hr

router = APIRouter()

@router.get("/packages", response_model=List[PackageOut])
def list_packages(services: Services = Depends(get_services)):
    return services.packages.list_packages()

@router.get("/packages/limit", response_model=LimitStatus)
def get_employee_limit(services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    """How many employees the current HR has against its package ceiling"""
    return services.packages.check_employee_limit(current_user.email)

@router.post("/create-checkout-session", response_model=CheckoutSession)
def create_checkout_session(payload: CheckoutRequest, gateway: CheckoutGateway = Depends(get_checkout_gateway)):
    return gateway.create_checkout_session(
        payload.package_name, payload.price, payload.employee_limit, payload.tracking_id
    )

@router.post("/payments", response_model=PaymentResult)
def record_payment(payload: PaymentCreate, services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    """Record a completed checkout; repeating a tracking id is safe"""
    with transaction(services.db):
        payment, created = services.packages.record_payment(
            payload.tracking_id,
            current_user.email,
            payload.package_name,
            payload.amount,
            employee_limit=payload.employee_limit,
            transaction_id=payload.transaction_id,
        )
    return {"created": created, "payment": payment}

@router.get("/payments/history", response_model=List[PaymentOut])
def payment_history(services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    return services.packages.payment_history(current_user.email)

@router.post("/downgrade-to-free", response_model=DowngradeResult, status_code=status.HTTP_200_OK)
def downgrade_to_free(services: Services = Depends(get_services), current_user: User = Depends(require_hr)):
    with transaction(services.db):
        package, deactivated = services.packages.downgrade_to_free(current_user.email)
    return {"package": package, "deactivated": deactivated}
