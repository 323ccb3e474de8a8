from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from .user import PackageInfo

class PackageOut(BaseModel):
    id: int
    name: str
    employees_limit: int
    price: float

    model_config = {
        "from_attributes": True
    }

class CheckoutRequest(BaseModel):
    package_name: str
    price: float = Field(..., gt=0)
    employee_limit: int = Field(..., gt=0)
    tracking_id: Optional[str] = None

class CheckoutSession(BaseModel):
    url: str
    tracking_id: str

class PaymentCreate(BaseModel):
    tracking_id: str = Field(..., min_length=1)
    transaction_id: Optional[str] = None
    package_name: str
    employee_limit: Optional[int] = None
    amount: float = Field(..., ge=0)

class PaymentOut(BaseModel):
    id: int
    hr_email: str
    package_name: str
    employee_limit: int
    amount: float
    tracking_id: str
    transaction_id: Optional[str] = None
    payment_date: datetime
    status: str

    model_config = {
        "from_attributes": True
    }

class PaymentResult(BaseModel):
    created: bool
    payment: PaymentOut

class LimitStatus(BaseModel):
    within_limit: bool
    current: int
    limit: int

class DowngradeResult(BaseModel):
    package: PackageInfo
    deactivated: int
