from pydantic import BaseModel, EmailStr
from typing import Optional, Literal
from datetime import datetime

class PackageInfo(BaseModel):
    name: str
    employees_limit: int
    price: float
    activated_at: Optional[str] = None

class UserCreate(BaseModel):
    name: str
    email: EmailStr
    role: Literal["hr", "employee"]
    profile_image: Optional[str] = None
    date_of_birth: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: str
    profile_image: Optional[str] = None
    date_of_birth: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    company_id: Optional[str] = None
    package: Optional[PackageInfo] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

class UserRole(BaseModel):
    email: str
    role: str
