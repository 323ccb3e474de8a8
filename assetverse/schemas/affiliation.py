from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import Optional

class AffiliationCreate(BaseModel):
    employee_email: EmailStr
    employee_name: Optional[str] = None

class AffiliationOut(BaseModel):
    id: int
    hr_email: str
    employee_email: str
    employee_name: str
    company_name: str
    company_logo: Optional[str] = None
    affiliation_date: datetime
    status: str

    model_config = {
        "from_attributes": True
    }

class EmployeeSummary(BaseModel):
    """One row of an HR's employee list"""
    employee_email: str
    employee_name: str
    profile_image: Optional[str] = None
    affiliation_date: datetime
    assets_count: int = 0

class CompanySummary(BaseModel):
    """One company an employee currently belongs to"""
    hr_email: str
    company_name: str
    company_logo: Optional[str] = None
    affiliation_date: datetime

class TeamMember(BaseModel):
    employee_email: str
    employee_name: str
    profile_image: Optional[str] = None
    date_of_birth: Optional[str] = None
