from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import Optional

class AssignAsset(BaseModel):
    employee_email: EmailStr
    employee_name: Optional[str] = None

class AssignmentOut(BaseModel):
    id: int
    asset_id: Optional[int] = None
    asset_name: str
    asset_type: str
    employee_email: str
    employee_name: str
    hr_email: str
    company_name: str
    assignment_date: datetime
    return_date: Optional[datetime] = None
    status: str

    model_config = {
        "from_attributes": True
    }
