from pydantic import BaseModel
from datetime import datetime
from typing import Optional, Literal
from enum import Enum

class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class AssetRequestCreate(BaseModel):
    asset_id: int
    note: Optional[str] = None

class RequestAction(BaseModel):
    action: Literal["approved", "rejected"]

class AssetRequestOut(BaseModel):
    id: int
    asset_id: Optional[int] = None
    asset_name: str
    asset_type: str
    requester_name: str
    requester_email: str
    hr_email: str
    company_name: str
    request_date: datetime
    approval_date: Optional[datetime] = None
    request_status: RequestStatus
    note: Optional[str] = None
    processed_by: Optional[str] = None

    model_config = {
        "from_attributes": True
    }
