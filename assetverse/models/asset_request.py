# assetverse/models/asset_request.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from assetverse.database import Base
import enum
from datetime import datetime

class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class AssetRequest(Base):
    __tablename__ = "asset_requests"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="SET NULL"), nullable=True, index=True)
    asset_name = Column(String, nullable=False)
    asset_type = Column(String, nullable=False)
    requester_name = Column(String, nullable=False)
    requester_email = Column(String, nullable=False, index=True)
    hr_email = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=False)
    request_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    approval_date = Column(DateTime, nullable=True)
    request_status = Column(String, nullable=False, default=RequestStatus.PENDING.value, index=True)
    note = Column(Text, nullable=True)
    processed_by = Column(String, nullable=True)
