# assetverse/models/assignment.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from assetverse.database import Base
import enum
from datetime import datetime

class AssignmentStatus(str, enum.Enum):
    ASSIGNED = "assigned"
    RETURNED = "returned"

class AssetAssignment(Base):
    __tablename__ = "asset_assignments"

    id = Column(Integer, primary_key=True, index=True)
    # Name and type are copied so history survives asset deletion
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="SET NULL"), nullable=True, index=True)
    asset_name = Column(String, nullable=False)
    asset_type = Column(String, nullable=False)
    employee_email = Column(String, nullable=False, index=True)
    employee_name = Column(String, nullable=False)
    hr_email = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=False)
    assignment_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    return_date = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default=AssignmentStatus.ASSIGNED.value)
