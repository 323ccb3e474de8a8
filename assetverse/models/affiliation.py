# assetverse/models/affiliation.py
from sqlalchemy import Column, Integer, String, DateTime, Index, text
from assetverse.database import Base
import enum
from datetime import datetime

class AffiliationStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class Affiliation(Base):
    __tablename__ = "affiliations"
    __table_args__ = (
        # At most one active row per pair; inactive rows are kept as history
        Index(
            "uq_affiliations_active_pair",
            "hr_email",
            "employee_email",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    hr_email = Column(String, nullable=False, index=True)
    employee_email = Column(String, nullable=False, index=True)
    employee_name = Column(String, nullable=False)
    company_name = Column(String, nullable=False)
    company_logo = Column(String, nullable=True)
    affiliation_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    status = Column(String, nullable=False, default=AffiliationStatus.ACTIVE.value)
