# assetverse/models/user.py
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from assetverse.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, nullable=False)  # hr or employee
    profile_image = Column(String, nullable=True)
    date_of_birth = Column(String, nullable=True)

    # HR only
    company_name = Column(String, nullable=True)
    company_logo = Column(String, nullable=True)
    company_id = Column(String, nullable=True)
    package = Column(JSON, nullable=True)  # {name, employees_limit, price, activated_at}

    # Employee only: unassigned or affiliated
    status = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
