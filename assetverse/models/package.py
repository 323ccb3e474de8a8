# assetverse/models/package.py
from sqlalchemy import Column, Integer, String, Float, DateTime
from assetverse.database import Base
from datetime import datetime

class Package(Base):
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    employees_limit = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)

class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    hr_email = Column(String, nullable=False, index=True)
    package_name = Column(String, nullable=False)
    employee_limit = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)
    # Idempotency key for recording a confirmed checkout
    tracking_id = Column(String, unique=True, nullable=False)
    transaction_id = Column(String, nullable=True)
    payment_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    status = Column(String, nullable=False, default="paid")

    def __repr__(self):
        return f"<Payment(id={self.id}, hr_email='{self.hr_email}', tracking_id='{self.tracking_id}')>"
