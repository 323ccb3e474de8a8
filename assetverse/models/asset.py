# assetverse/models/asset.py
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from assetverse.database import Base
import enum

class ProductType(str, enum.Enum):
    RETURNABLE = "returnable"
    NON_RETURNABLE = "non-returnable"

class Asset(Base):
    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint("available_quantity >= 0", name="ck_assets_available_quantity"),
        # Never reuse the id of a deleted asset
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    product_name = Column(String, nullable=False, index=True)
    product_image = Column(String, nullable=False)
    product_type = Column(String, nullable=False)
    hr_email = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=False)
    available_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
