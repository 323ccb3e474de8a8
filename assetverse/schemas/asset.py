from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from enum import Enum

class ProductType(str, Enum):
    RETURNABLE = "returnable"
    NON_RETURNABLE = "non-returnable"

class AssetCreate(BaseModel):
    product_name: str
    product_image: str
    product_type: ProductType
    available_quantity: int = Field(1, ge=0)

class AssetUpdate(BaseModel):
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    product_type: Optional[ProductType] = None

    @field_validator('product_name', 'product_image')
    @classmethod
    def not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError('must not be blank')
        return v

class AssetRestock(BaseModel):
    quantity: int = Field(..., gt=0)

class AssetOut(BaseModel):
    id: int
    product_name: str
    product_image: str
    product_type: str
    hr_email: str
    company_name: str
    available_quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
