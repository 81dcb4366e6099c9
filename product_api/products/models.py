from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    category: str = Field(..., min_length=1)
    inStock: bool = True
    tags: List[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """Partial body for PUT: any subset of the mutable fields."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    category: Optional[str] = Field(None, min_length=1)
    inStock: Optional[bool] = None
    tags: Optional[List[str]] = None

    # defaults are not validated, so this only fires for an explicit null
    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class Product(BaseModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    inStock: bool = True
    tags: List[str] = []
    createdAt: datetime


MUTABLE_FIELDS = tuple(ProductCreate.model_fields)
