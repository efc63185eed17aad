from typing import List, Optional
import datetime as dt
from datetime import datetime
from pydantic import BaseModel, Field
from meatline.models import BatchStatusEnum
from .common import Quantity, LocalDatetime


class ProductSummary(BaseModel):
    """Строка дневной сводки по одному продукту"""
    product_id: int
    product_name: str
    product_code: str
    unit: str
    total_quantity: Quantity
    order_count: int


class DailySummary(BaseModel):
    date: dt.date
    total_orders: int
    summary: List[ProductSummary] = []


class BatchItemCreate(BaseModel):
    product_id: int
    planned_quantity: Quantity = Field(gt=0)


class BatchCreate(BaseModel):
    production_date: LocalDatetime
    total_capacity: Quantity = Field(gt=0)
    items: List[BatchItemCreate] = []
    notes: Optional[str] = None


class ActualQuantity(BaseModel):
    item_id: int
    actual_quantity: Quantity = Field(ge=0)


class BatchUpdate(BaseModel):
    status: Optional[BatchStatusEnum] = None
    notes: Optional[str] = None
    actual_quantities: Optional[List[ActualQuantity]] = None


class BatchItemResponse(BaseModel):
    id: int
    product_id: int
    planned_quantity: Quantity
    actual_quantity: Optional[Quantity] = None

    class Config:
        from_attributes = True


class BatchResponse(BaseModel):
    id: int
    batch_number: str
    production_date: datetime
    total_capacity: Quantity
    used_capacity: Quantity
    status: BatchStatusEnum
    notes: Optional[str] = None
    items: List[BatchItemResponse] = []

    class Config:
        from_attributes = True
