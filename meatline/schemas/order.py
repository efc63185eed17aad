from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field
from meatline.models import OrderStatusEnum, ProductUnitEnum
from .common import Quantity, LocalDatetime


class OrderItemCreate(BaseModel):
    """Позиция нового заказа"""
    product_id: int
    quantity: Quantity = Field(gt=0)


class OrderCreate(BaseModel):
    """Создание заказа; пустой items отклоняет сервис"""
    distributor_id: Optional[int] = None
    order_date: LocalDatetime
    delivery_date: LocalDatetime
    items: List[OrderItemCreate] = []
    notes: Optional[str] = None


class OrderUpdate(BaseModel):
    order_date: Optional[LocalDatetime] = None
    delivery_date: Optional[LocalDatetime] = None
    notes: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatusEnum
    notes: Optional[str] = None


class OrderItemAdjust(BaseModel):
    adjusted_quantity: Optional[Quantity] = None
    adjustment_reason: Optional[str] = None


class ProductShort(BaseModel):
    id: int
    code: str
    name: str
    unit: ProductUnitEnum

    class Config:
        from_attributes = True


class OrderItemResponse(BaseModel):
    """Позиция заказа"""
    id: int
    product_id: int
    product: Optional[ProductShort] = None
    quantity: Quantity
    original_quantity: Quantity
    adjusted_quantity: Optional[Quantity] = None
    adjustment_reason: Optional[str] = None
    effective_quantity: Quantity
    unit_price: Quantity
    total_price: Quantity

    class Config:
        from_attributes = True


class StatusHistoryResponse(BaseModel):
    id: int
    status: OrderStatusEnum
    changed_by: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Ответ с данными заказа"""
    id: int
    order_number: str
    distributor_id: int
    order_date: datetime
    delivery_date: datetime
    status: OrderStatusEnum
    total_amount: Quantity
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []
    status_history: List[StatusHistoryResponse] = []

    class Config:
        from_attributes = True
