from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from meatline.models import ProductUnitEnum


class ProductBase(BaseModel):
    """Базовая схема продукта"""
    name: str = Field(min_length=3)
    code: str = Field(min_length=3)
    unit: ProductUnitEnum = ProductUnitEnum.KG
    base_recipe: Optional[Dict[str, Any]] = None
    production_parameters: Optional[Dict[str, Any]] = None


class ProductCreate(ProductBase):
    """Создание продукта"""
    is_active: bool = True


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3)
    code: Optional[str] = Field(default=None, min_length=3)
    unit: Optional[ProductUnitEnum] = None
    base_recipe: Optional[Dict[str, Any]] = None
    production_parameters: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None


class ProductResponse(ProductBase):
    """Ответ с данными продукта"""
    id: int
    is_active: bool

    class Config:
        from_attributes = True
