from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.models import User
from meatline.schemas import ProductCreate, ProductUpdate, ProductResponse
from meatline.services import ProductService
from meatline.api.deps import get_db, get_current_user, require_admin
from meatline.api.responses import ok, dump, dump_list

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def list_products(
    is_active: Optional[bool] = None,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    products = await ProductService(session).list_products(is_active)
    return ok(dump_list(ProductResponse, products))


@router.get("/{product_id}")
async def get_product(
    product_id: int,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    product = await ProductService(session).get_product(product_id)
    return ok(dump(ProductResponse, product))


@router.post("", status_code=201)
async def create_product(
    body: ProductCreate,
    user: User = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    product = await ProductService(session).create_product(body)
    return ok(dump(ProductResponse, product))


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    body: ProductUpdate,
    user: User = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    product = await ProductService(session).update_product(product_id, body)
    return ok(dump(ProductResponse, product))


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    user: User = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    await ProductService(session).delete_product(product_id)
    return ok(message="Product deleted")
