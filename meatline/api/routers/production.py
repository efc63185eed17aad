from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.models import User, BatchStatusEnum
from meatline.schemas import BatchCreate, BatchUpdate, BatchResponse
from meatline.services import ProductionService
from meatline.exceptions import ValidationError
from meatline.utils.validators import parse_date, day_bounds
from meatline.api.deps import get_db, require_manager
from meatline.api.responses import ok, dump, dump_list

router = APIRouter(prefix="/production", tags=["production"])


@router.get("/summary")
async def daily_summary(
    date: Optional[str] = Query(default=None),
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    """Спрос на продукты за день: ?date=YYYY-MM-DD"""
    day = parse_date(date) if date else None
    if date and day is None:
        raise ValidationError("date must be in YYYY-MM-DD format")
    summary = await ProductionService(session).daily_summary(day)
    return ok(summary.model_dump(mode="json"))


@router.get("/batches")
async def list_batches(
    status: Optional[BatchStatusEnum] = None,
    start_date: Optional[str] = Query(default=None),
    end_date: Optional[str] = Query(default=None),
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    start = parse_date(start_date)
    end = parse_date(end_date)
    if end is not None:
        end = day_bounds(end)[1]
    batches = await ProductionService(session).list_batches(status, start, end)
    return ok(dump_list(BatchResponse, batches))


@router.post("/batches", status_code=201)
async def create_batch(
    body: BatchCreate,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    batch = await ProductionService(session).create_batch(
        user,
        production_date=body.production_date,
        total_capacity=body.total_capacity,
        items=[item.model_dump() for item in body.items],
        notes=body.notes,
    )
    return ok(dump(BatchResponse, batch))


@router.get("/batches/{batch_id}")
async def get_batch(
    batch_id: int,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    batch = await ProductionService(session).get_batch(batch_id)
    return ok(dump(BatchResponse, batch))


@router.put("/batches/{batch_id}")
async def update_batch(
    batch_id: int,
    body: BatchUpdate,
    user: User = Depends(require_manager),
    session: AsyncSession = Depends(get_db),
):
    batch = await ProductionService(session).update_batch(
        batch_id,
        status=body.status,
        notes=body.notes,
        actual_quantities=[q.model_dump() for q in body.actual_quantities] if body.actual_quantities else None,
    )
    return ok(dump(BatchResponse, batch))
