"""Table registry API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.exceptions import DuplicateResource, NotFound, ValidationError
from app.models.reservation import Reservation
from app.models.table import Location, Table, TableStatus
from app.models.user import User, UserRole
from app.schemas.table import TableCreate, TableUpdate, TableResponse
from app.api.auth import require_role
from app.api.dependencies import get_locks
from app.services.locks import KeyedLocks, table_key

router = APIRouter()
logger = structlog.get_logger()


async def _get_table(db: AsyncSession, table_id: UUID) -> Table:
    table = await db.get(Table, table_id)
    if not table:
        raise NotFound("Table", table_id)
    return table


async def _commit_unique(db: AsyncSession, table_number: str) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Rejected duplicate table number", table_number=table_number)
        raise DuplicateResource("Table number already exists")


@router.get("", response_model=List[TableResponse])
async def list_tables(
    capacity: Optional[int] = Query(None, ge=1, le=20),
    location: Optional[Location] = None,
    area: Optional[str] = None,
    is_active: Optional[bool] = None,
    current_status: Optional[TableStatus] = None,
    db: AsyncSession = Depends(get_db),
):
    """List tables (public)"""
    query = select(Table)

    if capacity:
        query = query.where(Table.capacity >= capacity)
    if location:
        query = query.where(Table.location == location.value)
    if area:
        query = query.where(Table.area.ilike(f"%{area.strip()}%"))
    if is_active is not None:
        query = query.where(Table.is_active == is_active)
    if current_status:
        query = query.where(Table.current_status == current_status.value)

    result = await db.execute(query.order_by(Table.table_number))
    return result.scalars().all()


@router.get("/{table_id}", response_model=TableResponse)
async def get_table(
    table_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get table details"""
    return await _get_table(db, table_id)


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(
    table_data: TableCreate,
    current_user: User = Depends(require_role(UserRole.STAFF)),
    db: AsyncSession = Depends(get_db),
):
    """Create a table (staff only)"""
    table = Table(
        table_number=table_data.table_number,
        capacity=table_data.capacity,
        location=table_data.location.value,
        area=table_data.area,
        features=[feature.value for feature in table_data.features],
        price_per_person=table_data.price_per_person,
        is_active=True,
        current_status=TableStatus.AVAILABLE.value,
    )
    db.add(table)
    await _commit_unique(db, table_data.table_number)
    await db.refresh(table)

    logger.info("Table created", table_id=str(table.id), table_number=table.table_number)
    return table


@router.put("/{table_id}", response_model=TableResponse)
async def update_table(
    table_id: UUID,
    table_data: TableUpdate,
    current_user: User = Depends(require_role(UserRole.STAFF)),
    db: AsyncSession = Depends(get_db),
):
    """Update a table (staff only)"""
    table = await _get_table(db, table_id)
    changes = table_data.model_dump(exclude_unset=True, mode="json")

    for field in ("table_number", "capacity", "location", "area", "is_active", "current_status"):
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null", field=field)

    for field, value in changes.items():
        setattr(table, field, value)

    await _commit_unique(db, table.table_number)
    await db.refresh(table)

    logger.info("Table updated", table_id=str(table_id))
    return table


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_table(
    table_id: UUID,
    current_user: User = Depends(require_role(UserRole.STAFF)),
    db: AsyncSession = Depends(get_db),
    locks: KeyedLocks = Depends(get_locks),
):
    """Delete a table (staff only); its reservations keep their history without the reference"""
    async with locks.hold(table_key(table_id)):
        table = await _get_table(db, table_id)

        await db.execute(
            update(Reservation)
            .where(Reservation.table_id == table.id)
            .values(table_id=None)
        )
        await db.delete(table)
        await db.commit()

    logger.info("Table deleted", table_id=str(table_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
