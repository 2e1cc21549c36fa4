"""Review API endpoints"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.exceptions import AuthorizationError, DuplicateResource, NotFound
from app.models.reservation import Reservation
from app.models.review import Review
from app.models.user import User, UserRole
from app.schemas.review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewListResponse,
)
from app.api.auth import get_current_active_user, require_role

router = APIRouter()
logger = structlog.get_logger()

OWNER_FIELDS = ("rating", "food_rating", "service_rating", "ambiance_rating", "comment")


async def _get_review(db: AsyncSession, review_id: UUID) -> Review:
    review = await db.get(Review, review_id)
    if not review:
        raise NotFound("Review", review_id)
    return review


def _check_owner(user: User, review: Review, action: str) -> None:
    if user.role == UserRole.CUSTOMER and review.customer_id != user.id:
        raise AuthorizationError(f"Not authorized to {action} this review")


@router.get("", response_model=ReviewListResponse)
async def list_reviews(
    rating: Optional[int] = Query(None, ge=1, le=5),
    verified: Optional[bool] = None,
    customer: Optional[UUID] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    """List public reviews, or every review written by one customer"""
    if customer:
        filters = [Review.customer_id == customer]
    else:
        filters = [Review.is_public == True]

    if rating:
        filters.append(Review.rating == rating)
    if verified is not None:
        filters.append(Review.is_verified == verified)

    total_result = await db.execute(select(func.count(Review.id)).where(*filters))
    total = total_result.scalar()

    offset = (page - 1) * limit
    result = await db.execute(
        select(Review)
        .where(*filters)
        .order_by(Review.created_at.desc())
        .offset(offset)
        .limit(limit)
    )

    return ReviewListResponse(
        items=result.scalars().all(),
        total=total,
        page=page,
        page_size=limit,
    )


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    current_user: User = Depends(require_role(UserRole.CUSTOMER)),
    db: AsyncSession = Depends(get_db),
):
    """Review one of your own reservations; a reservation takes one review"""
    reservation = await db.get(Reservation, review_data.reservation_id)
    if not reservation:
        raise NotFound("Reservation", review_data.reservation_id)

    if reservation.customer_id != current_user.id:
        raise AuthorizationError("Not authorized to review this reservation")

    review = Review(
        customer_id=current_user.id,
        reservation_id=reservation.id,
        rating=review_data.rating,
        food_rating=review_data.food_rating,
        service_rating=review_data.service_rating,
        ambiance_rating=review_data.ambiance_rating,
        comment=review_data.comment,
        is_verified=False,
        is_public=True,
    )
    db.add(review)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Rejected second review", reservation_id=str(review_data.reservation_id))
        raise DuplicateResource("Review already exists for this reservation")
    await db.refresh(review)

    logger.info("Review created", review_id=str(review.id), rating=review.rating)
    return review


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: UUID,
    review_data: ReviewUpdate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Owner edits ratings and comment; staff attach a response"""
    review = await _get_review(db, review_id)
    _check_owner(current_user, review, "modify")

    changes = review_data.model_dump(exclude_unset=True, exclude={"staff_response"})

    if current_user.role == UserRole.CUSTOMER:
        for field in OWNER_FIELDS:
            if changes.get(field) is not None:
                setattr(review, field, changes[field])

    if current_user.role == UserRole.STAFF and review_data.staff_response:
        review.staff_response = review_data.staff_response.comment
        review.responded_by = current_user.id
        review.responded_at = datetime.utcnow()

    await db.commit()
    await db.refresh(review)

    return review


@router.delete("/{review_id}")
async def delete_review(
    review_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete your own review, or hide any review (staff)"""
    review = await _get_review(db, review_id)
    _check_owner(current_user, review, "delete")

    if current_user.role == UserRole.STAFF:
        review.is_public = False
        await db.commit()
        logger.info("Review hidden", review_id=str(review_id))
        return {"message": "Review hidden successfully"}

    await db.delete(review)
    await db.commit()
    logger.info("Review deleted", review_id=str(review_id))
    return {"message": "Review deleted successfully"}


@router.post("/{review_id}/verify", response_model=ReviewResponse)
async def verify_review(
    review_id: UUID,
    current_user: User = Depends(require_role(UserRole.STAFF)),
    db: AsyncSession = Depends(get_db),
):
    """Toggle the verified mark (staff only)"""
    review = await _get_review(db, review_id)
    review.is_verified = not review.is_verified
    await db.commit()
    await db.refresh(review)

    return review
