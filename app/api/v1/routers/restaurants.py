from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.restaurants import (
    RestaurantCreate,
    RestaurantOut,
    OpeningHoursUpdate,
    OpeningHoursScheduleOut,
    PaymentMethodsUpdate,
    MessageOut,
    MAX_INT32,
)
from app.services.business.hours import OpeningHoursError, weekly_schedule
from app.services.restaurants import service
from app.services.restaurants.service import (
    RestaurantError,
    RestaurantNotFoundError,
    SlugConflictError,
    RestaurantValidationError,
)

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


def _raise_http(e: Exception):
    """map domain errors to http errors."""
    if isinstance(e, RestaurantNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, SlugConflictError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, (RestaurantValidationError, OpeningHoursError)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    raise e


@router.post("", response_model=RestaurantOut, status_code=status.HTTP_201_CREATED)
def create_restaurant(payload: RestaurantCreate, db: Session = Depends(get_db)):
    """create a new restaurant in DRAFT status"""
    try:
        return service.create_restaurant(db, payload)
    except RestaurantError as e:
        _raise_http(e)


@router.get("", response_model=List[RestaurantOut])
def list_restaurants(
    limit: int = Query(20, le=MAX_INT32),
    offset: int = Query(0, le=MAX_INT32),
    db: Session = Depends(get_db),
):
    return service.list_restaurants(db, limit=limit, offset=offset)


@router.get("/{slug}", response_model=RestaurantOut)
def get_restaurant_by_slug(slug: str, db: Session = Depends(get_db)):
    try:
        return service.get_restaurant_by_slug(db, slug)
    except RestaurantError as e:
        _raise_http(e)


@router.get("/{slug}/opening-hours", response_model=OpeningHoursScheduleOut)
def get_opening_hours(slug: str, db: Session = Depends(get_db)):
    """weekly schedule plus current open status."""
    now = service.local_now()
    try:
        restaurant = service.get_restaurant_by_slug(db, slug, now=now)
    except RestaurantError as e:
        _raise_http(e)

    return OpeningHoursScheduleOut(
        slug=restaurant.slug,
        is_open=restaurant.is_open,
        current_time=now.strftime('%Y-%m-%d %H:%M'),
        weekly_hours=weekly_schedule(restaurant.opening_hours),
    )


@router.patch("/{restaurant_id}/open", response_model=MessageOut)
def open_restaurant(restaurant_id: UUID, db: Session = Depends(get_db)):
    try:
        service.open_restaurant(db, restaurant_id)
    except RestaurantError as e:
        _raise_http(e)
    return {"message": "restaurant opened successfully"}


@router.patch("/{restaurant_id}/close", response_model=MessageOut)
def close_restaurant(restaurant_id: UUID, db: Session = Depends(get_db)):
    try:
        service.close_restaurant(db, restaurant_id)
    except RestaurantError as e:
        _raise_http(e)
    return {"message": "restaurant closed successfully"}


@router.put("/{restaurant_id}/hours", response_model=MessageOut)
def update_opening_hours(restaurant_id: UUID, payload: OpeningHoursUpdate, db: Session = Depends(get_db)):
    """replace all opening hours of a restaurant"""
    try:
        service.update_opening_hours(db, restaurant_id, payload.hours)
    except (RestaurantError, OpeningHoursError) as e:
        _raise_http(e)
    return {"message": "opening hours updated successfully"}


@router.put("/{restaurant_id}/payments", response_model=MessageOut)
def update_payment_methods(restaurant_id: UUID, payload: PaymentMethodsUpdate, db: Session = Depends(get_db)):
    """replace all accepted payment methods of a restaurant"""
    try:
        service.update_payment_methods(db, restaurant_id, payload.methods)
    except RestaurantError as e:
        _raise_http(e)
    return {"message": "payment methods updated successfully"}
