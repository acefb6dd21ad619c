"""
Restaurant use cases.
Creation, listing, lookup, open/close transitions and full replacement of
opening hours and payment methods.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app import models
from app.core.config import settings
from app.schemas.restaurants import RestaurantCreate, OpeningHourIn
from app.services.business.hours import (
    RestaurantStatus,
    OpeningHoursError,
    is_open_at,
    validate_intervals,
)
from app.services.restaurants.slug import generate_slug

logger = logging.getLogger(__name__)

PAYMENT_METHOD_PIX = "PIX"
PAYMENT_METHOD_CREDIT_CARD = "CREDIT_CARD"
PAYMENT_METHOD_DEBIT_CARD = "DEBIT_CARD"
VALID_PAYMENT_METHODS = (PAYMENT_METHOD_PIX, PAYMENT_METHOD_CREDIT_CARD, PAYMENT_METHOD_DEBIT_CARD)


class RestaurantError(Exception):
    """base error for restaurant use cases."""


class RestaurantNotFoundError(RestaurantError):
    def __init__(self, key: object):
        self.key = key
        super().__init__("restaurant not found")


class SlugConflictError(RestaurantError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__("slug already exists")


class RestaurantValidationError(RestaurantError):
    pass


def local_now() -> datetime:
    """current wall-clock time in the business timezone, without tzinfo."""
    return datetime.now(settings.business_timezone).replace(tzinfo=None)


def compute_is_open(restaurant: models.Restaurant, now: datetime) -> bool:
    return is_open_at(restaurant.status, restaurant.opening_hours, now)


def _with_relations(query):
    return query.options(
        selectinload(models.Restaurant.address),
        selectinload(models.Restaurant.opening_hours),
        selectinload(models.Restaurant.payment_methods),
    )


def get_restaurant(db: Session, restaurant_id: UUID) -> models.Restaurant:
    restaurant = _with_relations(db.query(models.Restaurant)).filter(models.Restaurant.id == restaurant_id).first()
    if not restaurant:
        raise RestaurantNotFoundError(restaurant_id)
    return restaurant


def create_restaurant(db: Session, payload: RestaurantCreate) -> models.Restaurant:
    name = (payload.name or "").strip()
    if not name:
        raise RestaurantValidationError("name is required")
    if payload.delivery_fee < 0:
        raise RestaurantValidationError("delivery fee cannot be negative")
    if payload.min_order_value < 0:
        raise RestaurantValidationError("min order value cannot be negative")

    slug = (payload.slug or "").strip() or generate_slug(name)
    if not slug:
        raise RestaurantValidationError("slug could not be generated from name")

    existing = db.query(models.Restaurant.id).filter(models.Restaurant.slug == slug).first()
    if existing:
        raise SlugConflictError(slug)

    restaurant = models.Restaurant(
        name=name,
        slug=slug,
        description=payload.description,
        status=RestaurantStatus.DRAFT.value,
        category=payload.category,
        rating=0,
        total_reviews=0,
        delivery_fee=payload.delivery_fee,
        min_order_value=payload.min_order_value,
        preparation_time_min=payload.preparation_time_min,
        supports_pickup=payload.supports_pickup,
        supports_delivery=payload.supports_delivery,
        logo_url=payload.logo_url,
        banner_url=payload.banner_url,
    )

    if payload.address is not None:
        restaurant.address = models.Address(**payload.address.model_dump())

    db.add(restaurant)
    try:
        db.commit()
    except IntegrityError as e:
        # slug taken between the check and the insert
        db.rollback()
        raise SlugConflictError(slug) from e
    except Exception:
        db.rollback()
        raise

    restaurant = get_restaurant(db, restaurant.id)
    restaurant.is_open = False
    logger.info(f"Created restaurant {restaurant.id} with slug '{slug}'")
    return restaurant


def list_restaurants(db: Session, limit: int = 0, offset: int = 0, now: Optional[datetime] = None) -> List[models.Restaurant]:
    if limit <= 0:
        limit = settings.DEFAULT_PAGE_LIMIT
    if offset < 0:
        offset = 0

    restaurants = (
        _with_relations(db.query(models.Restaurant))
        .order_by(models.Restaurant.created_at.desc(), models.Restaurant.name.asc())
        .offset(offset)
        .limit(limit)
        .all()
    )

    # one clock reading for the whole page
    now = now or local_now()
    for restaurant in restaurants:
        restaurant.is_open = compute_is_open(restaurant, now)

    return restaurants


def get_restaurant_by_slug(db: Session, slug: str, now: Optional[datetime] = None) -> models.Restaurant:
    restaurant = _with_relations(db.query(models.Restaurant)).filter(models.Restaurant.slug == slug).first()
    if not restaurant:
        raise RestaurantNotFoundError(slug)

    restaurant.is_open = compute_is_open(restaurant, now or local_now())
    return restaurant


def _set_status(db: Session, restaurant: models.Restaurant, status: RestaurantStatus) -> None:
    restaurant.status = status.value
    db.add(restaurant)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Restaurant {restaurant.id} is now {status.value}")


def open_restaurant(db: Session, restaurant_id: UUID) -> models.Restaurant:
    restaurant = get_restaurant(db, restaurant_id)

    if restaurant.address is None:
        raise RestaurantValidationError("restaurant must have an address to be opened")
    if not restaurant.opening_hours:
        raise RestaurantValidationError("restaurant must have opening hours to be opened")
    if not restaurant.payment_methods:
        raise RestaurantValidationError("restaurant must have at least one payment method to be opened")

    _set_status(db, restaurant, RestaurantStatus.OPEN)
    return restaurant


def close_restaurant(db: Session, restaurant_id: UUID) -> models.Restaurant:
    restaurant = get_restaurant(db, restaurant_id)
    _set_status(db, restaurant, RestaurantStatus.CLOSED)
    return restaurant


def update_opening_hours(db: Session, restaurant_id: UUID, hours: Iterable[OpeningHourIn]) -> List[models.OpeningHour]:
    """replace the whole weekly schedule; a rejected candidate leaves the stored one untouched."""
    restaurant = get_restaurant(db, restaurant_id)

    try:
        accepted = validate_intervals(hours)
    except OpeningHoursError as e:
        logger.warning(f"Rejected opening hours for restaurant {restaurant_id}: {e}")
        raise

    try:
        db.query(models.OpeningHour).filter(models.OpeningHour.restaurant_id == restaurant.id).delete(synchronize_session=False)
        rows = [
            models.OpeningHour(
                restaurant_id=restaurant.id,
                weekday=interval.weekday,
                opens_at=interval.opens_at,
                closes_at=interval.closes_at,
            )
            for interval in accepted
        ]
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.expire(restaurant, ["opening_hours"])
    logger.info(f"Stored {len(rows)} opening hours for restaurant {restaurant_id}")
    return rows


def update_payment_methods(db: Session, restaurant_id: UUID, methods: Iterable[str]) -> List[models.PaymentMethod]:
    restaurant = get_restaurant(db, restaurant_id)

    requested = list(methods)
    for method in requested:
        if method not in VALID_PAYMENT_METHODS:
            raise RestaurantValidationError(f"invalid payment method: {method}")
    # repeated methods collapse into one row
    unique_methods = list(dict.fromkeys(requested))

    try:
        db.query(models.PaymentMethod).filter(models.PaymentMethod.restaurant_id == restaurant.id).delete(synchronize_session=False)
        rows = [models.PaymentMethod(restaurant_id=restaurant.id, method=method) for method in unique_methods]
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.expire(restaurant, ["payment_methods"])
    logger.info(f"Stored payment methods {unique_methods} for restaurant {restaurant_id}")
    return rows
