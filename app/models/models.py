import uuid
from datetime import datetime
from sqlalchemy import Integer, BigInteger, String, DateTime, Boolean, ForeignKey, Text, Float, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.db.base import Base
from app.services.business.hours import RestaurantStatus


# helpers
now = datetime.utcnow


class Restaurant(Base):
    __tablename__ = "restaurants"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=RestaurantStatus.DRAFT.value)  # DRAFT|OPEN|CLOSED|SUSPENDED
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)  # e.g., "Pizza", "Burgers"
    rating: Mapped[int] = mapped_column(Integer, default=0)  # 0..5
    total_reviews: Mapped[int] = mapped_column(Integer, default=0)
    delivery_fee: Mapped[int] = mapped_column(BigInteger, default=0)  # cents
    min_order_value: Mapped[int] = mapped_column(BigInteger, default=0)  # cents
    preparation_time_min: Mapped[int] = mapped_column(Integer, default=0)
    supports_pickup: Mapped[bool] = mapped_column(Boolean, default=False)
    supports_delivery: Mapped[bool] = mapped_column(Boolean, default=False)
    logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    banner_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now, onupdate=now)

    address: Mapped["Address"] = relationship("Address", back_populates="restaurant", uselist=False, cascade="all, delete-orphan")
    opening_hours: Mapped[list["OpeningHour"]] = relationship(
        "OpeningHour",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by=lambda: [OpeningHour.weekday, OpeningHour.opens_at],
    )
    payment_methods: Mapped[list["PaymentMethod"]] = relationship("PaymentMethod", back_populates="restaurant", cascade="all, delete-orphan")

    # computed per request, never stored
    is_open = False


class Address(Base):
    __tablename__ = "addresses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("restaurants.id", ondelete="CASCADE"), unique=True)
    street: Mapped[str] = mapped_column(String(255))
    number: Mapped[str] = mapped_column(String(32))
    complement: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(128))
    state: Mapped[str] = mapped_column(String(2))
    zip_code: Mapped[str] = mapped_column(String(16))
    lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    lng: Mapped[float | None] = mapped_column(Float, nullable=True)

    restaurant: Mapped[Restaurant] = relationship("Restaurant", back_populates="address")


class OpeningHour(Base):
    __tablename__ = "opening_hours"
    __table_args__ = (
        CheckConstraint("weekday BETWEEN 0 AND 6", name="ck_opening_hours_weekday"),
        CheckConstraint("opens_at BETWEEN 0 AND 1439", name="ck_opening_hours_opens_at"),
        CheckConstraint("closes_at BETWEEN 0 AND 1439", name="ck_opening_hours_closes_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("restaurants.id", ondelete="CASCADE"), index=True)
    weekday: Mapped[int] = mapped_column(Integer)  # 0=Sunday, 6=Saturday
    opens_at: Mapped[int] = mapped_column(Integer)  # minutes since midnight
    closes_at: Mapped[int] = mapped_column(Integer)  # minutes since midnight, < opens_at when past midnight

    restaurant: Mapped[Restaurant] = relationship("Restaurant", back_populates="opening_hours")


class PaymentMethod(Base):
    __tablename__ = "payment_methods"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "method", name="uq_payment_methods_restaurant_method"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("restaurants.id", ondelete="CASCADE"), index=True)
    method: Mapped[str] = mapped_column(String(32))  # PIX|CREDIT_CARD|DEBIT_CARD

    restaurant: Mapped[Restaurant] = relationship("Restaurant", back_populates="payment_methods")
