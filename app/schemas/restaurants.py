from typing import Any, Optional, List, Dict
from uuid import UUID
from pydantic import BaseModel, Field
from datetime import datetime

# column limits: Integer and BigInteger
MAX_INT32 = 2**31 - 1
MAX_BIGINT = 2**63 - 1


class AddressCreate(BaseModel):
    street: str = Field(..., min_length=1, max_length=255)
    number: str = Field(..., max_length=32)
    complement: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=128)
    state: str = Field(..., min_length=2, max_length=2)
    zip_code: str = Field(..., max_length=16)
    lat: Optional[float] = None
    lng: Optional[float] = None


class AddressOut(BaseModel):
    street: str
    number: str
    complement: Optional[str] = None
    city: str
    state: str
    zip_code: str
    lat: Optional[float] = None
    lng: Optional[float] = None

    class Config:
        from_attributes = True


class RestaurantCreate(BaseModel):
    # name and amounts are checked by the service so the messages match its rules
    name: str = Field(default="", max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=64)
    delivery_fee: int = Field(default=0, le=MAX_BIGINT)  # cents
    min_order_value: int = Field(default=0, le=MAX_BIGINT)  # cents
    preparation_time_min: int = Field(default=0, ge=0, le=MAX_INT32)
    supports_pickup: bool = False
    supports_delivery: bool = False
    logo_url: Optional[str] = Field(None, max_length=1024)
    banner_url: Optional[str] = Field(None, max_length=1024)
    address: Optional[AddressCreate] = None


class OpeningHourIn(BaseModel):
    """one weekly interval; range and overlap rules are enforced by the opening hours engine."""
    weekday: int = Field(..., description="0=Sunday .. 6=Saturday")
    opens_at: int = Field(..., description="Minutes since midnight (0-1439)")
    closes_at: int = Field(..., description="Minutes since midnight (0-1439), lower than opens_at when closing after midnight")


class OpeningHoursUpdate(BaseModel):
    hours: List[OpeningHourIn] = Field(default_factory=list)


class OpeningHourOut(BaseModel):
    weekday: int
    opens_at: int
    closes_at: int

    class Config:
        from_attributes = True


class PaymentMethodsUpdate(BaseModel):
    methods: List[str] = Field(default_factory=list, description="PIX, CREDIT_CARD or DEBIT_CARD")


class PaymentMethodOut(BaseModel):
    method: str

    class Config:
        from_attributes = True


class RestaurantOut(BaseModel):
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    status: str
    category: Optional[str] = None
    rating: int
    total_reviews: int
    is_open: bool
    delivery_fee: int
    min_order_value: int
    preparation_time_min: int
    supports_pickup: bool
    supports_delivery: bool
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    address: Optional[AddressOut] = None
    opening_hours: List[OpeningHourOut] = []
    payment_methods: List[PaymentMethodOut] = []

    class Config:
        from_attributes = True


class OpeningHoursScheduleOut(BaseModel):
    """weekly schedule keyed by day name, sunday first."""
    slug: str
    is_open: bool
    current_time: str = Field(..., description="Local wall-clock time used for is_open")
    weekly_hours: Dict[str, List[Dict[str, Any]]]


class MessageOut(BaseModel):
    message: str
