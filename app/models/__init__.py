from app.models.models import Restaurant, Address, OpeningHour, PaymentMethod

__all__ = ["Restaurant", "Address", "OpeningHour", "PaymentMethod"]
