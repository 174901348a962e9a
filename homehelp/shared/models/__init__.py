# homehelp/shared/models/__init__.py

from homehelp.core.database import Base
from .user_models import User, UserRole
from .service_models import Service, ServiceCategory, provider_service_link_table
from .provider_models import ProviderProfile, Credential
from .booking_models import Booking, BookingStatus, Payment, PaymentStatus, Review
