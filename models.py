"""SQLAlchemy database models for users, listings and marketplace interactions."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Text, Numeric, JSON,
    Boolean, ForeignKey, DateTime
)
from sqlalchemy.orm import relationship

from database import Base

SUPPORTED_LANGUAGES = ["en", "ar", "kur"]
LANGUAGE_NAMES = {
    "en": "English",
    "ar": "Arabic",
    "kur": "Kurdish Sorani",
}


def utcnow():
    return datetime.now(timezone.utc)


def generate_id(prefix):
    """Application-side primary keys, e.g. ``prop-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex}"


def _id_column(prefix):
    return Column(String(64), primary_key=True, default=lambda: generate_id(prefix))


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class PropertyType(str, enum.Enum):
    HOUSE = "house"
    APARTMENT = "apartment"
    VILLA = "villa"
    LAND = "land"


class ListingType(str, enum.Enum):
    SALE = "sale"
    RENT = "rent"


class PropertyStatus(str, enum.Enum):
    ACTIVE = "active"
    SOLD = "sold"
    RENTED = "rented"
    PENDING = "pending"


class InquiryStatus(str, enum.Enum):
    PENDING = "pending"
    REPLIED = "replied"
    CLOSED = "closed"


class ActivityType(str, enum.Enum):
    LOGIN = "login"
    VIEW_PROPERTY = "view_property"
    FAVORITE = "favorite"
    SEARCH = "search"
    INQUIRY = "inquiry"


class CustomerLevel(str, enum.Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class User(Base):
    __tablename__ = "users"

    id = _id_column("user")
    username = Column(String(191), unique=True, index=True, nullable=False)
    email = Column(String(320), unique=True, index=True, nullable=False)
    password = Column(Text, nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)
    first_name = Column(Text)
    last_name = Column(Text)
    phone = Column(Text)
    avatar = Column(Text)
    is_verified = Column(Boolean, default=False)
    wave_balance = Column(Integer, default=10)
    expires_at = Column(DateTime(timezone=True))
    is_expired = Column(Boolean, default=False)
    allowed_languages = Column(JSON, default=lambda: ["en"])
    created_at = Column(DateTime(timezone=True), default=utcnow)

    properties = relationship("Property", back_populates="agent")
    inquiries = relationship("Inquiry", back_populates="user")
    favorites = relationship("Favorite", back_populates="user")


class Property(Base):
    __tablename__ = "properties"

    id = _id_column("prop")
    title = Column(Text, nullable=False)
    description = Column(Text)
    type = Column(String(16), nullable=False)
    listing_type = Column(String(8), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), default="USD")
    bedrooms = Column(Integer)
    bathrooms = Column(Integer)
    area = Column(Integer)  # square meters
    address = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    country = Column(Text, nullable=False)
    latitude = Column(Numeric(10, 8))
    longitude = Column(Numeric(11, 8))
    images = Column(JSON, default=list)
    amenities = Column(JSON, default=list)
    features = Column(JSON, default=list)
    status = Column(String(16), default=PropertyStatus.ACTIVE.value, index=True)
    language = Column(String(3), nullable=False, default="en")
    agent_id = Column(String(64), ForeignKey("users.id"), nullable=True)
    contact_phone = Column(Text)  # WhatsApp and calls
    wave_id = Column(String(64), ForeignKey("waves.id"), nullable=True)
    views = Column(Integer, default=0, nullable=False)
    is_featured = Column(Boolean, default=False)
    slug = Column(String(255), unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    agent = relationship("User", back_populates="properties")
    wave = relationship("Wave", back_populates="properties")
    inquiries = relationship("Inquiry", back_populates="property")
    favorites = relationship("Favorite", back_populates="property")


class Inquiry(Base):
    __tablename__ = "inquiries"

    id = _id_column("inq")
    property_id = Column(String(64), ForeignKey("properties.id"))
    user_id = Column(String(64), ForeignKey("users.id"))
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text)
    message = Column(Text, nullable=False)
    status = Column(String(16), default=InquiryStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    property = relationship("Property", back_populates="inquiries")
    user = relationship("User", back_populates="inquiries")


class Favorite(Base):
    # (user_id, property_id) is kept unique by the favorites router, not by a constraint.
    __tablename__ = "favorites"

    id = _id_column("fav")
    user_id = Column(String(64), ForeignKey("users.id"), index=True)
    property_id = Column(String(64), ForeignKey("properties.id"))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="favorites")
    property = relationship("Property", back_populates="favorites")


class SearchHistory(Base):
    __tablename__ = "search_history"

    id = _id_column("search")
    user_id = Column(String(64), ForeignKey("users.id"))
    search_query = Column(Text, nullable=False)
    filters = Column(JSON)  # schemas.SearchFilters
    results_count = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)


class CustomerActivity(Base):
    __tablename__ = "customer_activity"

    id = _id_column("act")
    user_id = Column(String(64), ForeignKey("users.id"))
    activity_type = Column(String(50), nullable=False)
    target_id = Column(String(64))  # property id, search id, ...
    # "metadata" is reserved on declarative classes
    activity_metadata = Column("metadata", JSON)  # schemas.ActivityMetadata
    points = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)


class CustomerPoints(Base):
    __tablename__ = "customer_points"

    user_id = Column(String(64), ForeignKey("users.id"), primary_key=True)
    total_points = Column(Integer, default=0)
    lifetime_points = Column(Integer, default=0)
    level = Column(String(20), default=CustomerLevel.BRONZE.value)
    last_activity_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def adjust(self, delta):
        """Apply a points change. Only earned points count towards the lifetime total."""
        self.total_points = (self.total_points or 0) + delta
        if delta > 0:
            self.lifetime_points = (self.lifetime_points or 0) + delta
        self.last_activity_at = utcnow()
        return self.total_points


class Wave(Base):
    __tablename__ = "waves"

    id = _id_column("wave")
    name = Column(Text, nullable=False)
    description = Column(Text)
    max_properties = Column(Integer, default=1)
    is_active = Column(Boolean, default=True)
    created_by = Column(String(64), ForeignKey("users.id"))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    properties = relationship("Property", back_populates="wave")
    creator = relationship("User", foreign_keys=[created_by])
    permissions = relationship("CustomerWavePermission", back_populates="wave")


class CustomerWavePermission(Base):
    __tablename__ = "customer_wave_permissions"

    id = _id_column("wperm")
    user_id = Column(String(64), ForeignKey("users.id"))
    wave_id = Column(String(64), ForeignKey("waves.id"))
    granted_by = Column(String(64), ForeignKey("users.id"))
    granted_at = Column(DateTime(timezone=True), default=utcnow)
    expires_at = Column(DateTime(timezone=True), nullable=True)  # None = permanent
    is_active = Column(Boolean, default=True)

    wave = relationship("Wave", back_populates="permissions")
    user = relationship("User", foreign_keys=[user_id])
    granter = relationship("User", foreign_keys=[granted_by])


class CurrencyRate(Base):
    __tablename__ = "currency_rates"

    id = _id_column("rate")
    from_currency = Column(String(3), nullable=False, default="USD")
    to_currency = Column(String(3), nullable=False)
    rate = Column(Numeric(12, 6), nullable=False)
    set_by = Column(String(64), ForeignKey("users.id"))
    effective_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    setter = relationship("User", foreign_keys=[set_by])
