"""Pydantic schemas for data validation and serialization.

Fields are snake_case in Python and camelCase on the wire; request bodies
accept either spelling.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator, validate_email
from pydantic_core import PydanticCustomError
from pydantic.alias_generators import to_camel

from models import UserRole, PropertyType, ListingType, ActivityType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=191)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)
    role: UserRole = UserRole.USER
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class UserLogin(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        """Applies the same normalization ``EmailStr`` gives the address at registration."""
        try:
            return validate_email(value)[1]
        except PydanticCustomError:
            return value


class UserResponse(CamelModel):
    """A user as returned by the API. The password hash is never part of it."""
    id: str
    username: str
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    is_verified: Optional[bool] = None
    wave_balance: Optional[int] = None
    expires_at: Optional[datetime] = None
    is_expired: Optional[bool] = None
    allowed_languages: Optional[List[str]] = None
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    user: UserResponse
    token: str
    message: str


class CurrentUserResponse(CamelModel):
    user: UserResponse


class MessageResponse(CamelModel):
    message: str


class AgentInfo(CamelModel):
    id: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    avatar: Optional[str] = None


class PropertyResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    type: str
    listing_type: str
    price: Decimal
    currency: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[int] = None
    address: str
    city: str
    country: str
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    features: Optional[List[str]] = None
    status: Optional[str] = None
    language: Optional[str] = None
    agent_id: Optional[str] = None
    contact_phone: Optional[str] = None
    wave_id: Optional[str] = None
    views: Optional[int] = None
    is_featured: Optional[bool] = None
    slug: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    agent: Optional[AgentInfo] = None


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    has_more: bool


class PropertyListResponse(CamelModel):
    properties: List[PropertyResponse]
    pagination: Pagination


class SearchFilters(CamelModel):
    """Listing filters. Also the stored shape of ``SearchHistory.filters``."""
    type: Optional[PropertyType] = None
    country: Optional[str] = None
    city: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    listing_type: Optional[ListingType] = None
    sort_by: Optional[str] = None
    order: Optional[str] = None
    search: Optional[str] = None


class SearchHistoryRecord(CamelModel):
    id: str
    user_id: Optional[str] = None
    search_query: str
    filters: Optional[SearchFilters] = None
    results_count: Optional[int] = None
    created_at: Optional[datetime] = None


class ActivityMetadata(CamelModel):
    """Context attached to a customer activity; every field is optional."""
    property_slug: Optional[str] = None
    search_query: Optional[str] = None
    results_count: Optional[int] = None
    inquiry_id: Optional[str] = None
    user_agent: Optional[str] = None


class CustomerActivityRecord(CamelModel):
    id: str
    user_id: Optional[str] = None
    activity_type: ActivityType
    target_id: Optional[str] = None
    activity_metadata: Optional[ActivityMetadata] = Field(
        default=None,
        validation_alias=AliasChoices("activity_metadata", "metadata"),
        serialization_alias="metadata",
    )
    points: Optional[int] = None
    created_at: Optional[datetime] = None


class CurrencyRateResponse(CamelModel):
    id: str
    from_currency: str
    to_currency: str
    rate: Decimal
    set_by: Optional[str] = None
    effective_date: datetime
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FavoriteCreate(CamelModel):
    property_id: str = Field(..., min_length=1)


class FavoriteResponse(CamelModel):
    id: str
    user_id: str
    property_id: str
    created_at: Optional[datetime] = None


class InquiryCreate(CamelModel):
    property_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    message: str = Field(..., min_length=1)


class InquiryResponse(CamelModel):
    id: str
    property_id: str
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    status: Optional[str] = None
    created_at: Optional[datetime] = None
