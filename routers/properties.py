"""Listing search, featured properties and property details."""
import logging
from decimal import Decimal
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BeforeValidator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import schemas
import search
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["Properties"])


def blank_to_none(value):
    """Search forms submit untouched fields as empty strings; those count as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalParam = BeforeValidator(blank_to_none)


@router.get("", response_model=schemas.PropertyListResponse)
def get_properties(
        page: int = Query(search.DEFAULT_PAGE, ge=1),
        limit: int = Query(search.DEFAULT_LIMIT, ge=1),
        type: Annotated[Optional[models.PropertyType], OptionalParam] = None,
        country: Annotated[Optional[str], OptionalParam] = None,
        city: Annotated[Optional[str], OptionalParam] = None,
        min_price: Annotated[Optional[Decimal], OptionalParam, Query(alias="minPrice")] = None,
        max_price: Annotated[Optional[Decimal], OptionalParam, Query(alias="maxPrice")] = None,
        bedrooms: Annotated[Optional[int], OptionalParam] = None,
        bathrooms: Annotated[Optional[int], OptionalParam] = None,
        listing_type: Annotated[Optional[models.ListingType], OptionalParam, Query(alias="listingType")] = None,
        sort_by: Annotated[Optional[str], OptionalParam, Query(alias="sortBy")] = None,
        order: Annotated[Optional[str], OptionalParam] = None,
        q: Annotated[Optional[str], OptionalParam, Query(alias="search")] = None,
        db: Session = Depends(get_db)
):
    """Active properties, filtered, sorted and paginated. Bedrooms and bathrooms are minimums."""
    filters = schemas.SearchFilters(
        type=type,
        country=country,
        city=city,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        listing_type=listing_type,
        sort_by=sort_by,
        order=order,
        search=q
    )

    try:
        properties, pagination = search.search_properties(db, filters, page=page, limit=limit)
    except SQLAlchemyError:
        logger.exception("Error fetching properties")
        raise HTTPException(status_code=500, detail="Failed to fetch properties")

    return {"properties": properties, "pagination": pagination}


@router.get("/featured", response_model=List[schemas.PropertyResponse])
def get_featured_properties(db: Session = Depends(get_db)):
    """The newest featured active properties."""
    try:
        return search.featured_properties(db)
    except SQLAlchemyError:
        logger.exception("Error fetching featured properties")
        raise HTTPException(status_code=500, detail="Failed to fetch featured properties")


@router.get("/{identifier}", response_model=schemas.PropertyResponse)
def get_property_details(identifier: str, db: Session = Depends(get_db)):
    """Detailed view of a property by slug or id. Every call counts as one view."""
    try:
        db_property = search.find_property(db, identifier)
        if not db_property:
            raise HTTPException(status_code=404, detail="Property not found")

        snapshot = schemas.PropertyResponse.model_validate(db_property)
        search.increment_views(db, db_property.id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error fetching property %s", identifier)
        raise HTTPException(status_code=500, detail="Failed to fetch property")

    return snapshot
