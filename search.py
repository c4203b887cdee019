"""Filter, sort and pagination for the public property listing."""
import math

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

import models
import schemas

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12
FEATURED_LIMIT = 6


def build_conditions(filters: schemas.SearchFilters) -> list:
    """Predicates for a listing query. Only active properties are ever listed."""
    prop = models.Property
    conditions = [prop.status == models.PropertyStatus.ACTIVE.value]

    if filters.type:
        conditions.append(prop.type == filters.type.value)
    if filters.country:
        conditions.append(prop.country == filters.country)
    if filters.city:
        conditions.append(prop.city == filters.city)
    if filters.min_price is not None:
        conditions.append(prop.price >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(prop.price <= filters.max_price)
    if filters.bedrooms is not None:
        conditions.append(prop.bedrooms >= filters.bedrooms)
    if filters.bathrooms is not None:
        conditions.append(prop.bathrooms >= filters.bathrooms)
    if filters.listing_type:
        conditions.append(prop.listing_type == filters.listing_type.value)
    if filters.search:
        pattern = f"%{filters.search}%"
        conditions.append(
            or_(
                prop.title.like(pattern),
                prop.description.like(pattern),
                prop.address.like(pattern),
            )
        )

    return conditions


def sort_order(filters: schemas.SearchFilters):
    if filters.sort_by == "price":
        if filters.order == "desc":
            return models.Property.price.desc()
        return models.Property.price.asc()
    return models.Property.created_at.desc()


def with_agent(query):
    # many-to-one, so this is a LEFT OUTER JOIN; agentless rows keep agent = None
    return query.options(joinedload(models.Property.agent))


def paginate(total_count: int, page: int, limit: int) -> schemas.Pagination:
    total_pages = math.ceil(total_count / limit) if limit else 0
    return schemas.Pagination(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        has_more=page < total_pages,
    )


def search_properties(
        db: Session,
        filters: schemas.SearchFilters,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT
):
    """Returns one page of matching active properties plus the pagination block."""
    conditions = build_conditions(filters)

    total_count = db.query(func.count(models.Property.id)).filter(*conditions).scalar() or 0

    properties = (
        with_agent(db.query(models.Property))
        .filter(*conditions)
        .order_by(sort_order(filters))
        .limit(limit)
        .offset((page - 1) * limit)
        .all()
    )

    return properties, paginate(total_count, page, limit)


def featured_properties(db: Session, limit: int = FEATURED_LIMIT):
    return (
        with_agent(db.query(models.Property))
        .filter(
            models.Property.status == models.PropertyStatus.ACTIVE.value,
            models.Property.is_featured.is_(True),
        )
        .order_by(models.Property.created_at.desc())
        .limit(limit)
        .all()
    )


def find_property(db: Session, identifier: str):
    """Looks a property up by slug or by id."""
    return (
        with_agent(db.query(models.Property))
        .filter(or_(models.Property.slug == identifier, models.Property.id == identifier))
        .first()
    )


def increment_views(db: Session, property_id: str) -> None:
    """Bumps the view counter in the database itself so concurrent views are never lost."""
    db.query(models.Property).filter(models.Property.id == property_id).update(
        {models.Property.views: models.Property.views + 1},
        synchronize_session=False,
    )
    db.commit()
