"""Per-user property bookmarks."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import schemas
import search
from database import get_db
from routers.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/favorites", tags=["Favorites"])


@router.get("", response_model=List[schemas.PropertyResponse])
def get_favorites(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    """The properties the current user has favorited."""
    try:
        return search.with_agent(db.query(models.Property)).join(
            models.Favorite, models.Favorite.property_id == models.Property.id
        ).filter(
            models.Favorite.user_id == current_user.id
        ).all()
    except SQLAlchemyError:
        logger.exception("Error fetching favorites for %s", current_user.id)
        raise HTTPException(status_code=500, detail="Failed to fetch favorites")


@router.post("", response_model=schemas.FavoriteResponse, status_code=status.HTTP_201_CREATED)
def add_favorite(
    favorite_data: schemas.FavoriteCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    """Adds a property to the current user's favorites. Each property can be added once."""
    try:
        prop = db.query(models.Property).filter(models.Property.id == favorite_data.property_id).first()
        if not prop:
            raise HTTPException(status_code=404, detail="Property not found")

        existing_favorite = db.query(models.Favorite).filter(
            models.Favorite.user_id == current_user.id,
            models.Favorite.property_id == favorite_data.property_id
        ).first()
        if existing_favorite:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Property already in favorites")

        new_favorite = models.Favorite(
            id=models.generate_id("fav"),
            user_id=current_user.id,
            property_id=favorite_data.property_id
        )
        db.add(new_favorite)
        db.commit()
        db.refresh(new_favorite)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error adding favorite")
        raise HTTPException(status_code=500, detail="Failed to add favorite")

    return new_favorite


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(
    property_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    """Removes a property from the current user's favorites."""
    try:
        deleted = db.query(models.Favorite).filter(
            models.Favorite.user_id == current_user.id,
            models.Favorite.property_id == property_id
        ).delete(synchronize_session=False)

        if not deleted:
            raise HTTPException(status_code=404, detail="Favorite not found")

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error removing favorite")
        raise HTTPException(status_code=500, detail="Failed to remove favorite")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
