"""Contact requests about a property."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import schemas
from database import get_db
from routers.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/inquiries", tags=["Inquiries"])


@router.post("", response_model=schemas.InquiryResponse, status_code=status.HTTP_201_CREATED)
def create_inquiry(
    inquiry_data: schemas.InquiryCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    """Creates a pending inquiry from the current user."""
    try:
        prop = db.query(models.Property).filter(models.Property.id == inquiry_data.property_id).first()
        if not prop:
            raise HTTPException(status_code=404, detail="Property not found")

        new_inquiry = models.Inquiry(
            id=models.generate_id("inq"),
            property_id=inquiry_data.property_id,
            user_id=current_user.id,
            name=inquiry_data.name,
            email=inquiry_data.email,
            phone=inquiry_data.phone,
            message=inquiry_data.message,
            status=models.InquiryStatus.PENDING.value
        )
        db.add(new_inquiry)
        db.commit()
        db.refresh(new_inquiry)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating inquiry")
        raise HTTPException(status_code=500, detail="Failed to create inquiry")

    return new_inquiry
