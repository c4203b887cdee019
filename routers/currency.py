"""Currency exchange rates."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import schemas
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/currency-rates", tags=["Currency"])


@router.get("", response_model=List[schemas.CurrencyRateResponse])
def get_currency_rates(db: Session = Depends(get_db)):
    """All active rates, most recent effective date first."""
    try:
        return db.query(models.CurrencyRate).filter(
            models.CurrencyRate.is_active.is_(True)
        ).order_by(models.CurrencyRate.effective_date.desc()).all()
    except SQLAlchemyError:
        logger.exception("Error fetching currency rates")
        raise HTTPException(status_code=500, detail="Failed to fetch currency rates")
