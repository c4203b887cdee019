"""Loads sample users, listings and currency rates into an empty database.

Run it directly: ``python seed.py``. Rows that already exist are left alone.
"""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

import models
from database import lazy_db
from security import hash_password

logger = logging.getLogger(__name__)

SAMPLE_PROPERTIES = [
    {
        "id": "prop-1000",
        "title": "ڤیلای فاخر لە هەولێر",
        "description": "ڤیلایەکی زۆر جوان لە ناوەڕاستی هەولێر. ٤ ژووری نوستن، باخچە، پارکینگ.",
        "type": "villa",
        "listing_type": "sale",
        "price": Decimal("450000"),
        "bedrooms": 4,
        "bathrooms": 3,
        "area": 3200,
        "address": "شەقامی گوڵان، ناوەڕاستی هەولێر",
        "city": "هەولێر",
        "country": "عێراق",
        "latitude": Decimal("36.1911"),
        "longitude": Decimal("44.0093"),
        "images": [
            "https://images.unsplash.com/photo-1600596542815-ffad4c1539a9?auto=format&fit=crop&w=800&h=600",
            "https://images.unsplash.com/photo-1600607687939-ce8a6c25118c?auto=format&fit=crop&w=800&h=600",
        ],
        "amenities": ["مام ئاوی مەلەوان", "باخچە", "پارکینگ", "سیستەمی ئاسایش"],
        "features": ["ئەیر کۆندیشن", "چێشتخانەی مۆدێرن", "بالکۆن"],
        "is_featured": True,
        "language": "kur",
        "slug": "villa-luxury-erbil-kur",
    },
    {
        "id": "prop-1001",
        "title": "شقة حديثة في بغداد",
        "description": "شقة رائعة من غرفتي نوم في موقع متميز في بغداد.",
        "type": "apartment",
        "listing_type": "rent",
        "price": Decimal("800"),
        "bedrooms": 2,
        "bathrooms": 2,
        "area": 1200,
        "address": "حي المنصور، بغداد",
        "city": "بغداد",
        "country": "العراق",
        "latitude": Decimal("33.3152"),
        "longitude": Decimal("44.3661"),
        "images": [
            "https://images.unsplash.com/photo-1522708323590-d24dbb6b0267?auto=format&fit=crop&w=800&h=600",
        ],
        "amenities": ["مصعد", "موقف سيارات", "حماية ٢٤/٧"],
        "features": ["مطبخ حديث", "شرفة"],
        "is_featured": True,
        "language": "ar",
        "slug": "modern-apartment-baghdad-ar",
    },
    {
        "id": "prop-1002",
        "title": "Family House in Sulaymaniyah",
        "description": "A comfortable 3-bedroom family house with a beautiful garden in a quiet neighborhood.",
        "type": "house",
        "listing_type": "sale",
        "price": Decimal("180000"),
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 2000,
        "address": "Azadi Street, Sulaymaniyah",
        "city": "Sulaymaniyah",
        "country": "Iraq",
        "latitude": Decimal("35.5651"),
        "longitude": Decimal("45.4305"),
        "images": [
            "https://images.unsplash.com/photo-1570129477492-45c003edd2be?auto=format&fit=crop&w=800&h=600",
        ],
        "amenities": ["Garden", "Parking", "Basement"],
        "features": ["Fireplace", "Large Windows", "Storage"],
        "is_featured": False,
        "language": "en",
        "slug": "family-house-sulaymaniyah",
    },
]

SAMPLE_RATES = [
    ("USD", "IQD", Decimal("1310.0")),
    ("USD", "EUR", Decimal("0.92")),
    ("USD", "USD", Decimal("1.0")),
]


def _get_or_create_user(db: Session, username: str, **fields) -> models.User:
    user = db.query(models.User).filter(models.User.username == username).first()
    if user:
        return user

    user = models.User(id=models.generate_id("user"), username=username, **fields)
    db.add(user)
    db.flush()
    logger.info("Created user %s", username)
    return user


def seed_sample_data(db: Session) -> None:
    has_users = db.query(models.User.id).first() is not None
    has_properties = db.query(models.Property.id).first() is not None
    if has_users and has_properties:
        logger.info("Sample data already exists")
        return

    admin = db.query(models.User).filter(models.User.role == models.UserRole.ADMIN.value).first()
    if admin is None:
        admin = _get_or_create_user(
            db, "admin",
            email="admin@mapestate.com",
            password=hash_password("admin123"),
            role=models.UserRole.ADMIN.value,
            first_name="Admin",
            last_name="User",
            is_verified=True,
            allowed_languages=list(models.SUPPORTED_LANGUAGES),
        )

    agent = _get_or_create_user(
        db, "john_agent",
        email="john@mapestate.com",
        password=hash_password("agent123"),
        role=models.UserRole.USER.value,
        first_name="John",
        last_name="Smith",
        phone="+964 750 123 4567",
        is_verified=True,
        allowed_languages=["en"],
    )

    if not has_properties:
        for sample in SAMPLE_PROPERTIES:
            db.add(models.Property(agent_id=agent.id, currency="USD", **sample))
        logger.info("Created %d sample properties", len(SAMPLE_PROPERTIES))

    if db.query(models.CurrencyRate.id).first() is None:
        for from_currency, to_currency, rate in SAMPLE_RATES:
            db.add(models.CurrencyRate(
                id=models.generate_id("rate"),
                from_currency=from_currency,
                to_currency=to_currency,
                rate=rate,
                set_by=admin.id,
                is_active=True,
            ))
        logger.info("Created currency rates")

    db.commit()
    logger.info("Sample data initialization completed")


def main():
    logging.basicConfig(level=logging.INFO)
    db = lazy_db.session()
    try:
        seed_sample_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
