"""Password hashing and JWT issuance/verification."""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from config import settings, ConfigurationError

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "mapestate-development-secret-do-not-use-in-production"

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        # unrecognised or corrupt hash
        return False


def get_signing_secret() -> str:
    """Returns the JWT secret. Production refuses to run without one."""
    if settings.JWT_SECRET:
        return settings.JWT_SECRET
    if settings.is_production:
        raise ConfigurationError("JWT_SECRET must be set in production")
    logger.warning("JWT_SECRET is not set, signing tokens with the development secret")
    return DEV_JWT_SECRET


def issue_token(user_id: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRES_HOURS),
    }
    return jwt.encode(payload, get_signing_secret(), algorithm=settings.JWT_ALGORITHM)


def resolve_token(token: str):
    """Returns the user id carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, get_signing_secret(), algorithms=[settings.JWT_ALGORITHM])
    except ConfigurationError:
        logger.error("Cannot verify tokens without a signing secret")
        return None
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired token")
        return None
    except jwt.InvalidTokenError:
        logger.debug("Rejected invalid token")
        return None

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        return None
    return user_id
