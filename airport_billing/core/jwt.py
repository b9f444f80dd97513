from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from airport_billing.core.config import settings


def create_access_token(
    subject: int | str,
    role: str,
    shop_id: int | None = None,
    expires_delta: timedelta | None = None,
):
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    claims = {"sub": str(subject), "role": role, "exp": expire, "type": "access"}

    # Cashiers are bound to exactly one shop
    if shop_id is not None:
        claims["shop_id"] = shop_id

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str):
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    # Refresh or reset tokens are not accepted here
    if payload.get("type") != "access":
        return None

    return payload
