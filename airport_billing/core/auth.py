# airport_billing/core/auth.py

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status

from airport_billing.core.jwt import decode_access_token
from airport_billing.core.oauth2 import oauth2_scheme

ROLES = {"admin", "vendor", "cashier"}


@dataclass(frozen=True)
class Principal:
    id: int
    role: str
    shop_id: int | None = None


def principal_from_token(token: str) -> Principal | None:
    payload = decode_access_token(token)

    if payload is None:
        return None

    subject = payload.get("sub")
    role = payload.get("role")

    if subject is None or role not in ROLES:
        return None

    shop_id = payload.get("shop_id")

    try:
        return Principal(
            id=int(subject),
            role=role,
            shop_id=int(shop_id) if shop_id is not None else None,
        )
    except (TypeError, ValueError):
        return None


def get_current_principal(token: str = Depends(oauth2_scheme)) -> Principal:
    principal = principal_from_token(token)

    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return principal


def require_roles(*roles: str):
    allowed = set(roles)

    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied: role not allowed",
            )
        return principal

    return dependency
