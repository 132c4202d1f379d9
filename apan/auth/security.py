# apan/auth/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import secrets

from fastapi import Depends, HTTPException
from fastapi.security import APIKeyHeader
from jose import jwt, JWTError
from passlib.context import CryptContext

from apan.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    BCRYPT_ROUNDS,
    RESET_TOKEN_EXPIRE_MINUTES,
    SECRET_KEY,
)
from apan.schemas.user_schema import TokenUser

logger = logging.getLogger("apan.auth")

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS
)

BEARER_PREFIX = "Bearer "

# raw header; the Bearer check below is stricter than HTTPBearer (case-sensitive)
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer <token> returned by POST /users/login",
)


# ================= PASSWORDS =================
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


# ================= ACCESS TOKENS =================
def create_access_token(
    user_id: int, email: str, minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES
) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"user": {"id": user_id, "email": email}, "exp": exp}
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> TokenUser:
    """Return the identity embedded in ``token``.

    Raises a 401 when the signature is wrong, the token expired or the
    payload does not carry a ``user`` claim.
    """
    try:
        data = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user = data["user"]
        return TokenUser(id=int(user["id"]), email=user["email"])
    except (JWTError, KeyError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")


def get_current_user(
    authorization: Optional[str] = Depends(authorization_header),
) -> TokenUser:
    """Auth gate: every protected route depends on this."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Not authorized. Token not provided.")

    if not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Not authorized. Malformed token.")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Not authorized. Malformed token.")

    return decode_access_token(token)


# ================= PASSWORD RESET =================
def generate_reset_token() -> str:
    # 20 random bytes, hex-encoded
    return secrets.token_hex(20)


def reset_token_expiry(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.utcnow()
    return now + timedelta(minutes=RESET_TOKEN_EXPIRE_MINUTES)
