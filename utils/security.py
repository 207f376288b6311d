import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from utils.errors import AuthenticationError, ServerMisconfigured

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(password, hashed_password)


def get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise ServerMisconfigured(message="JWT_SECRET is not configured. Please contact the administrator.")
    return secret


def create_access_token(user_id: int, role: str, expires_delta: timedelta | None = None) -> str:
    """Sign a token whose payload is `{userId, role, exp}`."""
    secret = get_jwt_secret()
    if expires_delta is None:
        expires_delta = timedelta(days=int(os.getenv("JWT_EXPIRES_IN_DAYS", "7")))
    to_encode = {
        "userId": user_id,
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; raise AuthenticationError otherwise."""
    secret = get_jwt_secret()
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid token")
    if not isinstance(payload.get("userId"), int):
        raise AuthenticationError("Invalid token")
    return payload
