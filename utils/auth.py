from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from utils.errors import AuthenticationError
from utils.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _user_from_credentials(credentials: Optional[HTTPAuthorizationCredentials], db: Session) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")
    payload = decode_access_token(credentials.credentials)
    user = db.query(User).filter(User.id == payload["userId"]).first()
    if not user:
        raise AuthenticationError("Invalid token")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Require a valid bearer token and return the user it names."""
    return _user_from_credentials(credentials, db)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous requests pass through as None."""
    try:
        return _user_from_credentials(credentials, db)
    except AuthenticationError:
        return None
