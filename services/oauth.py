import logging
import os
import re
from typing import Optional
from urllib.parse import urlencode

import httpx
from sqlalchemy.orm import Session

from models.user import User, UserRole
from utils.security import create_access_token

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


class OAuthError(Exception):
    """The provider round trip did not yield a usable profile."""


def client_url() -> str:
    return os.getenv("CLIENT_URL", "http://localhost:3000").rstrip("/")


def google_callback_url() -> Optional[str]:
    return os.getenv("GOOGLE_CALLBACK_URL")


def google_login_url() -> Optional[str]:
    client_id = os.getenv("GOOGLE_CLIENT_ID")
    redirect_uri = google_callback_url()
    if not client_id or not redirect_uri:
        return None
    params = {
        "response_type": "code",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": "openid email profile",
        "access_type": "offline",
        "prompt": "select_account",
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


def success_redirect(token: str) -> str:
    return f"{client_url()}/auth/callback?{urlencode({'token': token})}"


def failure_redirect() -> str:
    return f"{client_url()}/login?error=oauth_failed"


async def fetch_google_profile(code: str, transport: httpx.AsyncBaseTransport | None = None) -> dict:
    client_id = os.getenv("GOOGLE_CLIENT_ID")
    client_secret = os.getenv("GOOGLE_CLIENT_SECRET")
    redirect_uri = google_callback_url()
    if not client_id or not client_secret or not redirect_uri:
        raise OAuthError("Google OAuth configuration missing.")

    token_params = {
        "code": code,
        "client_id": client_id,
        "client_secret": client_secret,
        "redirect_uri": redirect_uri,
        "grant_type": "authorization_code",
    }

    async with httpx.AsyncClient(transport=transport) as client:
        token_response = await client.post(GOOGLE_TOKEN_URL, data=token_params)
        token_response.raise_for_status()
        access_token = token_response.json()["access_token"]

        userinfo_response = await client.get(GOOGLE_USERINFO_URL, headers={
            "Authorization": f"Bearer {access_token}"
        })
        userinfo_response.raise_for_status()
        return userinfo_response.json()


def _unique_username(db: Session, email: str) -> str:
    base = re.sub(r"[^a-z0-9]", "", email.split("@")[0].lower()) or "user"
    base = base[:16]
    username = base
    counter = 1
    while db.query(User).filter(User.username == username).first():
        username = f"{base}{counter}"
        counter += 1
    return username


def resolve_google_user(profile: dict, db: Session) -> User:
    """Find or create the local account behind a Google profile."""
    email = profile.get("email")
    if not email:
        raise OAuthError("No email found in Google profile")
    email = email.lower()
    google_id = profile.get("sub")
    picture = profile.get("picture")
    display_name = profile.get("name") or ""
    first_name = profile.get("given_name") or (display_name.split(" ")[0] if display_name else "") or "User"
    last_name = profile.get("family_name") or " ".join(display_name.split(" ")[1:])

    user = db.query(User).filter(User.email == email).first()

    if user:
        if not user.google_id:
            user.google_id = google_id
            user.avatar = picture or user.avatar
            user.email_verified = True
            user.is_verified = True
            db.commit()
            db.refresh(user)
        elif picture and picture != user.avatar:
            user.avatar = picture
            db.commit()
            db.refresh(user)
        return user

    user = User(
        email=email,
        username=_unique_username(db, email),
        first_name=first_name,
        last_name=last_name or first_name,
        google_id=google_id,
        avatar=picture,
        password=None,
        email_verified=True,
        is_verified=True,
        role=UserRole.ENTHUSIAST,
        skills=[],
        interests=[],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("New user created via Google OAuth: %s", user.email)
    return user


async def handle_google_callback(code: str, db: Session, transport: httpx.AsyncBaseTransport | None = None) -> str:
    """Run the callback and return the client URL to redirect to."""
    try:
        profile = await fetch_google_profile(code, transport=transport)
        user = resolve_google_user(profile, db)
        token = create_access_token(user.id, user.role.value)
    except Exception:
        logger.exception("Google OAuth callback error")
        db.rollback()
        return failure_redirect()
    return success_redirect(token)
