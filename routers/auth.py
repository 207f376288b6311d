from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.user import UserCreate, UserLogin, AuthResponse, VerifyResponse
from services import auth as auth_service
from services import oauth as oauth_service
from utils.auth import get_current_user
from utils.errors import ServerMisconfigured

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    return auth_service.register(user_data, db)


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    return auth_service.login(credentials, db)


@router.get("/google")
async def google_login():
    url = oauth_service.google_login_url()
    if not url:
        raise ServerMisconfigured(message="Google OAuth configuration missing.")
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/google/callback")
async def google_callback(code: str | None = None, error: str | None = None, db: Session = Depends(get_db)):
    if error or not code:
        return RedirectResponse(oauth_service.failure_redirect(), status_code=status.HTTP_302_FOUND)
    target = await oauth_service.handle_google_callback(code, db)
    return RedirectResponse(target, status_code=status.HTTP_302_FOUND)


@router.get("/verify", response_model=VerifyResponse)
def verify(current_user: User = Depends(get_current_user)):
    return {"user": current_user}
