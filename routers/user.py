from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from models.user import User
from schemas.idea import IdeaDetail
from schemas.user import PrivateProfile, PublicProfile, UserUpdate
from services import idea as idea_service
from services import user as user_service
from utils.auth import get_current_user, get_optional_user

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=PrivateProfile)
def get_my_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Full profile of the logged-in user, email included."""
    return user_service.get_my_profile(db, current_user)


@router.put("/me", response_model=PrivateProfile)
def update_my_profile(
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return user_service.update_my_profile(db, current_user, user_update)


@router.get("/{user_id}/ideas", response_model=List[IdeaDetail])
def get_user_ideas(
    user_id: int,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    """Ideas by a user; private ones only when the user asks for their own."""
    user_service.get_user(db, user_id)
    return idea_service.list_user_ideas(db, user_id, viewer)


@router.get("/{username}", response_model=PublicProfile)
def get_user_profile(username: str, db: Session = Depends(get_db)):
    return user_service.get_profile_by_username(db, username)
