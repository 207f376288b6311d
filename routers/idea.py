from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from models.user import User
from schemas.idea import IdeaCreate, IdeaUpdate, IdeaResponse, IdeaDetail
from services import idea as idea_service
from utils.auth import get_current_user, get_optional_user

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get("", response_model=List[IdeaDetail])
def get_ideas(db: Session = Depends(get_db)):
    return idea_service.list_public_ideas(db)


@router.get("/{slug}", response_model=IdeaDetail)
def get_idea(
    slug: str,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    return idea_service.get_idea_by_slug(db, slug, viewer)


@router.post("", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
def create_idea(
    idea: IdeaCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return idea_service.create_idea(db, idea, current_user)


@router.put("/{idea_id}", response_model=IdeaResponse)
def update_idea(
    idea_id: int,
    idea: IdeaUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return idea_service.update_idea(db, idea_id, idea, current_user)


@router.delete("/{idea_id}")
def delete_idea(
    idea_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return idea_service.delete_idea(db, idea_id, current_user)
