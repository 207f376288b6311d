from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from models.user import User
from schemas.comment import CommentCreate, CommentUpdate, CommentResponse, CommentThread
from services import comment as comment_service
from utils.auth import get_current_user, get_optional_user

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/idea/{idea_id}", response_model=List[CommentThread])
def get_idea_comments(
    idea_id: int,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    return comment_service.list_idea_comments(db, idea_id, viewer)


@router.get("/{comment_id}/replies", response_model=List[CommentResponse])
def get_replies(
    comment_id: int,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    return comment_service.read_replies(db, comment_id, viewer)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.create_comment(db, comment, current_user)


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: int,
    comment_update: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.update_comment(db, comment_id, comment_update, current_user)


@router.delete("/{comment_id}")
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.delete_comment(db, comment_id, current_user)
