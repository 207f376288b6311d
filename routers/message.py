from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from models.user import User
from schemas.message import Conversation, MessageCreate, MessageWithUsers
from services import message as message_service
from utils.auth import get_current_user

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/conversations", response_model=List[Conversation])
def get_conversations(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return message_service.get_conversations(db, current_user)


@router.get("/user/{user_id}", response_model=List[MessageWithUsers])
def get_thread(
    user_id: int,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return message_service.get_thread(db, current_user, user_id, limit, offset)


@router.post("", response_model=MessageWithUsers, status_code=status.HTTP_201_CREATED)
def send_message(
    message: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return message_service.send_message(db, message, current_user)


@router.put("/read/{user_id}")
def mark_read(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return message_service.mark_conversation_read(db, current_user, user_id)
