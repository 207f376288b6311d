from typing import List

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, selectinload

from models import Message, User
from schemas.message import MessageCreate
from services.notification import notify
from utils.errors import NotFoundError, ValidationError


def _between(user_id: int, other_id: int):
    return or_(
        and_(Message.sender_id == user_id, Message.receiver_id == other_id),
        and_(Message.sender_id == other_id, Message.receiver_id == user_id),
    )


def _recency(message) -> float:
    # Counterparts without messages sort last.
    if message is None or message.created_at is None:
        return 0.0
    return message.created_at.timestamp()


def get_conversations(db: Session, current_user: User) -> List[dict]:
    sent_to = db.query(Message.receiver_id).filter(Message.sender_id == current_user.id).distinct()
    received_from = db.query(Message.sender_id).filter(Message.receiver_id == current_user.id).distinct()
    user_ids = {row[0] for row in sent_to} | {row[0] for row in received_from}

    conversations = []
    for user_id in user_ids:
        last_message = (
            db.query(Message)
            .filter(_between(current_user.id, user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .first()
        )
        unread_count = db.query(Message).filter(
            Message.sender_id == user_id,
            Message.receiver_id == current_user.id,
            Message.is_read.is_(False),
        ).count()
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            continue
        conversations.append({
            "user": user,
            "last_message": last_message,
            "unread_count": unread_count,
        })

    conversations.sort(
        key=lambda c: (_recency(c["last_message"]), c["last_message"].id if c["last_message"] else 0),
        reverse=True,
    )
    return conversations


def get_thread(db: Session, current_user: User, user_id: int, limit: int, offset: int) -> List[Message]:
    messages = (
        db.query(Message)
        .options(selectinload(Message.sender), selectinload(Message.receiver))
        .filter(_between(current_user.id, user_id))
        .order_by(Message.created_at.desc(), Message.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    messages.reverse()  # oldest first
    return messages


def send_message(db: Session, data: MessageCreate, current_user: User) -> Message:
    missing = []
    if data.receiver_id is None:
        missing.append("receiverId")
    if not data.content or not data.content.strip():
        missing.append("content")
    if missing:
        raise ValidationError(
            "Missing required fields",
            f"Missing required fields: {', '.join(missing)}",
            fields=missing,
        )

    receiver = db.query(User).filter(User.id == data.receiver_id).first()
    if not receiver:
        raise NotFoundError("User not found")

    message = Message(sender_id=current_user.id, receiver_id=receiver.id, content=data.content)
    db.add(message)
    notify(db, receiver.id, current_user, "MESSAGE",
           f"New message from {current_user.username}", f"/messages/{current_user.id}")
    db.commit()
    db.refresh(message)
    return message


def mark_conversation_read(db: Session, current_user: User, user_id: int) -> dict:
    db.query(Message).filter(
        Message.sender_id == user_id,
        Message.receiver_id == current_user.id,
        Message.is_read.is_(False),
    ).update({"is_read": True}, synchronize_session=False)
    db.commit()
    return {"message": "Messages marked as read"}
