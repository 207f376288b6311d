from typing import Optional

from sqlalchemy.orm import Session

from models.notification import Notification
from models.user import User
from utils.errors import NotFoundError


def notify(
        db: Session,
        recipient_id: int,
        actor: User,
        type: str,
        content: str,
        link: Optional[str] = None
) -> Optional[Notification]:
    """
    Queues a notification for `recipient_id` on the session.

    Nothing is created when the actor is the recipient. The caller owns the
    commit so the notification lands together with the action that caused it.
    """
    if recipient_id == actor.id:
        return None
    notification = Notification(user_id=recipient_id, type=type, content=content, link=link)
    db.add(notification)
    return notification


def list_notifications(db: Session, current_user: User, limit: int, offset: int) -> dict:
    notifications = (
        db.query(Notification)
        .filter(Notification.user_id == current_user.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    unread_count = (
        db.query(Notification)
        .filter(Notification.user_id == current_user.id, Notification.is_read.is_(False))
        .count()
    )
    return {"notifications": notifications, "unread_count": unread_count}


def mark_read(db: Session, notification_id: int, current_user: User) -> Notification:
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification or notification.user_id != current_user.id:
        raise NotFoundError("Notification not found")
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification


def mark_all_read(db: Session, current_user: User) -> dict:
    db.query(Notification).filter(
        Notification.user_id == current_user.id,
        Notification.is_read.is_(False),
    ).update({"is_read": True}, synchronize_session=False)
    db.commit()
    return {"message": "All notifications marked as read"}
