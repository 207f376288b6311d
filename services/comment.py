from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from models import Comment, Idea, User
from schemas.comment import CommentCreate, CommentUpdate, CommentThread, CommentResponse
from services.idea import get_visible_idea
from services.notification import notify
from utils.errors import AuthorizationError, NotFoundError, ValidationError


def get_replies(db: Session, parent_comment_id: int) -> List[Comment]:
    """Visible replies of a comment, oldest first."""
    return (
        db.query(Comment)
        .options(selectinload(Comment.author))
        .filter(Comment.parent_id == parent_comment_id, Comment.is_deleted.is_(False))
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )


def list_idea_comments(db: Session, idea_id: int, viewer: Optional[User]) -> List[CommentThread]:
    get_visible_idea(db, idea_id, viewer)

    comments = (
        db.query(Comment)
        .options(selectinload(Comment.author))
        .filter(
            Comment.idea_id == idea_id,
            Comment.is_deleted.is_(False),
            Comment.parent_id.is_(None),
        )
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )

    result = []
    for comment in comments:
        thread = CommentThread.model_validate(comment)
        thread.replies = [CommentResponse.model_validate(reply) for reply in get_replies(db, comment.id)]
        result.append(thread)
    return result


def read_replies(db: Session, comment_id: int, viewer: Optional[User]) -> List[Comment]:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise NotFoundError("Comment not found")
    get_visible_idea(db, comment.idea_id, viewer)
    return get_replies(db, comment_id)


def create_comment(db: Session, data: CommentCreate, current_user: User) -> Comment:
    missing = []
    if not data.content or not data.content.strip():
        missing.append("content")
    if data.idea_id is None:
        missing.append("ideaId")
    if missing:
        raise ValidationError(
            "Missing required fields",
            f"Missing required fields: {', '.join(missing)}",
            fields=missing,
        )

    idea: Idea = get_visible_idea(db, data.idea_id, current_user)

    parent = None
    if data.parent_id:
        parent = db.query(Comment).filter(Comment.id == data.parent_id).first()
        if not parent or parent.is_deleted:
            raise NotFoundError("Parent comment not found")
        if parent.idea_id != idea.id:
            raise ValidationError(message="Parent comment belongs to a different idea", fields=["parentId"])

    comment = Comment(
        content=data.content,
        idea_id=idea.id,
        parent_id=parent.id if parent else None,
        author_id=current_user.id,
        type=data.type.value,
    )
    db.add(comment)

    link = f"/ideas/{idea.slug}"
    if parent:
        notify(db, parent.author_id, current_user, "REPLY",
               f"{current_user.username} replied to your comment", link)
    if not parent or parent.author_id != idea.author_id:
        notify(db, idea.author_id, current_user, "COMMENT",
               f"{current_user.username} commented on \"{idea.title}\"", link)

    db.commit()
    db.refresh(comment)
    return comment


def _get_own_comment(db: Session, comment_id: int, current_user: User) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment or comment.is_deleted:
        raise NotFoundError("Comment not found")
    if comment.author_id != current_user.id:
        raise AuthorizationError()
    return comment


def update_comment(db: Session, comment_id: int, data: CommentUpdate, current_user: User) -> Comment:
    comment = _get_own_comment(db, comment_id, current_user)
    if not data.content or not data.content.strip():
        raise ValidationError("Missing required fields", "Missing required fields: content", fields=["content"])
    comment.content = data.content
    comment.is_edited = True
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: int, current_user: User) -> dict:
    comment = _get_own_comment(db, comment_id, current_user)
    # Soft delete: replies keep pointing at this row.
    comment.is_deleted = True
    db.commit()
    return {"message": "Comment deleted"}
