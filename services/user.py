from sqlalchemy.orm import Session

from models import Comment, Idea, User, Vote
from schemas.user import UserUpdate, PublicProfile, PrivateProfile
from utils.errors import NotFoundError


def _counts(db: Session, user_id: int) -> dict:
    return {
        "idea_count": db.query(Idea).filter(Idea.author_id == user_id).count(),
        "comment_count": db.query(Comment).filter(
            Comment.author_id == user_id, Comment.is_deleted.is_(False)
        ).count(),
        "vote_count": db.query(Vote).filter(Vote.user_id == user_id).count(),
    }


def get_my_profile(db: Session, current_user: User) -> PrivateProfile:
    return PrivateProfile.model_validate(current_user).model_copy(update=_counts(db, current_user.id))


def get_profile_by_username(db: Session, username: str) -> PublicProfile:
    user = db.query(User).filter(User.username == username.lower()).first()
    if not user:
        raise NotFoundError("User not found")
    return PublicProfile.model_validate(user).model_copy(update=_counts(db, user.id))


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def update_my_profile(db: Session, current_user: User, user_update: UserUpdate) -> PrivateProfile:
    for field, value in user_update.model_dump(exclude_unset=True).items():
        if field in ("first_name", "last_name") and not value:
            continue
        setattr(current_user, field, value)

    db.add(current_user)
    db.commit()
    db.refresh(current_user)
    return get_my_profile(db, current_user)
