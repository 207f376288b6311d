import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import User, Vote, VoteType
from services.idea import get_visible_idea, vote_counts_for
from services.notification import notify

logger = logging.getLogger(__name__)

VOTE_LABELS = {
    VoteType.UPVOTE: "upvoted",
    VoteType.INVEST_INTEREST: "is interested in investing in",
    VoteType.WOULD_USE: "would use",
}


def _find_vote(db: Session, user_id: int, idea_id: int, vote_type: VoteType):
    return db.query(Vote).filter(
        Vote.user_id == user_id,
        Vote.idea_id == idea_id,
        Vote.type == vote_type.value,
    ).first()


def _status(db: Session, idea_id: int, voted: bool, vote_type: VoteType) -> dict:
    return {
        "voted": voted,
        "type": vote_type,
        "vote_counts": vote_counts_for(db, [idea_id])[idea_id],
    }


def add_vote(db: Session, idea_id: int, vote_type: VoteType, current_user: User) -> tuple[dict, bool]:
    """Create the vote if absent. Returns (status, created)."""
    idea = get_visible_idea(db, idea_id, current_user)

    if _find_vote(db, current_user.id, idea.id, vote_type):
        return _status(db, idea.id, True, vote_type), False

    db.add(Vote(user_id=current_user.id, idea_id=idea.id, type=vote_type.value))
    notify(db, idea.author_id, current_user, "VOTE",
           f"{current_user.username} {VOTE_LABELS[vote_type]} \"{idea.title}\"",
           f"/ideas/{idea.slug}")
    try:
        db.commit()
    except IntegrityError:
        # A concurrent identical request inserted the row first.
        db.rollback()
        logger.info("Duplicate vote from user %s on idea %s ignored", current_user.id, idea_id)
        return _status(db, idea_id, True, vote_type), False
    return _status(db, idea.id, True, vote_type), True


def remove_vote(db: Session, idea_id: int, vote_type: VoteType, current_user: User) -> dict:
    """Delete the vote if present."""
    idea = get_visible_idea(db, idea_id, current_user)
    db.query(Vote).filter(
        Vote.user_id == current_user.id,
        Vote.idea_id == idea.id,
        Vote.type == vote_type.value,
    ).delete(synchronize_session=False)
    db.commit()
    return _status(db, idea.id, False, vote_type)


def get_user_votes(db: Session, idea_id: int, current_user: User) -> list[Vote]:
    get_visible_idea(db, idea_id, current_user)
    return (
        db.query(Vote)
        .filter(Vote.user_id == current_user.id, Vote.idea_id == idea_id)
        .order_by(Vote.created_at.asc(), Vote.id.asc())
        .all()
    )
