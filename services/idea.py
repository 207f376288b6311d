import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from models import Comment, Idea, User, Vote, VoteType
from schemas.idea import IdeaCreate, IdeaUpdate, IdeaDetail
from utils.errors import AuthorizationError, NotFoundError, ValidationError
from utils.slug import make_slug

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = [
    ("title", "title"),
    ("description", "description"),
    ("problem", "problem"),
    ("solution", "solution"),
]
SLUG_ATTEMPTS = 5


def unique_slug(db: Session, title: str) -> str:
    slug = make_slug(title)
    for _ in range(SLUG_ATTEMPTS - 1):
        if not db.query(Idea.id).filter(Idea.slug == slug).first():
            break
        logger.warning("Slug collision on %s, retrying", slug)
        slug = make_slug(title)
    return slug


def vote_counts_for(db: Session, idea_ids: Iterable[int]) -> Dict[int, Dict[str, int]]:
    idea_ids = list(idea_ids)
    counts = {idea_id: {vote_type.value: 0 for vote_type in VoteType} for idea_id in idea_ids}
    if not idea_ids:
        return counts
    rows = (
        db.query(Vote.idea_id, Vote.type, func.count(Vote.id))
        .filter(Vote.idea_id.in_(idea_ids))
        .group_by(Vote.idea_id, Vote.type)
        .all()
    )
    for idea_id, vote_type, count in rows:
        counts[idea_id][vote_type] = count
    return counts


def _with_counts(db: Session, query) -> List[IdeaDetail]:
    comment_count_subquery = db.query(
        Comment.idea_id,
        func.count(Comment.id).label("comment_count")
    ).filter(Comment.is_deleted.is_(False)).group_by(Comment.idea_id).subquery()

    rows = (
        query.add_columns(func.coalesce(comment_count_subquery.c.comment_count, 0))
        .options(selectinload(Idea.author))
        .outerjoin(comment_count_subquery, Idea.id == comment_count_subquery.c.idea_id)
        .order_by(Idea.created_at.desc(), Idea.id.desc())
        .all()
    )
    votes = vote_counts_for(db, [idea.id for idea, _ in rows])

    response = []
    for idea, count in rows:
        model = IdeaDetail.model_validate(idea)
        model.comment_count = count
        model.vote_counts = votes[idea.id]
        model.upvote_count = votes[idea.id][VoteType.UPVOTE.value]
        response.append(model)
    return response


def list_public_ideas(db: Session) -> List[IdeaDetail]:
    return _with_counts(db, db.query(Idea).filter(Idea.is_public.is_(True)))


def list_user_ideas(db: Session, user_id: int, viewer: Optional[User]) -> List[IdeaDetail]:
    query = db.query(Idea).filter(Idea.author_id == user_id)
    if viewer is None or viewer.id != user_id:
        query = query.filter(Idea.is_public.is_(True))
    return _with_counts(db, query)


def can_view(idea: Idea, viewer: Optional[User]) -> bool:
    return idea.is_public or (viewer is not None and idea.author_id == viewer.id)


def get_visible_idea(db: Session, idea_id: int, viewer: Optional[User]) -> Idea:
    idea = db.query(Idea).filter(Idea.id == idea_id).first()
    if not idea or not can_view(idea, viewer):
        raise NotFoundError("Idea not found")
    return idea


def get_idea_by_slug(db: Session, slug: str, viewer: Optional[User]) -> IdeaDetail:
    idea = db.query(Idea).filter(Idea.slug == slug).first()
    # Hidden ideas look exactly like missing ones to everyone but the author.
    if not idea or not can_view(idea, viewer):
        raise NotFoundError("Idea not found")
    return _with_counts(db, db.query(Idea).filter(Idea.id == idea.id))[0]


def _check_required(data: IdeaCreate, partial: bool) -> None:
    missing = []
    for attr, wire_name in REQUIRED_FIELDS:
        value = getattr(data, attr)
        if partial and attr not in data.model_fields_set:
            continue
        if value is None or not value.strip():
            missing.append(wire_name)
    if missing:
        raise ValidationError("Missing required fields", f"Please provide: {', '.join(missing)}", fields=missing)


def create_idea(db: Session, data: IdeaCreate, current_user: User) -> Idea:
    _check_required(data, partial=False)
    idea = Idea(
        title=data.title.strip(),
        slug=unique_slug(db, data.title),
        description=data.description,
        problem=data.problem,
        solution=data.solution,
        target_market=data.target_market,
        business_model=data.business_model,
        tags=data.tags or [],
        industry=data.industry,
        technology=data.technology,
        is_public=data.is_public,
        author_id=current_user.id,
    )
    db.add(idea)
    db.commit()
    db.refresh(idea)
    logger.info("User %s created idea %s (%s)", current_user.id, idea.id, idea.slug)
    return idea


def _get_owned_idea(db: Session, idea_id: int, current_user: User) -> Idea:
    idea = db.query(Idea).filter(Idea.id == idea_id).first()
    if not idea:
        raise NotFoundError("Idea not found")
    if idea.author_id != current_user.id:
        raise AuthorizationError()
    return idea


def update_idea(db: Session, idea_id: int, data: IdeaUpdate, current_user: User) -> Idea:
    idea = _get_owned_idea(db, idea_id, current_user)
    _check_required(data, partial=True)

    updates = data.model_dump(exclude_unset=True)
    if updates.get("is_public") is None:
        updates.pop("is_public", None)
    if "tags" in updates and updates["tags"] is None:
        updates["tags"] = []

    new_title = updates.get("title")
    if new_title is not None:
        new_title = new_title.strip()
        updates["title"] = new_title
        if new_title != idea.title:
            idea.slug = unique_slug(db, new_title)

    for key, value in updates.items():
        setattr(idea, key, value)

    db.commit()
    db.refresh(idea)
    return idea


def delete_idea(db: Session, idea_id: int, current_user: User) -> dict:
    idea = _get_owned_idea(db, idea_id, current_user)
    db.delete(idea)
    db.commit()
    logger.info("User %s deleted idea %s", current_user.id, idea_id)
    return {"message": "Idea deleted"}
