from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from models.user import User
from models.vote import VoteType
from schemas.vote import VoteRequest, VoteResponse, VoteStatus
from services import vote as vote_service
from utils.auth import get_current_user

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/idea/{idea_id}", response_model=VoteStatus)
def add_vote(
    idea_id: int,
    response: Response,
    vote: Optional[VoteRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    vote_type = vote.type if vote else VoteType.UPVOTE
    result, created = vote_service.add_vote(db, idea_id, vote_type, current_user)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return result


@router.delete("/idea/{idea_id}", response_model=VoteStatus)
def remove_vote(
    idea_id: int,
    vote: Optional[VoteRequest] = None,
    query_type: Optional[VoteType] = Query(None, alias="type"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # The type may come in the request body or as a query parameter.
    vote_type = query_type or (vote.type if vote else VoteType.UPVOTE)
    return vote_service.remove_vote(db, idea_id, vote_type, current_user)


@router.get("/idea/{idea_id}/user", response_model=List[VoteResponse])
def get_user_votes(
    idea_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return vote_service.get_user_votes(db, idea_id, current_user)
