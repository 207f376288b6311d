from typing import Dict, Optional
from datetime import datetime

from models.vote import VoteType
from schemas.base import CamelModel


class VoteRequest(CamelModel):
    type: VoteType = VoteType.UPVOTE


class VoteResponse(CamelModel):
    id: int
    user_id: int
    idea_id: int
    type: VoteType
    created_at: Optional[datetime] = None


class VoteStatus(CamelModel):
    voted: bool
    type: VoteType
    vote_counts: Dict[str, int]
