from pydantic import field_validator
from typing import Optional, List, Dict
from datetime import datetime

from schemas.base import CamelModel, AuthorSummary, split_list


class IdeaCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    problem: Optional[str] = None
    solution: Optional[str] = None
    target_market: Optional[str] = None
    business_model: Optional[str] = None
    tags: Optional[List[str]] = None
    industry: Optional[str] = None
    technology: Optional[str] = None
    is_public: bool = True

    @field_validator("tags", mode="before")
    @classmethod
    def comma_separated(cls, v):
        return split_list(v)


class IdeaUpdate(IdeaCreate):
    is_public: Optional[bool] = None


class IdeaResponse(CamelModel):
    id: int
    title: str
    slug: str
    description: str
    problem: str
    solution: str
    target_market: Optional[str] = None
    business_model: Optional[str] = None
    tags: List[str] = []
    industry: Optional[str] = None
    technology: Optional[str] = None
    is_public: bool
    author_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def tags_to_empty_list(cls, v):
        if v is None:
            return []
        return v


class IdeaDetail(IdeaResponse):
    author: AuthorSummary
    comment_count: int = 0
    upvote_count: int = 0
    vote_counts: Dict[str, int] = {}
