from typing import Optional, List
from datetime import datetime

from models.comment import CommentType
from schemas.base import CamelModel, AuthorSummary


class CommentCreate(CamelModel):
    content: Optional[str] = None
    idea_id: Optional[int] = None
    parent_id: Optional[int] = None
    type: CommentType = CommentType.FEEDBACK


class CommentUpdate(CamelModel):
    content: Optional[str] = None


class CommentResponse(CamelModel):
    id: int
    content: str
    type: str
    idea_id: int
    parent_id: Optional[int] = None
    author_id: int
    is_edited: bool = False
    is_deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[AuthorSummary] = None


class CommentThread(CommentResponse):
    """A top-level comment with its visible replies."""
    replies: List[CommentResponse] = []
