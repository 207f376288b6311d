from typing import Optional
from datetime import datetime

from schemas.base import CamelModel, AuthorSummary


class MessageCreate(CamelModel):
    receiver_id: Optional[int] = None
    content: Optional[str] = None


class MessageResponse(CamelModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool = False
    created_at: Optional[datetime] = None


class MessageWithUsers(MessageResponse):
    sender: AuthorSummary
    receiver: AuthorSummary


class Conversation(CamelModel):
    user: AuthorSummary
    last_message: Optional[MessageResponse] = None
    unread_count: int = 0
