from typing import List, Optional
from datetime import datetime

from schemas.base import CamelModel


class NotificationResponse(CamelModel):
    id: int
    type: str
    content: str
    link: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None


class NotificationList(CamelModel):
    notifications: List[NotificationResponse]
    unread_count: int
