from .user import User, UserRole
from .idea import Idea
from .comment import Comment, CommentType
from .vote import Vote, VoteType
from .message import Message
from .notification import Notification

__all__ = ["User", "UserRole", "Idea", "Comment", "CommentType", "Vote", "VoteType", "Message", "Notification"]
