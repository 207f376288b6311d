import enum

from sqlalchemy import Column, Integer, Boolean, String, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base


class CommentType(str, enum.Enum):
    FEEDBACK = "FEEDBACK"
    QUESTION = "QUESTION"
    SUGGESTION = "SUGGESTION"


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    content = Column(Text, nullable=False)
    type = Column(String(20), default=CommentType.FEEDBACK.value, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    is_edited = Column(Boolean, default=False, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    idea_id = Column(Integer, ForeignKey("ideas.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Self-referential relationship for replies
    parent_id = Column(Integer, ForeignKey("comments.id"), nullable=True)
    parent = relationship("Comment", remote_side=[id], back_populates="replies")
    replies = relationship("Comment", back_populates="parent", cascade="all, delete-orphan")

    author = relationship("User", back_populates="comments")
    idea = relationship("Idea", back_populates="comments")
